"""Ordering bounded context: shopping cart aggregate, service and checkout hand-off."""
