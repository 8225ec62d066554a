"""Cross-domain event contracts consumed by the ordering context."""
