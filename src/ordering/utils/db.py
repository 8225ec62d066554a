"""Schema management for SQL-backed deployments of the ordering domain.

The memory provider needs none of this; SQLite and PostgreSQL providers get
their tables created from the models Protean registered for them.
"""

from protean.domain import Domain
from sqlalchemy import create_engine

SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    for _, provider in domain.providers.items():
        if provider.conn_info["provider"] in SQL_PROVIDERS:
            yield provider


def setup_db(domain: Domain) -> list[str]:
    """Create tables for carts, cart items and catalogue product documents.

    Returns the names of the providers that were set up.
    """
    prepared = []
    with domain.domain_context():
        for provider in _sql_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])

            registries = (
                domain.registry.aggregates,
                domain.registry.entities,
                domain.registry.projections,
            )
            for registry in registries:
                for _, record in registry.items():
                    if record.cls.meta_.provider == provider.name:
                        # Touching the DAO registers the model's table in the provider metadata
                        domain.repository_for(record.cls)._dao  # noqa: B018

            if hasattr(domain, "_outbox_repos") and provider.name in domain._outbox_repos:
                domain._outbox_repos[provider.name]._dao  # noqa: B018

            provider._metadata.create_all(engine)
            prepared.append(provider.name)
    return prepared


def drop_db(domain: Domain) -> list[str]:
    dropped = []
    with domain.domain_context():
        for provider in _sql_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])
            provider._metadata.drop_all(engine)
            dropped.append(provider.name)
    return dropped
