"""Schema management for SQL-backed providers, driven by ``manage.py``.

The memory provider used in development and tests needs no schema, so only
providers listed in ``SQL_PROVIDERS`` are touched.
"""

from protean.domain import Domain
from sqlalchemy import create_engine

SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain) -> list:
    return [provider for provider in domain.providers.values() if provider.conn_info["provider"] in SQL_PROVIDERS]


def _stored_classes(domain: Domain, provider_name: str) -> list[type]:
    """Aggregates and entities persisted through ``provider_name``."""
    records = [*domain.registry.aggregates.values(), *domain.registry.entities.values()]
    return [record.cls for record in records if record.cls.meta_.provider == provider_name]


def setup_db(domain: Domain) -> list[str]:
    """Create tables on every SQL provider. Returns the provider names."""
    touched = []
    with domain.domain_context():
        for provider in _sql_providers(domain):
            # Building a DAO registers its table on the provider's metadata
            for cls in _stored_classes(domain, provider.name):
                domain.repository_for(cls)._dao  # noqa: B018
            provider._metadata.create_all(create_engine(provider.conn_info["database_uri"]))
            touched.append(provider.name)
    return touched


def drop_db(domain: Domain) -> list[str]:
    """Drop tables on every SQL provider. Returns the provider names."""
    touched = []
    with domain.domain_context():
        for provider in _sql_providers(domain):
            provider._metadata.drop_all(create_engine(provider.conn_info["database_uri"]))
            touched.append(provider.name)
    return touched
