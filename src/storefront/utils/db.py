"""Schema management for SQL-backed providers (sqlite, postgresql).

The memory provider needs no schema, so both helpers skip it.
"""

import structlog
from protean.domain import Domain
from sqlalchemy import create_engine

logger = structlog.get_logger(__name__)

SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    for _, provider in domain.providers.items():
        if provider.conn_info["provider"] in SQL_PROVIDERS:
            yield provider


def _register_models(domain: Domain, provider_name: str) -> None:
    # Touching _dao builds the model and adds its table to the provider's metadata
    for registry in (domain.registry.aggregates, domain.registry.entities):
        for _, record in registry.items():
            if record.cls.meta_.provider == provider_name:
                domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain) -> None:
    """Create the tables of every aggregate and entity stored in a SQL provider."""
    with domain.domain_context():
        for provider in _sql_providers(domain):
            _register_models(domain, provider.name)
            provider._metadata.create_all(create_engine(provider.conn_info["database_uri"]))
            logger.info("Tables created", provider=provider.name, tables=sorted(provider._metadata.tables))


def drop_db(domain: Domain) -> None:
    with domain.domain_context():
        for provider in _sql_providers(domain):
            provider._metadata.drop_all(create_engine(provider.conn_info["database_uri"]))
            logger.info("Tables dropped", provider=provider.name)
