"""Schema management for SQL-backed review stores.

The in-memory provider needs no schema, so both operations skip it. Run with
``PROTEAN_ENV=production`` to target the PostgreSQL overlay.
"""

import structlog
from protean.domain import Domain
from sqlalchemy import create_engine

logger = structlog.get_logger(__name__)

_SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    for name, provider in domain.providers.items():
        if provider.conn_info["provider"] in _SQL_PROVIDERS:
            yield name, provider


def setup_db(domain: Domain) -> list[str]:
    """Create review tables in every SQL provider; return the providers touched."""
    touched = []
    with domain.domain_context():
        for name, provider in _sql_providers(domain):
            # A repository's DAO registers its model with the provider metadata
            for _, record in domain.registry.aggregates.items():
                if record.cls.meta_.provider == name:
                    domain.repository_for(record.cls)._dao  # noqa: B018

            provider._metadata.create_all(create_engine(provider.conn_info["database_uri"]))
            logger.info("Schema created", provider=name, tables=sorted(provider._metadata.tables))
            touched.append(name)
    return touched


def drop_db(domain: Domain) -> list[str]:
    """Drop review tables from every SQL provider; return the providers touched."""
    touched = []
    with domain.domain_context():
        for name, provider in _sql_providers(domain):
            provider._metadata.drop_all(create_engine(provider.conn_info["database_uri"]))
            logger.info("Schema dropped", provider=name)
            touched.append(name)
    return touched
