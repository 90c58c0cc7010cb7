"""
Service config loaded from env: load_postgres_config().
"""
from autoresponder.config.postgres import PostgresConfig, load_postgres_config

__all__ = [
    "PostgresConfig",
    "load_postgres_config",
]
