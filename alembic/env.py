"""
Migrations for the users and books tables.

The database URL comes from DATABASE_URL (env or .env), never from alembic.ini,
so `alembic upgrade head` needs no JWT_SECRET. SQLite runs in batch mode
because it cannot ALTER most constraints in place.
"""

from logging.config import fileConfig

from alembic import context
from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.pool import NullPool

load_dotenv()

from bookstore.core.config import get_database_settings
from bookstore.models import Base

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

database_url = get_database_settings().DATABASE_URL
is_sqlite = database_url.startswith("sqlite")


def _configure(**kwargs: object) -> None:
    context.configure(
        target_metadata=Base.metadata,
        compare_type=True,
        render_as_batch=is_sqlite,
        **kwargs,
    )


def run_offline() -> None:
    """Emit SQL to stdout without connecting (alembic upgrade head --sql)."""
    _configure(url=database_url, literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def run_online() -> None:
    engine = create_engine(database_url, poolclass=NullPool)
    with engine.connect() as connection:
        _configure(connection=connection)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_offline()
else:
    run_online()
