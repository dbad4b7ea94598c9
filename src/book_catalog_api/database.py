import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from book_catalog_api.config import settings

logger = logging.getLogger(__name__)


def _connect_args(database_url: str) -> dict[str, object]:
    # Sync routes run in a threadpool, so a request may touch the connection off its thread.
    if make_url(database_url).get_backend_name() == "sqlite":
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.database_url, echo=False, connect_args=_connect_args(settings.database_url)
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    pass


def run_migrations(config_path: str | None = None, database_url: str | None = None) -> None:
    """Apply every pending Alembic revision up to ``head``."""
    path = Path(config_path or settings.alembic_config)
    alembic_cfg = Config(str(path))
    if not alembic_cfg.get_main_option("script_location"):
        alembic_cfg.set_main_option("script_location", str(path.parent / "migrations"))
    alembic_cfg.attributes["database_url"] = database_url or settings.database_url
    alembic_cfg.attributes["configure_logger"] = False

    logger.info("Applying database migrations", extra={"alembic_config": str(path)})
    command.upgrade(alembic_cfg, "head")
