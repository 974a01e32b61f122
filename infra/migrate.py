import logging
from importlib.resources import files
from pathlib import Path

from alembic import command
from alembic.config import Config

logger = logging.getLogger(__name__)

MIGRATION_PACKAGE = "infra.migration"


def migration_dir() -> Path:
    """The installed alembic script directory shipped inside `infra.migration`."""
    return Path(str(files(MIGRATION_PACKAGE)))


def run_migrations(db_url: str) -> None:
    script_location = migration_dir()
    alembic_ini = script_location / "alembic.ini"

    if not (script_location / "versions").is_dir():
        raise RuntimeError(f"Alembic versions missing under {script_location}")
    if not alembic_ini.exists():
        raise RuntimeError(f"Alembic config missing: {alembic_ini}")

    cfg = Config(str(alembic_ini))
    cfg.set_main_option("script_location", str(script_location))
    cfg.set_main_option("sqlalchemy.url", db_url)

    logger.info("Upgrading schema at %s to head", script_location)
    command.upgrade(cfg, "head")
