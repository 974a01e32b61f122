from __future__ import annotations

import ast
import json
from pathlib import Path

import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy.orm import sessionmaker

import main as cli
from core.services.health import ScheduleHealthService
from infra.db.base import Base
import infra.migration
from infra.migrate import migration_dir, run_migrations
from infra.services import build_service_graph

ROOT = Path(__file__).resolve().parents[1]


def _python_files(root: Path):
    for path in root.rglob("*.py"):
        if "dist" in path.parts:
            continue
        yield path


def _imported_modules(path: Path):
    tree = ast.parse(path.read_text(encoding="utf-8", errors="ignore"))
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield alias.name
        elif isinstance(node, ast.ImportFrom):
            yield node.module or ""


def test_core_layer_does_not_import_infra_layer():
    violations: list[tuple[str, str]] = []
    for path in _python_files(ROOT / "core"):
        for name in _imported_modules(path):
            if name == "infra" or name.startswith("infra."):
                violations.append((str(path.relative_to(ROOT)), name))

    assert not violations, f"Core layer imports infra layer: {violations}"


def test_service_graph_wires_health_service(session, user_session, support):
    graph = build_service_graph(session, user_session=user_session, support=support)

    assert isinstance(graph.health_service, ScheduleHealthService)
    assert graph.as_dict()["health_service"] is graph.health_service
    assert graph.support is support


def test_service_graph_reads_weights_from_env(session, user_session, support, monkeypatch):
    monkeypatch.setenv("SCHEDULE_HEALTH_WEIGHTS", "1,0,0")
    monkeypatch.setenv("SCHEDULE_HEALTH_AC_FACTOR", "1.0")
    hs = build_service_graph(session, user_session=user_session, support=support).health_service

    metrics = hs.get_health("empty")

    # only the schedule component counts
    assert metrics.overall_score == metrics.schedule_score


def test_migrations_create_health_schema(tmp_path):
    db_url = f"sqlite:///{(tmp_path / 'migrated.db').as_posix()}"

    run_migrations(db_url)
    # already at head: second run is a no-op
    run_migrations(db_url)

    engine = create_engine(db_url, future=True)
    try:
        inspector = inspect(engine)
        tables = set(inspector.get_table_names())
        assert {"tasks", "resources", "resource_costs", "schedule_health_snapshots"} <= tables
        indexes = {ix["name"]: ix for ix in inspector.get_indexes("schedule_health_snapshots")}
        assert indexes["ux_health_project_date"]["unique"]
        assert indexes["ux_health_project_date"]["column_names"] == ["project_id", "snapshot_date"]
    finally:
        engine.dispose()


def test_migration_scripts_resolve_from_the_installed_package():
    script_location = migration_dir()

    assert script_location.resolve() == Path(infra.migration.__file__).resolve().parent
    assert (script_location / "alembic.ini").is_file()
    assert (script_location / "env.py").is_file()
    assert any((script_location / "versions").glob("*_create_schedule_health_tables.py"))
    # nothing is looked up relative to the source checkout
    assert not (ROOT / "migration").exists()


def test_package_data_ships_migration_scripts():
    tomllib = pytest.importorskip("tomllib")
    config = tomllib.loads((ROOT / "pyproject.toml").read_text(encoding="utf-8"))

    package_data = config["tool"]["setuptools"]["package-data"]["infra.migration"]
    assert {"alembic.ini", "env.py", "versions/*.py"} <= set(package_data)
    assert "infra*" in config["tool"]["setuptools"]["packages"]["find"]["include"]


@pytest.fixture
def cli_env(tmp_path, monkeypatch, support):
    engine = create_engine(f"sqlite:///{(tmp_path / 'cli.db').as_posix()}", future=True)
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(cli, "SessionLocal", sessionmaker(bind=engine, autoflush=False, future=True))
    monkeypatch.setattr(cli, "run_migrations", lambda db_url: None)
    monkeypatch.setattr(cli, "setup_logging", lambda: tmp_path / "schedule_health.log")
    monkeypatch.setattr(
        cli,
        "build_service_graph",
        lambda session, user_session=None: build_service_graph(session, user_session=user_session, support=support),
    )
    yield
    engine.dispose()


def test_cli_submit_then_history(cli_env, capsys):
    rc = cli.main(["--user", "planner", "submit", "p-1", '{"overallScore": 64.5}', "--date", "2024-06-01"])
    assert rc == 0
    stored = json.loads(capsys.readouterr().out)
    assert stored["overall_score"] == 64.5
    assert stored["source"] == "MANUAL"

    assert cli.main(["--user", "planner", "history", "p-1"]) == 0
    history = json.loads(capsys.readouterr().out)
    assert [row["snapshot_date"] for row in history] == ["2024-06-01"]


def test_cli_health_prints_status(cli_env, capsys):
    assert cli.main(["--user", "planner", "health", "p-1"]) == 0
    payload = json.loads(capsys.readouterr().out)

    assert payload["status"] == "CRITICAL"
    assert payload["bac"] == 0.0
    assert isinstance(payload["alerts"], list)


def test_cli_rejects_malformed_fields(cli_env, capsys):
    assert cli.main(["--user", "planner", "submit", "p-1", "{not json"]) == 1
    assert capsys.readouterr().out == ""
