# main.py
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict

from core.exceptions import DomainError, ValidationError
from core.services.auth.session import UserSessionContext, UserSessionPrincipal
from infra.db.base import SessionLocal, db_url
from infra.logging_config import setup_logging
from infra.migrate import run_migrations
from infra.operational_support import bind_trace_id
from infra.services import build_service_graph

logger = logging.getLogger(__name__)


def _json_default(value):
    if hasattr(value, "isoformat"):
        return value.isoformat()
    raise TypeError(f"Not JSON serializable: {value!r}")


def _load_fields(raw: str) -> dict:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValidationError(f"Snapshot fields are not valid JSON: {exc}", code="INVALID_SNAPSHOT") from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="schedule-health", description="Project schedule health analytics.")
    parser.add_argument("--user", required=True, help="Authenticated user name of the caller.")
    sub = parser.add_subparsers(dest="command", required=True)

    health = sub.add_parser("health", help="Compute current health and record today's snapshot.")
    health.add_argument("project_id")

    history = sub.add_parser("history", help="Show the stored health history.")
    history.add_argument("project_id")

    submit = sub.add_parser("submit", help="Store a manual snapshot from a JSON object.")
    submit.add_argument("project_id")
    submit.add_argument("fields", help="JSON object with snapshot fields.")
    submit.add_argument("--date", dest="snapshot_date", default=None)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    setup_logging()
    run_migrations(db_url=db_url)

    user_session = UserSessionContext(UserSessionPrincipal(user_id=args.user, username=args.user))
    session = SessionLocal()
    try:
        graph = build_service_graph(session, user_session=user_session)
        service = graph.health_service
        with bind_trace_id():
            if args.command == "health":
                metrics = service.get_health(args.project_id)
                assessment = service.describe_health(metrics)
                result = {
                    **metrics.as_dict(),
                    "status": assessment.status.value,
                    "alerts": assessment.alerts,
                }
            elif args.command == "history":
                result = [asdict(row) for row in service.get_history(args.project_id)]
            else:
                stored = service.submit_snapshot(
                    args.project_id,
                    _load_fields(args.fields),
                    snapshot_date=args.snapshot_date,
                )
                result = asdict(stored)
    except DomainError as exc:
        logger.error("%s failed: [%s] %s", args.command, exc.code, exc)
        return 1
    finally:
        session.close()

    json.dump(result, sys.stdout, indent=2, default=_json_default)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
