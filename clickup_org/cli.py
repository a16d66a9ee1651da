"""
Command-line entry point for ClickUp ↔ Org synchronisation.

Usage:
    clickup-org sync
    clickup-org sync --list 901234 --concurrent
    clickup-org render 901234
    clickup-org push-status abc123 DONE
    clickup-org create 901234 --name "Write docs" --due 2026-11-01 --assign-me
    clickup-org whoami
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from datetime import date, timezone, tzinfo
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from clickup_org.config import Settings, SyncConfig, get_settings, load_sync_config
from clickup_org.errors import ClickUpSyncError, ConfigurationError
from clickup_org.integrations.clickup_client import ClickUpClient
from clickup_org.models.task import NewTask
from clickup_org.sync.engine import SyncOrchestrator
from clickup_org.sync.renderer import ID_PROPERTY, TaskRenderer
from clickup_org.sync.reverse import ReverseSyncHandler, StatusChangeEmitter, StatusChangeEvent
from clickup_org.sync.status_mapper import StatusTable
from clickup_org.sync.writer import DocumentWriter

logger = logging.getLogger(__name__)


@dataclass
class App:
    client: ClickUpClient
    orchestrator: SyncOrchestrator
    reverse: ReverseSyncHandler
    hooks: StatusChangeEmitter


def _resolve_timezone(name: str) -> tzinfo:
    if name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigurationError(f"Unknown timezone {name!r}") from e


def build_app(settings: Settings, sync_config: SyncConfig) -> App:
    tz = _resolve_timezone(settings.CLICKUP_TIMEZONE)
    status_table = StatusTable(
        sync_config.statuses,
        default_keyword=sync_config.default_keyword or settings.CLICKUP_DEFAULT_KEYWORD,
    )
    client = ClickUpClient(
        token=settings.CLICKUP_API_TOKEN,
        base_url=settings.CLICKUP_API_BASE_URL,
        timeout=settings.CLICKUP_REQUEST_TIMEOUT,
    )
    orchestrator = SyncOrchestrator(
        client=client,
        renderer=TaskRenderer(status_table, sync_config.custom_fields, tz=tz),
        writer=DocumentWriter(status_table),
        mappings=sync_config.lists,
        status_filter=sync_config.status_filter,
        assignee_filter=sync_config.assignee_filter,
    )
    reverse = ReverseSyncHandler(client, status_table)
    hooks = StatusChangeEmitter()
    reverse.attach(hooks)
    return App(client=client, orchestrator=orchestrator, reverse=reverse, hooks=hooks)


def _parse_date(raw: str) -> date:
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {raw!r}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sync ClickUp lists with Org documents")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to the YAML sync file (default: $CLICKUP_CONFIG_FILE)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sync = sub.add_parser("sync", help="Pull configured lists into their documents")
    sync.add_argument("--list", dest="list_id", help="Only sync this list id")
    sync.add_argument("--concurrent", action="store_true", help="Sync lists in parallel")

    render = sub.add_parser("render", help="Print a list's document without writing it")
    render.add_argument("list_id")

    push = sub.add_parser("push-status", help="Push a keyword change for one task")
    push.add_argument("task_id")
    push.add_argument("keyword")

    create = sub.add_parser("create", help="Create a task in a list")
    create.add_argument("list_id")
    create.add_argument("--name", required=True)
    create.add_argument("--description", default="")
    create.add_argument("--status", help="Local keyword, e.g. TODO")
    create.add_argument("--start", type=_parse_date)
    create.add_argument("--due", type=_parse_date)
    create.add_argument("--assign-me", action="store_true")

    sub.add_parser("whoami", help="Show the authenticated ClickUp user id")
    return parser


def _load_config(settings: Settings, path: Optional[str], required: bool) -> SyncConfig:
    config_path = settings.CLICKUP_CONFIG_FILE if path is None else Path(path)
    if not required and not config_path.exists():
        return SyncConfig()
    return load_sync_config(config_path)


def run(args: argparse.Namespace, settings: Settings) -> int:
    sync_config = _load_config(settings, args.config, required=args.command in ("sync", "render"))
    app = build_app(settings, sync_config)

    if args.command == "sync":
        if args.list_id:
            results = [app.orchestrator.sync_by_list_id(args.list_id)]
        else:
            results = app.orchestrator.sync_all(concurrent=args.concurrent)
        for r in results:
            state = "ok" if r.ok else ("partial" if r.written else "failed")
            print(f"{r.list_id}: {state}, {r.task_count} tasks -> {r.path}")
        return 0 if all(r.ok for r in results) else 1

    if args.command == "render":
        sys.stdout.write(app.orchestrator.render_list(args.list_id))
        return 0

    if args.command == "push-status":
        event = StatusChangeEvent(properties={ID_PROPERTY: args.task_id}, new_keyword=args.keyword)
        return 0 if app.reverse.handle(event) else 1

    if args.command == "create":
        new_task = NewTask(
            name=args.name,
            description=args.description,
            status=args.status,
            assign_to_me=args.assign_me,
            start_date=args.start,
            due_date=args.due,
        )
        print(app.orchestrator.create_task(args.list_id, new_task))
        return 0

    if args.command == "whoami":
        print(app.client.fetch_current_user())
        return 0

    return 2


def main(argv: Optional[list[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        return run(args, settings)
    except ClickUpSyncError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
