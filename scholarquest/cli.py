"""Command line interface for ScholarQuest."""

import argparse
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm

from scholarquest import config
from scholarquest.confirmation import ActionKind, ConfirmationFlow, action_for_status
from scholarquest.display import (
    ConsoleEventHandler,
    create_dashboard,
    create_progress_panel,
    create_stats_text,
)
from scholarquest.errors import InvalidTransitionError, ScholarQuestError
from scholarquest.logging import configure_logging
from scholarquest.models import PaperDraft, PaperResult, PaperStatus, Tier
from scholarquest.store import JsonFileStorage, RecordStore
from scholarquest.workflow import can_transition

# CLI option -> PaperDraft field
DRAFT_OPTIONS = {
    "title": "title",
    "conference": "conference",
    "tier": "tier",
    "submission_date": "submission_date",
    "score_release_date": "score_release_date",
    "scores": "scores",
    "rebuttal_date": "rebuttal_date",
    "final_scores": "final_scores",
    "result": "result",
    "content": "content",
}


def _enum_arg(enum_cls):
    """argparse type accepting enum values case-insensitively."""
    lookup = {member.value.lower(): member for member in enum_cls}

    def parse(value: str):
        try:
            return lookup[value.lower()]
        except KeyError:
            choices = ", ".join(member.value for member in enum_cls)
            raise argparse.ArgumentTypeError(f"invalid choice {value!r} (choose from {choices})") from None

    parse.__name__ = enum_cls.__name__
    return parse


def _add_draft_options(parser: argparse.ArgumentParser, require_title: bool) -> None:
    parser.add_argument("--title", required=require_title, help="Paper title")
    parser.add_argument("--conference", help="Target venue")
    parser.add_argument("--tier", type=_enum_arg(Tier), help="Venue tier (A, B, C, Other)")
    parser.add_argument("--submission-date", dest="submission_date")
    parser.add_argument("--score-release-date", dest="score_release_date")
    parser.add_argument("--scores", help="Initial review scores")
    parser.add_argument("--rebuttal-date", dest="rebuttal_date")
    parser.add_argument("--final-scores", dest="final_scores")
    parser.add_argument("--result", type=_enum_arg(PaperResult))
    parser.add_argument("--content", help="Notes or abstract")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scholarquest",
        description="Track paper submissions and level up with every acceptance",
    )
    parser.add_argument(
        "--data-file",
        type=Path,
        default=None,
        help=f"Storage file (default: {config.DATA_FILE})",
    )
    parser.add_argument(
        "--log-level",
        default=config.LOG_LEVEL,
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("status", help="Show level, XP and counts")

    list_parser = subparsers.add_parser("list", help="List records of one status")
    list_parser.add_argument(
        "--status",
        type=_enum_arg(PaperStatus),
        default=PaperStatus.ACCEPTED,
        help="Status tab to show (default: Accepted)",
    )

    add_parser = subparsers.add_parser("add", help="Record a new paper")
    _add_draft_options(add_parser, require_title=True)
    add_parser.add_argument(
        "--status",
        type=_enum_arg(PaperStatus),
        default=PaperStatus.TARGET,
        help="Initial status (default: Target)",
    )

    edit_parser = subparsers.add_parser("edit", help="Edit a paper's details")
    edit_parser.add_argument("record_id")
    _add_draft_options(edit_parser, require_title=False)

    advance_parser = subparsers.add_parser("advance", help="Move a paper to a new status")
    advance_parser.add_argument("record_id")
    advance_parser.add_argument("status", type=_enum_arg(PaperStatus))
    advance_parser.add_argument("-y", "--yes", action="store_true", help="Skip confirmation")

    delete_parser = subparsers.add_parser("delete", help="Delete a paper")
    delete_parser.add_argument("record_id")
    delete_parser.add_argument("-y", "--yes", action="store_true", help="Skip confirmation")

    return parser


def _draft_updates(args: argparse.Namespace) -> dict:
    updates = {}
    for option, field in DRAFT_OPTIONS.items():
        value = getattr(args, option, None)
        if value is not None:
            updates[field] = value
    return updates


def _run_confirmed(
    flow: ConfirmationFlow,
    kind: ActionKind,
    store: RecordStore,
    record_id: str,
    callback,
    assume_yes: bool,
    console: Console,
) -> bool:
    """Ask before running ``callback``; returns whether it ran."""
    message = flow.request(kind, store.get(record_id), callback)
    if assume_yes or Confirm.ask(message, console=console):
        flow.confirm()
        return True
    flow.cancel()
    console.print("[dim]Cancelled.[/dim]")
    return False


def run(args: argparse.Namespace, store: RecordStore, console: Console) -> int:
    """Execute a parsed command against ``store``."""
    flow = ConfirmationFlow()

    if args.command == "status":
        leveling = store.leveling()
        console.print(create_progress_panel(leveling))
        console.print(create_stats_text(store.status_counts(), leveling))

    elif args.command == "list":
        console.print(
            create_dashboard(
                store.leveling(),
                store.status_counts(),
                store.by_status(args.status),
                args.status,
            )
        )

    elif args.command == "add":
        draft = PaperDraft(**_draft_updates(args))
        record = store.add(draft, status=args.status)
        console.print(f"[green]Added[/green] {record.id}: {record.title}")

    elif args.command == "edit":
        current = store.get(args.record_id)
        draft = PaperDraft(**{**current.model_dump(include=set(PaperDraft.model_fields)), **_draft_updates(args)})
        record = store.update(args.record_id, draft)
        console.print(f"[green]Updated[/green] {record.id}: {record.title}")

    elif args.command == "advance":
        current = store.get(args.record_id)
        if not can_transition(current.status, args.status):
            raise InvalidTransitionError(current.status.value, args.status.value)
        kind = action_for_status(args.status)

        def advance():
            return store.transition_status(args.record_id, args.status)

        if kind is None:
            advance()
        else:
            _run_confirmed(flow, kind, store, args.record_id, advance, args.yes, console)

    elif args.command == "delete":
        def delete():
            return store.remove(args.record_id)

        if _run_confirmed(flow, ActionKind.DELETE, store, args.record_id, delete, args.yes, console):
            console.print(f"[red]Deleted[/red] {args.record_id}")

    return 0


def main(argv: list[str] | None = None, console: Console | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    console = console or Console()

    configure_logging(cli_mode=True, log_level=args.log_level)

    storage = JsonFileStorage(args.data_file or config.DATA_FILE)
    store = RecordStore(storage=storage, event_handler=ConsoleEventHandler(console))

    try:
        return run(args, store, console)
    except ScholarQuestError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        return 1
    except OSError as e:
        console.print(f"[red]Error:[/red] could not write {escape(str(storage.path))}: {escape(str(e))}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
