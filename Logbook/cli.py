# Logbook/cli.py

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

from dotenv import load_dotenv
load_dotenv()

from pydantic import ValidationError

from Logbook.config import Settings
from Logbook.display import render_detail, render_page_bar, render_table
from Logbook.export import write_export
from Logbook.models import KNOWN_STATUSES, STATUS_ALL, EntryDraft
from Logbook.notifications import Notification, Notifier
from Logbook.session import LogbookSession

logging.basicConfig(
    format="%(asctime)s | %(levelname)-8s | %(name)-24s | %(message)s",
    level=logging.WARNING,
)
log = logging.getLogger("Logbook.cli")

# CLI option -> EntryDraft field
ENTRY_OPTIONS = {
    "date": "date",
    "module": "module_or_feature",
    "activity": "activity",
    "detail": "technical_detail",
    "obstacle": "obstacle",
    "resolution": "resolution",
    "status": "status",
    "pic": "person_in_charge",
}


def _positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def _print_notification(notification: Notification):
    print(f"{notification.level.upper()}: {notification.message}", file=sys.stderr)


def _print_validation_error(error: ValidationError):
    print("Entry is not valid:", file=sys.stderr)
    for problem in error.errors():
        field = ".".join(str(part) for part in problem["loc"]) or "entry"
        print(f"  {field}: {problem['msg']}", file=sys.stderr)


def _add_filter_options(parser: argparse.ArgumentParser):
    parser.add_argument("--search", default="", help="Case-insensitive text to look for in module, activity, PIC or technical detail.")
    parser.add_argument("--status", default=STATUS_ALL, help=f"Exact status to keep (default: {STATUS_ALL}).")


def _add_entry_options(parser: argparse.ArgumentParser, required: bool):
    parser.add_argument("--date", type=date.fromisoformat, default=None, help="Entry date YYYY-MM-DD (default on add: today).")
    parser.add_argument("--module", required=required, default=None, help="Module or feature worked on.")
    parser.add_argument("--activity", required=required, default=None, help="What was done.")
    parser.add_argument("--detail", default=None, help="Technical detail.")
    parser.add_argument("--obstacle", default=None, help="Obstacle encountered.")
    parser.add_argument("--resolution", default=None, help="How the obstacle was resolved.")
    parser.add_argument("--status", required=required, default=None, help=f"Entry status, e.g. {', '.join(KNOWN_STATUSES)}.")
    parser.add_argument("--pic", required=required, default=None, help="Person in charge.")


def _entry_overrides(args_ns) -> dict:
    return {
        field: getattr(args_ns, option)
        for option, field in ENTRY_OPTIONS.items()
        if getattr(args_ns, option) is not None
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="logbook",
        description="Logbook: search, edit and export a remote activity logbook"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging for all Logbook modules.")
    parser.add_argument("--api-url", default=None, help="Base URL of the logbook API (overrides LOGBOOK_API_BASE_URL).")
    subparsers = parser.add_subparsers(dest="command", title="Available Commands", required=True)

    # --- List ---
    parser_list = subparsers.add_parser("list", help="Show one page of entries, newest first.")
    _add_filter_options(parser_list)
    parser_list.add_argument("--page", type=_positive_int, default=1, help="Page number (default: 1).")
    parser_list.add_argument("--per-page", type=_positive_int, default=None, help="Entries per page (default from settings).")
    def handle_list(args_ns, session: LogbookSession, current_settings: Settings) -> int:
        if args_ns.per_page is not None:
            session.state.items_per_page = args_ns.per_page
        session.set_search_term(args_ns.search)
        session.set_status_filter(args_ns.status)
        if not session.load():
            return 1
        if args_ns.page != 1 and not session.go_to_page(args_ns.page):
            log.warning(f"Page {args_ns.page} does not exist, showing page {session.state.current_page}.")
        page = session.current_page()
        print(render_table(page.items))
        print(render_page_bar(page))
        return 0
    parser_list.set_defaults(func=handle_list)

    # --- Show ---
    parser_show = subparsers.add_parser("show", help="Show every field of one entry.")
    parser_show.add_argument("number", type=int, help="Entry number.")
    def handle_show(args_ns, session: LogbookSession, current_settings: Settings) -> int:
        if not session.load():
            return 1
        entry = session.find_entry(args_ns.number)
        if entry is None:
            print(f"Entry #{args_ns.number} not found.", file=sys.stderr)
            return 1
        print(render_detail(entry))
        return 0
    parser_show.set_defaults(func=handle_show)

    # --- Statuses ---
    parser_statuses = subparsers.add_parser("statuses", help="List the status values currently in use.")
    def handle_statuses(args_ns, session: LogbookSession, current_settings: Settings) -> int:
        if not session.load():
            return 1
        for status in session.status_options():
            print(status)
        return 0
    parser_statuses.set_defaults(func=handle_statuses)

    # --- Add ---
    parser_add = subparsers.add_parser("add", help="Add a new entry.")
    _add_entry_options(parser_add, required=True)
    def handle_add(args_ns, session: LogbookSession, current_settings: Settings) -> int:
        fields = _entry_overrides(args_ns)
        fields.setdefault("date", date.today())
        try:
            draft = EntryDraft(**fields)
        except ValidationError as e:
            _print_validation_error(e)
            return 1
        return 0 if session.create_entry(draft) else 1
    parser_add.set_defaults(func=handle_add)

    # --- Edit ---
    parser_edit = subparsers.add_parser("edit", help="Change fields of an existing entry.")
    parser_edit.add_argument("number", type=int, help="Entry number.")
    _add_entry_options(parser_edit, required=False)
    def handle_edit(args_ns, session: LogbookSession, current_settings: Settings) -> int:
        if not session.load():
            return 1
        entry = session.find_entry(args_ns.number)
        if entry is None:
            print(f"Entry #{args_ns.number} not found.", file=sys.stderr)
            return 1
        fields = entry.model_dump(exclude={"sequence_number"})
        fields.update(_entry_overrides(args_ns))
        try:
            draft = EntryDraft(**fields)
        except ValidationError as e:
            _print_validation_error(e)
            return 1
        return 0 if session.update_entry(entry.sequence_number, draft) else 1
    parser_edit.set_defaults(func=handle_edit)

    # --- Delete ---
    parser_delete = subparsers.add_parser("delete", help="Delete an entry.")
    parser_delete.add_argument("number", type=int, help="Entry number.")
    parser_delete.add_argument("--yes", action="store_true", help="Do not ask for confirmation.")
    def handle_delete(args_ns, session: LogbookSession, current_settings: Settings) -> int:
        if not args_ns.yes:
            answer = input(f"Delete entry #{args_ns.number}? [y/N] ")
            if answer.strip().lower() not in ("y", "yes"):
                print("Cancelled.")
                return 0
        return 0 if session.delete_entry(args_ns.number) else 1
    parser_delete.set_defaults(func=handle_delete)

    # --- Export ---
    parser_export = subparsers.add_parser("export", help="Write the filtered entries to a CSV file.")
    _add_filter_options(parser_export)
    parser_export.add_argument("--out", type=Path, default=None, help="Output directory (default from settings).")
    def handle_export(args_ns, session: LogbookSession, current_settings: Settings) -> int:
        session.set_search_term(args_ns.search)
        session.set_status_filter(args_ns.status)
        if not session.load():
            return 1
        artifact = session.export()
        path = write_export(artifact, args_ns.out or current_settings.export_dir)
        print(path)
        return 0
    parser_export.set_defaults(func=handle_export)

    return parser


def main(argv=None) -> int:
    settings = Settings()
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.getLogger("Logbook").setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    if args.debug:
        logging.getLogger("Logbook").setLevel(logging.DEBUG)
        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG)
        for handler in root_logger.handlers:
            handler.setLevel(logging.DEBUG)
        log.debug("Debug logging enabled via CLI.")

    if args.api_url:
        settings.api_base_url = args.api_url

    notifier = Notifier()
    notifier.subscribe(_print_notification)
    session = LogbookSession.from_settings(settings, notifier=notifier)
    try:
        return args.func(args, session, settings)
    finally:
        session.sync.client.close()


if __name__ == "__main__":
    sys.exit(main())
