"""Hindsight CLI — hindsight watch.

Entry point for the ``hindsight`` command-line interface.
"""

from __future__ import annotations

import argparse
import logging
import sys
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from hindsight._errors import EventTypeError, HindsightError

if TYPE_CHECKING:
    from hindsight.history.record import EventRecord


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the hindsight CLI."""
    parser = argparse.ArgumentParser(
        prog="hindsight",
        description="Record and inspect a history of typed events.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # hindsight watch
    watch_parser = subparsers.add_parser(
        "watch",
        help="Record file changes under a directory",
    )
    watch_parser.add_argument("root", nargs="?", default=".", help="Directory to watch")
    watch_parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="TYPE",
        help="Hide events of this type from the final history (repeatable)",
    )
    watch_parser.add_argument(
        "--highlight",
        action="append",
        default=[],
        metavar="TYPE",
        help="Emphasize events of this type in the final history (repeatable)",
    )
    watch_parser.add_argument(
        "--html", action="store_true", help="Render the final history as HTML",
    )
    watch_parser.add_argument(
        "--max-events", type=int, default=None, help="Cap the recorded history",
    )
    watch_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging",
    )

    return parser


def _get_version() -> str:
    """Get the package version."""
    from hindsight import __version__

    return __version__


def resolve_types(names: list[str]) -> set[type]:
    """Map CLI type names (``file``, ``added``, ...) to event classes."""
    from hindsight.watcher import EVENT_TYPES_BY_NAME

    types: set[type] = set()
    for name in names:
        try:
            types.add(EVENT_TYPES_BY_NAME[name.lower()])
        except KeyError:
            msg = (
                f"Unknown event type {name!r}; "
                f"expected one of {sorted(EVENT_TYPES_BY_NAME)}"
            )
            raise EventTypeError(msg) from None
    return types


def _print_record(record: EventRecord) -> None:
    print(f"[{record.sequence}] {record.event_type_name}: {record.rendered}")


def watch(
    root: str,
    *,
    exclude: list[str],
    highlight: list[str],
    html: bool = False,
    max_events: int | None = None,
    stop: threading.Event | None = None,
) -> str:
    """Watch ``root`` until interrupted, then return the rendered history."""
    from hindsight.config_loader import load_config
    from hindsight.history.encoders import encode_html, encode_text
    from hindsight.history.recorder import EventHistory
    from hindsight.watcher import FileEvent, FileWatcher

    filtered_out = resolve_types(exclude)
    highlighted = resolve_types(highlight)
    root_path = Path(root)
    config = load_config(root_path, max_events=max_events)

    with EventHistory(config, base_type=FileEvent) as history:
        history.add_listener(_print_record)
        watcher = FileWatcher(root_path, history.on_event, config=config)
        watcher.start()
        print(f"Watching {watcher.root} (Ctrl-C to stop)", file=sys.stderr)
        try:
            (stop or threading.Event()).wait()
        except KeyboardInterrupt:
            pass
        finally:
            watcher.stop()

        encoder = encode_html if html else encode_text
        print(f"Recorded {len(history)} events", file=sys.stderr)
        return history.to_text(filtered_out, highlighted, encoder=encoder)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if getattr(args, "verbose", False):
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        if args.command == "watch":
            sys.stdout.write(
                watch(
                    args.root,
                    exclude=args.exclude,
                    highlight=args.highlight,
                    html=args.html,
                    max_events=args.max_events,
                )
            )
    except HindsightError as exc:
        print(f"hindsight: {exc}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
