#!/usr/bin/env python3
"""
BTU - Bookmark Time Updater

Command-line interface for re-pointing Hunt/Test bookmark folders at a new
time window. Reads a browser bookmarks export, rewrites the Arkime and
Kibana links under configured slots, and writes a date-stamped copy.
"""
import sys
import json
import argparse
import logging
from dataclasses import asdict, fields
from pathlib import Path
from typing import List

from rich.console import Console
from rich.table import Table

from btu.config import init_config, get_config
from btu.constants import PREVIEW_URL_LENGTH, STATUS_APPLIED, STATUS_UNMATCHED
from btu.dialects import detect_url_type
from btu.documents import read_document, write_document, default_output_name
from btu.extract import extract_urls
from btu.models import ExtractedUrl, SlotGroup, UpdateResult
from btu.rewriter import update_document_report
from btu.timeutils import DateParseError, UnknownTimezoneError

logger = logging.getLogger(__name__)


console = Console()
err_console = Console(stderr=True)


def truncate(text: str, length: int = PREVIEW_URL_LENGTH) -> str:
    return text if len(text) <= length else text[:length] + "..."


def output_urls(urls: List[ExtractedUrl], format: str = "table"):
    """Output extracted URLs in the specified format."""
    if format == "json":
        print(json.dumps([u.to_dict() for u in urls], indent=2))
    elif format == "urls":
        for u in urls:
            print(u.url)
    elif format == "plain":
        for u in urls:
            print(f"[{u.type}] {u.title or 'Untitled'}\n    {u.url}")
    else:  # table
        if not urls:
            console.print("[yellow]No compatible URLs detected[/yellow]")
            return
        table = Table(title="Dashboard links")
        table.add_column("#", style="cyan")
        table.add_column("Title", style="green")
        table.add_column("Type", style="magenta")
        table.add_column("URL", style="blue")
        for i, u in enumerate(urls, 1):
            table.add_row(str(i), u.title or "Untitled", u.type, truncate(u.url))
        console.print(table)


def output_result(result: UpdateResult, out: Console):
    """Print the per-slot outcome table and summary line."""
    table = Table(title="Slots")
    table.add_column("Slot", style="cyan")
    table.add_column("Status")
    table.add_column("Rewritten", style="green")
    table.add_column("Unknown", style="yellow")

    styles = {STATUS_APPLIED: "green", STATUS_UNMATCHED: "yellow"}
    for o in result.outcomes:
        style = styles.get(o.status, "dim")
        table.add_row(o.key, f"[{style}]{o.status}[/{style}]", str(o.rewritten), str(o.unknown))

    out.print(table)
    out.print(result.summary())


def apply_cli_ranges(group: SlotGroup, ranges):
    """Apply repeated ``--hunt N START END`` style arguments to a slot group."""
    for slot, start, end in ranges or []:
        group.set(slot, start, end)


def cmd_update(args):
    """Rewrite the time windows of configured slots in a bookmarks export."""
    config = get_config()
    out = err_console if args.stdout else console

    content = read_document(args.file)
    if not content.strip():
        out.print("[red]No content: the bookmarks document is empty[/red]")
        sys.exit(1)

    hunts, tests = config.slot_groups()
    apply_cli_ranges(hunts, args.hunt)
    apply_cli_ranges(tests, args.test)

    if hunts.configured_count() + tests.configured_count() == 0:
        out.print("[yellow]Nothing to update: no hunt or test time range has both a start and an end[/yellow]")
        return

    try:
        result = update_document_report(
            content, hunts, tests,
            tz=args.tz or config.timezone,
            strict=args.strict or config.strict_slots,
        )
    except (DateParseError, UnknownTimezoneError) as e:
        out.print(f"[red]Update failed: {e}[/red]")
        sys.exit(1)

    if args.stdout:
        write_document(result.content, "-")
    else:
        path = Path(args.out) if args.out else config.get_output_path(
            default_output_name(template=config.output_template))
        write_document(result.content, path)
        if not args.quiet:
            out.print(f"[green]Wrote updated bookmarks to {path}[/green]")

    if not args.quiet:
        output_result(result, out)


def cmd_preview(args):
    """List the Arkime and Kibana links in a bookmarks export."""
    content = read_document(args.file)
    output_urls(extract_urls(content), args.output)


def cmd_detect(args):
    """Show the dialect of each URL."""
    results = [{"url": url, "type": detect_url_type(url)} for url in args.urls]
    if args.output == "json":
        print(json.dumps(results, indent=2))
    else:
        for r in results:
            print(f"{r['type']}\t{r['url']}")


def cmd_slots(args):
    """Show saved slot time ranges."""
    config = get_config()
    hunts, tests = config.slot_groups()

    if args.output == "json":
        data = {
            "hunts": {k: v.to_dict() for k, v in hunts.items()},
            "tests": {k: v.to_dict() for k, v in tests.items()},
        }
        print(json.dumps(data, indent=2))
        return

    table = Table(title="Slots")
    table.add_column("Slot", style="cyan")
    table.add_column("Start", style="green")
    table.add_column("End", style="green")
    table.add_column("Configured")
    for group in (hunts, tests):
        for key, time_range in group.items():
            table.add_row(key, time_range.start or "-", time_range.end or "-",
                          "✓" if time_range.is_configured else "")
    console.print(table)
    console.print(f"Hunts configured: {hunts.configured_count()}/{len(hunts)}  "
                  f"Tests configured: {tests.configured_count()}/{len(tests)}")


def _coerce_config_value(config, key: str, value: str):
    current = getattr(config, key)
    if isinstance(current, bool):
        return value.lower() in ("true", "1", "yes")
    if isinstance(current, dict):
        raise ValueError(f"{key} is a table; edit it in the config file")
    return value


def cmd_config(args):
    """Manage configuration."""
    config = get_config()
    known = {f.name for f in fields(config)}

    if args.action == "show":
        if args.key:
            if args.key in known:
                print(getattr(config, args.key))
            else:
                console.print(f"[red]Unknown config key: {args.key}[/red]")
                sys.exit(1)
        else:
            print(json.dumps(asdict(config), indent=2, default=str))

    elif args.action == "set":
        if args.key not in known or args.value is None:
            console.print("[red]Usage: btu config set KEY VALUE (with a known key)[/red]")
            sys.exit(1)
        setattr(config, args.key, _coerce_config_value(config, args.key, args.value))
        config.save()
        if not args.quiet:
            console.print(f"[green]Set {args.key} = {args.value}[/green]")

    elif args.action == "init":
        config_path = Path.home() / ".config" / "btu" / "config.toml"
        config.save(config_path)
        console.print(f"[green]Created config at {config_path}[/green]")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="btu",
        description="BTU - Bookmark Time Updater: re-point Hunt/Test bookmarks at a new time window",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Rewrite Hunt3 and Test1 links, writing bookmarks_updated_<date>.html
  btu update bookmarks.html --hunt 3 2024-01-01T00:00 2024-01-02T00:00 \\
                            --test 1 2024-01-05T08:00 2024-01-05T18:00

  # Interpret times as UTC and pipe the result elsewhere
  btu update bookmarks.html --hunt 1 "2024-01-01 00:00" "2024-01-01 12:00" --tz UTC --stdout

  # Preview recognised links
  btu preview bookmarks.html
  btu -o json preview bookmarks.html

  # Check a single URL
  btu detect "https://arkime.example/sessions?startTime=1&stopTime=2"

  # Saved ranges and settings
  btu slots
  btu config set timezone UTC

Configuration:
  Config file: ~/.config/btu/config.toml or ./btu.toml
  Environment: BTU_TIMEZONE, BTU_OUTPUT_DIR, BTU_STRICT_SLOTS
        """
    )

    # Global options
    parser.add_argument("--config", help="Config file path")
    parser.add_argument("-q", "--quiet", action="store_true", help="Minimal output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("-o", "--output", choices=["table", "json", "plain", "urls"],
                        help="Output format")

    subparsers = parser.add_subparsers(dest="command", required=True, help="Commands")

    # update
    update_parser = subparsers.add_parser("update", help="Rewrite slot time windows")
    update_parser.add_argument("file", help="Bookmarks HTML export (- for stdin)")
    update_parser.add_argument("--hunt", nargs=3, action="append", metavar=("N", "START", "END"),
                               help="Time range for HuntN (repeatable)")
    update_parser.add_argument("--test", nargs=3, action="append", metavar=("N", "START", "END"),
                               help="Time range for TestN (repeatable)")
    target = update_parser.add_mutually_exclusive_group()
    target.add_argument("--out", help="Output file (default: bookmarks_updated_<date>.html)")
    target.add_argument("--stdout", action="store_true", help="Write the result to stdout")
    update_parser.add_argument("--tz", help="Time zone for times without an offset (default: local)")
    update_parser.add_argument("--strict", action="store_true",
                               help="Do not let Hunt1 match a Hunt11 heading")
    update_parser.set_defaults(func=cmd_update)

    # preview
    preview_parser = subparsers.add_parser("preview", help="List Arkime/Kibana links")
    preview_parser.add_argument("file", help="Bookmarks HTML export (- for stdin)")
    preview_parser.set_defaults(func=cmd_preview)

    # detect
    detect_parser = subparsers.add_parser("detect", help="Classify URLs")
    detect_parser.add_argument("urls", nargs="+", help="URLs to classify")
    detect_parser.set_defaults(func=cmd_detect)

    # slots
    slots_parser = subparsers.add_parser("slots", help="Show saved slot time ranges")
    slots_parser.set_defaults(func=cmd_slots)

    # config
    config_parser = subparsers.add_parser("config", help="Manage configuration")
    config_parser.add_argument("action", choices=["show", "set", "init"], help="Config action")
    config_parser.add_argument("key", nargs="?", help="Config key")
    config_parser.add_argument("value", nargs="?", help="Config value (for set)")
    config_parser.set_defaults(func=cmd_config)

    return parser


def main(argv=None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config_args = {}
    if args.output:
        config_args["output_format"] = args.output

    config = init_config(
        config_file=Path(args.config) if args.config else None,
        **config_args
    )

    if not args.output:
        args.output = config.output_format

    level = "DEBUG" if args.verbose else str(config.log_level).upper()
    if not isinstance(logging.getLevelName(level), int):
        err_console.print(f"[red]Unknown log level: {config.log_level}[/red]")
        sys.exit(1)

    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(message)s'
    )
    console.no_color = not config.color_output
    err_console.no_color = not config.color_output

    # Execute command
    try:
        args.func(args)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)
    except Exception as e:
        err_console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
