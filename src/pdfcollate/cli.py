#!/usr/bin/env python3
"""
PdfCollate CLI: combine, reorder and split PDF pages from the terminal.

Usage:
    python -m pdfcollate <command> [options]

Commands:
    compose     Merge the loaded pages into one PDF
    split       Write every page as its own PDF inside a ZIP archive
    list        Show the page order after the requested edits
    config      Show or change a stored setting

Edits are applied in the order they appear on the command line, after the
input files are loaded. PAGES always refer to the current 1-based positions.

Examples:
    # Merge two files
    pdfcollate compose a.pdf b.pdf -n merged

    # Move pages 2 and 5 to the front, rotate the new first page
    pdfcollate compose a.pdf b.pdf --move 2,5:1 --rotate 1

    # Drop page 3, add another file at the end, split into a ZIP
    pdfcollate split a.pdf --delete 3 --add c.pdf -o out/

    # Preview
    pdfcollate list a.pdf b.pdf --view list

    # Change the default archive name
    pdfcollate config export.archive_name scans
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from pdfcollate.config import APP_DESCRIPTION, APP_VERSION
from pdfcollate.utils.i18n import _

# ---------------------------------------------------------------------------
# Page specification parsers
# ---------------------------------------------------------------------------


def _parse_page_list(text: str) -> list[int]:
    """Parse a page specification string into a sorted list of page numbers.

    Supports: "3", "1-5", "1,3,7", "1-3,7,10-12"

    Args:
        text: Page specification string.

    Returns:
        Sorted list of 1-indexed page numbers.
    """
    pages: set[int] = set()
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            if "-" in part:
                start_s, end_s = part.split("-", 1)
                s, e = int(start_s.strip()), int(end_s.strip())
                pages.update(range(s, e + 1))
            else:
                pages.add(int(part))
        except ValueError:
            raise ValueError(
                f"Invalid page specification '{part}'. "
                "Use numbers and ranges like '1-5' or '1,3,7'."
            ) from None
    return sorted(p for p in pages if p >= 1)


def _parse_move(text: str) -> tuple[list[int], int]:
    """Parse a move specification "PAGES:TARGET".

    Args:
        text: e.g. "2,5:1" moves pages 2 and 5 so the block lands at slot 1.

    Returns:
        Tuple of (sorted 1-indexed pages, 1-indexed target slot).
    """
    pages_s, sep, target_s = text.rpartition(":")
    if not sep or not pages_s.strip():
        raise ValueError(f"Invalid move specification '{text}'. Use 'PAGES:TARGET', e.g. '2,5:1'.")
    try:
        target = int(target_s.strip())
    except ValueError:
        raise ValueError(f"Invalid move target '{target_s}'. Use a page position.") from None
    if target < 1:
        raise ValueError(f"Invalid move target '{target_s}'. Positions start at 1.")
    return _parse_page_list(pages_s), target


# ---------------------------------------------------------------------------
# Argument parser construction
# ---------------------------------------------------------------------------


class _RecordEdit(argparse.Action):
    """Append (kind, value) to ``namespace.edits`` preserving command-line order."""

    def __call__(self, parser, namespace, values, option_string=None):
        edits = list(getattr(namespace, "edits", None) or [])
        edits.append((self.dest, values))
        namespace.edits = edits


def _add_edit_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("inputs", nargs="+", type=Path, help=_("Input PDF files (in order)"))
    p.add_argument("--config", type=Path, default=None, help=_("Settings file to use"))
    p.set_defaults(edits=[])

    edits = p.add_argument_group(_("Edits (applied in command-line order)"))
    edits.add_argument(
        "--add",
        dest="add",
        action=_RecordEdit,
        type=Path,
        metavar="FILE",
        help=_("Append the pages of another PDF"),
    )
    edits.add_argument(
        "--rotate",
        dest="rotate",
        action=_RecordEdit,
        metavar="PAGES",
        help=_("Rotate pages 90° clockwise (e.g. '1,3' or '2-4')"),
    )
    edits.add_argument(
        "--rotate-left",
        dest="rotate_left",
        action=_RecordEdit,
        metavar="PAGES",
        help=_("Rotate pages 90° counter-clockwise"),
    )
    edits.add_argument(
        "--select",
        dest="select",
        action=_RecordEdit,
        metavar="PAGES",
        help=_("Mark pages as selected in the preview"),
    )
    edits.add_argument(
        "--delete",
        dest="delete",
        action=_RecordEdit,
        metavar="PAGES",
        help=_("Delete pages (e.g. '3,5,7' or '2-4')"),
    )
    edits.add_argument(
        "--move",
        dest="move",
        action=_RecordEdit,
        metavar="PAGES:TARGET",
        help=_("Move pages as one block to a position (e.g. '2,5:1')"),
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with subcommands."""
    p = argparse.ArgumentParser(
        prog="pdfcollate",
        description=APP_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("-v", "--verbose", action="store_true", help=_("Verbose logging (DEBUG)"))
    p.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")

    sub = p.add_subparsers(dest="command", help=_("Available commands"))

    # --- compose ---
    compose_p = sub.add_parser("compose", help=_("Merge pages into one PDF"))
    _add_edit_options(compose_p)
    compose_p.add_argument(
        "-n", "--name", type=str, default=None, help=_("Output file name without extension")
    )
    compose_p.add_argument("-o", "--output-dir", type=Path, default=None, help=_("Output directory"))

    # --- split ---
    split_p = sub.add_parser("split", help=_("Write one PDF per page into a ZIP archive"))
    _add_edit_options(split_p)
    split_p.add_argument(
        "-n", "--name", type=str, default=None, help=_("Archive name without extension")
    )
    split_p.add_argument("-o", "--output-dir", type=Path, default=None, help=_("Output directory"))

    # --- list ---
    list_p = sub.add_parser("list", help=_("Show the page order"))
    _add_edit_options(list_p)
    list_p.add_argument(
        "--view",
        choices=["blocks", "list"],
        default=None,
        help=_("Preview layout (default from settings)"),
    )
    list_p.add_argument(
        "--json", action="store_true", help=_("Print the pages as JSON instead of a preview")
    )

    # --- config ---
    config_p = sub.add_parser("config", help=_("Show or change a stored setting"))
    config_p.add_argument("key", help=_("Dot-separated key, e.g. 'export.archive_name'"))
    config_p.add_argument("value", nargs="?", default=None, help=_("New value (JSON or text)"))
    config_p.add_argument("--config", type=Path, default=None, help=_("Settings file to use"))

    return p


# ---------------------------------------------------------------------------
# Session helpers
# ---------------------------------------------------------------------------


def _build_session(args, logger):
    """Create an EditorSession using the selected settings file."""
    from pdfcollate.editor.session import EditorSession
    from pdfcollate.utils.config_manager import (
        ConfigManager,
        EditorSettings,
        get_config_manager,
    )

    manager = ConfigManager(str(args.config)) if args.config else get_config_manager()
    settings = EditorSettings.from_config(manager)
    if not args.verbose:
        from pdfcollate.utils.logger import set_log_level

        set_log_level(settings.log_level)
    logger.debug(f"Using settings from {manager.config_path}")
    return EditorSession(settings=settings)


def _report_load(report) -> None:
    for error in report.errors:
        print(f"Error: {error}", file=sys.stderr)


async def _prepare(args, logger):
    """Load the input files and apply the edits. Returns a session or None."""
    from pdfcollate.services.source_loader import LocalFile

    for p in args.inputs:
        if not p.exists():
            print(f"Error: {p} not found", file=sys.stderr)
            return None

    session = _build_session(args, logger)
    report = await session.load_files(LocalFile(p) for p in args.inputs)
    _report_load(report)
    if not session.registry:
        print(_("Error: no PDF file could be loaded"), file=sys.stderr)
        return None

    for kind, value in args.edits:
        if kind == "add":
            if not value.exists():
                print(f"Error: {value} not found", file=sys.stderr)
                return None
            _report_load(await session.add_files([LocalFile(value)]))
        elif kind == "rotate":
            for page_id in session.ids_at_positions(_parse_page_list(value)):
                session.rotate(page_id)
        elif kind == "rotate_left":
            for page_id in session.ids_at_positions(_parse_page_list(value)):
                session.rotate(page_id, clockwise=False)
        elif kind == "select":
            session.select(*session.ids_at_positions(_parse_page_list(value)))
        elif kind == "delete":
            session.delete(session.ids_at_positions(_parse_page_list(value)))
        elif kind == "move":
            pages, target = _parse_move(value)
            session.move(session.ids_at_positions(pages), target - 1)

    return session


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


async def _cmd_compose(args, logger) -> int:
    """Handle the 'compose' command."""
    session = await _prepare(args, logger)
    if session is None:
        return 1

    result = await session.compose(args.name)
    output_dir = args.output_dir or session.settings.output_dir or "."
    path = result.artifact.write_to(output_dir)
    print(f"Composed {result.succeeded} pages → {path}")
    if result.failed:
        print(f"Warning: {result.failed} page(s) could not be exported", file=sys.stderr)
    return 0


async def _cmd_split(args, logger) -> int:
    """Handle the 'split' command."""
    session = await _prepare(args, logger)
    if session is None:
        return 1

    result = await session.split(args.name)
    output_dir = args.output_dir or session.settings.output_dir or "."
    path = result.artifact.write_to(output_dir)
    print(f"Split {result.succeeded} pages → {path}")
    for name in result.entry_names:
        print(f"  → {name}")
    if result.failed:
        print(f"Warning: {result.failed} page(s) could not be exported", file=sys.stderr)
    return 0


async def _cmd_list(args, logger) -> int:
    """Handle the 'list' command."""
    session = await _prepare(args, logger)
    if session is None:
        return 1

    if args.json:
        print(json.dumps([page.to_dict() for page in session.collection], indent=2))
        return 0

    for line in session.preview(args.view):
        print(line)
    print(f"{len(session)} page(s) from {len(session.registry)} file(s)")
    return 0


def _parse_config_value(text: str):
    """Parse a value given on the command line: JSON when it parses, text otherwise."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


async def _cmd_config(args, logger) -> int:
    """Handle the 'config' command."""
    from pdfcollate.utils.config_manager import (
        ConfigManager,
        EditorSettings,
        get_config_manager,
    )

    manager = ConfigManager(str(args.config)) if args.config else get_config_manager()
    if args.value is None:
        value = manager.get(args.key)
        if value is None:
            print(f"Error: unknown setting '{args.key}'", file=sys.stderr)
            return 1
        print(json.dumps(value, ensure_ascii=False))
        return 0

    manager.set(args.key, _parse_config_value(args.value), save_immediately=False)
    EditorSettings.from_config(manager)
    if not manager.save():
        print(f"Error: could not write {manager.config_path}", file=sys.stderr)
        return 1
    logger.info(f"Setting {args.key} updated in {manager.config_path}")
    return 0


_COMMANDS = {
    "compose": _cmd_compose,
    "split": _cmd_split,
    "list": _cmd_list,
    "config": _cmd_config,
}


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    from pdfcollate.utils.exceptions import PdfCollateError
    from pdfcollate.utils.logger import logger, set_log_level

    if args.verbose:
        set_log_level(logging.DEBUG)

    handler = _COMMANDS[args.command]
    try:
        return asyncio.run(handler(args, logger))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except PdfCollateError as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
