"""Command-line interface for ReviewTools review mode."""
from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from .compose import LAYOUTS, SheetOptions, hex_to_rgba, write_sheet
from .file_scanner import is_supported_image
from .review_session import ReviewState, activate, apply_pattern_edits, jump_to, navigate

logger = logging.getLogger(__name__)


def setup_debug_logging() -> Path | None:
    """Send DEBUG logs to a file when ``REVIEWTOOLS_DEBUG`` is set."""

    if not os.environ.get("REVIEWTOOLS_DEBUG"):
        package_logger = logging.getLogger("review_tools")
        if not any(isinstance(h, logging.NullHandler) for h in package_logger.handlers):
            package_logger.addHandler(logging.NullHandler())
        return None
    log_path = Path(os.environ.get("REVIEWTOOLS_DEBUG_LOG", "review_tools_debug.log"))
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path, mode="w", encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    # remove existing file handlers to avoid duplicates
    root_logger.handlers = [h for h in root_logger.handlers if not isinstance(h, logging.FileHandler)]
    root_logger.addHandler(handler)
    root_logger.info("ReviewTools debug logging enabled at %s", log_path)
    return log_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Infer the naming pattern of images viewed together and browse matching sets"
    )
    parser.add_argument("inputs", nargs="+", type=Path, help="Images currently compared (same folder)")
    parser.add_argument(
        "--pattern",
        action="append",
        default=None,
        help="Hand-edited cell pattern; repeat once per cell to replace the inferred ones",
    )
    parser.add_argument("--list", action="store_true", help="Print every set found in the folder")
    parser.add_argument("--step", type=int, default=0, help="Move this many sets forward (negative for back)")
    parser.add_argument("--radix", default=None, help="Jump to the set with this radix")
    parser.add_argument("--sheet", type=Path, default=None, help="Write a comparison sheet of the selected set")
    parser.add_argument("--layout", choices=LAYOUTS, default="horizontal", help="Comparison sheet layout")
    parser.add_argument("--gap", type=int, default=0, help="Pixels between sheet cells")
    parser.add_argument(
        "--background",
        default="#00000000",
        help="Sheet background hex (RRGGBB or RRGGBBAA)",
    )
    return parser


def _print_patterns(state: ReviewState) -> None:
    for index, cell in enumerate(state.cell_patterns):
        label = cell.label or f"cell {index}"
        print(f"  [{index}] {label}: {cell.pattern}")


def main(argv: list[str] | None = None) -> int:
    setup_debug_logging()
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        background = hex_to_rgba(args.background)
    except ValueError as exc:
        parser.error(str(exc))

    parents = {path.expanduser().absolute().parent for path in args.inputs}
    if len(parents) != 1:
        parser.error("All inputs must live in the same folder")
    directory = parents.pop()
    if not directory.is_dir():
        parser.error(f"Input folder not found: {directory}")

    state = ReviewState()
    loads = activate(state, [path.name for path in args.inputs], directory)
    if state.error:
        print(f"[FAIL] {state.error}")
        return 1

    if args.pattern:
        if len(args.pattern) != len(state.cell_patterns):
            parser.error(f"Expected {len(state.cell_patterns)} --pattern values, got {len(args.pattern)}")
        loads = apply_pattern_edits(state, args.pattern)

    if args.radix is not None:
        loads = jump_to(state, args.radix)
        if state.error:
            print(f"[FAIL] {state.error}")
            return 1
    if args.step:
        loads = navigate(state, args.step)

    print(f"Folder: {directory}")
    print("Patterns:")
    _print_patterns(state)
    if args.list:
        print(f"Sets ({len(state.radixes)}):")
        for index, radix in enumerate(state.radixes):
            marker = "*" if index == state.index else " "
            print(f" {marker} {radix}")

    if state.current_radix is None:
        print("No matching sets found.")
        return 1

    print(f"Current set {state.index + 1}/{len(state.radixes)}: {state.current_radix}")
    resolved = dict(loads)
    for index, cell in enumerate(state.cell_patterns):
        label = cell.label or f"cell {index}"
        path = resolved.get(index)
        if path is None:
            print(f"[MISS] {label}")
            continue
        if not is_supported_image(Path(path)):
            logger.warning("Resolved file may not be an image: %s", path)
        print(f"[OK] {label} -> {Path(path).name}")

    if not loads:
        return 1

    if args.sheet:
        options = SheetOptions(layout=args.layout, gap=args.gap, background=background)
        try:
            written = write_sheet(loads, args.sheet, options)
        except (OSError, ValueError) as exc:
            print(f"[FAIL] Could not write sheet: {exc}")
            return 1
        print(f"Sheet written to {written}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
