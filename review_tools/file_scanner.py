"""Directory scanning helpers for review-mode navigation."""
from __future__ import annotations

import logging
import os
import re
from collections import defaultdict
from pathlib import Path
from typing import Callable, DefaultDict, List, Sequence, Set

from .patterns import CellPattern, PatternError, compile_pattern, match_radix

logger = logging.getLogger(__name__)

ListEntries = Callable[[Path], Sequence[str]]

# a radix must be corroborated by this many distinct cells (fewer if there are fewer cells)
MIN_CORROBORATING_CELLS = 2

_IMAGE_EXTENSIONS = {
    ".png",
    ".bmp",
    ".gif",
    ".jpg",
    ".jpeg",
    ".tga",
    ".tif",
    ".tiff",
    ".webp",
    ".exr",
    ".hdr",
}


def is_supported_image(path: Path) -> bool:
    return path.suffix.lower() in _IMAGE_EXTENSIONS


def list_directory(directory: Path) -> List[str]:
    """Return entry names of ``directory`` (flat, unsorted). Raises ``OSError``."""

    with os.scandir(directory) as entries:
        return [entry.name for entry in entries]


def _compile_cells(cell_patterns: Sequence[CellPattern]) -> List[re.Pattern[str] | None]:
    compiled: List[re.Pattern[str] | None] = []
    for cell in cell_patterns:
        try:
            compiled.append(compile_pattern(cell.pattern))
        except PatternError as exc:
            logger.warning("Skipping cell pattern: %s", exc)
            compiled.append(None)
    return compiled


def _safe_listing(directory: Path, list_entries: ListEntries) -> Sequence[str] | None:
    try:
        return list_entries(directory)
    except OSError as exc:
        logger.debug("review.listing failed dir=%s err=%s", directory, exc)
        return None


def scan_radixes(
    directory: Path,
    cell_patterns: Sequence[CellPattern],
    *,
    list_entries: ListEntries = list_directory,
) -> List[str]:
    """Return the sorted radixes found in ``directory`` for ``cell_patterns``.

    A radix is kept only when at least two distinct cells (or every cell, if
    there is a single one) match a file with that radix. Broad patterns such as
    ``^(.*)\\.jpg\\Z`` would otherwise turn every image into its own radix.
    """

    compiled = _compile_cells(cell_patterns)
    names = _safe_listing(directory, list_entries)
    if names is None:
        return []

    radix_cells: DefaultDict[str, Set[int]] = defaultdict(set)
    for name in names:
        for cell_index, regex in enumerate(compiled):
            if regex is None:
                continue
            radix = match_radix(regex, name)
            if radix is not None:
                radix_cells[radix].add(cell_index)

    min_cells = min(len(cell_patterns), MIN_CORROBORATING_CELLS)
    radixes = sorted(radix for radix, cells in radix_cells.items() if len(cells) >= min_cells)
    logger.debug(
        "review.scan dir=%s entries=%s candidates=%s radixes=%s",
        directory,
        len(names),
        len(radix_cells),
        len(radixes),
    )
    return radixes


def resolve_files_for_radix(
    directory: Path,
    radix: str,
    cell_patterns: Sequence[CellPattern],
    *,
    list_entries: ListEntries = list_directory,
) -> List[str | None]:
    """Return one path per cell for ``radix``; ``None`` where no file matches.

    Works on hand-edited patterns too, since only ``pattern`` is consulted.
    The first matching entry in listing order wins a slot.
    """

    result: List[str | None] = [None] * len(cell_patterns)
    compiled = _compile_cells(cell_patterns)
    names = _safe_listing(directory, list_entries)
    if names is None:
        return result

    for name in names:
        for cell_index, regex in enumerate(compiled):
            if result[cell_index] is not None or regex is None:
                continue
            if match_radix(regex, name) == radix:
                result[cell_index] = str(directory / name)

    logger.debug(
        "review.resolve radix=%r found=%s/%s",
        radix,
        sum(1 for path in result if path is not None),
        len(result),
    )
    return result
