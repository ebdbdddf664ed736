"""Review-mode state and navigation between comparable image sets."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence, Tuple

from .file_scanner import ListEntries, list_directory, resolve_files_for_radix, scan_radixes
from .patterns import CellPattern, extract_patterns

logger = logging.getLogger(__name__)

SlotLoad = Tuple[int, str]

NOT_ENOUGH_IMAGES = "Need at least 2 images to infer a pattern"
NO_COMMON_PATTERN = "No common pattern found in the current images"


@dataclass
class ReviewState:
    """Everything the viewer remembers about the active review.

    The state is owned by the caller and handed to every operation below;
    nothing in this package keeps it between calls.
    """

    directory: Path | None = None
    cell_patterns: List[CellPattern] = field(default_factory=list)
    radixes: List[str] = field(default_factory=list)
    index: int = 0
    error: str | None = None

    @property
    def pattern_texts(self) -> List[str]:
        return [cell.pattern for cell in self.cell_patterns]

    @property
    def current_radix(self) -> str | None:
        if not self.radixes:
            return None
        return self.radixes[self.index]


def _current_loads(state: ReviewState, list_entries: ListEntries) -> List[SlotLoad]:
    radix = state.current_radix
    if state.directory is None or radix is None:
        return []
    paths = resolve_files_for_radix(state.directory, radix, state.cell_patterns, list_entries=list_entries)
    return [(slot, path) for slot, path in enumerate(paths) if path is not None]


def _rescan(state: ReviewState, keep: str | None, list_entries: ListEntries) -> None:
    if state.directory is None:
        state.radixes = []
    else:
        state.radixes = scan_radixes(state.directory, state.cell_patterns, list_entries=list_entries)
    if keep is not None and keep in state.radixes:
        state.index = state.radixes.index(keep)
    else:
        state.index = min(state.index, max(len(state.radixes) - 1, 0))


def activate(
    state: ReviewState,
    filenames: Sequence[str],
    directory: Path,
    *,
    list_entries: ListEntries = list_directory,
) -> List[SlotLoad]:
    """Infer patterns from the displayed ``filenames`` and start reviewing ``directory``."""

    if len(filenames) < 2:
        state.error = NOT_ENOUGH_IMAGES
        return []
    result = extract_patterns(filenames)
    if result is None:
        state.error = NO_COMMON_PATTERN
        return []

    state.directory = Path(directory)
    state.cell_patterns = list(result.cell_patterns)
    state.error = None
    state.index = 0
    _rescan(state, result.radix, list_entries)
    logger.info(
        "Review activated radix=%s cells=%s radixes=%s",
        result.radix,
        len(state.cell_patterns),
        len(state.radixes),
    )
    return _current_loads(state, list_entries)


def apply_pattern_edits(
    state: ReviewState,
    texts: Sequence[str],
    *,
    list_entries: ListEntries = list_directory,
) -> List[SlotLoad]:
    """Replace the cell patterns with hand-edited ``texts`` and rescan."""

    previous = state.cell_patterns
    cells: List[CellPattern] = []
    for index, text in enumerate(texts):
        if index < len(previous):
            cells.append(CellPattern(label=previous[index].label, tail=previous[index].tail, pattern=text))
        else:
            cells.append(CellPattern(label="", tail="", pattern=text))
    keep = state.current_radix
    state.cell_patterns = cells
    state.error = None
    _rescan(state, keep, list_entries)
    return _current_loads(state, list_entries)


def refresh(state: ReviewState, *, list_entries: ListEntries = list_directory) -> List[SlotLoad]:
    state.error = None
    _rescan(state, state.current_radix, list_entries)
    return _current_loads(state, list_entries)


def navigate(state: ReviewState, step: int, *, list_entries: ListEntries = list_directory) -> List[SlotLoad]:
    """Move ``step`` sets forward (or back), wrapping around the known radix list."""

    if not state.radixes or state.directory is None:
        return []
    state.index = (state.index + step) % len(state.radixes)
    state.error = None
    return _current_loads(state, list_entries)


def jump_to(state: ReviewState, radix: str, *, list_entries: ListEntries = list_directory) -> List[SlotLoad]:
    if radix not in state.radixes:
        state.error = f"Unknown set: {radix}"
        return []
    state.index = state.radixes.index(radix)
    state.error = None
    return _current_loads(state, list_entries)
