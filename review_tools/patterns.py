"""Filename pattern inference for review-mode navigation."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Sequence

logger = logging.getLogger(__name__)

SEPARATORS = "_-."


class PatternError(RuntimeError):
    """Raised when a cell pattern cannot be used for matching."""


@dataclass(frozen=True)
class CellPattern:
    """One variant of a comparable set (e.g. the ``diffuse`` render pass)."""

    label: str
    tail: str
    pattern: str


@dataclass(frozen=True)
class ExtractionResult:
    radix: str
    cell_patterns: List[CellPattern]


def longest_common_prefix(names: Sequence[str]) -> str:
    if not names:
        return ""
    first = names[0]
    length = len(first)
    for name in names[1:]:
        length = min(length, len(name))
        for i in range(length):
            if first[i] != name[i]:
                length = i
                break
    return first[:length]


def derive_label(tail: str) -> str:
    """Return a display label for ``tail``.

    Leading separators and the extension are dropped. A tail that is only an
    extension (``.jpg``) is labelled by the extension itself.
    """

    stripped = tail.lstrip(SEPARATORS)
    stem, dot, ext = stripped.rpartition(".")
    if not dot:
        return stripped
    return stem or ext


def build_pattern(tail: str) -> str:
    return f"^(.*){re.escape(tail)}\\Z"


def compile_pattern(text: str) -> re.Pattern[str]:
    try:
        compiled = re.compile(text)
    except re.error as exc:
        raise PatternError(f"Invalid pattern {text!r}: {exc}") from exc
    if compiled.groups < 1:
        raise PatternError(f"Pattern {text!r} has no capture group")
    return compiled


def match_radix(compiled: re.Pattern[str], name: str) -> str | None:
    """Return the radix captured from ``name`` or ``None`` if it does not match."""

    match = compiled.search(name)
    if match is None:
        return None
    return match.group(1)


def _radix_from_prefix(prefix: str, names: Sequence[str]) -> str:
    if prefix.endswith(tuple(SEPARATORS)):
        # the separator belongs to every tail
        return prefix.rstrip(SEPARATORS)

    cut = len(prefix)
    mid_word = all(name[cut:cut + 1] and name[cut] not in SEPARATORS for name in names)
    if not mid_word:
        return prefix

    # e.g. "frame001_v" from v1/v2: back off to the last separator
    boundary = max(prefix.rfind(sep) for sep in SEPARATORS)
    if boundary < 0:
        return ""
    return prefix[:boundary]


def extract_patterns(filenames: Sequence[str]) -> ExtractionResult | None:
    """Infer the shared radix and per-cell patterns from sample filenames.

    Returns ``None`` for fewer than two names, when no radix can be derived,
    or when two names would produce the same tail.
    """

    if len(filenames) < 2:
        return None

    prefix = longest_common_prefix(filenames)
    if not prefix:
        logger.debug("review.extract no common prefix names=%s", len(filenames))
        return None

    radix = _radix_from_prefix(prefix, filenames)
    if not radix:
        logger.debug("review.extract empty radix prefix=%r", prefix)
        return None

    cell_patterns: List[CellPattern] = []
    for name in filenames:
        tail = name[len(radix):]
        cell_patterns.append(CellPattern(label=derive_label(tail), tail=tail, pattern=build_pattern(tail)))

    if len({cell.tail for cell in cell_patterns}) != len(cell_patterns):
        logger.debug("review.extract duplicate tails radix=%r", radix)
        return None

    logger.debug(
        "review.extract radix=%r labels=%s",
        radix,
        [cell.label for cell in cell_patterns],
    )
    return ExtractionResult(radix=radix, cell_patterns=cell_patterns)
