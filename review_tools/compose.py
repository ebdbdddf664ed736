"""Side-by-side comparison sheets for a resolved review set."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import List, Literal, Sequence, Tuple

from PIL import Image

logger = logging.getLogger(__name__)

Layout = Literal["horizontal", "vertical", "grid"]
LAYOUTS: Tuple[str, ...] = ("horizontal", "vertical", "grid")
RGBA = Tuple[int, int, int, int]


@dataclass(slots=True)
class SheetOptions:
    layout: Layout = "horizontal"
    gap: int = 0
    background: RGBA = (0, 0, 0, 0)


def hex_to_rgba(value: str) -> RGBA:
    value = value.strip()
    if value.startswith("#"):
        value = value[1:]
    if len(value) not in (6, 8):
        raise ValueError("Expected hex color in the form RRGGBB or RRGGBBAA")
    r = int(value[0:2], 16)
    g = int(value[2:4], 16)
    b = int(value[4:6], 16)
    a = int(value[6:8], 16) if len(value) == 8 else 255
    return (r, g, b, a)


def load_slots(loads: Sequence[Tuple[int, str]]) -> List[Tuple[int, Image.Image]]:
    """Open every resolved slot as RGBA. Files Pillow cannot read are skipped."""

    images: List[Tuple[int, Image.Image]] = []
    for slot, path in loads:
        try:
            with Image.open(path) as img:
                images.append((slot, img.convert("RGBA")))
        except OSError as exc:
            logger.warning("Skipping slot %s (%s): %s", slot, Path(path).name, exc)
    return images


def _grid_shape(count: int, layout: str) -> Tuple[int, int]:
    if layout == "horizontal":
        return count, 1
    if layout == "vertical":
        return 1, count
    if layout == "grid":
        columns = math.ceil(math.sqrt(count))
        return columns, math.ceil(count / columns)
    raise ValueError(f"Unknown layout: {layout}")


def compose_sheet(images: Sequence[Image.Image], options: SheetOptions | None = None) -> Image.Image:
    """Place ``images`` in equal cells sized to the largest one, centred."""

    options = options or SheetOptions()
    if not images:
        raise ValueError("No images to compose")
    columns, rows = _grid_shape(len(images), options.layout)
    gap = max(0, options.gap)
    cell_w = max(img.width for img in images)
    cell_h = max(img.height for img in images)
    width = columns * cell_w + (columns - 1) * gap
    height = rows * cell_h + (rows - 1) * gap

    sheet = Image.new("RGBA", (width, height), options.background)
    for position, img in enumerate(images):
        column = position % columns
        row = position // columns
        x = column * (cell_w + gap) + (cell_w - img.width) // 2
        y = row * (cell_h + gap) + (cell_h - img.height) // 2
        sheet.paste(img.convert("RGBA"), (x, y))

    logger.debug(
        "review.sheet layout=%s grid=%sx%s cell=%sx%s size=%sx%s",
        options.layout,
        columns,
        rows,
        cell_w,
        cell_h,
        width,
        height,
    )
    return sheet


def write_sheet(loads: Sequence[Tuple[int, str]], output_path: Path, options: SheetOptions | None = None) -> Path:
    images = [img for _slot, img in load_slots(loads)]
    sheet = compose_sheet(images, options)
    if output_path.suffix.lower() in {".jpg", ".jpeg"}:
        sheet = sheet.convert("RGB")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    sheet.save(output_path)
    return output_path
