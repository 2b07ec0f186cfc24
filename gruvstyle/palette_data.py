# gruvstyle/palette_data.py
from __future__ import annotations

"""
Palette definitions and builders.

Exports:
  GRUVBOX_LAB: list[tuple[str, tuple[float, float, float]]]  # [(name, Lab), ...]
  build_palette(name_lab_pairs=GRUVBOX_LAB) -> Palette
  default_palette() -> Palette   # built once, shared read-only
"""

from functools import lru_cache
from typing import List, Sequence, Tuple

import numpy as np

from .colour_convert import lab_to_rgb
from .constants import GRUVBOX_LAB
from .core_types import Lab, Palette, PaletteItem, RGBTuple


def build_palette(
    name_lab_pairs: Sequence[Tuple[str, Tuple[float, float, float]]] = GRUVBOX_LAB,
) -> Palette:
    """
    Convert a list of (name, Lab) into a Palette:
      items: PaletteItem per entry with name, Lab row and rendered sRGB
      lab: float32 [P,3], flagged read-only
    """
    if len(name_lab_pairs) == 0:
        raise ValueError("palette must have at least one entry")

    pal_lab: Lab = np.array([lab for _name, lab in name_lab_pairs], dtype=np.float32)
    pal_rgb = lab_to_rgb(pal_lab)
    pal_lab.setflags(write=False)

    items: List[PaletteItem] = []
    for i, (name, _lab) in enumerate(name_lab_pairs):
        rgb_tuple: RGBTuple = (
            int(pal_rgb[i, 0]),
            int(pal_rgb[i, 1]),
            int(pal_rgb[i, 2]),
        )
        row = pal_lab[i].copy()
        row.setflags(write=False)
        items.append(PaletteItem(name=name, lab=row, rgb=rgb_tuple))

    return Palette(items=tuple(items), lab=pal_lab)


@lru_cache(maxsize=1)
def default_palette() -> Palette:
    """The Gruvbox palette, built on first use."""
    return build_palette(GRUVBOX_LAB)


__all__ = ["GRUVBOX_LAB", "build_palette", "default_palette"]
