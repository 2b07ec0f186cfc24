# gruvstyle/styles.py
from __future__ import annotations

"""
Style selection and the per-style chain of stages.

Each style is a small frozen dataclass carrying only its own parameters;
`Style` is their union. apply_style() harmonises first, then runs the style's
post-effects in a fixed order.

  gruvbox    : edge mask (5, 25, 2) -> harmonize
  retro      : edge mask (3, 15, 1.5) -> harmonize -> VHS -> grain(12)
  synthwave  : harmonize(strength * 0.8) -> gradient -> saturation x1.5
  mosaic     : harmonize -> pixelate(block_size)
  watercolor : harmonize -> blur + noise
"""

from dataclasses import dataclass
from typing import Dict, Optional, Type, Union

import numpy as np

from .constants import (
    EDGE_GRUVBOX,
    EDGE_RETRO,
    GRAIN_RETRO,
    MOSAIC_BLOCK,
    SYNTHWAVE_SATURATION,
    SYNTHWAVE_STRENGTH_SCALE,
)
from .core_types import U8Image
from .effects import (
    add_film_grain,
    add_vhs_effect,
    apply_gradient_overlay,
    apply_watercolor_effect,
    boost_saturation,
    pixelate,
)
from .pipeline import compute_edge_mask, harmonize
from .utils import debug_log, warn


@dataclass(frozen=True)
class Gruvbox:
    name = "gruvbox"


@dataclass(frozen=True)
class Retro:
    name = "retro"


@dataclass(frozen=True)
class Synthwave:
    name = "synthwave"


@dataclass(frozen=True)
class Mosaic:
    block_size: int = MOSAIC_BLOCK
    name = "mosaic"


@dataclass(frozen=True)
class Watercolor:
    name = "watercolor"


Style = Union[Gruvbox, Retro, Synthwave, Mosaic, Watercolor]

STYLE_NAMES = ("gruvbox", "retro", "synthwave", "mosaic", "watercolor")

_SIMPLE_STYLES: Dict[str, Type] = {
    "gruvbox": Gruvbox,
    "retro": Retro,
    "synthwave": Synthwave,
    "watercolor": Watercolor,
}


def parse_style(name: Optional[str], block_size: int = MOSAIC_BLOCK) -> Style:
    """
    Resolve a style name. None or an unknown name falls back to gruvbox.
    """
    if name is None:
        return Gruvbox()
    key = name.strip().lower()
    if key == "mosaic":
        return Mosaic(block_size=block_size)
    cls = _SIMPLE_STYLES.get(key)
    if cls is None:
        warn(f"unknown style {name!r}; using gruvbox")
        return Gruvbox()
    return cls()


def apply_style(
    img: U8Image,
    style: Style,
    strength: float,
    *,
    method: str = "sigmoid",
    metric: str = "cie76",
    quantize: bool = False,
    rng: Optional[np.random.Generator] = None,
    workers: int = 1,
    debug: bool = False,
) -> U8Image:
    """
    Run the style's chain on `img`. The buffer is mutated; the returned array
    is the final image (a new array for mosaic, `img` otherwise).
    """
    opts = dict(method=method, metric=metric, quantize=quantize, workers=workers, debug=debug)
    if debug:
        debug_log(f"style: {style}")

    if isinstance(style, Gruvbox):
        mask = compute_edge_mask(img, *EDGE_GRUVBOX)
        harmonize(img, strength, mask, **opts)
        return img

    if isinstance(style, Retro):
        mask = compute_edge_mask(img, *EDGE_RETRO)
        harmonize(img, strength, mask, **opts)
        add_vhs_effect(img)
        add_film_grain(img, GRAIN_RETRO, rng=rng)
        return img

    if isinstance(style, Synthwave):
        harmonize(img, strength * SYNTHWAVE_STRENGTH_SCALE, None, **opts)
        apply_gradient_overlay(img)
        boost_saturation(img, SYNTHWAVE_SATURATION)
        return img

    if isinstance(style, Mosaic):
        harmonize(img, strength, None, **opts)
        return pixelate(img, style.block_size)

    if isinstance(style, Watercolor):
        harmonize(img, strength, None, **opts)
        return apply_watercolor_effect(img, rng=rng)

    raise TypeError(f"unsupported style {style!r}")


__all__ = [
    "Gruvbox",
    "Retro",
    "Synthwave",
    "Mosaic",
    "Watercolor",
    "Style",
    "STYLE_NAMES",
    "parse_style",
    "apply_style",
]
