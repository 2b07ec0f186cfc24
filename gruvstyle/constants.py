# gruvstyle/constants.py
"""
Global palette and tunables used across the project.

- GRUVBOX_LAB
- Harmonisation constants (blend weights, strength ranges, contrast)
- Edge mask (bilateral) parameters per style
- Post-effect constants
"""
from __future__ import annotations

from typing import Dict, List, Tuple

# =========================
# Gruvbox palette (Lab, D65)
# =========================
GRUVBOX_LAB: List[Tuple[str, Tuple[float, float, float]]] = [
    ("background", (29.77, 0.16, 0.20)),
    ("foreground", (86.97, -0.86, 9.92)),
    ("red", (44.36, 55.40, 37.13)),
    ("green", (56.83, -21.99, 56.27)),
    ("yellow", (65.17, 10.15, 57.42)),
    ("blue", (49.59, -9.26, -24.91)),
    ("purple", (51.70, 34.04, -14.60)),
    ("aqua", (58.69, -28.30, 15.25)),
    ("orange", (53.33, 39.77, 52.78)),
]

# ================
# Harmonisation
# ================
BLEND_METHODS: Tuple[str, ...] = ("sigmoid", "overshoot")
DEFAULT_METHOD: str = "sigmoid"

# Allowed strength per method, (lo, hi)
STRENGTH_RANGE: Dict[str, Tuple[float, float]] = {
    "sigmoid": (0.0, 1.0),
    "overshoot": (0.0, 2.0),
}

# Share of the palette lightness mixed into L
L_TARGET_WEIGHT: Dict[str, float] = {
    "sigmoid": 0.02,
    "overshoot": 0.05,
}

SIGMOID_SLOPE: float = 4.0
OVERSHOOT_GAIN: float = 1.5
CONTRAST_BOOST: float = 1.08

# ΔE is scaled by this and truncated when quantised matching is requested
DE_QUANT_SCALE: float = 1000.0

METRICS: Tuple[str, ...] = ("cie76", "ciede2000")
DEFAULT_METRIC: str = "cie76"

# Pixels per block when matching and harmonising; bounds the [N,P] temporaries
CHUNK_PIXELS: int = 1 << 16

# ===================================
# Edge mask: (diameter, sigma_color, sigma_space)
# ===================================
EDGE_GRUVBOX: Tuple[int, float, float] = (5, 25.0, 2.0)
EDGE_RETRO: Tuple[int, float, float] = (3, 15.0, 1.5)

# ==============
# Post-effects
# ==============
VHS_RED_SHIFT: int = 2
VHS_BLUE_SHIFT: int = 1
VHS_SCANLINE_DARKEN: int = 20
GRAIN_RETRO: int = 12
SYNTHWAVE_STRENGTH_SCALE: float = 0.8
SYNTHWAVE_SATURATION: float = 1.5
MOSAIC_BLOCK: int = 16
WATERCOLOR_BLUR: float = 2.0
WATERCOLOR_NOISE: int = 10
