# gruvstyle/__init__.py
"""
gruvstyle package.

Purpose:
  Recolour images toward the Gruvbox palette while keeping their lightness
  structure, then layer optional post-effects. See restyle.py for the CLI.

Public API:
  harmonize         : in-place palette harmonisation of a uint8 RGB buffer.
  compute_edge_mask : bilateral-filtered grey used as an edge mask.
  apply_style       : harmonisation plus a style's post-effects.
  parse_style       : style name -> Style value.
  colour_convert    : colour space transforms (rgb_to_lab, lab_to_rgb, hsl, ΔE).
  matcher           : nearest palette lookup.
  blend             : blend formulas.
  effects           : post-effects (VHS, grain, gradient, saturation, pixelate, watercolor).
  palette_data      : palette definitions and build helpers.
  pipeline          : harmonize_lab, harmonize, compute_edge_mask.

Quick start:
  from gruvstyle import harmonize, compute_edge_mask
  harmonize(img, 1.0, compute_edge_mask(img))
"""

__version__ = "0.2.0"

# Re-export namespaces for convenience.
from . import blend
from . import colour_convert
from . import core_types
from . import effects
from . import matcher
from . import palette_data
from . import pipeline

from .pipeline import compute_edge_mask, harmonize, harmonize_lab  # noqa: E402,F401
from .palette_data import GRUVBOX_LAB, default_palette  # noqa: E402,F401
from .styles import Style, apply_style, parse_style  # noqa: E402,F401

__all__ = [
    "__version__",
    "blend",
    "colour_convert",
    "core_types",
    "effects",
    "matcher",
    "palette_data",
    "pipeline",
    "GRUVBOX_LAB",
    "default_palette",
    "harmonize",
    "harmonize_lab",
    "compute_edge_mask",
    "Style",
    "apply_style",
    "parse_style",
]
