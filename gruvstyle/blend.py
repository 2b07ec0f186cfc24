# gruvstyle/blend.py
from __future__ import annotations

"""
Blend formulas that pull a Lab colour toward its matched palette entry.

Methods:
  sigmoid   : strength in [0,1]. L = 0.98*L + 0.02*Lt.
              a/b mix = s / (1 + exp(-4*|o - t|)), o*(1-mix) + t*mix.
  overshoot : strength in [0,2]. L = 0.95*L + 0.05*Lt.
              a/b = o*(1-s) + t*s*1.5 (overshoots the target chroma on purpose).

Lab values are left unclamped here; clamping happens on the final sRGB.
"""

import math

import numpy as np
from numpy.typing import NDArray

from .constants import (
    BLEND_METHODS,
    CONTRAST_BOOST,
    L_TARGET_WEIGHT,
    OVERSHOOT_GAIN,
    SIGMOID_SLOPE,
    STRENGTH_RANGE,
)
from .core_types import Lab, U8Mask, clamp_value
from .utils import warn


def _check_method(method: str) -> None:
    if method not in BLEND_METHODS:
        raise ValueError(f"unknown blend method {method!r}; expected one of {BLEND_METHODS}")


def clamp_strength(strength: float, method: str) -> float:
    """
    Clamp strength into the method's range.
    NaN/inf is a caller error and raises; finite values outside the range are
    clamped with a warning.
    """
    _check_method(method)
    value = float(strength)
    if not math.isfinite(value):
        raise ValueError(f"strength must be finite, got {strength!r}")
    lo, hi = STRENGTH_RANGE[method]
    clamped = clamp_value(value, lo, hi)
    if clamped != value:
        warn(f"strength {value:g} outside [{lo:g}, {hi:g}] for {method}; using {clamped:g}")
    return clamped


def sigmoid_mix(
    orig: np.ndarray, target: np.ndarray, strength: float
) -> NDArray[np.float32]:
    """Per-channel mix factor, between strength/2 (equal) and strength (far apart)."""
    dist = np.abs(orig.astype(np.float32) - target.astype(np.float32))
    return (strength / (1.0 + np.exp(-SIGMOID_SLOPE * dist))).astype(np.float32)


def blend_lab(orig: Lab, target: Lab, strength: float, method: str = "sigmoid") -> Lab:
    """
    Blend Lab rows toward their targets. `strength` must already be clamped.

    Args:
      orig: Lab [...,3]
      target: Lab [...,3] matched palette rows, same shape
      strength: clamped strength for `method`
    Returns:
      float32 Lab, same shape
    """
    _check_method(method)
    o = orig.astype(np.float32, copy=False)
    t = target.astype(np.float32, copy=False)
    out = np.empty(o.shape, dtype=np.float32)

    w = L_TARGET_WEIGHT[method]
    out[..., 0] = o[..., 0] * (1.0 - w) + t[..., 0] * w

    if method == "sigmoid":
        mix = sigmoid_mix(o[..., 1:], t[..., 1:], strength)
        out[..., 1:] = o[..., 1:] * (1.0 - mix) + t[..., 1:] * mix
    else:
        out[..., 1:] = o[..., 1:] * (1.0 - strength) + t[..., 1:] * (
            strength * OVERSHOOT_GAIN
        )
    return out


def apply_edge_lightness(
    orig_l: np.ndarray, harm_l: np.ndarray, edge_mask: U8Mask
) -> NDArray[np.float32]:
    """
    Recombine lightness with the edge mask as weight (mask/255).
    0 keeps the original L, 255 keeps the harmonised L.
    """
    w = edge_mask.astype(np.float32) / 255.0
    return (orig_l * (1.0 - w) + harm_l * w).astype(np.float32, copy=False)


def contrast_compensate(
    rgb: np.ndarray, boost: float = CONTRAST_BOOST
) -> NDArray[np.float32]:
    """Scale sRGB floats by `boost` and clip to [0,1]."""
    return np.clip(rgb.astype(np.float32, copy=False) * boost, 0.0, 1.0).astype(
        np.float32, copy=False
    )


__all__ = [
    "clamp_strength",
    "sigmoid_mix",
    "blend_lab",
    "apply_edge_lightness",
    "contrast_compensate",
]
