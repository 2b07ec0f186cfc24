# gruvstyle/matcher.py
from __future__ import annotations

"""
Nearest palette lookup in Lab.

Exports:
  palette_distances(src_lab, pal_lab, metric) -> float64 [N,P]
  nearest_indices(src_lab, pal_lab, *, metric, quantize) -> int32 [N]
  nearest(lab_row, palette=None, *, metric, quantize) -> Lab [3]

Notes:
  Ties go to the lowest palette index (np.argmin returns the first minimum),
  so identical input always resolves to the same entry.
  quantize=True truncates ΔE*1000 to an integer before comparing, which is how
  the first versions of this tool picked targets. Off by default.
"""

from typing import Optional

import numpy as np
from numpy.typing import NDArray

from .colour_convert import delta_e76, delta_e2000
from .constants import CHUNK_PIXELS, DE_QUANT_SCALE, DEFAULT_METRIC, METRICS
from .core_types import Lab, Palette
from .palette_data import default_palette


def palette_distances(
    src_lab: Lab, pal_lab: Lab, metric: str = DEFAULT_METRIC
) -> NDArray[np.float64]:
    """ΔE of every source row to every palette row under the named metric."""
    if metric == "cie76":
        return delta_e76(src_lab, pal_lab)
    if metric == "ciede2000":
        return delta_e2000(src_lab, pal_lab)
    raise ValueError(f"unknown metric {metric!r}; expected one of {METRICS}")


def nearest_indices(
    src_lab: Lab,
    pal_lab: Lab,
    *,
    metric: str = DEFAULT_METRIC,
    quantize: bool = False,
) -> NDArray[np.int32]:
    """
    For each source Lab row pick the palette row with the smallest ΔE.

    Args:
      src_lab: Lab [N,3] (any leading shape is flattened)
      pal_lab: Lab [P,3]
      metric: "cie76" or "ciede2000"
      quantize: compare floor(ΔE*1000) instead of the exact value
    Returns:
      int32 array [N]
    """
    if metric not in METRICS:
        raise ValueError(f"unknown metric {metric!r}; expected one of {METRICS}")
    src = np.asarray(src_lab).reshape(-1, 3)
    out = np.empty(src.shape[0], dtype=np.int32)
    # Blocks of CHUNK_PIXELS keep the [N,P] distance matrix small.
    for start in range(0, src.shape[0], CHUNK_PIXELS):
        end = start + CHUNK_PIXELS
        dist = palette_distances(src[start:end], pal_lab, metric)
        if quantize:
            dist = np.floor(dist * DE_QUANT_SCALE)
        out[start:end] = np.argmin(dist, axis=1)
    return out


def nearest(
    lab_row: Lab,
    palette: Optional[Palette] = None,
    *,
    metric: str = DEFAULT_METRIC,
    quantize: bool = False,
) -> Lab:
    """Closest palette Lab row for a single Lab colour."""
    pal = palette if palette is not None else default_palette()
    idx = nearest_indices(
        np.asarray(lab_row, dtype=np.float32).reshape(1, 3),
        pal.lab,
        metric=metric,
        quantize=quantize,
    )
    return pal.lab[int(idx[0])]


__all__ = ["palette_distances", "nearest_indices", "nearest"]
