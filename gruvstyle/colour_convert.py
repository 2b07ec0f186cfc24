# gruvstyle/colour_convert.py
from __future__ import annotations

"""
Colour conversions and metrics (D65).

Exports:
  rgb_to_linear(srgb) / linear_to_rgb(linear)
  rgb_to_lab(rgb)
  lab_to_rgb_float(lab) / lab_to_rgb(lab)
  rgb_to_hsl(rgb) / hsl_to_rgb(hsl)
  delta_e76(src_lab, pal_lab)
  delta_e2000(src_lab, pal_lab)
"""

import numpy as np
from numpy.typing import NDArray

from .core_types import Hsl, Lab, U8Image

# Reference white (D65)
XN, YN, ZN = 0.95047, 1.00000, 1.08883
_EPS = 216.0 / 24389.0
_KAPPA = 24389.0 / 27.0

# Linear sRGB <-> XYZ (D65)
_RGB_TO_XYZ = np.array(
    [
        [0.4124564, 0.3575761, 0.1804375],
        [0.2126729, 0.7151522, 0.0721750],
        [0.0193339, 0.1191920, 0.9503041],
    ],
    dtype=np.float64,
)
_XYZ_TO_RGB = np.linalg.inv(_RGB_TO_XYZ)


# sRGB transfer


def rgb_to_linear(srgb: np.ndarray) -> np.ndarray:
    """
    Convert sRGB (non-linear 0..1) to linear RGB (0..1). Vectorised.
    Args:
      srgb: array[...] in 0..1 (float)
    Returns:
      float32 array, same shape
    """
    srgb_f = srgb.astype(np.float32, copy=False)
    with np.errstate(invalid="ignore"):
        linear = np.where(
            srgb_f <= 0.04045, srgb_f / 12.92, ((srgb_f + 0.055) / 1.055) ** 2.4
        )
    return linear.astype(np.float32, copy=False)


def linear_to_rgb(linear: np.ndarray) -> np.ndarray:
    """Linear RGB to sRGB (0..1). Input is clipped to [0,1] first."""
    lin = np.clip(linear.astype(np.float32, copy=False), 0.0, 1.0)
    srgb = np.where(
        lin <= 0.0031308, lin * 12.92, 1.055 * np.power(lin, 1.0 / 2.4) - 0.055
    )
    return srgb.astype(np.float32, copy=False)


# sRGB <-> Lab (D65)


def rgb_to_lab(rgb: np.ndarray) -> Lab:
    """
    sRGB to CIE Lab (D65).
    Integer input is read as 0..255, float input as 0..1.
    Preserves shape (...,3). Returns float32.
    """
    rgb_f = rgb.astype(np.float32, copy=False)
    if np.issubdtype(rgb.dtype, np.integer):
        rgb_f = rgb_f / 255.0

    lin = rgb_to_linear(rgb_f).astype(np.float64, copy=False)
    xyz = lin @ _RGB_TO_XYZ.T

    x = xyz[..., 0] / XN
    y = xyz[..., 1] / YN
    z = xyz[..., 2] / ZN

    def f(t: np.ndarray) -> np.ndarray:
        return np.where(t > _EPS, np.cbrt(t), (_KAPPA * t + 16.0) / 116.0)

    fx, fy, fz = f(x), f(y), f(z)

    out = np.empty(rgb_f.shape, dtype=np.float32)
    out[..., 0] = 116.0 * fy - 16.0
    out[..., 1] = 500.0 * (fx - fy)
    out[..., 2] = 200.0 * (fy - fz)
    return out


def lab_to_rgb_float(lab: Lab) -> NDArray[np.float32]:
    """
    CIE Lab (D65) to sRGB floats in [0,1].
    Out-of-gamut values are clipped per channel.
    """
    lab_d = np.asarray(lab, dtype=np.float64)
    L = lab_d[..., 0]
    fy = (L + 16.0) / 116.0
    fx = fy + lab_d[..., 1] / 500.0
    fz = fy - lab_d[..., 2] / 200.0

    def finv(t: np.ndarray) -> np.ndarray:
        t3 = t * t * t
        return np.where(t3 > _EPS, t3, (116.0 * t - 16.0) / _KAPPA)

    xyz = np.empty(lab_d.shape, dtype=np.float64)
    xyz[..., 0] = XN * finv(fx)
    xyz[..., 1] = YN * np.where(L > _KAPPA * _EPS, fy * fy * fy, L / _KAPPA)
    xyz[..., 2] = ZN * finv(fz)

    lin = xyz @ _XYZ_TO_RGB.T
    return linear_to_rgb(lin)


def lab_to_rgb(lab: Lab) -> U8Image:
    """CIE Lab (D65) to uint8 sRGB, rounded and clamped to [0,255]."""
    rgb_f = lab_to_rgb_float(lab)
    return np.clip(np.rint(rgb_f * 255.0), 0, 255).astype(np.uint8)


# sRGB <-> HSL


def rgb_to_hsl(rgb: np.ndarray) -> Hsl:
    """
    sRGB floats (0..1) to HSL. Hue in degrees [0,360), s and l in 0..1.
    Works on gamma-encoded values, no linearisation.
    """
    rgb_f = rgb.astype(np.float32, copy=False)
    r, g, b = rgb_f[..., 0], rgb_f[..., 1], rgb_f[..., 2]
    mx = np.max(rgb_f, axis=-1)
    mn = np.min(rgb_f, axis=-1)
    d = mx - mn
    light = 0.5 * (mx + mn)

    with np.errstate(divide="ignore", invalid="ignore"):
        denom = 1.0 - np.abs(2.0 * light - 1.0)
        sat = np.where((d > 0.0) & (denom > 0.0), d / denom, 0.0)
        hue = np.where(
            mx == r,
            ((g - b) / d) % 6.0,
            np.where(mx == g, (b - r) / d + 2.0, (r - g) / d + 4.0),
        )
    hue = np.where(d > 0.0, hue * 60.0, 0.0) % 360.0

    out = np.empty(rgb_f.shape, dtype=np.float32)
    out[..., 0] = hue
    out[..., 1] = sat
    out[..., 2] = light
    return out


def hsl_to_rgb(hsl: Hsl) -> NDArray[np.float32]:
    """HSL to sRGB floats. Saturation above 1 is allowed; result is clipped to [0,1]."""
    hsl_f = hsl.astype(np.float32, copy=False)
    h = (hsl_f[..., 0] % 360.0) / 60.0
    s = hsl_f[..., 1]
    light = hsl_f[..., 2]

    c = (1.0 - np.abs(2.0 * light - 1.0)) * s
    x = c * (1.0 - np.abs(h % 2.0 - 1.0))
    m = light - 0.5 * c
    zero = np.zeros_like(c)

    sector = np.floor(h).astype(np.int32) % 6
    r = np.choose(sector, [c, x, zero, zero, x, c])
    g = np.choose(sector, [x, c, c, x, zero, zero])
    b = np.choose(sector, [zero, zero, x, c, c, x])

    out = np.stack([r + m, g + m, b + m], axis=-1)
    return np.clip(out, 0.0, 1.0).astype(np.float32, copy=False)


# Distances


def delta_e76(src_lab: Lab, pal_lab: Lab) -> NDArray[np.float64]:
    """
    Euclidean Lab distance of every source row to every palette row.

    Args:
      src_lab: Lab [N,3]
      pal_lab: Lab [P,3]
    Returns:
      float64 array [N,P]
    """
    src = np.asarray(src_lab, dtype=np.float64).reshape(-1, 3)
    pal = np.asarray(pal_lab, dtype=np.float64).reshape(-1, 3)
    out = np.empty((src.shape[0], pal.shape[0]), dtype=np.float64)
    for j, row in enumerate(pal):
        diff = src - row
        out[:, j] = np.sqrt(np.einsum("ij,ij->i", diff, diff))
    return out


def delta_e2000(src_lab: Lab, pal_lab: Lab) -> NDArray[np.float64]:
    """
    CIEDE2000 distance of every source row to every palette row.
    Vectorised over both axes; kL = kC = kH = 1.

    Returns:
      float64 array [N,P]
    """
    src = np.asarray(src_lab, dtype=np.float64).reshape(-1, 3)[:, None, :]
    pal = np.asarray(pal_lab, dtype=np.float64).reshape(-1, 3)[None, :, :]
    L1, a1, b1 = src[..., 0], src[..., 1], src[..., 2]
    L2, a2, b2 = pal[..., 0], pal[..., 1], pal[..., 2]

    C1 = np.hypot(a1, b1)
    C2 = np.hypot(a2, b2)
    C_bar7 = (0.5 * (C1 + C2)) ** 7
    G = 0.5 * (1.0 - np.sqrt(C_bar7 / (C_bar7 + 25.0**7)))

    a1p = (1.0 + G) * a1
    a2p = (1.0 + G) * a2
    C1p = np.hypot(a1p, b1)
    C2p = np.hypot(a2p, b2)

    h1p = np.degrees(np.arctan2(b1, a1p)) % 360.0
    h2p = np.degrees(np.arctan2(b2, a2p)) % 360.0

    dLp = L2 - L1
    dCp = C2p - C1p

    chroma_zero = (C1p * C2p) == 0.0
    dhp = h2p - h1p
    dhp = np.where(dhp > 180.0, dhp - 360.0, np.where(dhp < -180.0, dhp + 360.0, dhp))
    dhp = np.where(chroma_zero, 0.0, dhp)
    dHp = 2.0 * np.sqrt(C1p * C2p) * np.sin(np.radians(dhp / 2.0))

    L_bar = 0.5 * (L1 + L2)
    C_bar_p = 0.5 * (C1p + C2p)

    h_sum = h1p + h2p
    h_bar_p = np.where(
        np.abs(h1p - h2p) <= 180.0,
        0.5 * h_sum,
        np.where(h_sum < 360.0, 0.5 * (h_sum + 360.0), 0.5 * (h_sum - 360.0)),
    )
    h_bar_p = np.where(chroma_zero, h_sum, h_bar_p)

    T = (
        1.0
        - 0.17 * np.cos(np.radians(h_bar_p - 30.0))
        + 0.24 * np.cos(np.radians(2.0 * h_bar_p))
        + 0.32 * np.cos(np.radians(3.0 * h_bar_p + 6.0))
        - 0.20 * np.cos(np.radians(4.0 * h_bar_p - 63.0))
    )

    d_theta = 30.0 * np.exp(-(((h_bar_p - 275.0) / 25.0) ** 2.0))
    C_bar_p7 = C_bar_p**7
    R_c = 2.0 * np.sqrt(C_bar_p7 / (C_bar_p7 + 25.0**7))

    S_l = 1.0 + (0.015 * (L_bar - 50.0) ** 2) / np.sqrt(20.0 + (L_bar - 50.0) ** 2)
    S_c = 1.0 + 0.045 * C_bar_p
    S_h = 1.0 + 0.015 * C_bar_p * T
    R_t = -np.sin(np.radians(2.0 * d_theta)) * R_c

    tl = dLp / S_l
    tc = dCp / S_c
    th = dHp / S_h
    return np.sqrt(np.maximum(tl * tl + tc * tc + th * th + R_t * tc * th, 0.0))


__all__ = [
    "rgb_to_linear",
    "linear_to_rgb",
    "rgb_to_lab",
    "lab_to_rgb_float",
    "lab_to_rgb",
    "rgb_to_hsl",
    "hsl_to_rgb",
    "delta_e76",
    "delta_e2000",
]
