# -*- coding: utf-8 -*-
"""
Chromahub: Hub-and-spoke color conversion
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Conversion Engine
=================
Numerical core shared by every color space in Chromahub.  All transforms
pivot through CIE 1931 XYZ (the hub), normalized so that the D65 reference
white has Y = 1.0.

The module provides:
1. Exact rational constants for the CIE 1976 L*u*v* breakpoint.
2. ``MatrixTRCTransform``: the ICC matrix/TRC pipeline (device RGB <-> XYZ)
   parametrized by a linear matrix, a chromatic-adaptation matrix and three
   ``ParametricCurveType3`` tone-response curves.  The per-channel curves run
   in Numba kernels.
3. ``ColorSpaceEngine``: array transforms XYZ <-> xyY and XYZ <-> L*u*v*.

Every public transform accepts a single triple of shape (3,) or a batch of
shape (N, 3) (any leading shape works, the last axis must be 3).

Non-finite policy:
    Zero denominators (black in xyY / L*u*v*, y = 0, v' = 0) are *not*
    masked.  They propagate as IEEE inf / NaN and numpy's runtime warnings
    are suppressed.  Substituting a white-point chromaticity for black is a
    convention, and silently applying one would change results.

References:
    - CIE 15:2004 "Colorimetry"
    - ICC.1:2010 "Image technology colour management", parametricCurveType
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Final, NamedTuple, Tuple, TypeAlias

import numpy as np
from numpy.typing import NDArray
from numba import njit

from chroma_errors import TransformConfigError

__all__ = [
    # --- Type Aliases ---
    "ArrayFloat",

    # --- Constants ---
    "REF_WHITE_D65",
    "LUV_EPSILON",
    "LUV_KAPPA",
    "LUV_KAPPA_INV",
    "LUV_L_BREAK",

    # --- Decorators ---
    "handle_shapes",

    # --- Classes ---
    "ParametricCurveType3",
    "MatrixTRCTransform",
    "ColorSpaceEngine",
]

logger = logging.getLogger(__name__)

# --- Type Aliases ---
ArrayFloat: TypeAlias = NDArray[np.floating]

# --- Constants ---

def _read_only(arr: ArrayFloat) -> ArrayFloat:
    arr.flags.writeable = False
    return arr

# D65 reference white (Y = 1.0).  The only white point Chromahub knows.
REF_WHITE_D65: Final[ArrayFloat] = _read_only(
    np.array([0.95047, 1.00000, 1.08883], dtype=np.float64)
)

# --- Exact Rational Math Constants ---
# CIE 1976: delta = 6/29 is where the lightness function switches from the
# cube root to the linear segment.  Forward and backward thresholds are the
# same breakpoint expressed on either side, so they must stay in sync.
_LUV_DELTA: Final[float] = 6.0 / 29.0
LUV_EPSILON: Final[float] = _LUV_DELTA * _LUV_DELTA * _LUV_DELTA  # ~0.008856
LUV_KAPPA: Final[float] = (29.0 / 3.0) ** 3                        # ~903.296
LUV_KAPPA_INV: Final[float] = (3.0 / 29.0) ** 3
# LUV_KAPPA * LUV_EPSILON == 8 on the 0..100 lightness scale.
LUV_L_BREAK: Final[float] = 8.0


# =============================================================================
# 1. SHAPE HANDLING
# =============================================================================

def _as_batch(arr: Any) -> Tuple[ArrayFloat, Tuple[int, ...]]:
    """Convert input to a contiguous float64 (N, 3) array, remembering its shape."""
    arr_in = np.asarray(arr, dtype=np.float64)
    if arr_in.ndim == 0 or arr_in.shape[-1] != 3:
        last = arr_in.shape[-1] if arr_in.ndim else "none"
        raise ValueError(f"Expected last dimension size 3, got {last}")
    return np.ascontiguousarray(arr_in.reshape(-1, 3)), arr_in.shape

def _report_non_finite(name: str, res: ArrayFloat) -> None:
    if logger.isEnabledFor(logging.DEBUG) and not np.all(np.isfinite(res)):
        n_bad = int(np.count_nonzero(~np.all(np.isfinite(res), axis=-1)))
        logger.debug("%s produced non-finite values for %d triple(s)", name, n_bad)

def handle_shapes(func: Callable[..., ArrayFloat]) -> Callable[..., ArrayFloat]:
    """
    Decorator to normalize inputs to (N, 3) and restore the caller's shape.

    Single triples (3,) are treated as a batch of one internally, which keeps
    the kernels free of shape branches.

    Returns:
        The wrapped function.
        - If input is (3,), returns (3,)
        - If input is (..., 3), returns (..., 3)
    """
    @functools.wraps(func)
    def wrapper(arr: Any, *args: Any, **kwargs: Any) -> ArrayFloat:
        batch, shape = _as_batch(arr)
        res = func(batch, *args, **kwargs)
        _report_non_finite(func.__name__, res)
        return res.reshape(shape)
    return wrapper

def handle_method_shapes(func: Callable[..., ArrayFloat]) -> Callable[..., ArrayFloat]:
    """Variant of :func:`handle_shapes` for instance methods."""
    @functools.wraps(func)
    def wrapper(self: Any, arr: Any, *args: Any, **kwargs: Any) -> ArrayFloat:
        batch, shape = _as_batch(arr)
        res = func(self, batch, *args, **kwargs)
        _report_non_finite(func.__name__, res)
        return res.reshape(shape)
    return wrapper


# =============================================================================
# 2. TONE-CURVE KERNELS (Numba)
# =============================================================================
# params is a (3, 5) array: one row (g, a, b, c, d) per channel.
# NaN inputs fail both comparisons and fall through to the linear branch,
# which keeps them NaN.  Compiled without fastmath so inf / NaN survive.

@njit(cache=True, fastmath=False)
def _trc_forward(dev: ArrayFloat, params: ArrayFloat) -> ArrayFloat:
    """
    ICC parametricCurveType 3, device value -> linear light.

        y = (a*x + b)^g  for x >= d
        y = c*x          for x <  d
    """
    n = dev.shape[0]
    out = np.empty(dev.shape, dtype=np.float64)
    for ch in range(3):
        g = params[ch, 0]
        a = params[ch, 1]
        b = params[ch, 2]
        c = params[ch, 3]
        d = params[ch, 4]
        for i in range(n):
            x = dev[i, ch]
            if x >= d:
                out[i, ch] = (a * x + b) ** g
            else:
                out[i, ch] = c * x
    return out

@njit(cache=True, fastmath=False)
def _trc_inverse(lin: ArrayFloat, params: ArrayFloat) -> ArrayFloat:
    """
    Inverse of parametricCurveType 3, linear light -> device value.

        x = (y^(1/g) - b)/a  for y >= c*d
        x = y/c              for y <  c*d
    """
    n = lin.shape[0]
    out = np.empty(lin.shape, dtype=np.float64)
    for ch in range(3):
        g = params[ch, 0]
        a = params[ch, 1]
        b = params[ch, 2]
        c = params[ch, 3]
        d = params[ch, 4]
        for i in range(n):
            y = lin[i, ch]
            if y >= c * d:
                out[i, ch] = (y ** (1.0 / g) - b) / a
            else:
                out[i, ch] = y / c
    return out


# =============================================================================
# 3. MATRIX / TRC TRANSFORM
# =============================================================================

class ParametricCurveType3(NamedTuple):
    """
    ICC parametricCurveType 3 coefficients.

    A two-branch curve defined on [0, 1]: a power law for x >= d and a linear
    segment below it.  ``apply`` maps device values to linear light (device
    space -> XYZ direction); ``apply_inverse`` maps back.
    """
    g: float
    a: float
    b: float
    c: float
    d: float

    def apply(self, x: Any) -> Any:
        """y = (a*x + b)^g for x >= d, else c*x.  Works on scalars and arrays."""
        x = np.asarray(x, dtype=np.float64)
        with np.errstate(invalid="ignore"):
            out = np.where(x >= self.d, np.power(self.a * x + self.b, self.g), self.c * x)
        return out[()]

    def apply_inverse(self, y: Any) -> Any:
        """x = (y^(1/g) - b)/a for y >= c*d, else y/c."""
        y = np.asarray(y, dtype=np.float64)
        with np.errstate(invalid="ignore"):
            out = np.where(
                y >= self.c * self.d,
                (np.power(y, 1.0 / self.g) - self.b) / self.a,
                y / self.c,
            )
        return out[()]

    def as_array(self) -> ArrayFloat:
        return np.array(self, dtype=np.float64)


def _checked_matrix(value: Any, label: str, owner: str) -> ArrayFloat:
    try:
        mat = np.array(value, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise TransformConfigError(f"{owner}: {label} is not numeric") from exc
    if mat.shape != (3, 3):
        raise TransformConfigError(f"{owner}: {label} must be 3x3, got shape {mat.shape}")
    return _read_only(mat)

def _checked_inverse(mat: ArrayFloat, label: str, owner: str) -> ArrayFloat:
    try:
        inv = np.linalg.inv(mat)
    except np.linalg.LinAlgError as exc:
        raise TransformConfigError(f"{owner}: {label} is not invertible") from exc
    if not np.all(np.isfinite(inv)):
        raise TransformConfigError(f"{owner}: {label} is not invertible")
    return _read_only(inv)


@dataclass(frozen=True, eq=False)
class MatrixTRCTransform:
    """
    Matrix/TRC pipeline between a device RGB space and the XYZ hub.

    Column vectors, as in the ICC specification:

        device -> XYZ:  XYZ = inv(CA) @ M @ trc(rgb)
        XYZ -> device:  rgb = trc_inv(inv(M) @ CA @ XYZ)

    where M maps linear device RGB to D50 PCS XYZ (each column is one
    primary) and CA adapts D65 to D50.  Both inverses are computed once here;
    a singular matrix raises ``TransformConfigError`` so a broken constant
    table fails at construction and never at conversion time.

    Arrays are copied and frozen, so instances are safe to share.
    """
    matrix: ArrayFloat
    red_trc: ParametricCurveType3
    green_trc: ParametricCurveType3
    blue_trc: ParametricCurveType3
    chromatic_adaptation_matrix: ArrayFloat
    name: str = "custom"
    _matrix_inv: ArrayFloat = field(init=False, repr=False)
    _adaptation_inv: ArrayFloat = field(init=False, repr=False)
    _trc_params: ArrayFloat = field(init=False, repr=False)

    def __post_init__(self) -> None:
        owner = f"MatrixTRCTransform({self.name})"
        matrix = _checked_matrix(self.matrix, "matrix", owner)
        adaptation = _checked_matrix(
            self.chromatic_adaptation_matrix, "chromatic_adaptation_matrix", owner
        )
        curves = (self.red_trc, self.green_trc, self.blue_trc)
        params = np.array([ParametricCurveType3(*curve) for curve in curves], dtype=np.float64)

        object.__setattr__(self, "matrix", matrix)
        object.__setattr__(self, "chromatic_adaptation_matrix", adaptation)
        object.__setattr__(self, "_matrix_inv", _checked_inverse(matrix, "matrix", owner))
        object.__setattr__(
            self, "_adaptation_inv",
            _checked_inverse(adaptation, "chromatic_adaptation_matrix", owner),
        )
        object.__setattr__(self, "_trc_params", _read_only(params))
        logger.debug("Built %s", owner)

    # --- _raw fast paths (assume contiguous (N, 3) float64) ---

    def _to_profile_connection_space_raw(self, rgb: ArrayFloat) -> ArrayFloat:
        linear = _trc_forward(rgb, self._trc_params)
        # Row vectors: v @ M.T == (M @ v.T).T
        with np.errstate(invalid="ignore", over="ignore"):
            pcs = linear @ self.matrix.T
            return pcs @ self._adaptation_inv.T

    def _to_device_space_raw(self, xyz: ArrayFloat) -> ArrayFloat:
        with np.errstate(invalid="ignore", over="ignore"):
            pcs = xyz @ self.chromatic_adaptation_matrix.T
            linear = np.ascontiguousarray(pcs @ self._matrix_inv.T)
        return _trc_inverse(linear, self._trc_params)

    # --- Public API ---

    @handle_method_shapes
    def to_profile_connection_space(self, rgb: ArrayFloat) -> ArrayFloat:
        """
        Device RGB -> XYZ (D65 hub).

        Args:
            rgb: Device values, shape (3,) or (N, 3), nominally in [0, 1].

        Returns:
            XYZ coordinates, same shape.
        """
        return self._to_profile_connection_space_raw(rgb)

    @handle_method_shapes
    def to_device_space(self, xyz: ArrayFloat) -> ArrayFloat:
        """
        XYZ (D65 hub) -> device RGB.  Out-of-gamut colors are *not* clipped.

        Args:
            xyz: XYZ coordinates, shape (3,) or (N, 3).

        Returns:
            Device values, same shape.
        """
        return self._to_device_space_raw(xyz)


# =============================================================================
# 4. COLOR SPACE ENGINE
# =============================================================================

def _uv_prime(xyz: ArrayFloat) -> Tuple[ArrayFloat, ArrayFloat]:
    """
    CIE 1976 u', v' chromaticity.

        u' = 4X / (X + 15Y + 3Z)
        v' = 9Y / (X + 15Y + 3Z)
    """
    X, Y, Z = xyz[..., 0], xyz[..., 1], xyz[..., 2]
    denom = X + 15.0 * Y + 3.0 * Z
    return 4.0 * X / denom, 9.0 * Y / denom

_WHITE_U_PRIME, _WHITE_V_PRIME = (float(v) for v in _uv_prime(REF_WHITE_D65))


class ColorSpaceEngine:
    """Static utility class for the XYZ <-> xyY and XYZ <-> L*u*v* transforms.

    Each transform has an internal ``_raw`` variant working on validated
    (N, 3) float64 input and a public ``@handle_shapes`` wrapper.
    """

    @staticmethod
    def _xyz_to_xyY_raw(xyz_array: ArrayFloat) -> ArrayFloat:
        """Raw XYZ → xyY."""
        X, Y, Z = xyz_array[:, 0], xyz_array[:, 1], xyz_array[:, 2]
        out = np.empty_like(xyz_array)
        with np.errstate(divide="ignore", invalid="ignore"):
            denom = X + Y + Z
            out[:, 0] = X / denom
            out[:, 1] = Y / denom
        out[:, 2] = Y
        return out

    @staticmethod
    def _xyY_to_xyz_raw(xyY_array: ArrayFloat) -> ArrayFloat:
        """Raw xyY → XYZ."""
        x, y, Y = xyY_array[:, 0], xyY_array[:, 1], xyY_array[:, 2]
        out = np.empty_like(xyY_array)
        with np.errstate(divide="ignore", invalid="ignore"):
            out[:, 0] = Y / y * x
            out[:, 2] = Y / y * (1.0 - x - y)
        out[:, 1] = Y
        return out

    @staticmethod
    def _xyz_to_luv_raw(xyz_array: ArrayFloat) -> ArrayFloat:
        """Raw XYZ → L*u*v* (L in [0, 1])."""
        out = np.empty_like(xyz_array)
        with np.errstate(divide="ignore", invalid="ignore"):
            n = xyz_array[:, 1] / REF_WHITE_D65[1]
            L = np.where(
                n <= LUV_EPSILON,
                LUV_KAPPA * n / 100.0,
                (116.0 * np.cbrt(n) - 16.0) / 100.0,
            )
            u_prime, v_prime = _uv_prime(xyz_array)
            out[:, 0] = L
            out[:, 1] = 13.0 * L * (u_prime - _WHITE_U_PRIME)
            out[:, 2] = 13.0 * L * (v_prime - _WHITE_V_PRIME)
        return out

    @staticmethod
    def _luv_to_xyz_raw(luv_array: ArrayFloat) -> ArrayFloat:
        """Raw L*u*v* (L in [0, 1]) → XYZ."""
        L, u, v = luv_array[:, 0], luv_array[:, 1], luv_array[:, 2]
        white_Y = REF_WHITE_D65[1]
        out = np.empty_like(luv_array)
        with np.errstate(divide="ignore", invalid="ignore"):
            u_prime = u / (13.0 * L) + _WHITE_U_PRIME
            v_prime = v / (13.0 * L) + _WHITE_V_PRIME

            L100 = L * 100.0
            Y = np.where(
                L100 <= LUV_L_BREAK,
                white_Y * L100 * LUV_KAPPA_INV,
                white_Y * ((L100 + 16.0) / 116.0) ** 3,
            )
            out[:, 0] = Y * 9.0 * u_prime / (4.0 * v_prime)
            out[:, 1] = Y
            out[:, 2] = Y * (12.0 - 3.0 * u_prime - 20.0 * v_prime) / (4.0 * v_prime)
        return out

    # =====================================================================
    #  Public API  (shape-safe wrappers)
    # =====================================================================

    @staticmethod
    @handle_shapes
    def xyz_to_xyY(xyz_array: ArrayFloat) -> ArrayFloat:
        """
        Converts XYZ to xyY (chromaticity + luminance).

            x = X / (X+Y+Z)
            y = Y / (X+Y+Z)
            Y = Y

        Black (X+Y+Z = 0) yields NaN chromaticity; it is not replaced by the
        white-point chromaticity.

        Args:
            xyz_array: Input XYZ data, shape (N, 3) or (3,).
        """
        return ColorSpaceEngine._xyz_to_xyY_raw(xyz_array)

    @staticmethod
    @handle_shapes
    def xyY_to_xyz(xyY_array: ArrayFloat) -> ArrayFloat:
        """
        Converts xyY to XYZ.  y = 0 yields non-finite X and Z.

        Args:
            xyY_array: Input xyY data, shape (N, 3) or (3,).
        """
        return ColorSpaceEngine._xyY_to_xyz_raw(xyY_array)

    @staticmethod
    @handle_shapes
    def xyz_to_luv(xyz_array: ArrayFloat) -> ArrayFloat:
        """
        Converts XYZ to CIE L*u*v* against the D65 white.

        L is scaled to [0, 1] (the traditional 0..100 value divided by 100).

        Args:
            xyz_array: Input XYZ data, shape (N, 3) or (3,).
        """
        return ColorSpaceEngine._xyz_to_luv_raw(xyz_array)

    @staticmethod
    @handle_shapes
    def luv_to_xyz(luv_array: ArrayFloat) -> ArrayFloat:
        """
        Converts CIE L*u*v* (L in [0, 1]) to XYZ.

        L = 0 (black) and v' = 0 are undefined and yield non-finite output.

        Args:
            luv_array: Input Luv data, shape (N, 3) or (3,).
        """
        return ColorSpaceEngine._luv_to_xyz_raw(luv_array)
