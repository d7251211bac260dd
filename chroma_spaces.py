# -*- coding: utf-8 -*-
"""
Chromahub: Hub-and-spoke color conversion
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: chroma_spaces.py — Concrete color spaces.

    CIEXYY     CIE 1931 xyY (chromaticity + luminance)
    CIELUV     CIE 1976 L*u*v*, L scaled to [0, 1]
    SRGB       IEC 61966-2-1 sRGB
    DisplayP3  Apple Display P3 (P3 primaries, D65 white, sRGB curve)

The RGB spaces are instances of the shared ``MatrixTRCTransform`` and differ
only in their constant tables.  The tables are ICC s15Fixed16Number values
(integer / 65536) in the D50 profile connection space, as found in the
standard ICC profiles of these spaces.  The transforms are built at import
time, so a singular table fails the import with ``TransformConfigError``.
"""

from __future__ import annotations

from typing import Final

import numpy as np

from chroma_color import Color
from chroma_engine import ColorSpaceEngine, MatrixTRCTransform, ParametricCurveType3
from chroma_hub import CIEXYZ

__all__ = [
    "CIEXYY",
    "CIELUV",
    "SRGB",
    "DisplayP3",
    "SRGB_TRANSFORM",
    "DISPLAY_P3_TRANSFORM",
]

_S15: Final[float] = 65536.0


class CIEXYY(Color):
    """
    A color in the CIE 1931 xyY color space.

    x and y are X and Y normalized by (X + Y + Z); the third component is Y
    (luminance) unchanged.  Black has no chromaticity and converts to NaN x, y;
    y = 0 converts back to non-finite X and Z.

    See https://en.wikipedia.org/wiki/CIE_1931_color_space#CIE_xy_chromaticity_diagram_and_the_CIE_xyY_color_space
    """

    __slots__ = ()

    COMPONENTS = ("x", "y", "Y")

    @classmethod
    def from_ciexyz(cls, ciexyz: CIEXYZ) -> CIEXYY:
        return cls.from_vector3(ColorSpaceEngine.xyz_to_xyY(ciexyz._vec))

    def to_ciexyz(self) -> CIEXYZ:
        return CIEXYZ.from_vector3(ColorSpaceEngine.xyY_to_xyz(self._vec))


class CIELUV(Color):
    """
    A color in the CIE 1976 L*u*v* color space, relative to D65.

    More perceptually uniform than XYZ.  Unlike the usual convention, L is
    normalized to [0, 1].  L = 0 (black) has no defined u', v' and converts
    back to non-finite XYZ.

    See https://en.wikipedia.org/wiki/CIELUV
    """

    __slots__ = ()

    COMPONENTS = ("L", "u", "v")

    @classmethod
    def from_ciexyz(cls, ciexyz: CIEXYZ) -> CIELUV:
        return cls.from_vector3(ColorSpaceEngine.xyz_to_luv(ciexyz._vec))

    def to_ciexyz(self) -> CIEXYZ:
        return CIEXYZ.from_vector3(ColorSpaceEngine.luv_to_xyz(self._vec))


# =============================================================================
# Matrix/TRC constant tables
# =============================================================================

# sRGB tone response, shared by both RGB spaces.
SRGB_TONE_RESPONSE_CURVE: Final[ParametricCurveType3] = ParametricCurveType3(
    g=157_286.0 / _S15,
    a=62119.0 / _S15,
    b=3417.0 / _S15,
    c=5072.0 / _S15,
    d=2651.0 / _S15,
)

# D65 -> D50 (Bradford), shared by both RGB spaces.
_D65_TO_D50_ADAPTATION = np.array([
    [68674.0,  1502.0, -3290.0],
    [ 1939.0, 64912.0, -1118.0],
    [ -605.0,   988.0, 49262.0],
]) / _S15

# Columns are the red, green and blue primaries in D50 PCS XYZ.
_SRGB_MATRIX = np.array([
    [28578.0, 25241.0,  9376.0],
    [14581.0, 46981.0,  3972.0],
    [  912.0,  6362.0, 46799.0],
]) / _S15

_DISPLAY_P3_MATRIX = np.array([
    [33759.0, 19135.0, 10296.0],
    [15807.0, 45367.0,  4363.0],
    [  -69.0,  2745.0, 51385.0],
]) / _S15

SRGB_TRANSFORM: Final[MatrixTRCTransform] = MatrixTRCTransform(
    matrix=_SRGB_MATRIX,
    red_trc=SRGB_TONE_RESPONSE_CURVE,
    green_trc=SRGB_TONE_RESPONSE_CURVE,
    blue_trc=SRGB_TONE_RESPONSE_CURVE,
    chromatic_adaptation_matrix=_D65_TO_D50_ADAPTATION,
    name="sRGB",
)

DISPLAY_P3_TRANSFORM: Final[MatrixTRCTransform] = MatrixTRCTransform(
    matrix=_DISPLAY_P3_MATRIX,
    red_trc=SRGB_TONE_RESPONSE_CURVE,
    green_trc=SRGB_TONE_RESPONSE_CURVE,
    blue_trc=SRGB_TONE_RESPONSE_CURVE,
    chromatic_adaptation_matrix=_D65_TO_D50_ADAPTATION,
    name="Display P3",
)


class _MatrixTRCColor(Color):
    """RGB space defined entirely by a ``MatrixTRCTransform``."""

    __slots__ = ()

    COMPONENTS = ("r", "g", "b")
    TRANSFORM: MatrixTRCTransform

    @classmethod
    def from_ciexyz(cls, ciexyz: CIEXYZ) -> _MatrixTRCColor:
        return cls.from_vector3(cls.TRANSFORM.to_device_space(ciexyz._vec))

    def to_ciexyz(self) -> CIEXYZ:
        return CIEXYZ.from_vector3(self.TRANSFORM.to_profile_connection_space(self._vec))


class SRGB(_MatrixTRCColor):
    """
    A color in the sRGB color space.

    The standard space of the web (https://www.w3.org/TR/css-color-3/#rgb-color);
    hexadecimal colors in CSS are generally sRGB.

    See https://en.wikipedia.org/wiki/SRGB
    """

    __slots__ = ()

    TRANSFORM = SRGB_TRANSFORM


class DisplayP3(_MatrixTRCColor):
    """
    A color in the Apple Display P3 color space.

    Like DCI-P3 but with the D65 white point and the sRGB transfer curve.

    See https://en.wikipedia.org/wiki/DCI-P3#Display_P3
    """

    __slots__ = ()

    TRANSFORM = DISPLAY_P3_TRANSFORM
