# -*- coding: utf-8 -*-
"""
Chromahub: Hub-and-spoke color conversion
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: chroma_hub.py — CIE 1931 XYZ, the canonical hub space.
"""

from __future__ import annotations

from chroma_color import Color
from chroma_engine import REF_WHITE_D65

__all__ = ["CIEXYZ", "get_d65_ciexyz"]


class CIEXYZ(Color):
    """
    A color in the CIE 1931 XYZ color space.

    Every other space converts to and from this one.  Y is luminance; Z
    roughly follows the short-wavelength cone response; X is chosen so that
    real colors have non-negative values.  Values are normalized so the
    reference white has Y = 1.0.

    See https://en.wikipedia.org/wiki/CIE_1931_color_space
    """

    __slots__ = ()

    COMPONENTS = ("X", "Y", "Z")

    @classmethod
    def from_ciexyz(cls, ciexyz: CIEXYZ) -> CIEXYZ:
        return cls.from_vector3(ciexyz._vec)

    def to_ciexyz(self) -> CIEXYZ:
        return self

    def luminance(self) -> float:
        """The Y component."""
        return float(self._vec[1])


def get_d65_ciexyz() -> CIEXYZ:
    """The D65 reference white (X=0.95047, Y=1.0, Z=1.08883)."""
    return CIEXYZ.from_vector3(REF_WHITE_D65)
