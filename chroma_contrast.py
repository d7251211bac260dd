# -*- coding: utf-8 -*-
"""
Chromahub: Hub-and-spoke color conversion
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: chroma_contrast.py — WCAG 2 contrast ratio over hub luminance.

    ratio = (L_lighter + 0.05) / (L_darker + 0.05)

Ranges from 1.0 (identical luminance) to 21.0 (white on black).
See https://www.w3.org/TR/WCAG21/#dfn-contrast-ratio
"""

from chroma_color import Color

__all__ = ["contrast_ratio", "contrast_ratio_luminance"]

_FLARE = 0.05


def contrast_ratio_luminance(lighter: float, darker: float) -> float:
    """Contrast ratio of two relative luminances, lighter first."""
    return (lighter + _FLARE) / (darker + _FLARE)


def contrast_ratio(color1: Color, color2: Color) -> float:
    """
    Contrast ratio between two colors, which may be in different spaces.

    Symmetric: the lighter of the two is always the numerator.
    """
    lum1 = color1.luminance()
    lum2 = color2.luminance()
    return contrast_ratio_luminance(max(lum1, lum2), min(lum1, lum2))
