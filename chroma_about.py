# -*- coding: utf-8 -*-
# Chromahub: Hub-and-spoke color conversion.
#
# Copyright (c) 2026 opticsWolf
#
# SPDX-License-Identifier: LGPL-3.0-or-later

"""
Project metadata for opticsWolf Chromahub.
"""

from typing import Final

# Metadata Definitions
__title__: Final[str] = "Chromahub"
__description__: Final[str] = (
    "Color conversion between RGB, perceptual and chromaticity spaces "
    "through the CIE 1931 XYZ hub, with hex encoding and contrast ratios."
)
__version__: Final[str] = "0.1.0"
__author__: Final[str] = "opticsWolf"
__license__: Final[str] = "LGPL-3.0-or-later"
__copyright__: Final[str] = "Copyright (c) 2026 opticsWolf"

def metadata_summary() -> dict[str, str]:
    """Returns a dictionary of project metadata for introspection."""
    return {
        "title": __title__,
        "version": __version__,
        "license": __license__,
        "description": __description__,
        "copyright": __copyright__,
    }
