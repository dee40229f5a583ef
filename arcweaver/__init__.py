#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ArcWeaver v0.1.0

Package initialization and version metadata.

Author: ArcWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .version import __version__
from .errors import ArcWeaverError, MalformedRecordError, DanglingEdgeError, CapacityError
from .pipeline import ConversionResult, node_to_arc_centric, convert_file

__all__ = [
    "__version__",
    "ArcWeaverError",
    "MalformedRecordError",
    "DanglingEdgeError",
    "CapacityError",
    "ConversionResult",
    "node_to_arc_centric",
    "convert_file",
]

# ArcWeaver v0.1.0
# Any usage is subject to this software's license.
