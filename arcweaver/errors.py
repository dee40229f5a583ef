#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ArcWeaver v0.1.0

Error types raised while converting a node-centric graph.

Every error aborts the run; there is no partial output mode.

Author: ArcWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from typing import Optional


class ArcWeaverError(Exception):
    """
    Base class for conversion errors.
    
    Attributes:
        record_id: Id of the offending unitig record (if known)
        line_number: 1-based line of the offending header (if known)
    """
    
    def __init__(self, message: str, record_id: Optional[object] = None,
                 line_number: Optional[int] = None):
        self.message = message
        self.record_id = record_id
        self.line_number = line_number
        super().__init__(self._format())
    
    def _format(self) -> str:
        location = []
        if self.record_id is not None:
            location.append(f"record {self.record_id}")
        if self.line_number is not None:
            location.append(f"line {self.line_number}")
        if location:
            return f"{self.message} ({', '.join(location)})"
        return self.message


class MalformedRecordError(ArcWeaverError):
    """Raised for bad header fields, alphabet violations, length mismatches and duplicate ids."""
    pass


class DanglingEdgeError(ArcWeaverError):
    """Raised when an adjacency annotation references an unknown unitig id."""
    pass


class CapacityError(ArcWeaverError):
    """Raised when the doubled id space does not fit the configured id width."""
    pass


__all__ = [
    'ArcWeaverError',
    'MalformedRecordError',
    'DanglingEdgeError',
    'CapacityError',
]
