"""
ArcWeaver v0.1.0

Shared utilities.

Author: ArcWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .sequence_utils import reverse_complement, is_palindromic, find_invalid_base
from .memory import peak_memory_mb, log_peak_memory

__all__ = [
    "reverse_complement",
    "is_palindromic",
    "find_invalid_base",
    "peak_memory_mb",
    "log_peak_memory",
]
