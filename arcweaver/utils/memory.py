#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ArcWeaver v0.1.0

Peak memory reporting for conversion runs.

Author: ArcWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
import sys
from typing import Optional

logger = logging.getLogger(__name__)


def peak_memory_mb() -> Optional[float]:
    """
    Peak resident set size of this process in MiB.
    
    Returns:
        Peak RSS in MiB, or None where the platform has no `resource` module
    """
    try:
        import resource
    except ImportError:
        return None
    
    max_rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # ru_maxrss is bytes on macOS and KiB on Linux
    if sys.platform == 'darwin':
        return max_rss / (1024 * 1024)
    return max_rss / 1024


def log_peak_memory() -> Optional[float]:
    """Log the peak resident memory and return it."""
    rss_mb = peak_memory_mb()
    if rss_mb is None:
        logger.debug("Peak memory unavailable on this platform")
    else:
        logger.info(f"Peak memory: {rss_mb:.1f} MiB")
    return rss_mb

# ArcWeaver v0.1.0
# Any usage is subject to this software's license.
