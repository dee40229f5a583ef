#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
File handling helpers with automatic gzip detection.
"""

import gzip
from pathlib import Path
from typing import TextIO, Union


def is_gzipped(filepath: Union[str, Path]) -> bool:
    """
    Check if file is gzip compressed.
    
    Args:
        filepath: Path to file
    
    Returns:
        True if file is gzipped
    """
    filepath = Path(filepath)
    return filepath.suffix in ('.gz', '.gzip')


def open_file(filepath: Union[str, Path], mode: str = 'r') -> TextIO:
    """
    Open a text file, transparently (de)compressing *.gz paths.
    
    Args:
        filepath: Path to file
        mode: File mode ('r' or 'w')
    
    Returns:
        Text file handle
    """
    filepath = Path(filepath)
    
    if is_gzipped(filepath):
        if 'r' in mode:
            return gzip.open(filepath, 'rt')
        else:
            return gzip.open(filepath, 'wt')
    else:
        return open(filepath, mode)


__all__ = ['is_gzipped', 'open_file']
