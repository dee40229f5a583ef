"""
ArcWeaver v0.1.0

Input and output of node-centric and arc-centric graphs.

Author: ArcWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .bcalm2_parser import parse_bcalm2, read_bcalm2, parse_record, parse_link
from .edge_list_writer import format_arc, write_edge_list, save_edge_list
from .file_utils import open_file, is_gzipped

__all__ = [
    "parse_bcalm2",
    "read_bcalm2",
    "parse_record",
    "parse_link",
    "format_arc",
    "write_edge_list",
    "save_edge_list",
    "open_file",
    "is_gzipped",
]
