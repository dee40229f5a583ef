#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ArcWeaver v0.1.0

Edge list export for the doubled arc-centric graph.

Output layout:

    <doubled node count>
    <from> <to> <weight> <mirror_from> <mirror_to> <sequence>
    ...

Arcs are written in emission order; the writer does not reorder or
validate them.

Author: ArcWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import TextIO

from ..graph.data_structures import Arc, ArcCentricGraph, Weight
from .file_utils import open_file

logger = logging.getLogger(__name__)


def format_weight(weight: Weight) -> str:
    """
    Render a weight, dropping the fraction of integral floats.
    
    Example:
        >>> format_weight(3.0), format_weight(2.5)
        ('3', '2.5')
    """
    if isinstance(weight, float) and weight.is_integer():
        return str(int(weight))
    return str(weight)


def format_arc(arc: Arc) -> str:
    """One edge list line for an arc, without the trailing newline."""
    return (
        f"{arc.from_id} {arc.to_id} {format_weight(arc.weight)} "
        f"{arc.mirror_from} {arc.mirror_to} {arc.sequence}"
    )


def write_edge_list(graph: ArcCentricGraph, handle: TextIO) -> int:
    """
    Write the node count line and one line per arc.
    
    Args:
        graph: Arc-centric graph to serialize
        handle: Writable text handle
    
    Returns:
        Number of arc lines written
    
    Raises:
        OSError: If the handle cannot be written
    """
    handle.write(f"{graph.node_count}\n")
    for arc in graph.arcs:
        handle.write(format_arc(arc))
        handle.write("\n")
    return graph.arc_count


def save_edge_list(graph: ArcCentricGraph, output_path: str | Path) -> int:
    """
    Write an edge list file (gzip-compressed when the name ends in .gz).
    
    Args:
        graph: Arc-centric graph to serialize
        output_path: Destination file
    
    Returns:
        Number of arc lines written
    """
    output_path = Path(output_path)
    logger.info(f"Writing {graph.arc_count} arcs to {output_path}")
    
    output_path.parent.mkdir(parents=True, exist_ok=True)
    
    with open_file(output_path, 'w') as handle:
        return write_edge_list(graph, handle)


__all__ = ['format_weight', 'format_arc', 'write_edge_list', 'save_edge_list']
