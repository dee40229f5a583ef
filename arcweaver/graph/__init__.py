"""
ArcWeaver v0.1.0

Graph model and the node-centric to arc-centric transform.

Author: ArcWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .data_structures import Strand, Node, NodeEdge, NodeCentricGraph, Arc, ArcCentricGraph
from .doubler import NodeDoubler
from .weights import WeightMode, WeightTracker
from .arc_builder import ArcBuilder

__all__ = [
    "Strand",
    "Node",
    "NodeEdge",
    "NodeCentricGraph",
    "Arc",
    "ArcCentricGraph",
    "NodeDoubler",
    "WeightMode",
    "WeightTracker",
    "ArcBuilder",
]
