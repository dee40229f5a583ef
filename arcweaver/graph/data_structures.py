#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
ArcWeaver v0.1.0

Graph data structures shared by the conversion stages.

- Node-centric side: unitig nodes and strand-annotated adjacencies as parsed
  from BCALM2 headers
- Arc-centric side: doubled arcs carrying weight, mirror ids and overlap sequence

Author: ArcWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union


# ============================================================================
# Strand
# ============================================================================

class Strand(Enum):
    """Orientation marker of a unitig end in an adjacency annotation."""
    PLUS = '+'
    MINUS = '-'

    @classmethod
    def parse(cls, marker: str) -> 'Strand':
        """Parse '+' or '-' (raises ValueError otherwise)."""
        return cls(marker)

    def flipped(self) -> 'Strand':
        """Opposite strand."""
        return Strand.MINUS if self is Strand.PLUS else Strand.PLUS

    @property
    def is_reverse(self) -> bool:
        return self is Strand.MINUS

    def __str__(self) -> str:
        return self.value


# ============================================================================
# Node-centric structures
# ============================================================================

@dataclass(frozen=True)
class Node:
    """
    Unitig of the node-centric de Bruijn graph.

    Attributes:
        id: Unitig id from the record header
        sequence: Uppercase nucleotide sequence
        length: Declared length (LN:i:), equal to len(sequence)
        abundance: Mean k-mer coverage (km:f:)
        kmer_count: Total k-mer count (KC:i:), if present
        line_number: Line of the record header in the input
    """
    id: int
    sequence: str
    length: int
    abundance: float
    kmer_count: Optional[int] = None
    line_number: Optional[int] = None


@dataclass(frozen=True)
class NodeEdge:
    """
    One direction of a node-centric adjacency.

    The end of `from_id` read on `from_strand` overlaps the start of `to_id`
    read on `to_strand`.
    """
    from_id: int
    from_strand: Strand
    to_id: int
    to_strand: Strand
    line_number: Optional[int] = field(default=None, compare=False)

    @property
    def key(self) -> Tuple[int, Strand, int, Strand]:
        return (self.from_id, self.from_strand, self.to_id, self.to_strand)

    def mirror(self) -> 'NodeEdge':
        """The same adjacency described from the other unitig."""
        return NodeEdge(
            from_id=self.to_id,
            from_strand=self.to_strand.flipped(),
            to_id=self.from_id,
            to_strand=self.from_strand.flipped(),
            line_number=self.line_number,
        )

    @property
    def is_self_mirror(self) -> bool:
        """True for hairpin adjacencies such as L:+:n:- on record n."""
        return self.key == self.mirror().key

    def __str__(self) -> str:
        return f"{self.from_id}{self.from_strand} -> {self.to_id}{self.to_strand}"


@dataclass
class NodeCentricGraph:
    """
    Parsed node table plus normalized adjacency list.

    `nodes` keeps record order; `edges` keeps discovery order with each
    biological adjacency listed once.
    """
    nodes: Dict[int, Node] = field(default_factory=dict)
    edges: List[NodeEdge] = field(default_factory=list)

    def add_node(self, node: Node):
        """Add a node to the table."""
        self.nodes[node.id] = node

    def add_edge(self, edge: NodeEdge):
        """Append a normalized edge."""
        self.edges.append(edge)

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)


# ============================================================================
# Arc-centric structures
# ============================================================================

Weight = Union[int, float]


@dataclass(frozen=True)
class Arc:
    """
    Arc of the doubled arc-centric graph.

    Attributes:
        from_id: Doubled source id
        to_id: Doubled target id
        weight: Weight of the originating node-centric edge
        mirror_from: Source of the reverse-complement arc, mirror(to_id)
        mirror_to: Target of the reverse-complement arc, mirror(from_id)
        sequence: Overlap sequence read along this arc
        source_edge: Index of the originating edge in NodeCentricGraph.edges
        self_complemental: True when the arc is its own mirror
    """
    from_id: int
    to_id: int
    weight: Weight
    mirror_from: int
    mirror_to: int
    sequence: str
    source_edge: int = field(default=-1, compare=False)
    self_complemental: bool = field(default=False, compare=False)

    @property
    def endpoints(self) -> Tuple[int, int]:
        return (self.from_id, self.to_id)


@dataclass
class ArcCentricGraph:
    """
    Doubled arc-centric graph in emission order.

    Parallel arcs (equal endpoints) are kept as separate entries; the mirror
    columns alone do not say which parallel arc is whose reverse complement.
    """
    node_count: int
    arcs: List[Arc] = field(default_factory=list)

    def add_arc(self, arc: Arc):
        """Append an arc."""
        self.arcs.append(arc)

    @property
    def arc_count(self) -> int:
        return len(self.arcs)

    @property
    def self_complemental_count(self) -> int:
        return sum(1 for arc in self.arcs if arc.self_complemental)

    def __len__(self) -> int:
        return len(self.arcs)


__all__ = [
    'Strand',
    'Node',
    'NodeEdge',
    'NodeCentricGraph',
    'Weight',
    'Arc',
    'ArcCentricGraph',
]

# ArcWeaver v0.1.0
# Any usage is subject to this software's license.
