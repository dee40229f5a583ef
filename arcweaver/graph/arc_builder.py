#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
ArcWeaver v0.1.0

Arc builder: node-centric adjacencies to doubled arc-centric arcs.

- Resolves each BCALM2 adjacency through the doubled id space
- Reads the (k-1)-overlap off the source unitig on the annotated strand
- Emits every arc together with its reverse-complement mirror arc
- Collapses self-complemental arcs to a single record

An annotation L:sa:b:sb on record a means the end of a read on strand sa
overlaps the start of b read on strand sb. The arc runs from resolve(a, sa)
to resolve(b, sb); its mirror runs from mirror(resolve(b, sb)) to
mirror(resolve(a, sa)), which is exactly what the partner annotation
L:-sb:a:-sa on record b resolves to.

Author: ArcWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
from typing import List, Optional

from ..errors import DanglingEdgeError, MalformedRecordError
from ..utils.sequence_utils import oriented_sequence, prefix, reverse_complement, suffix
from .data_structures import Arc, ArcCentricGraph, NodeCentricGraph, NodeEdge
from .doubler import NodeDoubler
from .weights import WeightTracker

logger = logging.getLogger(__name__)


class ArcBuilder:
    """
    Builder for the doubled arc-centric graph.

    Args:
        graph: Parsed node-centric graph
        doubler: Doubled id mapping for graph.nodes
        k: K-mer size; arcs carry (k-1)-long overlaps
        tracker: Weight tracker (a default abundance tracker if None)
        check_overlaps: Verify that the target unitig starts with the overlap
    """

    def __init__(self, graph: NodeCentricGraph, doubler: NodeDoubler, k: int,
                 tracker: Optional[WeightTracker] = None, check_overlaps: bool = False):
        if k < 2:
            raise ValueError(f"k must be >= 2, got {k}")
        self.graph = graph
        self.doubler = doubler
        self.k = k
        self.tracker = tracker or WeightTracker(graph.nodes, k)
        self.check_overlaps = check_overlaps

    def build(self) -> ArcCentricGraph:
        """
        Convert every node-centric edge, in discovery order.

        Returns:
            ArcCentricGraph with one or two arcs per edge

        Raises:
            DanglingEdgeError: If an edge names a unitig missing from the node table
            MalformedRecordError: If a unitig is shorter than the overlap, or an
                overlap check fails
        """
        result = ArcCentricGraph(node_count=self.doubler.node_count)

        for index, edge in enumerate(self.graph.edges):
            for arc in self.arcs_for_edge(index, edge):
                self.tracker.record(arc)
                result.add_arc(arc)

        logger.info(
            f"Built {result.arc_count} arcs from {self.graph.edge_count} edges "
            f"({result.self_complemental_count} self-complemental)"
        )
        parallel = self.tracker.parallel_groups()
        if parallel:
            logger.info(f"Kept {len(parallel)} groups of parallel arcs")
        return result

    def arcs_for_edge(self, index: int, edge: NodeEdge) -> List[Arc]:
        """Arc and mirror arc of a single edge (one arc if self-complemental)."""
        self._check_endpoints(edge)

        from_id = self.doubler.resolve(edge.from_id, edge.from_strand)
        to_id = self.doubler.resolve(edge.to_id, edge.to_strand)
        sequence = self._overlap(edge)
        weight = self.tracker.weight_for(edge)

        mirror_from = NodeDoubler.mirror(to_id)
        mirror_to = NodeDoubler.mirror(from_id)
        mirror_sequence = reverse_complement(sequence)

        self_complemental = (
            (from_id, to_id, sequence) == (mirror_from, mirror_to, mirror_sequence)
        )

        arc = Arc(
            from_id=from_id,
            to_id=to_id,
            weight=weight,
            mirror_from=mirror_from,
            mirror_to=mirror_to,
            sequence=sequence,
            source_edge=index,
            self_complemental=self_complemental,
        )
        if self_complemental:
            logger.debug(f"Self-complemental arc from edge {edge}")
            return [arc]

        mirror_arc = Arc(
            from_id=mirror_from,
            to_id=mirror_to,
            weight=weight,
            mirror_from=from_id,
            mirror_to=to_id,
            sequence=mirror_sequence,
            source_edge=index,
        )
        return [arc, mirror_arc]

    def _check_endpoints(self, edge: NodeEdge):
        for node_id in (edge.from_id, edge.to_id):
            if node_id not in self.doubler:
                raise DanglingEdgeError(
                    f"Edge {edge} references unknown unitig {node_id}",
                    record_id=edge.from_id, line_number=edge.line_number,
                )

    def _overlap(self, edge: NodeEdge) -> str:
        overlap_length = self.k - 1
        source = self.graph.nodes[edge.from_id]
        target = self.graph.nodes[edge.to_id]

        for node in (source, target):
            if node.length < overlap_length:
                raise MalformedRecordError(
                    f"Unitig of length {node.length} is shorter than the "
                    f"{overlap_length}-base overlap",
                    record_id=node.id, line_number=node.line_number,
                )

        overlap = suffix(
            oriented_sequence(source.sequence, edge.from_strand.is_reverse),
            overlap_length,
        )

        if self.check_overlaps:
            expected = prefix(
                oriented_sequence(target.sequence, edge.to_strand.is_reverse),
                overlap_length,
            )
            if overlap != expected:
                raise MalformedRecordError(
                    f"Edge {edge}: overlap {overlap} does not match target start {expected}",
                    record_id=edge.from_id, line_number=edge.line_number,
                )
        return overlap


__all__ = ['ArcBuilder']

# ArcWeaver v0.1.0
# Any usage is subject to this software's license.
