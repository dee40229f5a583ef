#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
ArcWeaver v0.1.0

Arc weights and parallel-arc bookkeeping.

Weights come from the node-centric edge an arc was built from and are never
summed across edges. Arcs with equal endpoints stay separate records.

Author: ArcWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
from collections import Counter
from enum import Enum
from typing import Dict, List, Tuple

from ..errors import MalformedRecordError
from .data_structures import Arc, Node, NodeEdge, Weight

logger = logging.getLogger(__name__)


class WeightMode(Enum):
    """Source of arc weights."""
    ABUNDANCE = 'abundance'  # km:f: of the source unitig
    KMER_COUNT = 'kmer_count'  # KC:i: / number of k-mers of the source unitig


class WeightTracker:
    """
    Assign weights to arcs and count parallel arcs.

    Args:
        nodes: Node table keyed by unitig id
        k: K-mer size the graph was built with
        mode: WeightMode or its string value
    """

    def __init__(self, nodes: Dict[int, Node], k: int, mode=WeightMode.ABUNDANCE):
        self.nodes = nodes
        self.k = k
        self.mode = WeightMode(mode)
        self._endpoint_counts: Counter = Counter()
        self._non_integer_warnings = 0

    def weight_for(self, edge: NodeEdge) -> Weight:
        """
        Weight of the originating node-centric edge.

        Both arcs of a biarc get the value returned here.
        """
        node = self.nodes[edge.from_id]
        if self.mode is WeightMode.ABUNDANCE:
            return node.abundance
        return self._average_kmer_count(node)

    def _average_kmer_count(self, node: Node) -> int:
        if node.kmer_count is None:
            raise MalformedRecordError(
                "Weight mode 'kmer_count' needs a KC:i: tag",
                record_id=node.id, line_number=node.line_number,
            )

        kmers = node.length - (self.k - 1)
        if kmers <= 0:
            raise MalformedRecordError(
                f"Unitig of length {node.length} holds no {self.k}-mer",
                record_id=node.id, line_number=node.line_number,
            )

        if node.kmer_count % kmers != 0:
            self._non_integer_warnings += 1
            logger.warning(
                f"Found unitig with non-integer average abundance: "
                f"{node.sequence[:self.k + 10]} (record {node.id}, "
                f"KC={node.kmer_count}, {kmers} k-mers)"
            )
        return node.kmer_count // kmers

    def record(self, arc: Arc):
        """Count an emitted arc under its endpoint pair."""
        self._endpoint_counts[arc.endpoints] += 1

    def parallel_groups(self) -> List[Tuple[Tuple[int, int], int]]:
        """Endpoint pairs carrying more than one arc, with their multiplicity."""
        return [
            (endpoints, count)
            for endpoints, count in self._endpoint_counts.items()
            if count > 1
        ]

    def multiplicity(self, from_id: int, to_id: int) -> int:
        return self._endpoint_counts.get((from_id, to_id), 0)

    @property
    def non_integer_warnings(self) -> int:
        return self._non_integer_warnings


__all__ = ['WeightMode', 'WeightTracker']

# ArcWeaver v0.1.0
# Any usage is subject to this software's license.
