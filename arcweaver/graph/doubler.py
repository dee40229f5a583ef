#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
ArcWeaver v0.1.0

Node doubling: every unitig gets a forward and a reverse-complement id.

The i-th unitig in record order owns doubled ids 2i (forward) and 2i + 1
(reverse), so the mirror of any doubled id is `x ^ 1`.

Author: ArcWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
from typing import Dict, Iterable, Iterator, Tuple

from ..errors import CapacityError
from .data_structures import Strand

logger = logging.getLogger(__name__)

DEFAULT_ID_BITS = 64


class NodeDoubler:
    """
    Mapping between unitig ids and the doubled id space.

    Args:
        node_ids: Unitig ids in record order
        id_bits: Width of the doubled id type used by consumers of the output

    Raises:
        CapacityError: If 2 * len(node_ids) ids do not fit into id_bits
    """

    def __init__(self, node_ids: Iterable[int], id_bits: int = DEFAULT_ID_BITS):
        self.id_bits = id_bits
        self._index: Dict[int, int] = {}
        self._node_ids = []
        for node_id in node_ids:
            self._index[node_id] = len(self._node_ids)
            self._node_ids.append(node_id)

        doubled = 2 * len(self._node_ids)
        if doubled > 2 ** id_bits:
            raise CapacityError(
                f"{len(self._node_ids)} unitigs need {doubled} doubled ids, "
                f"which exceeds the {id_bits}-bit id space"
            )
        logger.debug(f"Doubled {len(self._node_ids)} unitigs into {doubled} ids")

    @staticmethod
    def mirror(doubled_id: int) -> int:
        """Reverse-complement partner of a doubled id."""
        return doubled_id ^ 1

    @staticmethod
    def is_forward(doubled_id: int) -> bool:
        return doubled_id & 1 == 0

    def forward(self, node_id: int) -> int:
        """Doubled id of the unitig read forwards (KeyError if unknown)."""
        return 2 * self._index[node_id]

    def reverse(self, node_id: int) -> int:
        """Doubled id of the unitig read as reverse complement (KeyError if unknown)."""
        return 2 * self._index[node_id] + 1

    def doubled_pair(self, node_id: int) -> Tuple[int, int]:
        """(forward, reverse) ids of a unitig."""
        forward = self.forward(node_id)
        return forward, forward + 1

    def resolve(self, node_id: int, strand: Strand) -> int:
        """'+' selects the forward id, '-' the reverse id."""
        if strand is Strand.PLUS:
            return self.forward(node_id)
        return self.reverse(node_id)

    def node_of(self, doubled_id: int) -> Tuple[int, Strand]:
        """Unitig id and strand behind a doubled id."""
        if not 0 <= doubled_id < self.node_count:
            raise KeyError(doubled_id)
        node_id = self._node_ids[doubled_id >> 1]
        strand = Strand.PLUS if self.is_forward(doubled_id) else Strand.MINUS
        return node_id, strand

    @property
    def node_count(self) -> int:
        """Number of doubled ids."""
        return 2 * len(self._node_ids)

    def doubled_ids(self) -> Iterator[int]:
        return iter(range(self.node_count))

    def __contains__(self, node_id: int) -> bool:
        return node_id in self._index

    def __len__(self) -> int:
        return len(self._node_ids)


__all__ = ['NodeDoubler', 'DEFAULT_ID_BITS']

# ArcWeaver v0.1.0
# Any usage is subject to this software's license.
