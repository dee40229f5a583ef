#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
ArcWeaver v0.1.0

BCALM2 unitig reader.

Parses FASTA records whose headers carry BCALM2 annotations:

    >0 LN:i:14 KC:i:21 km:f:21.0 L:-:2:+ L:+:2:+
    ATCGATCGATCGAT

into a node table and a normalized node-centric edge list. Each adjacency
is usually listed twice (once per unitig, as mirror images); the parser keeps
one copy per biological adjacency, in discovery order.

Sequence lines are joined by Biopython's SimpleFastaParser, which drops
spaces and carriage returns, so 'AC GT' is read as 'ACGT'. The declared LN
is checked against the joined sequence.

Author: ArcWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

# =============================================================================
# SECTION 1: IMPORTS AND DEPENDENCIES
# =============================================================================

import logging
from collections import Counter
from pathlib import Path
from typing import Dict, Iterator, List, Optional, TextIO, Tuple, Union

from Bio.SeqIO.FastaIO import SimpleFastaParser

from ..errors import MalformedRecordError
from ..graph.data_structures import Node, NodeCentricGraph, NodeEdge, Strand
from ..utils.sequence_utils import find_invalid_base
from .file_utils import open_file

logger = logging.getLogger(__name__)


# =============================================================================
# SECTION 2: HEADER PARSING
# =============================================================================

LINK_PREFIX = 'L:'
LENGTH_TAG = 'LN'
KMER_COUNT_TAG = 'KC'
ABUNDANCE_TAG = 'km'


class _LineCounter:
    """
    Line iterator that remembers where each FASTA header sits.

    SimpleFastaParser reads one line past a record before yielding it, so
    header positions are kept as a list indexed by record number.
    """

    def __init__(self, handle: TextIO):
        self._handle = handle
        self.header_lines: List[int] = []

    def __iter__(self) -> Iterator[str]:
        for line_number, line in enumerate(self._handle, start=1):
            if line.startswith('>'):
                self.header_lines.append(line_number)
            yield line


def _parse_int(value: str, field: str, record_id, line_number) -> int:
    try:
        return int(value)
    except ValueError:
        raise MalformedRecordError(
            f"Field {field} is not an integer: {value!r}",
            record_id=record_id, line_number=line_number,
        ) from None


def _parse_float(value: str, field: str, record_id, line_number) -> float:
    try:
        return float(value)
    except ValueError:
        raise MalformedRecordError(
            f"Field {field} is not a number: {value!r}",
            record_id=record_id, line_number=line_number,
        ) from None


def parse_link(token: str, record_id: int, line_number: Optional[int] = None) -> NodeEdge:
    """
    Parse one adjacency annotation.

    Args:
        token: Annotation such as 'L:+:35514:-'
        record_id: Id of the record the annotation belongs to
        line_number: Header line of the record

    Returns:
        NodeEdge starting at record_id

    Raises:
        MalformedRecordError: On a missing field, bad strand marker or bad id

    Example:
        >>> parse_link('L:-:2:+', 0)
        NodeEdge(from_id=0, from_strand=<Strand.MINUS: '-'>, to_id=2, to_strand=<Strand.PLUS: '+'>, line_number=None)
    """
    parts = token.split(':')
    if len(parts) != 4 or not all(parts):
        raise MalformedRecordError(
            f"Adjacency annotation {token!r} must look like L:<+|->:<id>:<+|->",
            record_id=record_id, line_number=line_number,
        )

    _, from_marker, to_id, to_marker = parts
    try:
        from_strand = Strand.parse(from_marker)
        to_strand = Strand.parse(to_marker)
    except ValueError:
        raise MalformedRecordError(
            f"Adjacency annotation {token!r} has a strand marker other than + or -",
            record_id=record_id, line_number=line_number,
        ) from None

    return NodeEdge(
        from_id=record_id,
        from_strand=from_strand,
        to_id=_parse_int(to_id, 'neighbour id', record_id, line_number),
        to_strand=to_strand,
        line_number=line_number,
    )


def parse_header(title: str, line_number: Optional[int] = None) -> Tuple[int, Dict[str, str], List[NodeEdge]]:
    """
    Split a BCALM2 header into id, tags and adjacency annotations.

    Args:
        title: Header text without the leading '>'
        line_number: Line of the header in the input

    Returns:
        (record id, {tag name: value}, [NodeEdge, ...])
    """
    tokens = title.split()
    if not tokens:
        raise MalformedRecordError("Record header is empty", line_number=line_number)

    record_id = _parse_int(tokens[0], 'id', None, line_number)
    if record_id < 0:
        raise MalformedRecordError(
            f"Record id must be non-negative, got {record_id}", line_number=line_number,
        )

    tags: Dict[str, str] = {}
    links: List[NodeEdge] = []
    last_tag = None
    for token in tokens[1:]:
        if token.startswith(LINK_PREFIX):
            links.append(parse_link(token, record_id, line_number))
            last_tag = None
            continue

        parts = token.split(':', 2)
        if len(parts) != 3 or not parts[0]:
            # Space-separated values such as 'ab:Z:2 3 4' continue the previous tag
            if last_tag is None:
                raise MalformedRecordError(
                    f"Header field {token!r} is not a TAG:TYPE:VALUE annotation",
                    record_id=record_id, line_number=line_number,
                )
            tags[last_tag] = f"{tags[last_tag]} {token}"
            continue
        last_tag = parts[0]
        tags[last_tag] = parts[2]

    return record_id, tags, links


# =============================================================================
# SECTION 3: RECORD PARSING
# =============================================================================

def parse_record(title: str, sequence: str, line_number: Optional[int] = None) -> Tuple[Node, List[NodeEdge]]:
    """
    Build a Node and its raw adjacency annotations from one FASTA record.

    Raises:
        MalformedRecordError: On missing tags, alphabet violations or a
            declared length that disagrees with the sequence
    """
    record_id, tags, links = parse_header(title, line_number)

    for required in (LENGTH_TAG, ABUNDANCE_TAG):
        if required not in tags:
            raise MalformedRecordError(
                f"Missing {required} tag", record_id=record_id, line_number=line_number,
            )

    length = _parse_int(tags[LENGTH_TAG], LENGTH_TAG, record_id, line_number)
    abundance = _parse_float(tags[ABUNDANCE_TAG], ABUNDANCE_TAG, record_id, line_number)
    kmer_count = None
    if KMER_COUNT_TAG in tags:
        kmer_count = _parse_int(tags[KMER_COUNT_TAG], KMER_COUNT_TAG, record_id, line_number)

    sequence = sequence.upper()
    if not sequence:
        raise MalformedRecordError(
            "Record has no sequence", record_id=record_id, line_number=line_number,
        )

    invalid = find_invalid_base(sequence)
    if invalid is not None:
        raise MalformedRecordError(
            f"Sequence has non-nucleotide character {sequence[invalid]!r} at position {invalid}",
            record_id=record_id, line_number=line_number,
        )

    if length != len(sequence):
        raise MalformedRecordError(
            f"Declared length {length} != sequence length {len(sequence)}",
            record_id=record_id, line_number=line_number,
        )

    node = Node(
        id=record_id,
        sequence=sequence,
        length=length,
        abundance=abundance,
        kmer_count=kmer_count,
        line_number=line_number,
    )
    return node, links


# =============================================================================
# SECTION 4: GRAPH PARSING
# =============================================================================

def parse_bcalm2(handle: TextIO) -> NodeCentricGraph:
    """
    Parse BCALM2 unitigs from an open text handle.

    Adjacencies listed from both unitigs are matched up as mirror pairs and
    kept once; an annotation listed only once is kept as well. Neighbour ids
    are not checked here.

    Args:
        handle: Text handle positioned at the start of the FASTA data

    Returns:
        NodeCentricGraph with nodes in record order and edges in discovery order

    Raises:
        MalformedRecordError: On any malformed or duplicated record
    """
    graph = NodeCentricGraph()
    # Unmatched mirror images of edges already kept
    pending: Counter = Counter()
    absorbed = 0

    lines = _LineCounter(handle)
    for index, (title, sequence) in enumerate(SimpleFastaParser(lines)):
        line_number = lines.header_lines[index]
        node, links = parse_record(title, sequence, line_number)

        if node.id in graph.nodes:
            raise MalformedRecordError(
                f"Duplicate record id (first seen on line {graph.nodes[node.id].line_number})",
                record_id=node.id, line_number=line_number,
            )
        graph.add_node(node)

        for edge in links:
            if pending[edge.key] > 0:
                pending[edge.key] -= 1
                absorbed += 1
                continue
            graph.add_edge(edge)
            pending[edge.mirror().key] += 1

    logger.info(
        f"Parsed {graph.node_count} unitigs and {graph.edge_count} adjacencies "
        f"({absorbed} mirror annotations merged)"
    )
    return graph


def read_bcalm2(filepath: Union[str, Path]) -> NodeCentricGraph:
    """
    Read a BCALM2 unitig file (plain or gzipped).

    Args:
        filepath: Path to the unitig FASTA file

    Returns:
        NodeCentricGraph
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Unitig file not found: {filepath}")

    logger.info(f"Reading unitigs from {filepath}")
    with open_file(filepath, 'r') as handle:
        return parse_bcalm2(handle)


__all__ = [
    'parse_link',
    'parse_header',
    'parse_record',
    'parse_bcalm2',
    'read_bcalm2',
]

# ArcWeaver v0.1.0
# Any usage is subject to this software's license.
