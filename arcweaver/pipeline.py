"""
ArcWeaver conversion pipeline.

Runs the stages in order on a fully loaded graph:
- Parse: BCALM2 records into a node table and normalized adjacencies
- Double: assign forward/reverse ids to every unitig
- Build: emit arcs and mirror arcs, collapsing self-complemental ones
- Write: node count line plus the arc table

Each stage sees the complete output of the previous one; nothing is streamed.
"""

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional, TextIO, Union
import logging
import sys
import time

from .graph.arc_builder import ArcBuilder
from .graph.data_structures import ArcCentricGraph, NodeCentricGraph
from .graph.doubler import DEFAULT_ID_BITS, NodeDoubler
from .graph.weights import WeightMode, WeightTracker
from .io.bcalm2_parser import parse_bcalm2
from .io.edge_list_writer import write_edge_list
from .io.file_utils import is_gzipped, open_file
from .utils.memory import log_peak_memory

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """
    Summary of a conversion run.

    Attributes:
        unitigs: Parsed node-centric records
        doubled_nodes: Node count written to the output (2 * unitigs)
        edges: Normalized node-centric adjacencies
        arcs: Arc lines written
        self_complemental_arcs: Arcs collapsed onto their own mirror
        parallel_groups: Endpoint pairs carrying more than one arc
        elapsed_seconds: Wall time of the run
        peak_memory_mb: Peak resident memory, if available
    """
    unitigs: int
    doubled_nodes: int
    edges: int
    arcs: int
    self_complemental_arcs: int
    parallel_groups: int
    elapsed_seconds: float = 0.0
    peak_memory_mb: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def transform(graph: NodeCentricGraph, k: int,
              weight_mode: Union[str, WeightMode] = WeightMode.ABUNDANCE,
              check_overlaps: bool = False,
              id_bits: int = DEFAULT_ID_BITS):
    """
    Double a parsed graph and build its arcs.

    Returns:
        (ArcCentricGraph, WeightTracker)
    """
    logger.info("Doubling unitigs")
    doubler = NodeDoubler(graph.nodes, id_bits=id_bits)

    logger.info("Building arcs")
    tracker = WeightTracker(graph.nodes, k, weight_mode)
    builder = ArcBuilder(graph, doubler, k, tracker=tracker, check_overlaps=check_overlaps)
    return builder.build(), tracker


def _read_and_transform(input_handle: TextIO, k: int,
                        weight_mode: Union[str, WeightMode] = WeightMode.ABUNDANCE,
                        check_overlaps: bool = False,
                        id_bits: int = DEFAULT_ID_BITS):
    logger.info("Reading graph")
    graph = parse_bcalm2(input_handle)

    arc_graph, tracker = transform(
        graph, k, weight_mode=weight_mode, check_overlaps=check_overlaps, id_bits=id_bits,
    )
    return graph, arc_graph, tracker


def _finish(graph: NodeCentricGraph, arc_graph: ArcCentricGraph, tracker: WeightTracker,
            written: int, start: float) -> ConversionResult:
    result = _summarize(graph, arc_graph, tracker)
    result.arcs = written
    result.elapsed_seconds = time.time() - start
    result.peak_memory_mb = log_peak_memory()
    return result


def node_to_arc_centric(input_handle: TextIO, output_handle: TextIO, k: int,
                        weight_mode: Union[str, WeightMode] = WeightMode.ABUNDANCE,
                        check_overlaps: bool = False,
                        id_bits: int = DEFAULT_ID_BITS) -> ConversionResult:
    """
    Convert a BCALM2 node-centric graph into a doubled arc-centric edge list.

    Nothing is written to output_handle unless the whole graph was built.

    Args:
        input_handle: Text handle with BCALM2 unitigs
        output_handle: Writable text handle for the edge list
        k: K-mer size BCALM2 was run with
        weight_mode: 'abundance' or 'kmer_count'
        check_overlaps: Verify overlaps against target unitigs
        id_bits: Doubled id width

    Returns:
        ConversionResult

    Raises:
        MalformedRecordError, DanglingEdgeError, CapacityError, OSError
    """
    start = time.time()
    graph, arc_graph, tracker = _read_and_transform(
        input_handle, k, weight_mode=weight_mode, check_overlaps=check_overlaps, id_bits=id_bits,
    )

    logger.info("Writing graph...")
    written = write_edge_list(arc_graph, output_handle)
    return _finish(graph, arc_graph, tracker, written, start)


def convert_file(input_path: Union[str, Path], output_path: Optional[Union[str, Path]],
                 config: Dict[str, Any]) -> ConversionResult:
    """
    File-level conversion driven by a configuration dictionary.

    The output file is only created once the arc-centric graph is complete,
    and it is removed again if writing fails part way.

    Args:
        input_path: BCALM2 unitig file (plain or .gz)
        output_path: Edge list destination; None or '-' writes to stdout
        config: Configuration (see arcweaver.config.schema.DEFAULT_CONFIG)

    Returns:
        ConversionResult
    """
    conversion = config['conversion']
    k = conversion['kmer_size']
    if k is None:
        raise ValueError("A k-mer size is required (conversion.kmer_size or -k)")

    input_path = Path(input_path)
    if not input_path.exists():
        raise FileNotFoundError(f"Unitig file not found: {input_path}")

    start = time.time()
    logger.info(f"Loading graph from {input_path} with k = {k}")
    with open_file(input_path, 'r') as input_handle:
        graph, arc_graph, tracker = _read_and_transform(
            input_handle, k,
            weight_mode=conversion['weight'],
            check_overlaps=conversion['check_overlaps'],
            id_bits=conversion['id_bits'],
        )

    logger.info("Writing graph...")
    if output_path is None or str(output_path) == '-':
        written = write_edge_list(arc_graph, sys.stdout)
        return _finish(graph, arc_graph, tracker, written, start)

    output_path = Path(output_path)
    if config['output']['compression'] == 'gzip' and not is_gzipped(output_path):
        output_path = output_path.with_name(output_path.name + '.gz')
    output_path.parent.mkdir(parents=True, exist_ok=True)

    logger.info(f"Writing edge list to {output_path}")
    output_handle = open_file(output_path, 'w')
    try:
        with output_handle:
            written = write_edge_list(arc_graph, output_handle)
    except OSError:
        # Drop the truncated edge list
        output_path.unlink()
        raise

    return _finish(graph, arc_graph, tracker, written, start)


def _summarize(graph: NodeCentricGraph, arc_graph: ArcCentricGraph,
               tracker: WeightTracker) -> ConversionResult:
    return ConversionResult(
        unitigs=graph.node_count,
        doubled_nodes=arc_graph.node_count,
        edges=graph.edge_count,
        arcs=arc_graph.arc_count,
        self_complemental_arcs=arc_graph.self_complemental_count,
        parallel_groups=len(tracker.parallel_groups()),
    )
