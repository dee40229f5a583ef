#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ArcWeaver v0.1.0

Tests for the BCALM2 unitig reader.

Author: ArcWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import gzip
import pytest

from arcweaver.errors import MalformedRecordError
from arcweaver.graph.data_structures import NodeEdge, Strand
from arcweaver.io.bcalm2_parser import parse_header, parse_link, read_bcalm2


class TestHeaderParsing:
    """Test header and annotation parsing."""

    def test_link_parsing(self):
        """Test that a link token becomes a strand-annotated edge."""
        edge = parse_link('L:-:35514:+', 7)

        assert edge.from_id == 7
        assert edge.from_strand is Strand.MINUS
        assert edge.to_id == 35514
        assert edge.to_strand is Strand.PLUS

    def test_header_tags_and_links(self):
        """Test that tags are collected and unknown tags are kept as strings."""
        record_id, tags, links = parse_header("3 LN:i:31 km:f:2.5 ab:Z:1 2 L:+:16:+ L:-:11:+")

        assert record_id == 3
        assert tags['LN'] == '31'
        assert tags['km'] == '2.5'
        assert tags['ab'] == '1 2'
        assert len(links) == 2
        assert links[1].key == (3, Strand.MINUS, 11, Strand.PLUS)

    @pytest.mark.parametrize("token", ['L:+:1', 'L:+::+', 'L:+:1:+:0'])
    def test_link_missing_field(self, token):
        """Test that incomplete annotations are rejected."""
        with pytest.raises(MalformedRecordError):
            parse_link(token, 0)

    def test_link_bad_strand(self):
        """Test that strand markers other than +/- are rejected."""
        with pytest.raises(MalformedRecordError, match="strand marker"):
            parse_link('L:x:1:+', 0)

    def test_link_bad_neighbour(self):
        """Test that non-integer neighbour ids are rejected."""
        with pytest.raises(MalformedRecordError):
            parse_link('L:+:one:+', 0)

    def test_stray_token(self):
        """Test that a bare token following a link is rejected."""
        with pytest.raises(MalformedRecordError, match="TAG:TYPE:VALUE"):
            parse_header("0 LN:i:4 L:+:1:+ junk")

    def test_non_integer_id(self):
        """Test that a non-numeric record id is rejected."""
        with pytest.raises(MalformedRecordError):
            parse_header("utg1 LN:i:4 km:f:1.0")


class TestRecordParsing:
    """Test node table construction."""

    def test_nodes_in_record_order(self, parse_text, complex_unitigs):
        """Test that nodes keep their header values and record order."""
        graph = parse_text(complex_unitigs)

        assert list(graph.nodes) == [0, 1, 2, 3]
        node = graph.nodes[3]
        assert node.sequence == "CGATCGATCGATCAGT"
        assert node.length == 16
        assert node.abundance == 1.0
        assert node.kmer_count == 3
        assert node.line_number == 7

    def test_lowercase_and_multiline_sequence(self, parse_text):
        """Test that sequences are joined across lines and uppercased."""
        graph = parse_text(">0 LN:i:8 km:f:2.0\nacgt\nTTGA\n")

        assert graph.nodes[0].sequence == "ACGTTTGA"

    def test_spaces_in_sequence_dropped(self, parse_text):
        """Test that spaces inside sequence lines are removed before checks."""
        graph = parse_text(">0 LN:i:4 km:f:2.0\nAC GT\n")

        assert graph.nodes[0].sequence == "ACGT"

    def test_kmer_count_optional(self, parse_text):
        """Test that records without KC:i: still parse."""
        graph = parse_text(">0 LN:i:4 km:f:2.0\nACGT\n")

        assert graph.nodes[0].kmer_count is None

    def test_alphabet_violation(self, parse_text):
        """Test that non-nucleotide characters are rejected."""
        with pytest.raises(MalformedRecordError, match="non-nucleotide"):
            parse_text(">0 LN:i:4 km:f:2.0\nACNT\n")

    def test_length_mismatch(self, parse_text):
        """Test that LN must match the sequence length."""
        with pytest.raises(MalformedRecordError, match="Declared length"):
            parse_text(">0 LN:i:5 km:f:2.0\nACGT\n")

    def test_missing_abundance(self, parse_text):
        """Test that a record without km:f: is rejected."""
        with pytest.raises(MalformedRecordError, match="km"):
            parse_text(">0 LN:i:4\nACGT\n")

    def test_duplicate_id_reports_line(self, parse_text):
        """Test that duplicated ids fail with the offending line number."""
        text = ">0 LN:i:4 km:f:2.0\nACGT\n>0 LN:i:4 km:f:2.0\nCGTA\n"

        with pytest.raises(MalformedRecordError) as excinfo:
            parse_text(text)

        assert excinfo.value.record_id == 0
        assert excinfo.value.line_number == 3
        assert "line 3" in str(excinfo.value)

    def test_empty_input(self, parse_text):
        """Test that empty input yields an empty graph."""
        graph = parse_text("")

        assert graph.node_count == 0
        assert graph.edge_count == 0


class TestEdgeNormalization:
    """Test merging of adjacencies listed from both unitigs."""

    def test_both_directions_merged(self, parse_text, complex_unitigs):
        """Test that each adjacency is kept once, in discovery order."""
        graph = parse_text(complex_unitigs)

        assert [edge.key for edge in graph.edges] == [
            (0, Strand.MINUS, 2, Strand.PLUS),
            (0, Strand.PLUS, 2, Strand.PLUS),
            (1, Strand.MINUS, 2, Strand.MINUS),
            (1, Strand.PLUS, 2, Strand.MINUS),
            (2, Strand.PLUS, 3, Strand.PLUS),
        ]

    def test_single_direction_kept(self, parse_text):
        """Test that an adjacency listed from one side only survives."""
        text = ">0 LN:i:4 km:f:3.0 L:+:1:+\nACGT\n>1 LN:i:4 km:f:5.0\nCGTA\n"

        graph = parse_text(text)

        assert graph.edges == [NodeEdge(0, Strand.PLUS, 1, Strand.PLUS)]

    def test_repeated_annotations_stay_parallel(self, parse_text):
        """Test that a repeated adjacency is not merged with itself."""
        text = (
            ">0 LN:i:4 km:f:3.0 L:+:1:+ L:+:1:+\nACGT\n"
            ">1 LN:i:4 km:f:5.0 L:-:0:- L:-:0:-\nCGTA\n"
        )

        graph = parse_text(text)

        assert graph.edge_count == 2

    def test_hairpin_listed_once(self, parse_text, hairpin_unitig):
        """Test that a self-mirror adjacency yields one edge."""
        graph = parse_text(hairpin_unitig)

        assert graph.edge_count == 1
        assert graph.edges[0].is_self_mirror

    def test_dangling_neighbour_not_checked(self, parse_text):
        """Test that unknown neighbours are left for the arc builder."""
        graph = parse_text(">0 LN:i:4 km:f:1.0 L:+:9:+\nACGT\n")

        assert graph.edges[0].to_id == 9


class TestFileReading:
    """Test reading unitig files from disk."""

    def test_read_gzipped(self, temp_output_dir, complex_unitigs):
        """Test that gzipped unitig files are decompressed."""
        path = temp_output_dir / "unitigs.fa.gz"
        with gzip.open(path, 'wt') as handle:
            handle.write(complex_unitigs)

        graph = read_bcalm2(path)

        assert graph.node_count == 4
        assert graph.edge_count == 5

    def test_missing_file(self, temp_output_dir):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            read_bcalm2(temp_output_dir / "absent.fa")

# ArcWeaver v0.1.0
# Any usage is subject to this software's license.
