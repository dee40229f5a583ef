#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ArcWeaver v0.1.0

Pytest configuration and shared fixtures.

Author: ArcWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import io
import pytest
from pathlib import Path
import tempfile
import shutil


@pytest.fixture
def temp_output_dir():
    """Create temporary output directory for tests."""
    temp_dir = tempfile.mkdtemp(prefix="arcweaver_test_")
    yield Path(temp_dir)
    # Cleanup after test
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def two_unitigs():
    """Two 4-base unitigs joined by one (+,+) adjacency, listed from both sides (k = 4)."""
    return (
        ">0 LN:i:4 KC:i:3 km:f:3.0 L:+:1:+\n"
        "ACGT\n"
        ">1 LN:i:4 KC:i:5 km:f:5.0 L:-:0:-\n"
        "CGTA\n"
    )


@pytest.fixture
def complex_unitigs():
    """Small BCALM2 graph with k = 14, every adjacency listed from both sides."""
    return (
        ">0 LN:i:14 KC:i:21 km:f:21.0   L:-:2:+  L:+:2:+\n"
        "ATCGATCGATCGAT\n"
        ">1 LN:i:14 KC:i:20 km:f:20.0   L:-:2:-  L:+:2:-\n"
        "CGATCGATCGATCG\n"
        ">2 LN:i:14 KC:i:43 km:f:43.0   L:+:1:+ L:+:1:- L:+:3:+  L:-:0:+ L:-:0:-\n"
        "TCGATCGATCGATC\n"
        ">3 LN:i:16 KC:i:3 km:f:1.0   L:-:2:-\n"
        "CGATCGATCGATCAGT"
    )


@pytest.fixture
def complex_edge_list():
    """Expected edge list for complex_unitigs."""
    return (
        "8\n"
        "1 4 21 5 0 TCGATCGATCGAT\n"
        "5 0 21 1 4 ATCGATCGATCGA\n"
        "0 4 21 5 1 TCGATCGATCGAT\n"
        "5 1 21 0 4 ATCGATCGATCGA\n"
        "3 5 20 4 2 GATCGATCGATCG\n"
        "4 2 20 3 5 CGATCGATCGATC\n"
        "2 5 20 4 3 GATCGATCGATCG\n"
        "4 3 20 2 5 CGATCGATCGATC\n"
        "4 6 43 7 5 CGATCGATCGATC\n"
        "7 5 43 4 6 GATCGATCGATCG\n"
    )


@pytest.fixture
def hairpin_unitig():
    """Unitig whose end folds back onto its own reverse complement (k = 5)."""
    return ">0 LN:i:6 KC:i:6 km:f:3.0 L:+:0:-\nTTACGT\n"


@pytest.fixture
def parse_text():
    """Parse BCALM2 text into a NodeCentricGraph."""
    from arcweaver.io.bcalm2_parser import parse_bcalm2

    def _parse(text):
        return parse_bcalm2(io.StringIO(text))

    return _parse

# ArcWeaver v0.1.0
# Any usage is subject to this software's license.
