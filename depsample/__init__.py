__version__ = "0.1.0"

from depsample.core.data_structures import Token, Arc, GraphNode, GraphEdge, ParseGraph
from depsample.parsers import (
    ParserAlgorithm,
    parse_projective,
    parse_greedy_arborescence,
    parse_arc_standard,
)
from depsample.validation import ValidationHarness, ValidationReport, run_validation
