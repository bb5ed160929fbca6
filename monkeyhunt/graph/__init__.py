"""Random forest generation: graphic degree sequences, SIS sampling and the Forest."""

from monkeyhunt.graph.degree_sequence import (
    generate_degree_sequence,
    generate_graphic_sequence,
    graphic_sequence_test,
)
from monkeyhunt.graph.errors import (
    DegreeSequenceError,
    GraphGenerationError,
    PrecisionLossError,
)
from monkeyhunt.graph.forest import Forest, generate_forest
from monkeyhunt.graph.indexer import SymmetricPairIndexer
from monkeyhunt.graph.sis import CURGraphBuilder, generate_cur_graph
from monkeyhunt.graph.validation import count_components, validate_forest

__all__ = [
    "CURGraphBuilder",
    "DegreeSequenceError",
    "Forest",
    "GraphGenerationError",
    "PrecisionLossError",
    "SymmetricPairIndexer",
    "count_components",
    "generate_cur_graph",
    "generate_degree_sequence",
    "generate_forest",
    "generate_graphic_sequence",
    "graphic_sequence_test",
    "validate_forest",
]
