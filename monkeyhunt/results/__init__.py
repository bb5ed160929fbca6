"""Result schema, experiment IDs and result.json persistence."""

from monkeyhunt.results.experiment_id import generate_experiment_id
from monkeyhunt.results.schema import (
    SCHEMA_VERSION,
    build_result,
    load_result,
    validate_result,
    write_result,
)

__all__ = [
    "SCHEMA_VERSION",
    "build_result",
    "generate_experiment_id",
    "load_result",
    "validate_result",
    "write_result",
]
