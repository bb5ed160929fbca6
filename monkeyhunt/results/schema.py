"""Result schema: building, validating and writing result.json files.

Uses a Python validation function (not jsonschema) to check required
fields, types and per-strategy statistics before anything is written.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Sequence

from monkeyhunt.benchmark.runner import BenchmarkResult
from monkeyhunt.config.experiment import ExperimentConfig
from monkeyhunt.config.hashing import full_config_hash, game_config_hash
from monkeyhunt.config.serialization import config_to_dict
from monkeyhunt.reproducibility.git_hash import get_git_hash
from monkeyhunt.results.experiment_id import generate_experiment_id

log = logging.getLogger(__name__)

SCHEMA_VERSION = "1.0"

REQUIRED_TOP_FIELDS = {
    "schema_version",
    "experiment_id",
    "timestamp",
    "description",
    "tags",
    "config",
    "benchmarks",
    "metadata",
}

REQUIRED_BENCHMARK_FIELDS = {"n_trees", "n_instances", "n_trials", "statistics"}

REQUIRED_STATISTICS_FIELDS = {
    "n_samples",
    "n_captures",
    "min",
    "max",
    "mean",
    "std",
    "success_ratio",
}


def build_result(
    config: ExperimentConfig,
    results: Sequence[BenchmarkResult],
    experiment_id: str | None = None,
) -> dict[str, Any]:
    """Assemble the result.json payload of a run.

    Args:
        config: Configuration the run used.
        results: One BenchmarkResult per node count.
        experiment_id: Optional ID; generated from the config if omitted.

    Returns:
        JSON-serializable dict.
    """
    return {
        "schema_version": SCHEMA_VERSION,
        "experiment_id": experiment_id or generate_experiment_id(config),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "description": config.description,
        "tags": list(config.tags),
        "config": config_to_dict(config),
        "benchmarks": [r.to_dict() for r in results],
        "metadata": {
            "seed": config.seed,
            "code_hash": get_git_hash(),
            "config_hash": full_config_hash(config),
            "game_hash": game_config_hash(config),
        },
    }


def validate_result(result: dict[str, Any]) -> list[str]:
    """Validate a result dict against the schema.

    Returns a list of error strings. An empty list means the result is valid.

    Checks:
    - All required top-level fields are present
    - schema_version is a string, tags a list, config a dict
    - timestamp is ISO 8601
    - every benchmark entry carries its sizes and per-strategy statistics
    - success ratios lie in [0, 1]
    """
    errors: list[str] = []

    missing = REQUIRED_TOP_FIELDS - set(result.keys())
    if missing:
        errors.append(f"Missing required top-level fields: {sorted(missing)}")

    if "schema_version" in result and not isinstance(result["schema_version"], str):
        errors.append("schema_version must be a string")
    if "tags" in result and not isinstance(result["tags"], list):
        errors.append("tags must be a list")
    if "config" in result and not isinstance(result["config"], dict):
        errors.append("config must be a dict")

    if "timestamp" in result:
        ts = result["timestamp"]
        if not isinstance(ts, str):
            errors.append("timestamp must be a string")
        else:
            try:
                datetime.fromisoformat(ts)
            except ValueError:
                errors.append("timestamp must be in ISO 8601 format")

    benchmarks = result.get("benchmarks", [])
    if not isinstance(benchmarks, list):
        errors.append("benchmarks must be a list")
        return errors

    for idx, entry in enumerate(benchmarks):
        if not isinstance(entry, dict):
            errors.append(f"benchmarks[{idx}] must be a dict")
            continue
        missing = REQUIRED_BENCHMARK_FIELDS - set(entry.keys())
        if missing:
            errors.append(f"benchmarks[{idx}] missing fields: {sorted(missing)}")
            continue
        for name, stats in entry["statistics"].items():
            missing = REQUIRED_STATISTICS_FIELDS - set(stats.keys())
            if missing:
                errors.append(
                    f"benchmarks[{idx}].statistics.{name} missing fields: "
                    f"{sorted(missing)}"
                )
                continue
            ratio = stats["success_ratio"]
            if not isinstance(ratio, (int, float)) or not 0.0 <= ratio <= 1.0:
                errors.append(
                    f"benchmarks[{idx}].statistics.{name}.success_ratio "
                    f"must be in [0, 1], got {ratio!r}"
                )
            if stats["n_captures"] > stats["n_samples"]:
                errors.append(
                    f"benchmarks[{idx}].statistics.{name}: more captures "
                    f"than samples"
                )

    return errors


def write_result(result: dict[str, Any], results_dir: str | Path = "results") -> Path:
    """Validate and write result.json under results_dir/experiment_id/.

    Raises:
        ValueError: If the result fails validation.
    """
    errors = validate_result(result)
    if errors:
        raise ValueError(f"Invalid result: {'; '.join(errors)}")

    output_dir = Path(results_dir) / result["experiment_id"]
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / "result.json"
    with open(path, "w") as f:
        json.dump(result, f, indent=2)
    log.info("Result written to %s", path)
    return path


def load_result(path: str | Path) -> dict[str, Any]:
    """Read a result.json file."""
    with open(path) as f:
        return json.load(f)
