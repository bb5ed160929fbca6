"""Reproduction block for benchmark reports.

Builds copy-pasteable checkout and run commands from the metadata and
configuration stored in result.json. The git hash is the one captured
when the benchmark ran, not when the report is printed.
"""

from typing import Any


def build_reproduction_block(result: dict[str, Any]) -> dict[str, Any]:
    """Build a reproduction block from result data.

    Args:
        result: result.json dict with ``metadata`` and ``config`` keys.

    Returns:
        Dict with keys:
        - ``checkout_cmd``: git checkout command for the code version
        - ``run_cmd``: CLI command with the seed and sizes of the run
        - ``seed``: The random seed used
        - ``is_dirty``: True if the working tree had uncommitted changes
        - ``dirty_warning``: Warning string if dirty, else None
    """
    metadata = result.get("metadata", {})
    config = result.get("config", {})

    code_hash = metadata.get("code_hash", "unknown")
    is_dirty = code_hash.endswith("-dirty")
    checkout_cmd = f"git checkout {code_hash.removesuffix('-dirty')}"

    seed = config.get("seed", metadata.get("seed", 42))
    run_parts = ["python run_benchmark.py", f"--seed {seed}"]

    if config.get("sweep"):
        run_parts.append("--sweep")
    else:
        graph = config.get("graph", {})
        benchmark = config.get("benchmark", {})
        if graph.get("n"):
            run_parts.append(f"--n {graph['n']}")
        if benchmark.get("n_instances"):
            run_parts.append(f"--instances {benchmark['n_instances']}")
        if benchmark.get("n_trials"):
            run_parts.append(f"--trials {benchmark['n_trials']}")

    dirty_warning = (
        "WARNING: The working tree had uncommitted changes when this "
        "benchmark was run. Results may not be exactly reproducible."
    ) if is_dirty else None

    return {
        "checkout_cmd": checkout_cmd,
        "run_cmd": " ".join(run_parts),
        "seed": seed,
        "is_dirty": is_dirty,
        "dirty_warning": dirty_warning,
    }
