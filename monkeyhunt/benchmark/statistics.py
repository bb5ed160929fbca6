"""Summary statistics of hunt outcomes.

An outcome is the number of shots a strategy fired before killing the
monkey, or GIVE_UP (-1) when it gave up. Location statistics use the
captures only; the success ratio divides captures by all trials.
"""

from dataclasses import asdict, dataclass
from typing import Any, Sequence

import numpy as np

from monkeyhunt.strategy.base import GIVE_UP


@dataclass(frozen=True, slots=True)
class ResultStatistics:
    """Aggregate of one strategy's outcomes over a benchmark.

    min, max, mean and std are None when nothing was captured; the
    elapsed fields are None when no shot timings were recorded.
    """

    n_samples: int
    n_captures: int
    min: int | None
    max: int | None
    mean: float | None
    std: float | None  # sample standard deviation (ddof=1)
    success_ratio: float
    elapsed_mean: float | None = None  # seconds per shot
    elapsed_min: float | None = None
    elapsed_max: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def compute_statistics(
    outcomes: Sequence[int] | np.ndarray,
    elapsed: Sequence[float] | np.ndarray | None = None,
) -> ResultStatistics:
    """Summarize per-trial outcomes and optional per-shot timings.

    Args:
        outcomes: Shot counts (>= 1) or GIVE_UP, one per trial.
        elapsed: Optional duration in seconds of every shot fired.

    Returns:
        ResultStatistics for the outcomes.

    Raises:
        ValueError: If an outcome is neither positive nor GIVE_UP.
    """
    results = np.asarray(outcomes, dtype=np.int64)
    invalid = results[(results != GIVE_UP) & (results < 1)]
    if invalid.size:
        raise ValueError(f"Invalid outcomes: {invalid.tolist()}")

    captures = results[results != GIVE_UP]
    n_samples = int(results.size)
    n_captures = int(captures.size)

    if n_captures:
        lo, hi = int(captures.min()), int(captures.max())
        mean = float(captures.mean())
        std = float(captures.std(ddof=1)) if n_captures > 1 else 0.0
    else:
        lo = hi = None
        mean = std = None

    times = np.asarray(elapsed if elapsed is not None else [], dtype=np.float64)
    if times.size:
        e_mean, e_min, e_max = (
            float(times.mean()),
            float(times.min()),
            float(times.max()),
        )
    else:
        e_mean = e_min = e_max = None

    return ResultStatistics(
        n_samples=n_samples,
        n_captures=n_captures,
        min=lo,
        max=hi,
        mean=mean,
        std=std,
        success_ratio=n_captures / n_samples if n_samples else 0.0,
        elapsed_mean=e_mean,
        elapsed_min=e_min,
        elapsed_max=e_max,
    )
