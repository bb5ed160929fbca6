"""Text report of benchmark statistics rendered with Jinja2.

The report lists, for every forest size and every strategy, the sample
count, min, max, mean, standard deviation, success ratio and the time
per shot when it was recorded.
"""

import logging
from typing import Any, Sequence

from jinja2 import DictLoader, Environment, StrictUndefined

from monkeyhunt.benchmark.runner import BenchmarkResult
from monkeyhunt.benchmark.statistics import ResultStatistics

log = logging.getLogger(__name__)

_STATISTICS_TEMPLATE = """\
Results statistics for {{ name }} ({{ stats.n_samples }} samples):
	- Min={{ stats.min | na }}, Max={{ stats.max | na }}
	- Avg={{ stats.mean | na("%.5f") }}, Std={{ stats.std | na("%.5f") }}
	- Success ratio={{ "%.2f" | format(100 * stats.success_ratio) }}%
{% if stats.elapsed_mean is not none %}
	- Time per shot: avg={{ stats.elapsed_mean | micros }}, min={{ stats.elapsed_min | micros }}, max={{ stats.elapsed_max | micros }}
{% endif %}
"""

_BENCHMARK_TEMPLATE = """\
******************************************
    BENCHMARK WITH {{ result.n_trees }} TREES
******************************************
Number of instances: {{ result.n_instances }}
Number of trials   : {{ result.n_trials }}
Elapsed            : {{ "%.1f" | format(result.elapsed_seconds) }}s
{% for name, stats in result.statistics.items() %}
{% include "statistics.txt" %}
{% if result.bind_failures.get(name) %}
	- Forests without a plan: {{ result.bind_failures[name] }}/{{ result.n_instances }}
{% endif %}
{% endfor %}
"""

_REPORT_TEMPLATE = """\
{% if experiment_id %}
Experiment: {{ experiment_id }}
{% endif %}
{% for result in results %}
{% include "benchmark.txt" %}
{% endfor %}
{% if reproduction %}
To reproduce:
  {{ reproduction.checkout_cmd }}
  {{ reproduction.run_cmd }}
{% if reproduction.dirty_warning %}
{{ reproduction.dirty_warning }}
{% endif %}
{% endif %}
"""


def _na(value: Any, fmt: str = "%s") -> str:
    return "n/a" if value is None else fmt % value


def _micros(seconds: float | None) -> str:
    return "n/a" if seconds is None else f"{seconds * 1e6:.1f}us"


def _create_env() -> Environment:
    env = Environment(
        loader=DictLoader(
            {
                "statistics.txt": _STATISTICS_TEMPLATE,
                "benchmark.txt": _BENCHMARK_TEMPLATE,
                "report.txt": _REPORT_TEMPLATE,
            }
        ),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=False,
        keep_trailing_newline=True,
    )
    env.filters["na"] = _na
    env.filters["micros"] = _micros
    return env


_ENV = _create_env()


def format_statistics(name: str, stats: ResultStatistics) -> str:
    """Render the statistics block of one strategy."""
    return _ENV.get_template("statistics.txt").render(name=name, stats=stats)


def format_report(
    results: Sequence[BenchmarkResult],
    experiment_id: str | None = None,
    reproduction: dict[str, Any] | None = None,
) -> str:
    """Render the full text report of a run."""
    return _ENV.get_template("report.txt").render(
        results=list(results),
        experiment_id=experiment_id,
        reproduction=reproduction,
    )
