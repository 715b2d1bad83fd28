"""
Measure JSON and TOON renderings of the same data side by side.
"""
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from tqdm import tqdm

from benchmark.datasets import Dataset
from benchmark.tokens import count_tokens
from toon import DELIMITERS, encode

logger = logging.getLogger(__name__)

TokenCounter = Callable[[str, str], int]

DEFAULT_MODELS = ("gpt-4o", "gpt-4", "cl100k_base")

BASELINE_FORMAT = "JSON (Pretty)"
TOON_PREFIX = "TOON"


@dataclass
class FormatMetrics:
    """Size of one rendering."""
    bytes: int
    characters: int
    lines: int
    tokens: Dict[str, int] = field(default_factory=dict)


@dataclass
class FormatResult:
    """One rendering of a dataset and its metrics."""
    format: str
    content: str
    metrics: FormatMetrics

    def primary_tokens(self, models: Sequence[str] = DEFAULT_MODELS) -> Optional[int]:
        """Token count for the first model in `models` that was counted."""
        for model in models:
            if model in self.metrics.tokens:
                return self.metrics.tokens[model]
        return None


@dataclass
class DatasetComparison:
    """All renderings of one dataset, with the baseline and the best TOON rendering."""
    dataset: str
    results: List[FormatResult]
    baseline: FormatResult
    best: FormatResult
    token_reduction: Optional[float]
    char_reduction: Optional[float]

    @property
    def best_format(self) -> str:
        return self.best.format


def percent_reduction(before: Optional[int], after: Optional[int]) -> Optional[float]:
    """Percentage saved going from `before` to `after`, to one decimal place."""
    if not before or after is None:
        return None
    return round((before - after) / before * 100, 1)


def render_formats(data: Any, indent: int = 2) -> List[Tuple[str, str]]:
    """
    Render `data` in every compared format.

    Returns:
        (format name, content) pairs in a fixed order
    """
    return [
        ("JSON (Compact)", json.dumps(data, separators=(",", ":"), ensure_ascii=False)),
        (BASELINE_FORMAT, json.dumps(data, indent=indent, ensure_ascii=False)),
        ("TOON (Comma)", encode(data, indent=indent, delimiter=DELIMITERS["comma"])),
        ("TOON (Tab)", encode(data, indent=indent, delimiter=DELIMITERS["tab"])),
        ("TOON (Pipe)", encode(data, indent=indent, delimiter=DELIMITERS["pipe"])),
    ]


def analyze_format(
    name: str,
    content: str,
    models: Sequence[str] = DEFAULT_MODELS,
    counter: TokenCounter = count_tokens
) -> FormatResult:
    """
    Calculate size metrics for one rendering.

    Args:
        name: Format name, e.g. 'TOON (Tab)'
        content: The rendered text
        models: Models to count tokens for
        counter: Token counting function (text, model) -> int

    Returns:
        FormatResult for the rendering
    """
    tokens = {model: counter(content, model) for model in models}
    metrics = FormatMetrics(
        bytes=len(content.encode("utf-8")),
        characters=len(content),
        lines=len(content.split("\n")),
        tokens=tokens,
    )
    return FormatResult(format=name, content=content, metrics=metrics)


def compare_dataset(
    dataset: Dataset,
    models: Sequence[str] = DEFAULT_MODELS,
    counter: TokenCounter = count_tokens
) -> DatasetComparison:
    """
    Render a dataset in every format and pick the best TOON rendering.

    The best TOON rendering has the fewest tokens for the first model in
    `models`; ties keep the earlier format.
    """
    results = [
        analyze_format(name, content, models, counter)
        for name, content in render_formats(dataset.data)
    ]

    baseline = next(r for r in results if r.format == BASELINE_FORMAT)
    toon_results = [r for r in results if r.format.startswith(TOON_PREFIX)]
    best = min(toon_results, key=lambda r: r.primary_tokens(models) or 0)

    comparison = DatasetComparison(
        dataset=dataset.name,
        results=results,
        baseline=baseline,
        best=best,
        token_reduction=percent_reduction(
            baseline.primary_tokens(models), best.primary_tokens(models)
        ),
        char_reduction=percent_reduction(
            baseline.metrics.characters, best.metrics.characters
        ),
    )
    logger.info(
        f"{dataset.name}: best format {best.format}, "
        f"token reduction {comparison.token_reduction}%"
    )
    return comparison


def compare_all(
    datasets: Iterable[Dataset],
    models: Sequence[str] = DEFAULT_MODELS,
    counter: TokenCounter = count_tokens,
    progress: bool = True
) -> List[DatasetComparison]:
    """Compare every dataset, showing a progress bar unless `progress` is False."""
    datasets = list(datasets)
    comparisons = []
    for dataset in tqdm(datasets, desc="Comparing formats", unit="datasets", disable=not progress):
        comparisons.append(compare_dataset(dataset, models, counter))
    return comparisons
