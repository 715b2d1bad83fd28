"""
Plain-text tables and summaries for comparison results.
"""
from typing import Iterable, List, Optional, Sequence

from benchmark.comparison import DatasetComparison, FormatResult
from llm.format_test import FormatTestResult

RULE_WIDTH = 80
NAME_WIDTH = 20
COLUMN_WIDTH = 12


def rule(char: str = "=") -> str:
    return char * RULE_WIDTH


def truncate(text: str, limit: int) -> str:
    """Cut `text` to `limit` characters, marking the cut with '...'."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def _cell(value: Optional[object]) -> str:
    return ("N/A" if value is None else str(value)).rjust(COLUMN_WIDTH)


def format_metrics_table(results: Sequence[FormatResult], models: Sequence[str]) -> str:
    """
    Build the per-format metrics table.

    Args:
        results: Renderings to list, in display order
        models: Token models in preference order; the first counted one is shown

    Returns:
        Header, separator and one row per rendering
    """
    header = (
        "Format".ljust(NAME_WIDTH)
        + "Bytes".rjust(COLUMN_WIDTH)
        + "Chars".rjust(COLUMN_WIDTH)
        + "Lines".rjust(COLUMN_WIDTH)
        + "Tokens".rjust(COLUMN_WIDTH)
    )
    lines = [header, rule("-")]
    for result in results:
        lines.append(
            result.format.ljust(NAME_WIDTH)
            + _cell(result.metrics.bytes)
            + _cell(result.metrics.characters)
            + _cell(result.metrics.lines)
            + _cell(result.primary_tokens(models))
        )
    return "\n".join(lines)


def format_comparison(
    comparison: DatasetComparison,
    models: Sequence[str],
    preview_chars: int = 400
) -> str:
    """Render one dataset comparison: table, best format and sample outputs."""
    lines = [
        rule(),
        f"Dataset: {comparison.dataset}",
        rule(),
        "",
        format_metrics_table(comparison.results, models),
        "",
        f"Best TOON format: {comparison.best_format}",
    ]
    if comparison.token_reduction is not None:
        lines.append(
            f"Token reduction: {comparison.token_reduction}% "
            f"({comparison.baseline.primary_tokens(models)} -> "
            f"{comparison.best.primary_tokens(models)} tokens)"
        )
    if comparison.char_reduction is not None:
        lines.append(f"Character reduction: {comparison.char_reduction}%")
    lines.extend([
        "",
        f"--- {comparison.baseline.format} ---",
        truncate(comparison.baseline.content, preview_chars),
        "",
        f"--- {comparison.best.format} ---",
        truncate(comparison.best.content, preview_chars),
    ])
    return "\n".join(lines)


def format_summary(comparisons: Iterable[DatasetComparison]) -> str:
    lines: List[str] = [rule(), "SUMMARY", rule()]
    for comparison in comparisons:
        reduction = (
            "n/a" if comparison.token_reduction is None
            else f"{comparison.token_reduction}%"
        )
        lines.append(comparison.dataset)
        lines.append(f"  Best format: {comparison.best_format} (token reduction {reduction})")
    return "\n".join(lines)


def format_format_test(result: FormatTestResult, preview_chars: int = 300) -> str:
    """Render the JSON vs TOON response-time test for one model."""
    lines = [rule(), f"Model: {result.model}", rule()]
    for label, size, reply in (
        ("JSON", result.json_size, result.json_reply),
        ("TOON", result.toon_size, result.toon_reply),
    ):
        eval_count = "N/A" if reply.eval_count is None else reply.eval_count
        lines.extend([
            "",
            f"{label} data size: {size.characters} chars, {size.bytes} bytes",
            f"Response time: {reply.elapsed_ms:.0f}ms",
            f"Response length: {reply.content_length} chars",
            f"Tokens generated: {eval_count}",
            "Response:",
            truncate(reply.text, preview_chars),
        ])

    lines.extend([
        "",
        rule(),
        "INPUT SIZE (data only)",
        rule("-"),
        f"JSON: {result.json_size.characters} chars, {result.json_size.bytes} bytes",
        f"TOON: {result.toon_size.characters} chars, {result.toon_size.bytes} bytes",
        f"Characters: {result.char_reduction}% smaller",
        f"Bytes:      {result.byte_reduction}% smaller",
        "TOON is smaller" if result.toon_is_smaller else "JSON is smaller",
        "",
        "FULL PROMPT SIZE",
        rule("-"),
        f"JSON prompt: {result.json_reply.prompt_length} chars",
        f"TOON prompt: {result.toon_reply.prompt_length} chars",
        f"Reduction:   {result.prompt_reduction}%",
        "",
        "RESPONSE TIME",
        rule("-"),
        f"JSON: {result.json_reply.elapsed_ms:.0f}ms",
        f"TOON: {result.toon_reply.elapsed_ms:.0f}ms",
        f"Difference: {result.time_difference}%",
        "TOON is faster" if result.toon_is_faster else "JSON is faster (may vary by run)",
    ])
    return "\n".join(lines)
