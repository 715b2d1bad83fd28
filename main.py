"""
Command-line entry point: encode JSON as TOON and run the format benchmarks.
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from benchmark.comparison import DEFAULT_MODELS, compare_all, compare_dataset
from benchmark.datasets import LLM_TEST_PROMPT, comparison_datasets, get_dataset
from benchmark.report import (
    format_comparison,
    format_format_test,
    format_metrics_table,
    format_summary,
    rule,
)
from llm.format_test import choose_model, run_format_test
from llm.ollama_client import OllamaClient, OllamaUnavailable
from toon import EncodeOptions, ToonError, encode
from toon.options import resolve_delimiter
import config

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging to stderr (stdout carries command output), plus config.LOG_FILE when set."""
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.LOG_FILE:
        handlers.append(logging.FileHandler(config.LOG_FILE))
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, config.LOG_LEVEL, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )


def _token_models() -> tuple:
    return config.TOKENIZER_MODELS or DEFAULT_MODELS


def cmd_encode(args: argparse.Namespace) -> int:
    """Read JSON from a file or stdin and write TOON."""
    try:
        if args.input and args.input != "-":
            text = Path(args.input).read_text(encoding="utf-8")
        else:
            text = sys.stdin.read()
        data = json.loads(text)
    except (OSError, json.JSONDecodeError, RecursionError) as e:
        logger.error(f"Could not read JSON input: {e}")
        return 1

    options = EncodeOptions(
        indent=args.indent,
        delimiter=resolve_delimiter(args.delimiter),
        length_marker=args.length_marker,
        max_depth=args.max_depth,
    )
    try:
        output = encode(data, options)
    except ToonError as e:
        logger.error(f"Encoding failed: {e}")
        return 1
    except RecursionError:
        logger.error("Encoding failed: input nests deeper than Python allows; lower --max-depth")
        return 1

    if args.output:
        Path(args.output).write_text(output + "\n", encoding="utf-8")
        logger.info(f"Wrote TOON to {args.output}")
    else:
        print(output)
    return 0


def cmd_demo(args: argparse.Namespace) -> int:
    """Show one dataset in every format with its size metrics."""
    models = _token_models()
    dataset = get_dataset("demo")
    comparison = compare_dataset(dataset, models)

    print(rule())
    print("JSON vs TOON Encoding Comparison")
    print(rule())
    print()
    print(format_metrics_table(comparison.results, models))
    print()
    print(f"Best TOON format: {comparison.best_format}")
    if comparison.token_reduction is not None:
        print(f"Token reduction: {comparison.token_reduction}%")
    if comparison.char_reduction is not None:
        print(f"Character reduction: {comparison.char_reduction}%")
    for result in comparison.results:
        print()
        print(f"--- {result.format} ---")
        print(result.content)
    return 0


def cmd_compare(args: argparse.Namespace) -> int:
    """Compare formats across the sample datasets."""
    models = _token_models()
    comparisons = compare_all(
        comparison_datasets(seed=args.seed), models, progress=not args.no_progress
    )
    for comparison in comparisons:
        print(format_comparison(comparison, models, config.SAMPLE_PREVIEW_CHARS))
        print()
    print(format_summary(comparisons))
    return 0


def cmd_llm_test(args: argparse.Namespace) -> int:
    """Time a local model's replies to JSON and TOON prompts."""
    client = OllamaClient(base_url=args.base_url)
    try:
        available = client.list_models()
    except OllamaUnavailable as e:
        logger.error(str(e))
        logger.info("Start the server with `ollama serve` and pull a model, e.g. `ollama pull llama3.1`")
        return 1

    logger.info(f"Available models: {', '.join(available) or 'none'}")
    model = choose_model(available, config.PREFERRED_MODELS, args.model or config.OLLAMA_MODEL)
    if model is None:
        logger.error("No models available. Install one with `ollama pull llama3.1`")
        return 1

    logger.info(f"Checking if model {model} is ready...")
    if not client.is_model_ready(model):
        logger.error(f"Model {model} is not ready")
        return 1

    result = run_format_test(client, model, get_dataset("llm").data, LLM_TEST_PROMPT)
    if result is None:
        logger.error(f"No reply from {model}; test aborted")
        return 1

    print(format_format_test(result, config.RESPONSE_PREVIEW_CHARS))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="toon-bench",
        description="Encode JSON as TOON and compare it with JSON for LLM inputs"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    encode_parser = subparsers.add_parser("encode", help="Convert JSON to TOON")
    encode_parser.add_argument("input", nargs="?", help="JSON file (default: stdin)")
    encode_parser.add_argument("--output", "-o", help="Write TOON to this file instead of stdout")
    encode_parser.add_argument("--indent", type=int, default=config.DEFAULT_INDENT,
                               help=f"Spaces per level (default: {config.DEFAULT_INDENT})")
    encode_parser.add_argument("--delimiter", default=config.DEFAULT_DELIMITER,
                               help="comma, tab, pipe or a single character (default: %(default)s)")
    encode_parser.add_argument("--length-marker", default="",
                               help="Prefix for array lengths, e.g. '#'")
    encode_parser.add_argument("--max-depth", type=int, default=config.DEFAULT_MAX_DEPTH,
                               help=f"Maximum nesting depth (default: {config.DEFAULT_MAX_DEPTH})")
    encode_parser.set_defaults(func=cmd_encode)

    demo_parser = subparsers.add_parser("demo", help="Show the demo dataset in every format")
    demo_parser.set_defaults(func=cmd_demo)

    compare_parser = subparsers.add_parser("compare", help="Compare formats across sample datasets")
    compare_parser.add_argument("--seed", type=int, default=config.DATASET_SEED,
                                help="Seed for the generated order dataset")
    compare_parser.add_argument("--no-progress", action="store_true", help="Hide the progress bar")
    compare_parser.set_defaults(func=cmd_compare)

    llm_parser = subparsers.add_parser("llm-test", help="Time a local Ollama model on JSON vs TOON")
    llm_parser.add_argument("--model", help="Model to test (default: first preferred model installed)")
    llm_parser.add_argument("--base-url", default=config.OLLAMA_BASE_URL,
                            help="Ollama server URL (default: %(default)s)")
    llm_parser.set_defaults(func=cmd_llm_test)

    return parser


def main(argv: Optional[List[str]] = None):
    """Main execution function."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        exit_code = args.func(args)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        exit_code = 130
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
