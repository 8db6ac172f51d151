"""End-to-end run: read, build, prune, filter, export."""

from __future__ import annotations

import argparse
import logging
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import pandas as pd

from cograph.coefficient_filter import FilterResult, filter_by_coefficient
from cograph.errors import CographError, IngestionError
from cograph.export import export_dot
from cograph.graph_builder import build_graph, records_from_frame
from cograph.io import Source, read_transactions
from cograph.preprocess import normalize_file
from cograph.pruning import IterativePruner, PruneResult
from cograph.settings import PipelineConfig, load_settings

log = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    prune: PruneResult
    filtered: FilterResult

    @property
    def graph(self):
        return self.filtered.graph


def run_frame(df: pd.DataFrame, config: PipelineConfig) -> PipelineResult:
    """Run the graph stages on an already loaded transaction table."""

    graph = build_graph(records_from_frame(df))
    pruned = IterativePruner(config.min_component_size).run(graph)
    filtered = filter_by_coefficient(
        pruned.graph,
        config.coefficient_threshold,
        min_component_size=config.min_component_size,
    )
    return PipelineResult(prune=pruned, filtered=filtered)


def run_pipeline(
    source: Source,
    config: Optional[PipelineConfig] = None,
    *,
    output_path: Optional[str | Path] = None,
) -> PipelineResult:
    """Read ``source``, run every stage and optionally write the DOT file.

    Nothing is written unless every stage succeeds.
    """

    config = config or load_settings()
    result = run_frame(read_transactions(source), config)
    if output_path is not None:
        export_dot(result.graph, output_path)
        log.info("Wrote %s", output_path)
    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cograph",
        description="Find dense product clusters in a co-purchase graph",
    )
    parser.add_argument("input", nargs="?", help="normalized transaction CSV")
    parser.add_argument("-o", "--output", help="destination DOT file")
    parser.add_argument("-t", "--threshold", type=float, help="clustering coefficient cut-off")
    parser.add_argument("-m", "--min-component-size", type=int, help="convergence target")
    parser.add_argument("--raw", action="store_true", help="input is a raw export to normalize first")
    parser.add_argument("--settings", help="YAML settings file")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        config = load_settings(args.settings).override(
            input_path=args.input,
            output_path=args.output,
            coefficient_threshold=args.threshold,
            min_component_size=args.min_component_size,
        )
        if args.raw:
            with tempfile.TemporaryDirectory() as tmp:
                cleaned = Path(tmp) / "cleaned.csv"
                try:
                    normalize_file(config.input_path, cleaned)
                except (OSError, KeyError, pd.errors.ParserError) as exc:
                    raise IngestionError(f"Cannot normalize {config.input_path}: {exc}") from exc
                result = run_pipeline(cleaned, config, output_path=config.output_path)
        else:
            result = run_pipeline(config.input_path, config, output_path=config.output_path)
    except (CographError, ValueError, TypeError, OSError) as exc:
        log.error("Pipeline failed: %s", exc)
        return 1

    log.info(
        "Done: %d node(s), %d edge(s), %d ranked component(s)",
        result.graph.number_of_nodes(),
        result.graph.number_of_edges(),
        len(result.filtered.ranking),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
