#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
TOPSIS Candidate Ranking — Main Entry Point
===========================================

Usage
-----
    python main.py position.json candidates.csv
    python main.py position.json candidates.csv --export
    python main.py position.json candidates.csv --export --output results/

Files are written under ``<output>/outputs/`` (default: the current
directory): ``reports/`` for the audit report, ``results/`` for rankings
and snapshots, ``logs/`` for the debug log.

``position.json`` holds ``{"name": ..., "attributes": [...]}``; the
candidate file is CSV or TSV with a ``Name`` column followed by one column
per attribute, in attribute order.

Pipeline Phases
---------------
1. Candidate Import  – parse and bounds-check the candidate file
2. Validation        – missing / invalid values, weight sum
3. Ranking           – TOPSIS closeness scores and competition ranks
4. Export            – audit report, rankings CSV, JSON snapshot
"""

import sys
import json
from pathlib import Path


def main():
    """Parse arguments and run one analysis."""
    args = sys.argv[1:]
    if '--help' in args or '-h' in args or len(args) < 2:
        print(__doc__)
        sys.exit(0 if ('--help' in args or '-h' in args) else 2)

    export = '--export' in args
    output_dir = None
    if '--output' in args:
        idx = args.index('--output')
        if idx + 1 >= len(args):
            print("  ERROR: --output requires a directory")
            sys.exit(2)
        output_dir = args[idx + 1]
    position_path, candidates_path = args[0], args[1]

    # Imported lazily so --help stays fast
    from hiring_topsis import (
        Position, RankingPipeline, get_default_config, load_candidates,
    )

    config = get_default_config()
    if output_dir:
        config.paths.base_dir = Path(output_dir)

    try:
        with open(position_path, 'r', encoding='utf-8') as f:
            position = Position.from_dict(json.load(f))

        imported = load_candidates(candidates_path, position, config)
        print(imported.summary())
        if not imported.candidates:
            print("\n  ERROR: no valid candidates to rank")
            sys.exit(1)

        pipeline = RankingPipeline(config, configure_logging=True)
        result = pipeline.run(position, imported.candidates, export=export)
        print_results(result)

    except (OSError, ValueError, KeyError) as e:
        print(f"\n  ERROR: {e}")
        sys.exit(1)


def print_results(result):
    """Print the ranking table and any saved files."""
    print(f"\n{'='*70}")
    print(f"  RANKING: {result.position.name}")
    print(f"{'='*70}")
    print(f"    {'Rank':<6} {'Candidate':<30} {'Score':>8} {'D+':>8} {'D-':>8}")
    print(f"    {'-'*62}")
    for r in result.rankings:
        print(f"    {r.rank:<6} {r.candidate_name:<30} {r.closeness_score:>8.4f} "
              f"{r.distance_to_best:>8.4f} {r.distance_to_worst:>8.4f}")

    if not result.validation.valid:
        print(f"\n  WARNINGS ({len(result.validation.errors)})")
        for err in result.validation.errors:
            print(f"    - {err}")

    if result.saved_files:
        print(f"\n  SAVED FILES")
        for kind, path in result.saved_files.items():
            print(f"    {kind:<10} {path}")
    print(f"{'='*70}\n")


if __name__ == '__main__':
    main()
