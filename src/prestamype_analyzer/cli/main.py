"""Main CLI entry point."""

import argparse
import json
import logging
import sys
from pathlib import Path

DEFAULT_CONFIG_PATH = Path("prestamype_analyzer.yaml")
DEFAULT_DB_PATH = Path("prestamype_analyzer.db")


def main() -> None:
    """Parse args and dispatch to subcommands."""
    parser = argparse.ArgumentParser(
        prog="prestamype-analyzer",
        description="Score and allocate a budget across Prestamype lending opportunities",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # analyze
    analyze_parser = subparsers.add_parser("analyze", help="Score opportunities and suggest a distribution")
    analyze_parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="JSON export from the page extractor (list or {'data': [...]})",
    )
    analyze_parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help="Path to config YAML (defaults apply when missing)",
    )
    analyze_parser.add_argument(
        "--store",
        type=Path,
        default=None,
        metavar="DB_PATH",
        help="Save a snapshot of the analysis to SQLite at given path",
    )
    analyze_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write full JSON result to file (default: stdout)",
    )
    analyze_parser.add_argument(
        "--summary",
        action="store_true",
        help="Print human-readable summary instead of JSON",
    )
    analyze_parser.add_argument(
        "--simulate",
        action="store_true",
        help="Include a per-opportunity investment simulation in JSON output",
    )

    # config
    config_parser = subparsers.add_parser("config", help="Show or change saved preferences")
    config_parser.add_argument("action", choices=["show", "set"], help="Show or update config")
    config_parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Path to config YAML")
    config_parser.add_argument("--budget", type=float, default=None, help="Budget in the config currency")
    config_parser.add_argument("--min-return", type=float, default=None, help="Minimum annual return, percent")
    config_parser.add_argument(
        "--max-risk",
        type=str.upper,
        choices=["A", "B", "C", "D", "E"],
        default=None,
        help="Highest acceptable risk grade",
    )
    config_parser.add_argument(
        "--currency",
        type=str.upper,
        choices=["PEN", "USD"],
        default=None,
        help="Display currency",
    )

    # history
    history_parser = subparsers.add_parser("history", help="Show saved analysis snapshots")
    history_parser.add_argument("--db", type=Path, default=DEFAULT_DB_PATH, help="Path to SQLite database")
    history_parser.add_argument("--limit", type=int, default=5, help="Number of snapshots to show")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "analyze":
        _run_analyze(args)
    elif args.command == "config":
        _run_config(args)
    elif args.command == "history":
        _run_history(args)
    else:
        parser.print_help()


def _load_config(path: Path):
    """Load config via ConfigStore; unreadable or invalid files exit with a message."""
    import yaml

    from prestamype_analyzer.store import ConfigStore

    store = ConfigStore(path)
    try:
        store.load()
    except (ValueError, yaml.YAMLError) as e:
        raise SystemExit(f"Invalid config in {path}:\n{e}")
    return store


def _run_analyze(args: argparse.Namespace) -> None:
    """Run analyze command."""
    from prestamype_analyzer.pipeline import analyze_export
    from prestamype_analyzer.simulation import simulate_investment

    if not args.input.exists():
        raise SystemExit(f"Input file not found: {args.input}")
    config = _load_config(args.config).get()
    try:
        result = analyze_export(config, args.input, db_path=args.store)
    except ValueError as e:
        raise SystemExit(f"Could not read {args.input}: {e}")

    if not result.scored:
        print("No opportunities found in input.", file=sys.stderr)
        raise SystemExit(1)

    if args.summary:
        overview = result.overview
        print(f"Opportunities: {overview.total}")
        print(f"Recommended: {overview.recommended}")
        print(f"Within budget: {overview.within_budget}")
        print(f"Average return: {overview.average_return:.1f}%")
        print()
        for line in result.recommendations:
            print(f"  {line}")
        print()
        for line in result.summary:
            print(line)
        for d in result.distributions:
            print(f"  {d.opportunity.title or d.opportunity.id}: {d.investment:,.0f} {d.currency} (score {d.opportunity.score})")
        return

    output_data = result.model_dump(mode="json")
    if args.simulate:
        output_data["simulations"] = [
            simulate_investment(opp, config).model_dump(mode="json") for opp in result.scored
        ]
    output = json.dumps(output_data, indent=2, default=str)

    if args.output:
        args.output.write_text(output, encoding="utf-8")
        print(f"Analyzed {len(result.scored)} opportunities (wrote to {args.output})")
    else:
        print(output)


def _run_config(args: argparse.Namespace) -> None:
    """Run config command."""
    from pydantic import ValidationError

    store = _load_config(args.config)
    if args.action == "set":
        changes = {
            "budget": args.budget,
            "min_return": args.min_return,
            "max_risk": args.max_risk,
            "currency": args.currency,
        }
        if all(v is None for v in changes.values()):
            raise SystemExit("config set requires at least one of --budget, --min-return, --max-risk, --currency")
        try:
            store.save(changes)
        except ValidationError as e:
            raise SystemExit(f"Invalid config value:\n{e}")
    print(json.dumps(store.get().model_dump(), indent=2))


def _run_history(args: argparse.Namespace) -> None:
    """Run history command."""
    from prestamype_analyzer.store import AnalysisStore

    store = AnalysisStore(args.db)
    snapshots = store.list_recent(limit=args.limit)
    if not snapshots:
        print("No analyses saved yet. Run: prestamype-analyzer analyze --input FILE --store DB")
        return
    for snap in snapshots:
        print(
            f"[{snap.created_at:%Y-%m-%d %H:%M}] {snap.total} opportunities, "
            f"{snap.recommended} recommended, {snap.within_budget} within budget "
            f"(budget {snap.config.budget:g} {snap.config.currency})"
        )
        for opp in snap.opportunities[:3]:
            print(f"    {opp.score:3d}  {opp.title or opp.id}")


if __name__ == "__main__":
    main()
