#!/usr/bin/env python3
"""
Fleet kilometres — CLI: ingest a driver distance sheet, apply the system and
double-crew rosters, print fleet totals and rankings.
"""
import argparse
import logging
import sys
from pathlib import Path

# Run from project root or with module path
try:
    from fleet_km.run import run
except ImportError:
    sys.path.insert(0, str(Path(__file__).resolve().parent))
    from fleet_km.run import run

from fleet_km.ledger import find_driver
from fleet_km.outputs import format_driver, format_rankings, format_run_summary, format_totals
from fleet_km.rankings import DEFAULT_TOP_N
from fleet_km.snapshots import DEFAULT_STORE_FILE, SnapshotStore


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Fleet kilometres — solo vs shared distance per driver and for the fleet.",
    )
    parser.add_argument(
        "data",
        type=Path,
        nargs="?",
        default=None,
        help="Driver distance sheet (XLSX or CSV). Omit when using --load",
    )
    parser.add_argument(
        "--system",
        type=Path,
        default=None,
        help="System roster (XLSX or CSV with a driver column)",
    )
    parser.add_argument(
        "--crew",
        type=Path,
        default=None,
        help="Double-crew roster (driver column plus 'nr' group number)",
    )
    parser.add_argument(
        "--store",
        type=Path,
        default=Path(DEFAULT_STORE_FILE),
        help=f"Snapshot store file. Default: {DEFAULT_STORE_FILE}",
    )
    parser.add_argument(
        "--save",
        type=str,
        default=None,
        help="Save the ingested dataset under this name",
    )
    parser.add_argument(
        "--load",
        type=str,
        default=None,
        help="Load a saved dataset instead of a data file",
    )
    parser.add_argument(
        "--driver",
        type=str,
        default=None,
        help="Print one driver's detail",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=DEFAULT_TOP_N,
        help=f"Length of the top rankings. Default: {DEFAULT_TOP_N}",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.data is None and not args.load:
        print("Error: give a data file or --load NAME", file=sys.stderr)
        return 1
    if args.data is not None and not args.data.exists():
        print(f"Error: data file not found: {args.data}", file=sys.stderr)
        return 1

    try:
        result = run(
            data_path=args.data,
            system_path=args.system,
            crew_path=args.crew,
            store=SnapshotStore(args.store),
            save_as=args.save,
            load_key=args.load,
            top_n=max(1, args.top),
        )
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    view = result.view
    print(format_run_summary(view.dataset, result.saved_as))
    print()
    print(format_totals(view.totals))
    print()
    print(format_rankings(view.rankings, limit=max(1, args.top)))

    if args.driver:
        print()
        driver = find_driver(view.adjusted_drivers, args.driver)
        if driver is None:
            print(f"--- DRIVER: {args.driver} not found ---")
        else:
            print(format_driver(driver))

    return 0


if __name__ == "__main__":
    sys.exit(main())
