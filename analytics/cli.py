from __future__ import annotations

import argparse
import json
import logging
import os
from typing import Any

from .config import source_config_from_env
from .convex_client import ConvexQueryClient
from .ingest import ConvexStore, SnapshotStore, collect_team_records, load_snapshot
from .records import Player
from .render import render_text
from .report import build_report
from .seed import seed_team_records


def _load_env() -> None:
    try:
        from dotenv import load_dotenv  # type: ignore

        load_dotenv()
    except ImportError:
        pass


def _write_json(path: str, obj: Any) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Team analytics report generator")
    parser.add_argument("--team-id", required=True, help="Team id to aggregate")
    parser.add_argument("--from-raw", default=None, help="Load a table snapshot JSON instead of querying")
    parser.add_argument("--seed-demo", action="store_true", help="Use a synthetic seeded dataset")
    parser.add_argument(
        "--seed-players",
        default="Top,Jungle,Mid,ADC,Support",
        help="Comma separated positions for the seeded roster",
    )
    parser.add_argument(
        "--save-raw",
        default=None,
        help="Path to save the table snapshot JSON (with --seed-demo or --from-raw)",
    )
    parser.add_argument("--output", default=None, help="Path to output report")
    parser.add_argument(
        "--output-format", choices=["json", "text", "pdf"], default="json", help="Output format"
    )
    parser.add_argument("--cache", action="store_true", help="Enable on-disk response cache")
    parser.add_argument("--debug", action="store_true", help="Print debug logs")
    return parser.parse_args()


def _seed_tables(team_id: str, positions: str):
    players = [
        Player(id=f"player_{i}", name=f"{pos}Main", position=pos, team_id=team_id, win_rate=50.0)
        for i, pos in enumerate(p.strip() for p in positions.split(",") if p.strip())
    ]
    return seed_team_records(team_id, players)


def main() -> None:
    _load_env()
    args = _parse_args()
    if args.save_raw and not (args.seed_demo or args.from_raw):
        raise SystemExit("--save-raw needs --seed-demo or --from-raw")
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)

    if args.cache:
        os.environ["ANALYTICS_CACHE"] = "1"

    tables = None
    if args.seed_demo:
        tables = _seed_tables(args.team_id, args.seed_players)
    elif args.from_raw:
        tables = load_snapshot(args.from_raw)

    if tables is not None:
        store: Any = SnapshotStore(tables)
        if args.save_raw:
            _write_json(args.save_raw, tables)
    else:
        source = source_config_from_env()
        if not source.convex_url:
            raise SystemExit(
                "CONVEX_URL not found. Set it in your shell or .env file, or use --from-raw."
            )
        client = ConvexQueryClient(base_url=source.convex_url, auth_token=source.auth_token)
        store = ConvexStore(client, source.function_paths)

    records = collect_team_records(store, args.team_id)
    report = build_report(records)

    if args.output_format == "pdf":
        if not args.output:
            raise SystemExit("--output is required for pdf output")
        from .report_pdf import build_pdf

        build_pdf(report, args.output)
        return

    if args.output_format == "json":
        output_text = json.dumps(report, indent=2)
    else:
        output_text = render_text(report)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output_text)
    else:
        print(output_text)


if __name__ == "__main__":
    main()
