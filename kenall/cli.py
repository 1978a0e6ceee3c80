"""
Command line entry point.

    kenall download [--dest DIR]
    kenall normalize KEN_ALL.CSV [-o OUTPUT.csv]
    kenall lookup KEN_ALL.CSV 060-0007
"""

import argparse
import asyncio
import sys
from pathlib import Path

from kenall.config import settings
from kenall.logging_config import configure_logging


def _download(args) -> int:
    from kenall.tasks.registry_tasks import download_registry

    path = asyncio.run(download_registry(args.dest))
    print(path)
    return 0


def _normalize(args) -> int:
    from kenall.tasks.registry_tasks import normalize_registry

    result = normalize_registry(args.source, args.output, args.encoding)
    print(
        f"groups={result.groups} records={len(result.records)} "
        f"errors={len(result.errors)} mismatches={result.mismatches}",
        file=sys.stderr,
    )
    return 1 if result.errors and args.strict else 0


def _lookup(args) -> int:
    from kenall.services.lookup_service import load_index

    index = load_index(args.source, args.encoding or settings.registry_encoding)
    try:
        records = index.lookup(args.code)
    except ValueError as e:
        print(e, file=sys.stderr)
        return 2
    if not records:
        print(f"{args.code}: not found", file=sys.stderr)
        return 1
    for r in records:
        print("\t".join(r.as_row()))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="kenall", description="Japan Post KEN_ALL normalizer")
    parser.add_argument("--log-level", default=settings.log_level)
    parser.add_argument("--log-json", action="store_true", default=settings.log_json)
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("download", help="download and extract KEN_ALL.CSV")
    p.add_argument("--dest", type=Path, default=None)
    p.set_defaults(func=_download)

    p = sub.add_parser("normalize", help="write one CSV line per expanded town")
    p.add_argument("source", type=Path)
    p.add_argument("-o", "--output", type=Path, default=None)
    p.add_argument("--encoding", default=None)
    p.add_argument("--strict", action="store_true", help="exit 1 when any row was malformed")
    p.set_defaults(func=_normalize)

    p = sub.add_parser("lookup", help="print the towns of one postal code")
    p.add_argument("source", type=Path)
    p.add_argument("code")
    p.add_argument("--encoding", default=None)
    p.set_defaults(func=_lookup)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, args.log_json)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
