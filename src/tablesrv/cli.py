# src/tablesrv/cli.py
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import pandas as pd
import uvicorn

from . import store
from .app import app
from .loader import load_table


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tablesrv", description="tablesrv – serve sortable, paginated HTML tables"
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    serve_p = sub.add_parser(
        "serve",
        help="Serve a CSV/TSV/JSON file as a sortable, paginated table",
    )
    serve_p.add_argument("path", help="Data file (.csv, .tsv, .json, .jsonl)")
    serve_p.add_argument(
        "--name", default=None, help="Dataset name in the URL (default: file stem)"
    )
    serve_p.add_argument("--title", default=None, help="Page title (default: name)")
    serve_p.add_argument(
        "--table",
        default=None,
        help="Import path of a Table subclass: package.module:TableClass",
    )
    serve_p.add_argument(
        "--page-size",
        type=int,
        default=None,
        help="Default page size (default: from tablesrv.ini, else 10)",
    )
    serve_p.add_argument(
        "--host", default="127.0.0.1", help="Host to bind (default: 127.0.0.1)"
    )
    serve_p.add_argument(
        "--port", type=int, default=8000, help="Port to bind (default: 8000)"
    )
    serve_p.add_argument(
        "--quiet",
        action="store_true",
        help="Reduce uvicorn logging noise",
    )

    return p


def load_dataframe(path: Path) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(path)
    if suffix == ".tsv":
        return pd.read_csv(path, sep="\t")
    if suffix == ".json":
        return pd.read_json(path)
    if suffix == ".jsonl":
        return pd.read_json(path, lines=True)
    raise ValueError(f"Unsupported data file type: {path.suffix!r}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.cmd == "serve":
        if args.page_size is not None and args.page_size <= 0:
            print("tablesrv: --page-size must be > 0", file=sys.stderr)
            return 2

        path = Path(args.path).expanduser()
        try:
            df = load_dataframe(path)
        except (OSError, ValueError) as e:
            print(f"tablesrv: cannot load {path}: {e}", file=sys.stderr)
            return 2

        table = load_table(args.table) if args.table else None
        ds = store.register_dataset(
            args.name or path.stem,
            df,
            table=table,
            title=args.title,
            default_page_size=args.page_size,
        )
        print(f"tablesrv: serving {ds.name!r} at http://{args.host}:{args.port}/tables/{ds.name}")

        try:
            uvicorn.run(
                app,
                host=args.host,
                port=args.port,
                log_level="warning" if args.quiet else "info",
            )
        except KeyboardInterrupt:
            return 0

    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
