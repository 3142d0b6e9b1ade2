"""Entry point: cli | oneshot."""

import argparse
import asyncio
import sys


def _parse_oneshot(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="intranet_search oneshot")
    parser.add_argument("query", nargs="*", help="Search text (read from stdin when omitted)")
    parser.add_argument("--type", default="all", dest="search_type")
    parser.add_argument("--page", type=int, default=1)
    return parser.parse_args(argv)


def main():
    mode = "cli"
    if len(sys.argv) > 1:
        mode = sys.argv[1].lower()

    if mode == "cli":
        from intranet_search.interfaces.cli import run_cli

        try:
            asyncio.run(run_cli())
        except KeyboardInterrupt:
            pass

    elif mode == "oneshot":
        from intranet_search.interfaces.oneshot import main as run_oneshot_main

        args = _parse_oneshot(sys.argv[2:])
        if args.query:
            query = " ".join(args.query).strip()
        else:
            query = sys.stdin.read().strip()
        sys.exit(run_oneshot_main(query=query, search_type=args.search_type, page=args.page))

    else:
        print(f"Unknown mode: {mode}")
        print("Usage: python -m intranet_search.main [cli|oneshot]")
        sys.exit(1)


if __name__ == "__main__":
    main()
