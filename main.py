"""CLI entrypoint: print the citation for a single DOI."""

from __future__ import annotations

import argparse
import logging
import os
import sys

from dotenv import load_dotenv

from citation import fetch_citation


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags."""
    parser = argparse.ArgumentParser(description="Render a DOI as an HTML citation")
    parser.add_argument("doi", help="DOI, 'doi:' identifier or resolver URL")
    parser.add_argument(
        "--style",
        default=os.getenv("CITATION_STYLE", "chicago-author-date"),
        help="CSL style name, e.g. chicago-author-date or apa",
    )
    parser.add_argument(
        "--work-type",
        default="",
        help="Label inserted after the title, e.g. dataset (inferred when omitted)",
    )
    parser.add_argument("--timeout", type=float, default=None, help="Per-request timeout in seconds")
    parser.add_argument("--debug", action="store_true", help="Log resolver and rendering details")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Load config, fetch the citation and print it."""
    load_dotenv()
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    citation = fetch_citation(
        args.doi,
        work_type=args.work_type,
        style=args.style,
        debug=args.debug,
        logger=logging.getLogger("citation"),
        timeout=args.timeout,
    )
    if citation is None:
        logging.error("No citation produced for %s", args.doi)
        return 1

    print(citation)
    return 0


if __name__ == "__main__":
    sys.exit(main())
