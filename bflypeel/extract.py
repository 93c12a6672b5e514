"""Extract undirected support-vote edges from a wiki election dump."""

from __future__ import annotations

import argparse
import re
import sys
from collections.abc import Iterable, Sequence

DEFAULT_INPUT = "wikiElec.ElecBs3.txt"
DEFAULT_OUTPUT = "wiki_elec_undirected.txt"

_USER = re.compile(r"U\s+(\d+)", re.ASCII)
_SUPPORT_VOTE = re.compile(r"V\s+1\s+(\d+)", re.ASCII)


def extract_undirected_edges(lines: Iterable[str]) -> list[tuple[str, str]]:
    """Return the distinct (user, voter) pairs of support votes.

    A ``U <id>`` line sets the current user; each later ``V 1 <id>`` line
    yields an edge to that user.  Every edge is stored with its smaller id
    (compared as text) first, and the edges come back sorted.
    """
    current_user = ""
    edges: set[tuple[str, str]] = set()
    for line in lines:
        user = _USER.search(line)
        if user:
            current_user = user.group(1)
        vote = _SUPPORT_VOTE.search(line)
        if vote and current_user:
            u, v = current_user, vote.group(1)
            edges.add((u, v) if u <= v else (v, u))
    return sorted(edges)


def main(argv: Sequence[str] | None = None) -> int:
    """Write the undirected support-vote edges of an election dump to a file."""
    parser = argparse.ArgumentParser(
        prog="bflypeel-extract",
        description="Extract undirected support-vote edges from a wiki election dump.",
    )
    parser.add_argument("input_file", nargs="?", default=DEFAULT_INPUT)
    parser.add_argument("output_file", nargs="?", default=DEFAULT_OUTPUT)
    args = parser.parse_args(argv)

    try:
        source = open(
            args.input_file, encoding="utf-8", errors="surrogateescape", newline=""
        )
    except OSError:
        print("Error opening input file!", file=sys.stderr)
        return 1

    with source:
        try:
            target = open(
                args.output_file,
                "w",
                encoding="utf-8",
                errors="surrogateescape",
                newline="\n",
            )
        except OSError:
            print("Error opening output file!", file=sys.stderr)
            return 1
        with target:
            for u, v in extract_undirected_edges(source):
                target.write(f"{u} {v}\n")

    print(
        "Extracted undirected vertex pairs (without doubling) and saved to "
        f"{args.output_file}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())