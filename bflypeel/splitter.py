"""Split a graph file's lines evenly into numbered subgraph files."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path


def _subgraph_path(directory: str | Path, rank: int) -> Path:
    return Path(directory) / f"subgraph_{rank}.txt"


def split_lines(lines: Iterable[str], parts: int) -> list[list[str]]:
    """Split lines into ``parts`` consecutive chunks of near equal size.

    The first ``len(lines) % parts`` chunks get one extra line.
    """
    if parts < 1:
        raise ValueError("parts must be at least 1")
    items = list(lines)
    base, extra = divmod(len(items), parts)
    chunks = []
    start = 0
    for rank in range(parts):
        size = base + (1 if rank < extra else 0)
        chunks.append(items[start:start + size])
        start += size
    return chunks


def write_subgraphs(
    lines: Iterable[str], parts: int, directory: str | Path = "."
) -> list[Path]:
    """Write each chunk to ``subgraph_<rank>.txt`` and return the paths."""
    paths = []
    for rank, chunk in enumerate(split_lines(lines, parts)):
        path = _subgraph_path(directory, rank)
        with open(path, "w", encoding="utf-8", errors="surrogateescape", newline="\n") as out:
            out.writelines(f"{line}\n" for line in chunk)
        paths.append(path)
    return paths


def delete_subgraphs(
    parts: int, directory: str | Path = "."
) -> tuple[list[Path], list[Path]]:
    """Delete the subgraph files; return (deleted paths, paths that failed)."""
    deleted: list[Path] = []
    failed: list[Path] = []
    for rank in range(parts):
        path = _subgraph_path(directory, rank)
        try:
            path.unlink()
        except OSError:
            failed.append(path)
        else:
            deleted.append(path)
    return deleted, failed


def _read_lines(filename: str) -> list[str]:
    with open(filename, encoding="utf-8", errors="surrogateescape", newline="") as stream:
        return [line[:-1] if line.endswith("\n") else line for line in stream]


def _first_token() -> str:
    for line in sys.stdin:
        tokens = line.split()
        if tokens:
            return tokens[0]
    return ""


def main(argv: Sequence[str] | None = None) -> int:
    """Split a graph file into subgraph files, then offer to delete them."""
    parser = argparse.ArgumentParser(
        prog="bflypeel-split",
        description="Split a graph file's lines evenly into subgraph files.",
    )
    parser.add_argument("graph_file")
    parser.add_argument("-n", "--parts", type=int, default=1)
    parser.add_argument("-d", "--directory", default=".")
    args = parser.parse_args(argv)

    if args.parts < 1:
        print("Number of parts must be at least 1", file=sys.stderr)
        return 1

    try:
        lines = _read_lines(args.graph_file)
    except OSError:
        print(f"Error opening file: {args.graph_file}", file=sys.stderr)
        return 1
    print(f"Total lines in {args.graph_file}: {len(lines)}")

    for rank, _ in enumerate(write_subgraphs(lines, args.parts, args.directory)):
        print(f"Rank {rank} created subgraph_{rank}.txt")

    print("Now delete? (y/n): ", end="", flush=True)
    if _first_token() in ("y", "Y"):
        deleted, failed = delete_subgraphs(args.parts, args.directory)
        for path in deleted:
            print(f"Deleted {path.name}")
        for path in failed:
            print(f"Failed to delete {path.name}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())