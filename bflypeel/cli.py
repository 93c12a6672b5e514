"""Command line butterfly counting and peeling over a partitioned graph."""

from __future__ import annotations

import argparse
import sys
import time
from collections import deque
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import TextIO

from bflypeel.graph import Graph


@dataclass
class LoadedGraph:
    """An undirected graph read from an edge list, with names mapped to ids."""

    names: list[str] = field(default_factory=list)
    edges: list[tuple[int, int]] = field(default_factory=list)
    adj: list[list[int]] = field(default_factory=list)

    @property
    def vertex_count(self) -> int:
        return len(self.names)


def _tokens(stream: TextIO) -> Iterable[str]:
    for line in stream:
        yield from line.split()


def read_graph(stream: TextIO) -> LoadedGraph:
    """Read whitespace separated vertex pairs into a :class:`LoadedGraph`.

    Vertices get ids in order of first appearance.  A trailing unpaired
    token is ignored.  Raises ValueError when no vertex is found.
    """
    ids: dict[str, int] = {}
    graph = LoadedGraph()

    def vertex_id(name: str) -> int:
        if name not in ids:
            ids[name] = len(graph.names)
            graph.names.append(name)
            graph.adj.append([])
        return ids[name]

    tokens = iter(_tokens(stream))
    for u in tokens:
        v = next(tokens, None)
        if v is None:
            break
        graph.edges.append((vertex_id(u), vertex_id(v)))

    if not graph.names:
        raise ValueError("No vertices found!")

    for u, v in graph.edges:
        graph.adj[u].append(v)
        graph.adj[v].append(u)
    return graph


def bipartite_stats(edges: Iterable[tuple[int, int]]) -> tuple[int, int, int]:
    """Return (edge count, distinct first endpoints, distinct second endpoints)."""
    edge_list = list(edges)
    firsts = {u for u, _ in edge_list}
    seconds = {v for _, v in edge_list}
    return len(edge_list), len(firsts), len(seconds)


def partition_graph(adj: Sequence[Sequence[int]], num_partitions: int) -> list[int]:
    """Assign every vertex to one of ``num_partitions`` balanced parts.

    Parts are grown breadth first so that neighbouring vertices tend to
    share a part.  With one partition or fewer every vertex goes to part 0.
    """
    n = len(adj)
    if num_partitions <= 1:
        return [0] * n

    base, extra = divmod(n, num_partitions)
    part = [-1] * n
    next_seed = 0
    for p in range(num_partitions):
        capacity = base + (1 if p < extra else 0)
        filled = 0
        queue: deque[int] = deque()
        while filled < capacity:
            if not queue:
                while next_seed < n and part[next_seed] != -1:
                    next_seed += 1
                if next_seed >= n:
                    break
                queue.append(next_seed)
            vertex = queue.popleft()
            if part[vertex] != -1:
                continue
            part[vertex] = p
            filled += 1
            queue.extend(nb for nb in adj[vertex] if part[nb] == -1)
    return part


def build_partitions(graph: LoadedGraph, num_partitions: int) -> list[Graph]:
    """Split the graph into preprocessed subgraphs, one per partition.

    Every subgraph is renamed to the global degree ranking built from the
    degrees of all partitions together.
    """
    part = partition_graph(graph.adj, num_partitions)
    parts = max(num_partitions, 1)
    subgraphs = []
    for rank in range(parts):
        local_vertices = [v for v, p in enumerate(part) if p == rank]
        subgraph = Graph()
        subgraph.load_partition(local_vertices, graph.adj)
        subgraphs.append(subgraph)

    all_degrees = [pair for sub in subgraphs for pair in sub.local_degrees()]
    for subgraph in subgraphs:
        subgraph.preprocess(all_degrees)
    return subgraphs


@dataclass
class _RankResult:
    iterations: int = 0
    butterflies: int = 0
    timings: dict[str, float] = field(default_factory=dict)


def _run_rank(
    rank: int, subgraph: Graph, mode: str, verbose: bool, out: TextIO
) -> _RankResult:
    result = _RankResult()
    if mode == "v":
        start = time.perf_counter()
        counts = subgraph.count_butterflies_vertex()
        result.timings["vertex_count"] = time.perf_counter() - start

        start = time.perf_counter()
        order, result.iterations = subgraph.peel_vertices_by_butterfly_count(counts)
        result.timings["vertex_peel"] = time.perf_counter() - start

        result.butterflies = sum(c for c in counts.values() if c > 0) // 4
        if verbose:
            for vertex, count in counts.items():
                if count > 0:
                    print(
                        f"Process {rank}: Vertex (rank) {vertex} is part of "
                        f"{count} butterflies",
                        file=out,
                    )
            print(
                f"Process {rank}: Vertex (rank) peeling order: "
                + " ".join(str(v) for v in order),
                file=out,
            )
    else:
        start = time.perf_counter()
        counts = subgraph.count_butterflies_edge()
        result.timings["edge_count"] = time.perf_counter() - start

        start = time.perf_counter()
        order, result.iterations = subgraph.peel_edges_by_butterfly_count(counts)
        result.timings["edge_peel"] = time.perf_counter() - start

        result.butterflies = sum(c for c in counts.values() if c > 0) // 4
        if verbose:
            for (u, v), count in counts.items():
                if count > 0:
                    print(
                        f"Process {rank}: Edge (rank) ({u} - {v}) is part of "
                        f"{count} butterflies",
                        file=out,
                    )
            print(
                f"Process {rank}: Edge (rank) peeling order: "
                + " ".join(f"({u} - {v})" for u, v in order),
                file=out,
            )
    return result


def main(argv: Sequence[str] | None = None) -> int:
    """Count and peel butterflies over a partitioned edge-list graph."""
    parser = argparse.ArgumentParser(
        prog="bflypeel",
        description="Butterfly counting and peeling over a partitioned graph.",
    )
    parser.add_argument("input_file")
    parser.add_argument("num_partitions", type=int)
    parser.add_argument("mode", choices=["v", "e"])
    parser.add_argument(
        "--verbose", action="store_true", help="print per-item counts and orders"
    )
    args = parser.parse_args(argv)
    out = sys.stdout

    try:
        with open(args.input_file, encoding="utf-8") as stream:
            graph = read_graph(stream)
    except (OSError, ValueError):
        print("No vertices found!", file=sys.stderr)
        return 1

    start = time.perf_counter()
    part = partition_graph(graph.adj, args.num_partitions)
    parts = max(args.num_partitions, 1)
    subgraphs = []
    load_times = []
    for rank in range(parts):
        local_vertices = [v for v, p in enumerate(part) if p == rank]
        print(f"Rank {rank} has {len(local_vertices)} vertices.", file=out)
        start = time.perf_counter()
        subgraph = Graph()
        subgraph.load_partition(local_vertices, graph.adj)
        load_times.append(time.perf_counter() - start)
        subgraphs.append(subgraph)

    all_degrees = [pair for sub in subgraphs for pair in sub.local_degrees()]
    preprocess_times = []
    for subgraph in subgraphs:
        start = time.perf_counter()
        subgraph.preprocess(all_degrees)
        preprocess_times.append(time.perf_counter() - start)

    results = [
        _run_rank(rank, subgraph, args.mode, args.verbose, out)
        for rank, subgraph in enumerate(subgraphs)
    ]

    total_iterations = sum(r.iterations for r in results)
    total_butterflies = sum(r.butterflies for r in results)
    edge_count, num_u, num_v = bipartite_stats(graph.edges)

    def max_time(name: str) -> float:
        return max(r.timings.get(name, 0.0) for r in results)

    print("\n---> Global results <---", file=out)
    print(f"Total butterflies: {total_butterflies}", file=out)
    label = "Vertex" if args.mode == "v" else "Edge"
    print(f"{label} peeling iterations: {total_iterations}", file=out)
    print(f"Total edges: {edge_count}", file=out)
    print(f"|U| = {num_u}\n|V| = {num_v}", file=out)

    print("\n---> Timing Results (Max Across Processes) <---", file=out)
    print(f"loadPartition: {max(load_times)}s", file=out)
    print(f"preprocess: {max(preprocess_times)}s", file=out)
    if args.mode == "v":
        print(f"vertex_count: {max_time('vertex_count')}s", file=out)
        print(f"vertex_peel: {max_time('vertex_peel')}s", file=out)
    else:
        print(f"edge_count: {max_time('edge_count')}s", file=out)
        print(f"edge_peel: {max_time('edge_peel')}s", file=out)
    return 0


if __name__ == "__main__":
    sys.exit(main())