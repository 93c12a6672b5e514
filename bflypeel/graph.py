"""Partitioned graph with butterfly counting and peeling."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from itertools import combinations

Edge = tuple[int, int]


def ordered_pair(a: int, b: int) -> Edge:
    """Return the edge (a, b) with the smaller vertex id first."""
    return (a, b) if a < b else (b, a)


@dataclass(frozen=True)
class Wedge:
    """A path first - center - second, with first <= second."""

    center: int
    first: int
    second: int


@dataclass
class Graph:
    """The subgraph held by one partition, keyed by global vertex ids."""

    local_vertex_ids: list[int] = field(default_factory=list)
    adjacency_list: list[list[int]] = field(default_factory=list)
    deg_u: list[int] = field(default_factory=list)

    def load_partition(
        self, local_vertices: Iterable[int], global_adj: Sequence[Iterable[int]]
    ) -> None:
        """Replace the held subgraph with the given vertices and their neighbours."""
        self.local_vertex_ids = [int(v) for v in local_vertices]
        self.adjacency_list = [
            [int(n) for n in global_adj[v]] for v in self.local_vertex_ids
        ]
        self.deg_u = []

    def local_degrees(self) -> list[tuple[int, int]]:
        """Return (vertex id, degree) for every local vertex."""
        return [
            (vertex, len(neighbors))
            for vertex, neighbors in zip(self.local_vertex_ids, self.adjacency_list)
        ]

    def preprocess(
        self, vertex_degrees: Iterable[tuple[int, int]] | None = None
    ) -> None:
        """Rename vertices to their degree rank and compute ``deg_u``.

        ``vertex_degrees`` holds the (id, degree) pairs of every partition;
        by default only this partition's own degrees are used.  Vertices are
        ranked by descending degree, ties broken by ascending id.
        """
        if vertex_degrees is None:
            vertex_degrees = self.local_degrees()
        ordered = sorted(vertex_degrees, key=lambda item: (-item[1], item[0]))
        rank = {vertex: position for position, (vertex, _) in enumerate(ordered)}

        def renamed(vertex: int) -> int:
            try:
                return rank[vertex]
            except KeyError:
                raise ValueError(f"vertex {vertex} has no known degree") from None

        self.local_vertex_ids = [renamed(v) for v in self.local_vertex_ids]
        self.adjacency_list = [
            sorted((renamed(n) for n in neighbors), reverse=True)
            for neighbors in self.adjacency_list
        ]
        # Neighbours are sorted descending, so those ranked at or above u
        # form a prefix of the list.
        self.deg_u = [
            sum(1 for n in neighbors if n >= u_rank)
            for u_rank, neighbors in zip(self.local_vertex_ids, self.adjacency_list)
        ]

    def get_wedges(self) -> list[Wedge]:
        """Return every wedge centred at a local vertex."""
        return [
            Wedge(center, first, second)
            for center, neighbors in zip(self.local_vertex_ids, self.adjacency_list)
            for first, second in combinations(sorted(neighbors), 2)
        ]

    def _symmetric_adjacency(self) -> dict[int, set[int]]:
        adjacency: dict[int, set[int]] = defaultdict(set)
        for u, neighbors in zip(self.local_vertex_ids, self.adjacency_list):
            for v in neighbors:
                adjacency[u].add(v)
                adjacency[v].add(u)
        return adjacency

    def count_butterflies_vertex(self) -> dict[int, int]:
        """Return the number of butterflies each vertex takes part in."""
        adjacency = self._symmetric_adjacency()
        counts: dict[int, int] = defaultdict(int)
        for wedge in self.get_wedges():
            second_neighbors = adjacency[wedge.second]
            for x in adjacency[wedge.first]:
                if x != wedge.center and x in second_neighbors:
                    for vertex in (wedge.center, wedge.first, wedge.second, x):
                        counts[vertex] += 1
        # Each butterfly is seen from four wedges.
        return {vertex: count // 4 for vertex, count in counts.items()}

    def count_butterflies_edge(self) -> dict[Edge, int]:
        """Return the number of butterflies each edge takes part in."""
        groups: dict[Edge, list[int]] = defaultdict(list)
        for wedge in self.get_wedges():
            groups[ordered_pair(wedge.first, wedge.second)].append(wedge.center)

        counts: dict[Edge, int] = defaultdict(int)
        for (u1, u2), centers in groups.items():
            share = len(centers) - 1
            for center in centers:
                counts[ordered_pair(u1, center)] += share
                counts[ordered_pair(u2, center)] += share
        # Each butterfly reaches an edge through two endpoint groups.
        return {edge: count // 2 for edge, count in counts.items()}

    def peel_vertices_by_butterfly_count(
        self, butterfly_counts: Mapping[int, int]
    ) -> tuple[list[int], int]:
        """Peel vertices in buckets of least butterfly count.

        Returns the peeling order and the number of peeling rounds.
        """
        counts = dict(butterfly_counts)
        removed: set[int] = set()
        order: list[int] = []
        adjacency = {
            u: list(neighbors)
            for u, neighbors in zip(self.local_vertex_ids, self.adjacency_list)
        }
        iterations = 0

        while counts:
            lowest = min(counts.values())
            bucket = [v for v, count in counts.items() if count == lowest]

            for v in bucket:
                order.append(v)
                removed.add(v)
                del counts[v]
                if v in adjacency:
                    for neighbor in adjacency[v]:
                        if neighbor in adjacency:
                            adjacency[neighbor] = [
                                n for n in adjacency[neighbor] if n != v
                            ]
                    del adjacency[v]

            affected: set[int] = set()
            for v in bucket:
                for u in adjacency.get(v, ()):
                    if u in removed:
                        continue
                    affected.add(u)
                    affected.update(
                        w for w in adjacency.get(u, ()) if w not in removed
                    )

            for u in affected:
                if u in removed or u not in adjacency:
                    continue
                counts[u] = self._closed_neighbor_pairs(u, adjacency, removed)
            iterations += 1

        return order, iterations

    @staticmethod
    def _closed_neighbor_pairs(
        u: int, adjacency: Mapping[int, list[int]], removed: set[int]
    ) -> int:
        live = [n for n in adjacency[u] if n in adjacency and n not in removed]
        total = 0
        for i, n1 in enumerate(adjacency[u]):
            if n1 not in adjacency or n1 in removed:
                continue
            for n2 in adjacency[u][i + 1:]:
                if n2 in live and n2 in adjacency[n1]:
                    total += 1
        return total

    def peel_edges_by_butterfly_count(
        self, edge_counts: Mapping[Edge, int]
    ) -> tuple[list[Edge], int]:
        """Peel edges in buckets of least butterfly count.

        Returns the peeling order and the number of peeling rounds.
        """
        counts = dict(edge_counts)
        removed: set[Edge] = set()
        order: list[Edge] = []
        adjacency: dict[int, set[int]] = defaultdict(set)
        for u, neighbors in zip(self.local_vertex_ids, self.adjacency_list):
            adjacency[u] = set(neighbors)
        iterations = 0

        while counts:
            lowest = min(counts.values())
            bucket = [e for e, count in counts.items() if count == lowest]

            for edge in bucket:
                order.append(edge)
                removed.add(edge)
                del counts[edge]
                first, second = edge
                adjacency[first].discard(second)
                adjacency[second].discard(first)

            affected: set[Edge] = set()
            for u, v in bucket:
                for endpoint in (u, v):
                    for neighbor in list(adjacency[endpoint]):
                        near = ordered_pair(endpoint, neighbor)
                        if near not in removed:
                            affected.add(near)
                        for second_neighbor in list(adjacency[neighbor]):
                            if second_neighbor == endpoint:
                                continue
                            far = ordered_pair(neighbor, second_neighbor)
                            if far not in removed:
                                affected.add(far)

            for edge in affected:
                if edge in removed:
                    continue
                u, v = edge
                if len(adjacency[u]) > len(adjacency[v]):
                    u, v = v, u
                weight = (len(adjacency[u]) - 1) * (len(adjacency[v]) - 1)
                counts[edge] = sum(
                    weight for w in adjacency[u] if w != v and w in adjacency[v]
                )
            iterations += 1

        return order, iterations