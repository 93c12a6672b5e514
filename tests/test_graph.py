import math

import pytest

from bflypeel.graph import Graph, Wedge, ordered_pair


def _adjacency(n, edges):
    adj = [[] for _ in range(n)]
    for u, v in edges:
        adj[u].append(v)
        adj[v].append(u)
    return adj


def _full_graph(n, edges):
    g = Graph()
    g.load_partition(range(n), _adjacency(n, edges))
    return g


def _complete_bipartite(a, b):
    edges = [(u, a + v) for u in range(a) for v in range(b)]
    return _full_graph(a + b, edges), edges


def test_ordered_pair_puts_smaller_first():
    assert ordered_pair(5, 2) == (2, 5)
    assert ordered_pair(2, 5) == (2, 5)
    assert ordered_pair(3, 3) == (3, 3)


def test_load_partition_keeps_only_local_vertices():
    adj = _adjacency(4, [(0, 1), (1, 2), (2, 3)])
    g = Graph()
    g.load_partition([1, 3], adj)
    assert g.local_vertex_ids == [1, 3]
    assert g.adjacency_list == [adj[1], adj[3]]
    assert g.local_degrees() == [(1, 2), (3, 1)]


def test_get_wedges_of_star():
    g = _full_graph(4, [(3, 0), (3, 1), (3, 2)])
    wedges = g.get_wedges()
    centred = [w for w in wedges if w.center == 3]
    assert {(w.first, w.second) for w in centred} == {(0, 1), (0, 2), (1, 2)}
    assert all(w.first <= w.second for w in wedges)
    assert Wedge(3, 0, 1) in wedges


def test_preprocess_ranks_by_degree_then_id():
    g = _full_graph(4, [(3, 0), (3, 1), (3, 2)])
    g.preprocess()
    # Highest degree first, ties by ascending id.
    assert g.local_vertex_ids == [1, 2, 3, 0]
    assert g.adjacency_list[3] == sorted(g.adjacency_list[3], reverse=True)
    assert g.adjacency_list[0] == [0]
    for u_rank, neighbors, deg in zip(g.local_vertex_ids, g.adjacency_list, g.deg_u):
        assert deg <= len(neighbors)
        assert all(n >= u_rank for n in neighbors[:deg])
        assert all(n < u_rank for n in neighbors[deg:])


def test_preprocess_across_partitions_is_consistent():
    n = 5
    adj = _adjacency(n, [(0, 1), (0, 2), (1, 2), (2, 3), (3, 4)])
    left, right = Graph(), Graph()
    left.load_partition([0, 2, 4], adj)
    right.load_partition([1, 3], adj)
    degrees = left.local_degrees() + right.local_degrees()
    left.preprocess(degrees)
    right.preprocess(degrees)
    assert sorted(left.local_vertex_ids + right.local_vertex_ids) == list(range(n))
    # Vertex 2 has the highest degree.
    assert left.local_vertex_ids[1] == 0


def test_preprocess_rejects_unknown_vertex():
    adj = _adjacency(3, [(0, 1), (1, 2)])
    g = Graph()
    g.load_partition([0, 1], adj)
    with pytest.raises(ValueError):
        g.preprocess(g.local_degrees())


def test_vertex_counts_on_complete_bipartite():
    g, _ = _complete_bipartite(2, 3)
    counts = g.count_butterflies_vertex()
    total = math.comb(2, 2) * math.comb(3, 2)
    assert sum(counts.values()) == 4 * total
    assert counts[0] == counts[1] == total
    assert counts[2] == counts[3] == counts[4]


def test_edge_counts_on_complete_bipartite():
    g, edges = _complete_bipartite(3, 3)
    counts = g.count_butterflies_edge()
    total = math.comb(3, 2) * math.comb(3, 2)
    assert sum(counts.values()) == 4 * total
    assert set(counts) == {ordered_pair(u, v) for u, v in edges}
    assert len(set(counts.values())) == 1


def test_counts_are_empty_without_cycles():
    g = _full_graph(4, [(0, 1), (1, 2), (2, 3)])
    assert all(c == 0 for c in g.count_butterflies_edge().values())
    assert g.count_butterflies_vertex() == {}
    assert Graph().count_butterflies_edge() == {}


def test_peel_vertices_orders_by_count():
    g, _ = _complete_bipartite(2, 3)
    counts = g.count_butterflies_vertex()
    order, iterations = g.peel_vertices_by_butterfly_count(counts)
    assert sorted(order) == sorted(counts)
    assert [counts[v] for v in order] == sorted(counts[v] for v in order)
    assert iterations == len(set(counts.values()))


def test_peel_vertices_from_given_counts():
    g = Graph()
    order, iterations = g.peel_vertices_by_butterfly_count({5: 2, 6: 1, 7: 2})
    assert order == [6, 5, 7]
    assert iterations == 2


def test_peel_empty_counts():
    g = Graph()
    assert g.peel_vertices_by_butterfly_count({}) == ([], 0)
    assert g.peel_edges_by_butterfly_count({}) == ([], 0)


def test_peel_edges_single_layer_when_all_equal():
    g, edges = _complete_bipartite(2, 2)
    counts = g.count_butterflies_edge()
    order, iterations = g.peel_edges_by_butterfly_count(counts)
    assert set(order) == {ordered_pair(u, v) for u, v in edges}
    assert len(order) == len(edges)
    assert iterations == 1


def test_peel_edges_recomputes_after_removal():
    edges = [(0, 1), (1, 2), (2, 3), (3, 0), (0, 4)]
    g = _full_graph(5, edges)
    counts = g.count_butterflies_edge()
    assert counts[(0, 4)] == 0
    order, iterations = g.peel_edges_by_butterfly_count(counts)
    assert order[0] == (0, 4)
    assert set(order) == {ordered_pair(u, v) for u, v in edges}
    assert len(order) == len(set(order))
    assert iterations == 2