# bflypeel

bflypeel counts butterflies (4-cycles) in bipartite graphs and peels them,
either per vertex or per edge. It can split the graph into several
partitions. Each partition is then processed in turn within a single
process.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Commands

### `bflypeel`

```
bflypeel <input_file> <num_partitions> <v|e> [--verbose]
```

The input is a plain edge list. Each edge is two vertex names separated
by whitespace. If a token is left over at the end without a partner, it
is ignored.

The command works in these steps:

1. It gives vertices ids in the order their names first appear.
2. It splits the vertices into `num_partitions` parts of balanced size. Each
   part is grown breadth first. With one partition or fewer, every vertex
   goes to part 0.
3. It ranks the vertices by degree, from highest to lowest. Ties go to the
   lower id. The ranking is built from the degrees of all parts together.
4. It counts and peels butterflies, either per vertex (`v`) or per edge
   (`e`).

For each part, it prints how many vertices that part holds. At the end it
prints:

- the total butterfly count
- the total number of peeling iterations
- the number of edges
- `|U|` and `|V|`, which are the numbers of distinct first and distinct
  second endpoints
- the longest time any part spent on loading, preprocessing, counting and
  peeling

`--verbose` adds more output for each part. It prints the butterfly count
of every vertex or edge that is in at least one butterfly, and then the
peeling order. Both use ranked vertex ids.

If the file cannot be read, or it holds no vertices, the command prints
`No vertices found!` and exits with status 1.

### `bflypeel-extract`

```
bflypeel-extract [input_file] [output_file]
```

This command reads an election vote log. By default the log is
`wikiElec.ElecBs3.txt`. In the log:

- A `U <id>` line sets the current user.
- Each later `V 1 <id>` line is a support vote for that user.

The command writes each distinct user/voter pair once, as `a b` on its own
line. The ids within a pair are ordered as text, and the pairs are sorted.
The output goes to `wiki_elec_undirected.txt` unless you name another file.

### `bflypeel-split`

```
bflypeel-split <graph_file> [-n PARTS] [-d DIRECTORY]
```

This command splits the lines of a file into `PARTS` consecutive chunks of
nearly equal size. `PARTS` defaults to 1. The first chunks get one extra
line each when the lines do not divide evenly. Chunk `i` is written to
`subgraph_<i>.txt` in `DIRECTORY`, which defaults to the current directory.

When the files are written, the command asks `Now delete? (y/n): `. If you
answer `y` or `Y`, it deletes them again.

## Library use

```python
from bflypeel.graph import Graph

g = Graph()
adj = [[2, 3], [2, 3], [0, 1], [0, 1]]  # a single 4-cycle
g.load_partition([0, 1, 2, 3], adj)
g.preprocess(g.local_degrees())
counts = g.count_butterflies_vertex()
order, iterations = g.peel_vertices_by_butterfly_count(counts)
```

### `bflypeel.graph`

This module holds `Graph`, `Wedge` and `ordered_pair`.

The `Graph` class has these methods:

- `load_partition`
- `local_degrees`
- `preprocess`
- `get_wedges`
- `count_butterflies_vertex`
- `count_butterflies_edge`
- `peel_vertices_by_butterfly_count`
- `peel_edges_by_butterfly_count`

Both peeling methods return a pair: the peeling order and the number of
peeling rounds.

### `bflypeel.cli`

This module provides:

- `read_graph`, which returns a `LoadedGraph`
- `bipartite_stats`
- `partition_graph`
- `build_partitions`, which returns one preprocessed `Graph` per partition

### `bflypeel.extract`

This module provides `extract_undirected_edges`.

### `bflypeel.splitter`

This module provides:

- `split_lines`
- `write_subgraphs`
- `delete_subgraphs`

## What it does not do

The partitions are processed one after another in a single process. The
package does not spread the work over several processes or machines.

Partitioning is a simple balanced breadth-first split. It is not a graph
partitioner that tries to keep the number of cut edges as small as
possible.