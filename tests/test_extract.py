from bflypeel.extract import extract_undirected_edges, main


def test_support_votes_become_ordered_edges():
    lines = ["U 5 alice", "V 1 3 2008 bob", "V 1 9 2008 carol"]
    assert extract_undirected_edges(lines) == [("3", "5"), ("5", "9")]


def test_non_support_votes_are_ignored():
    lines = ["U 5", "V -1 3", "V 0 4", "V 1 6"]
    assert extract_undirected_edges(lines) == [("5", "6")]


def test_votes_before_any_user_are_ignored():
    lines = ["V 1 3", "U 5", "V 1 7"]
    assert extract_undirected_edges(lines) == [("5", "7")]


def test_duplicates_and_reversed_pairs_merge():
    lines = ["U 5", "V 1 3", "V 1 3", "U 3", "V 1 5"]
    assert extract_undirected_edges(lines) == [("3", "5")]


def test_ordering_is_textual():
    lines = ["U 9", "V 1 10"]
    assert extract_undirected_edges(lines) == [("10", "9")]


def test_result_is_sorted_and_each_pair_ordered():
    lines = ["U 20", "V 1 1", "V 1 30", "U 4", "V 1 2", "V 1 8"]
    edges = extract_undirected_edges(lines)
    assert edges == sorted(edges)
    assert all(u <= v for u, v in edges)
    assert len(edges) == 4


def test_main_writes_output(tmp_path, capsys):
    source = tmp_path / "in.txt"
    target = tmp_path / "out.txt"
    source.write_text("U 5\nV 1 3\nV -1 4\nU 2\nV 1 5\n", encoding="utf-8")
    assert main([str(source), str(target)]) == 0
    assert target.read_text(encoding="utf-8") == "2 5\n3 5\n"
    assert "saved to" in capsys.readouterr().out


def test_main_missing_input_fails(tmp_path, capsys):
    target = tmp_path / "out.txt"
    assert main([str(tmp_path / "missing.txt"), str(target)]) == 1
    assert "Error opening input file!" in capsys.readouterr().err
    assert not target.exists()