import pytest

from revgen import Graph, Node


def _diamond():
    # a -> b, a -> c, b -> d, c -> d
    a, b, c, d = (Node(x) for x in "abcd")
    a.attach(b).attach(c)
    b.attach(d)
    c.attach(d)
    return a, b, c, d


def test_graph_traversal_and_validation():
    a, b, c, d = _diamond()
    g = Graph([a])

    # Nodes returned in depth-first order without duplicates
    labels = [n.get_label() for n in g.nodes()]
    assert labels == ["a", "b", "d", "c"]
    assert len(g) == 4

    # DAG validation should not raise
    g.validate_dag()
    assert g.find_cycle() is None
    assert g.depth() == 3


def test_edges():
    a, b, c, d = _diamond()
    pairs = [(e.src.get_label(), e.dst.get_label()) for e in Graph([a]).edges()]
    assert pairs == [("a", "b"), ("a", "c"), ("b", "d"), ("c", "d")]


def test_nodes_deduplicated_by_identity_not_value():
    root = Node("r")
    root.attach(Node("x")).attach(Node("x"))
    assert len(Graph([root]).nodes()) == 3


def test_index_of():
    a, b, c, d = _diamond()
    g = Graph([a])
    assert g.index_of(a) == 0
    assert g.index_of(c) == 3
    with pytest.raises(ValueError):
        g.index_of(Node("a"))


def test_cycle_detection():
    a, b = Node("a"), Node("b")
    a.attach(b)
    b.attach(a)
    g = Graph([a])

    assert [n.get_label() for n in g.find_cycle()] == ["a", "b", "a"]
    with pytest.raises(ValueError, match="Cycle detected"):
        g.validate_dag()
    with pytest.raises(ValueError):
        g.depth()
    # traversal still terminates
    assert len(g.nodes()) == 2


def test_self_loop_is_a_cycle():
    a = Node("a")
    a.attach(a)
    assert Graph([a]).find_cycle() == [a, a]


def test_multiple_roots_and_empty_graph():
    a, b = Node("a"), Node("b")
    shared = Node("shared")
    a.attach(shared)
    b.attach(shared)
    g = Graph().add_root(a).add_root(b)
    assert [n.get_label() for n in g.nodes()] == ["a", "shared", "b"]
    assert Graph().depth() == 0
    assert Graph().nodes() == []
