from revgen import Node, DEFAULT_LABEL


def test_default_node():
    n = Node()
    assert n.get_label() == "node" == DEFAULT_LABEL
    assert n.count() == 0
    assert len(n) == 0
    assert not n.attrs


def test_attach_counts_distinct_instances():
    n = Node("root")
    kids = [Node(f"k{i}") for i in range(4)]
    for k in kids:
        n.attach(k)
    assert n.count() == 4

    # re-attaching an already attached instance is a no-op
    n.attach(kids[0]).attach(kids[2])
    assert n.count() == 4


def test_attach_ref_reports_insertion():
    n, m = Node(), Node("m")
    assert n.attach_ref(m) is True
    assert n.attach_ref(m) is False
    assert n.count() == 1


def test_attach_rejects_non_nodes():
    import pytest

    with pytest.raises(TypeError):
        Node().attach("child")  # type: ignore[arg-type]


def test_attach_and_detach_are_chainable():
    n, a, b = Node("root"), Node("a"), Node("b")
    assert n.attach(a).attach(b) is n
    assert n.detach(a) is n
    assert n.relations() == [b]


def test_contains_after_attach_and_detach():
    n, m = Node("root"), Node("child")
    n.attach(m)
    assert n.contains(m)
    assert m in n
    n.detach(m)
    assert not n.contains(m)
    assert n.count() == 0


def test_value_equal_duplicates():
    n = Node("root")
    a = Node("dup").set("k", 1)
    b = Node("dup").set("k", 1)
    assert a is not b and a == b

    n.attach(a)
    n.attach(b)
    assert n.count() == 2

    # detach matches by value: both instances go
    n.detach(a)
    assert n.count() == 0


def test_remove_equal_to_returns_removed_count():
    n = Node()
    n.attach(Node("x")).attach(Node("x")).attach(Node("y"))
    assert n.remove_equal_to(Node("x")) == 2
    assert n.remove_equal_to(Node("z")) == 0
    assert [m.get_label() for m in n] == ["y"]


def test_contains_matches_value_not_identity():
    n = Node().attach(Node("leaf"))
    assert n.contains(Node("leaf"))
    assert not n.contains(Node("other"))
    assert "leaf" not in n


def test_detach_keeps_relative_order():
    n = Node()
    a, b, c, d = (Node(x) for x in "abcd")
    n.attach(a).attach(b).attach(c).attach(d)
    n.detach(b)
    assert [m.get_label() for m in n] == ["a", "c", "d"]


def test_detached_instance_can_be_reattached():
    n, m = Node(), Node("m")
    n.attach(m).detach(m).attach(m)
    assert n.count() == 1


def test_self_loop():
    a = Node("a")
    a.attach(a)
    assert a.count() == 1
    assert a.contains(a)
    assert list(a) == [a]


def test_mutual_attachment():
    a, b = Node("a"), Node("b")
    a.attach(b)
    b.attach(a)
    assert a.count() == 1 and b.count() == 1
    assert list(a) == [b]
    assert list(b) == [a]


def test_leaf_node_is_truthy():
    assert Node()


def test_repr_does_not_recurse():
    a = Node("a").set("bound", 5)
    a.attach(a)
    assert repr(a) == "Node(label='a', attrs=['bound'], links=1)"
