from rich.console import Console

from revgen import Node, RenderOptions, build_rich_tree, iter_nodes


def _print(tree, capsys):
    Console(width=80).print(tree)
    return capsys.readouterr().out


def _root():
    root = Node("seq").set("min", 1)
    for i in range(4):
        root.attach(Node(f"lit{i}").set("value", str(i)))
    return root


def test_iter_nodes_depths():
    root = Node("r")
    child = Node("c")
    root.attach(child)
    child.attach(Node("g"))
    assert [(d, n.get_label()) for d, n in iter_nodes(root)] == [(0, "r"), (1, "c"), (2, "g")]


def test_iter_nodes_stops_at_revisits():
    a, b = Node("a"), Node("b")
    a.attach(b)
    b.attach(a)
    assert [(d, n.get_label()) for d, n in iter_nodes(a)] == [(0, "a"), (1, "b"), (2, "a")]


def test_tree_shows_labels_and_attrs(capsys):
    out = _print(build_rich_tree(_root()), capsys)
    assert "seq" in out
    assert "min=1" in out
    assert "lit3" in out and "value='3'" in out


def test_hide_attrs(capsys):
    out = _print(build_rich_tree(_root(), RenderOptions(show_attrs=False)), capsys)
    assert "lit0" in out
    assert "value=" not in out


def test_ascii_tree_truncates_links(capsys):
    opts = RenderOptions(icons_on=False, max_links=1)
    out = _print(build_rich_tree(_root(), opts=opts), capsys)
    assert "lit0" in out
    assert "lit1" not in out
    assert "+3 more" in out
    # ensure no icon present
    assert "◆" not in out and "◇" not in out


def test_max_depth(capsys):
    root = Node("r")
    root.attach(Node("c").attach(Node("deep")))
    out = _print(build_rich_tree(root, RenderOptions(max_depth=1)), capsys)
    assert "c" in out
    assert "deep" not in out
    assert "…" in out


def test_cycle_renders_revisit_marker(capsys):
    a = Node("alpha")
    a.attach(a)
    out = _print(build_rich_tree(a), capsys)
    assert "↺ alpha" in out


def test_labels_with_markup_are_escaped(capsys):
    out = _print(build_rich_tree(Node("[bold]x")), capsys)
    assert "[bold]x" in out


def test_show_tree(capsys):
    from revgen.utils.logging import show_tree

    show_tree(_root())
    captured = capsys.readouterr()
    assert "seq" in captured.out
    assert "lit2" in captured.out
