from dpadnav.focus.regions import RegionTable


def test_entry_point_highest_priority_wins(make_node):
    table = RegionTable()
    low = make_node(label="low")
    high = make_node(label="high")
    table.register_node("content", low, is_entry_point=True, priority=1)
    table.register_node("content", high, is_entry_point=True, priority=5)

    assert table.entry_point_for("content") is high
    assert [e.node for e in table.entry_points_of("content")] == [high, low]


def test_equal_priority_keeps_registration_order(make_node):
    table = RegionTable()
    first = make_node(label="first")
    second = make_node(label="second")
    table.register_node("content", first, is_entry_point=True)
    table.register_node("content", second, is_entry_point=True)

    assert table.entry_point_for("content") is first


def test_reregistering_entry_point_updates_priority(make_node):
    table = RegionTable()
    a = make_node(label="a")
    b = make_node(label="b")
    table.register_node("content", a, is_entry_point=True, priority=5)
    table.register_node("content", b, is_entry_point=True, priority=3)
    table.register_node("content", a, is_entry_point=True, priority=1)

    entries = table.entry_points_of("content")
    assert len(entries) == 2
    assert table.entry_point_for("content") is b


def test_falls_back_to_first_live_member(make_node):
    table = RegionTable()
    first = make_node(label="first")
    second = make_node(label="second")
    entry = make_node(label="entry")
    table.register_node("grid", first)
    table.register_node("grid", second)
    table.register_node("grid", entry, is_entry_point=True)

    entry.set_enabled(False)
    assert table.entry_point_for("grid") is first

    first.visible = False
    assert table.entry_point_for("grid") is second


def test_empty_or_unknown_region(make_node):
    table = RegionTable()
    dead = make_node()
    table.register_node("gone", dead)
    dead.detach()

    assert table.entry_point_for("gone") is None
    assert table.entry_point_for("never-registered") is None
    assert table.members_of("never-registered") == []


def test_node_moves_between_regions(make_node):
    table = RegionTable()
    node = make_node()
    table.register_node("a", node, is_entry_point=True)
    table.register_node("b", node)

    assert table.region_of(node) == "b"
    assert node.region == "b"
    assert table.members_of("a") == []
    assert table.entry_points_of("a") == []
    assert table.regions() == ["a", "b"]
    assert "a" in table


def test_cleanup_reports_removed_members(make_node):
    table = RegionTable()
    live = make_node()
    stale = make_node()
    table.register_node("row", live)
    table.register_node("row", stale, is_entry_point=True)
    stale.detach()

    assert table.cleanup() == 1
    assert table.members_of("row") == [live]
    assert table.entry_points_of("row") == []
    assert table.region_of(stale) is None
