import pytest
from dpadnav.focus.history import DEFAULT_MAX_HISTORY, FocusHistory, FocusHistoryEntry


def _entry(node, region=None, route=None):
    return FocusHistoryEntry(node=node, region=region, route=route)


def test_push_and_peek(make_node):
    history = FocusHistory()
    a, b = make_node(label="a"), make_node(label="b")

    history.push(_entry(a))
    history.push(_entry(b))

    assert history.max_size == DEFAULT_MAX_HISTORY
    assert len(history) == 2
    assert history.peek_current().node is b
    assert history.peek_previous().node is a


def test_no_duplicate_adjacent_pushes(make_node):
    history = FocusHistory()
    a, b = make_node(), make_node()

    assert history.push(_entry(a))
    assert not history.push(_entry(a))
    assert len(history) == 1

    # Non-adjacent repeats are kept
    history.push(_entry(b))
    history.push(_entry(a))
    assert [e.node for e in history.entries()] == [a, b, a]


def test_bounded_evicts_oldest(make_node):
    history = FocusHistory(max_size=3)
    nodes = [make_node(label=str(i)) for i in range(5)]
    for node in nodes:
        history.push(_entry(node))

    assert len(history) == 3
    assert [e.node for e in history.entries()] == nodes[2:]


def test_zero_capacity_keeps_nothing(make_node):
    history = FocusHistory(max_size=0)
    assert not history.push(_entry(make_node()))

    assert history.is_empty
    assert history.pop() is None


def test_negative_capacity_rejected():
    with pytest.raises(ValueError):
        FocusHistory(max_size=-1)

    with pytest.raises(ValueError):
        FocusHistory().set_max_size(-5)


def test_set_max_size_trims_oldest(make_node):
    history = FocusHistory()
    nodes = [make_node() for _ in range(6)]
    for node in nodes:
        history.push(_entry(node))

    history.set_max_size(2)

    assert history.max_size == 2
    assert [e.node for e in history.entries()] == nodes[-2:]


def test_pop_tracks_last_popped(make_node):
    history = FocusHistory()
    a, b, c = make_node(), make_node(), make_node()
    history.push(_entry(a))
    history.push(_entry(b))

    popped = history.pop()
    assert popped.node is b
    assert history.last_popped is popped

    history.clear_last_popped()
    assert history.last_popped is None

    history.pop()
    history.push(_entry(c))
    assert history.last_popped is None


def test_duplicate_push_keeps_last_popped(make_node):
    history = FocusHistory()
    a, b = make_node(), make_node()
    history.push(_entry(a))
    history.push(_entry(b))
    popped = history.pop()

    # Same node as the new top: rejected, not a distinct push
    history.push(_entry(a))
    assert history.last_popped is popped


def test_region_and_route_lookup(make_node):
    history = FocusHistory()
    tab, card_1, card_2 = make_node(), make_node(), make_node()
    history.push(_entry(card_1, region="content", route="/home"))
    history.push(_entry(tab, region="tabs", route="/home"))
    history.push(_entry(card_2, region="content", route="/details"))

    assert history.last_focus_in_region("content").node is card_2
    assert history.last_focus_in_region("tabs").node is tab
    assert history.last_focus_in_region("sidebar") is None
    assert history.last_focus_in_route("/home").node is tab
    assert history.last_focus_in_route("/settings") is None


def test_remove_stale(make_node):
    history = FocusHistory()
    a, b, c = make_node(), make_node(), make_node()
    for node in (a, b, c):
        history.push(_entry(node))

    b.detach()
    assert not history.entries()[1].is_valid
    assert "stale" in repr(history.entries()[1])

    assert history.remove_stale() == 1
    assert [e.node for e in history.entries()] == [a, c]
    assert history.remove_stale() == 0


def test_remove_stale_never_leaves_adjacent_duplicates(make_node):
    history = FocusHistory()
    a, b = make_node(), make_node()
    history.push(_entry(a, region="first"))
    history.push(_entry(b))
    history.push(_entry(a, region="second"))

    b.set_enabled(False)

    assert history.remove_stale() == 2
    entries = history.entries()
    assert len(entries) == 1
    assert entries[0].region == "second"


def test_clear(make_node):
    history = FocusHistory()
    history.push(_entry(make_node()))
    history.push(_entry(make_node()))
    history.pop()

    history.clear()
    assert history.is_empty
    assert history.last_popped is None
    assert history.peek_current() is None
    assert history.peek_previous() is None
