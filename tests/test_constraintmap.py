import constraintmap
from conftest import E, T

def test_letters(letters):
    assert len(letters) == 78
    assert len(letters.free_keys()) == 26
    assert not letters.is_pinned(E)
    assert letters.is_pinned(71) # space

def test_swap_needs_both_keys_free(letters):
    assert letters.is_swap_legal(E, T)
    assert not letters.is_swap_legal(E, 71)
    assert not letters.is_swap_legal(71, E)

def test_frozen():
    frozen = constraintmap.get_constraintmap("frozen")
    assert len(frozen) == 78
    assert frozen.free_keys() == []

def test_pin_all_except():
    cm = constraintmap.pin_all_except([E, T], 78)
    assert cm.free_keys() == [E, T]
    assert cm.name == "custom"

def test_available_maps():
    assert {"letters", "letters-punctuation", "frozen"} <= set(
        constraintmap.list_constraintmaps())
