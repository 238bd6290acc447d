import remap
from conftest import E, T

def test_apply_and_undo(qwerty):
    before = qwerty.fingerprint()
    edit = remap.swap(E, T) + remap.swap(T, 43)
    edit.apply(qwerty)
    assert qwerty.position("a") == (T, False)
    edit.undo(qwerty)
    assert qwerty.fingerprint() == before

def test_negation(qwerty):
    edit = remap.swap(E, T) + remap.swap(T, 43)
    assert list(-edit) == [(T, 43), (E, T)]

def test_describe(qwerty):
    assert remap.swap(E, T).describe(qwerty) == "e <-> t"
    assert remap.Remap().describe(qwerty) == "no-op"
    assert str(remap.swap(E, T)) == f"{E} <-> {T}"
