from dfsm import DFSM

ends_with_b = "0 1/a b/0,a,0;0,b,1;1,a,0;1,b,1/0/1"
ends_with_a = "0 1/a b/0,a,1;0,b,0;1,a,1;1,b,0/0/1"
redundant = (
    "0 1 2 3 4/a b/0,a,0;0,b,1;1,a,2;1,b,3;2,a,0;2,b,1;3,a,2;3,b,1;4,a,4;4,b,4/0/1 3 4"
)


def test_canonic_form_of_single_state():
    m = DFSM.from_encoding("5/a b/5,b,5;5,a,5/5/")
    assert m.to_canonic_form().encode() == "0/a b/0,a,0;0,b,0/0/"


def test_canonic_form_follows_traversal_order():
    m = DFSM.from_encoding(
        "10 20 30/a b/10,a,20;10,b,30;20,a,30;20,b,10;30,a,30;30,b,30/10/30"
    )
    assert m.to_canonic_form().encode() == (
        "0 1 2/a b/0,a,1;0,b,2;1,a,2;1,b,0;2,a,2;2,b,2/0/2"
    )


def test_canonic_form_drops_unreachable_states():
    m = DFSM.from_encoding("0 5/a/0,a,0;5,a,5/5/0 5")
    assert m.to_canonic_form().encode() == "0/a/0,a,0/0/0"


def test_canonic_form_uses_alphabet_order():
    m = DFSM.from_encoding("7 9/b a/7,a,7;7,b,9;9,a,7;9,b,9/7/9")
    assert m.to_canonic_form().encode() == "0 1/b a/0,a,0;0,b,1;1,a,0;1,b,1/0/1"


def test_relabeled_machines_have_same_canonic_form():
    m1 = DFSM.from_encoding(ends_with_b)
    m2 = DFSM.from_encoding("7 9/a b/7,a,7;7,b,9;9,a,7;9,b,9/7/9")
    m3 = DFSM.from_encoding(redundant)
    canonic = m1.minimize().to_canonic_form().encode()
    assert canonic == ends_with_b
    assert m2.minimize().to_canonic_form().encode() == canonic
    assert m3.minimize().to_canonic_form().encode() == canonic


def test_different_languages_have_different_canonic_forms():
    m1 = DFSM.from_encoding(ends_with_b).minimize().to_canonic_form()
    m2 = DFSM.from_encoding(ends_with_a).minimize().to_canonic_form()
    assert m1.encode() != m2.encode()


def test_equivalent_to():
    m1 = DFSM.from_encoding(ends_with_b)
    assert m1.equivalent_to(DFSM.from_encoding(redundant))
    assert m1.equivalent_to(DFSM.from_encoding("7 9/b a/7,a,7;7,b,9;9,a,7;9,b,9/7/9"))
    assert not m1.equivalent_to(DFSM.from_encoding(ends_with_a))
    assert not m1.equivalent_to(DFSM.from_encoding("0/a/0,a,0/0/0"))
