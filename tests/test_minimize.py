from itertools import product

import pytest
from dfsm import DFSM, State, Transition
from loguru import logger

ends_with_b = "0 1/a b/0,a,0;0,b,1;1,a,0;1,b,1/0/1"

# Same language as ends_with_b: 2 duplicates 0, 3 duplicates 1, 4 is unreachable
redundant = (
    "0 1 2 3 4/a b/0,a,0;0,b,1;1,a,2;1,b,3;2,a,0;2,b,1;3,a,2;3,b,1;4,a,4;4,b,4/0/1 3 4"
)


def div3_machine():
    # Binary numbers divisible by 3, with every remainder state doubled:
    # states 0-2 move to the copies 3-5 and back.
    states = [State(n) for n in range(6)]
    transitions = []
    for state in states:
        r = state.id % 3
        offset = 3 if state.id < 3 else 0
        for bit in "01":
            dest = (2 * r + int(bit)) % 3 + offset
            transitions.append(Transition(state, bit, states[dest]))
    return DFSM(states, "01", transitions, states[0], [states[0], states[3]])


def strings(alphabet, maxlen):
    for length in range(maxlen + 1):
        for chars in product(alphabet, repeat=length):
            yield "".join(chars)


def test_compute():
    m = DFSM.from_encoding(ends_with_b)
    assert m.compute("aab")
    assert not m.compute("bba")
    assert not m.compute("")
    assert m.compute(["b"])


def test_reachable_states():
    m = DFSM.from_encoding(redundant)
    assert m.reachable_states == frozenset(State(n) for n in range(4))


def test_remove_unreachable_states():
    m = DFSM.from_encoding(redundant)
    pruned = m.remove_unreachable_states()
    assert pruned.encode() == (
        "0 1 2 3/a b/0,a,0;0,b,1;1,a,2;1,b,3;2,a,0;2,b,1;3,a,2;3,b,1/0/1 3"
    )
    assert pruned.initial == m.initial
    assert pruned.alphabet == m.alphabet


def test_minimize():
    m = DFSM.from_encoding(redundant)
    assert m.minimize().encode() == ends_with_b


def test_minimize_merges_equivalent_states():
    m = div3_machine()
    assert len(m) == 6
    minimal = m.minimize()
    assert len(minimal) == 3
    assert minimal.states == frozenset([State(0), State(1), State(2)])
    assert minimal.accepting == frozenset([State(0)])


def test_minimize_all_accepting():
    m = DFSM.from_encoding("0 1 2/a/0,a,1;1,a,2;2,a,0/0/0 1 2")
    assert m.minimize().encode() == "0/a/0,a,0/0/0"


def test_minimize_no_accepting():
    m = DFSM.from_encoding("3 4/a b/3,a,4;3,b,3;4,a,3;4,b,4/4/")
    assert m.minimize().encode() == "3/a b/3,a,3;3,b,3/3/"


def test_minimize_is_idempotent():
    for m in (DFSM.from_encoding(redundant), div3_machine()):
        once = m.minimize()
        twice = once.minimize()
        assert twice.to_canonic_form().encode() == once.to_canonic_form().encode()
        assert len(twice) == len(once)


@pytest.mark.parametrize("machine", [DFSM.from_encoding(redundant), div3_machine()])
def test_language_is_preserved(machine):
    minimal = machine.minimize()
    pruned = machine.remove_unreachable_states()
    for s in strings(list(machine.alphabet), 7):
        expected = machine.compute(s)
        assert minimal.compute(s) == expected
        assert pruned.compute(s) == expected


def test_div3_language():
    m = div3_machine()
    for s in strings("01", 8):
        assert m.compute(s) == (int(s or "0", 2) % 3 == 0)


def test_algorithms_do_not_change_receiver():
    m = DFSM.from_encoding(redundant)
    before = m.encode()
    derived = [m.remove_unreachable_states(), m.minimize(), m.to_canonic_form()]
    assert m.encode() == before
    assert len(m) == 5
    for d in derived:
        assert d is not m
        assert d.transition_function is not m.transition_function


def test_minimize_logs_rounds():
    messages = []
    logger.enable("dfsm")
    handler_id = logger.add(messages.append, level="DEBUG", format="{message}")
    try:
        DFSM.from_encoding(redundant).minimize()
    finally:
        logger.remove(handler_id)
        logger.disable("dfsm")

    assert any("Refinement round 1" in m for m in messages)
    assert any("4 of 5 states are reachable" in m for m in messages)
