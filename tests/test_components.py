import pytest
from dfsm import (
    DFSM,
    EPSILON,
    Alphabet,
    MalformedAlphabet,
    MalformedEncoding,
    State,
    Transition,
    TransitionFunction,
    UndefinedTransition,
    encode_state_set,
    parse_state_id_list,
)
from dfsm.states import ordered, pretty_state_set

s0, s1, s2 = State(0), State(1), State(2)


def test_alphabet_parse():
    alphabet = Alphabet.parse(" a  b a\tc ")
    assert list(alphabet) == ["a", "b", "c"]
    assert len(alphabet) == 3
    assert "b" in alphabet
    assert "d" not in alphabet
    assert alphabet.encode() == "a b c"
    assert alphabet.pretty() == "{a, b, c}"


def test_alphabet_order_is_stable():
    alphabet = Alphabet.parse("z y x")
    assert list(alphabet) == list(alphabet) == ["z", "y", "x"]
    assert alphabet != Alphabet.parse("x y z")
    assert alphabet.symbols() == Alphabet.parse("x y z").symbols()
    assert alphabet == Alphabet("zyx")


def test_empty_alphabet():
    alphabet = Alphabet.parse("   ")
    assert len(alphabet) == 0
    assert alphabet.encode() == ""
    assert alphabet.pretty() == "{}"


def test_malformed_alphabet():
    with pytest.raises(MalformedAlphabet):
        Alphabet.parse("a bc")
    with pytest.raises(MalformedAlphabet):
        Alphabet(["a", EPSILON])
    with pytest.raises(MalformedEncoding):
        Alphabet([1])


def test_state():
    assert State(3) == State(3)
    assert State(3) != State(4)
    assert State(1) < State(2) <= State(2)
    assert len({State(1), State(1), State(2)}) == 2
    assert State(12).encode() == "12"
    assert repr(State(5)) == "State(5)"


def test_state_is_immutable():
    state = State(1)
    with pytest.raises(AttributeError):
        state.id = 2
    with pytest.raises(AttributeError):
        state._id = 2


def test_state_id_must_be_int():
    with pytest.raises(TypeError):
        State("1")
    with pytest.raises(TypeError):
        State(True)


def test_parse_state_id_list():
    assert parse_state_id_list(" 3 1  2 ") == [3, 1, 2]
    assert parse_state_id_list("") == []
    with pytest.raises(MalformedEncoding):
        parse_state_id_list("1 x")


def test_encode_state_set():
    states = {State(10), State(2), State(0)}
    assert encode_state_set(states) == "0 2 10"
    assert encode_state_set(set()) == ""
    assert pretty_state_set(states) == "{0, 2, 10}"


def test_transition_order():
    ts = [
        Transition(s1, "a", s0),
        Transition(s0, "b", s0),
        Transition(s0, "a", s1),
        Transition(s0, EPSILON, s1),
        Transition(s0, "a", s0),
    ]
    assert [t.encode() for t in sorted(ts)] == [
        "0,,1",
        "0,a,0",
        "0,a,1",
        "0,b,0",
        "1,a,0",
    ]


def test_transition_value_semantics():
    t = Transition(s0, "a", s1)
    assert t == Transition(State(0), "a", State(1))
    assert len({t, Transition(s0, "a", s1)}) == 1
    assert t.pretty() == "(0, a, 1)"
    assert Transition(s0, EPSILON, s1).pretty() == "(0, ε, 1)"
    with pytest.raises(AttributeError):
        t.symbol = "b"


def test_transition_function():
    tf = TransitionFunction(
        [Transition(s1, "a", s0), Transition(s0, "b", s1), Transition(s0, EPSILON, s1)]
    )
    assert tf.apply_to(s0, "b") == s1
    assert tf.maps(s0, "b")
    assert not tf.maps(s0, "a")
    assert not tf.maps(s2, "a")
    assert len(tf) == 3
    assert tf.encode() == "0,,1;0,b,1;1,a,0"
    assert tf.pretty() == "{(0, ε, 1), (0, b, 1), (1, a, 0)}"
    assert tf.states() == {s0, s1}
    assert sorted(tf.labels(s0), key=repr) == sorted(["b", EPSILON], key=repr)


def test_transitions_round_trip():
    ts = {Transition(s0, "a", s1), Transition(s1, "a", s1), Transition(s1, "b", s0)}
    tf = TransitionFunction(ts)
    assert tf.transitions == frozenset(ts)
    assert list(tf) == sorted(ts)
    assert TransitionFunction(tf.transitions) == tf


def test_apply_to_undefined():
    tf = TransitionFunction([Transition(s0, "a", s0)])
    with pytest.raises(UndefinedTransition):
        tf.apply_to(s0, "b")
    with pytest.raises(UndefinedTransition):
        tf.apply_to(s1, "a")
    with pytest.raises(LookupError):
        tf.apply_to(s1, "a")


@pytest.mark.parametrize("symbol", ["/", ";", ",", " ", "\t", "\n"])
def test_alphabet_rejects_delimiters_and_whitespace(symbol):
    with pytest.raises(MalformedAlphabet):
        Alphabet(["a", symbol])


def test_machine_over_delimiter_symbol_is_rejected():
    with pytest.raises(MalformedAlphabet):
        DFSM([s0], [","], [Transition(s0, ",", s0)], s0)


@pytest.mark.parametrize("text", ["+3", "1_0", "١", "0x1", "--1", "1.0"])
def test_parse_state_id_list_needs_plain_integers(text):
    with pytest.raises(MalformedEncoding):
        parse_state_id_list(text)


def test_parse_negative_state_ids():
    assert parse_state_id_list("-2 7 -0") == [-2, 7, 0]


def test_ordered_falls_back_to_repr():
    assert ordered([State(2), State(1)]) == [State(1), State(2)]
    assert ordered([State(1), 1]) == sorted([State(1), 1], key=repr)
