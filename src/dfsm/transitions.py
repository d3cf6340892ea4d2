# Copyright 2024 The dfsm authors. All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
#    1. Redistributions of source code must retain the above copyright notice,
#       this list of conditions and the following disclaimer.
#
#    2. Redistributions in binary form must reproduce the above copyright
#       notice, this list of conditions and the following disclaimer in the
#       documentation and/or other materials provided with the distribution.
#
# THIS SOFTWARE IS PROVIDED BY THE DFSM AUTHORS ``AS IS'' AND ANY EXPRESS OR
# IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED WARRANTIES OF
# MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO
# EVENT SHALL THE DFSM AUTHORS OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT,
# INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT
# LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA,
# OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
# LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING
# NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
# EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
#
# The views and conclusions contained in the software and documentation are
# those of the authors and should not be interpreted as representing official
# policies, either expressed or implied, of the dfsm authors.

from cached_property import cached_property

from dfsm.alphabet import EPSILON
from dfsm.errors import (
    DanglingStateReference,
    EpsilonNotAllowed,
    IncompleteTransitionFunction,
    NondeterministicTransition,
    UndefinedTransition,
    UnknownSymbol,
)
from dfsm.states import describe, ordered


class Transition:
    """
    An immutable ``(from_state, symbol, to_state)`` triple.

    The symbol is either a one-character string or :data:`dfsm.alphabet.EPSILON`.
    Transitions are ordered by source state, then symbol (epsilon before any
    real symbol), then target state. :meth:`TransitionFunction.encode` relies
    on this order to produce the same text for the same set of transitions.
    """

    __slots__ = ("from_state", "symbol", "to_state")

    def __init__(self, from_state, symbol, to_state):
        """
        Args:
            from_state (State): The state this transition leaves.
            symbol (str or Marker): The symbol that triggers it.
            to_state (State): The state this transition enters.
        """
        object.__setattr__(self, "from_state", from_state)
        object.__setattr__(self, "symbol", symbol)
        object.__setattr__(self, "to_state", to_state)

    def __setattr__(self, name, value):
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    def tuple(self):
        return self.from_state, self.symbol, self.to_state

    def sort_key(self):
        if self.symbol is EPSILON:
            symkey = (0, "")
        else:
            symkey = (1, self.symbol)
        return self.from_state, symkey, self.to_state

    def __eq__(self, other):
        if not isinstance(other, Transition):
            return NotImplemented
        return self.tuple() == other.tuple()

    def __lt__(self, other):
        if not isinstance(other, Transition):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __hash__(self):
        return hash(self.tuple())

    def __repr__(self):
        return "{}({!r}, {!r}, {!r})".format(self.__class__.__name__, *self.tuple())

    def encode(self):
        """
        Returns the transition as ``from,symbol,to``. The symbol is left
        empty for an epsilon transition.
        """
        symbol = "" if self.symbol is EPSILON else self.symbol
        return f"{self.from_state.encode()},{symbol},{self.to_state.encode()}"

    def pretty(self):
        symbol = "ε" if self.symbol is EPSILON else self.symbol
        return f"({self.from_state.pretty()}, {symbol}, {self.to_state.pretty()})"


class TransitionFunction:
    """
    A mapping from (state, symbol) pairs to successor states.

    The function is built once from a collection of :class:`Transition`
    objects and never changes afterwards. Building it does not check anything;
    the ``verify_*`` methods do that and are called by the machine that owns
    the function.

    Attributes:
        delta (dict): Maps each source state to a dictionary of
            ``symbol -> target state``. Treat it as read-only.

    Example:
        >>> s0, s1 = State(0), State(1)
        >>> tf = TransitionFunction([Transition(s0, "a", s1), Transition(s1, "a", s1)])
        >>> tf.apply_to(s0, "a")
        State(1)
        >>> tf.encode()
        '0,a,1;1,a,1'
    """

    def __init__(self, transitions=()):
        """
        Args:
            transitions (iterable): The :class:`Transition` objects. If two of
                them have the same source and symbol but different targets,
                the pair is remembered and :meth:`verify_total` reports it.
        """
        delta = {}
        conflicts = set()
        for t in transitions:
            trans = delta.setdefault(t.from_state, {})
            existing = trans.get(t.symbol)
            if existing is not None and existing != t.to_state:
                conflicts.add((t.from_state, t.symbol))
            trans[t.symbol] = t.to_state

        self.delta = delta
        self._conflicts = frozenset(conflicts)

    def __len__(self):
        return sum(len(trans) for trans in self.delta.values())

    def __iter__(self):
        return iter(sorted(self.transitions))

    def __eq__(self, other):
        if not isinstance(other, TransitionFunction):
            return NotImplemented
        return self.transitions == other.transitions and self._conflicts == other._conflicts

    def __hash__(self):
        return hash(self.transitions)

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.encode()!r}>"

    def apply_to(self, state, symbol):
        """
        Returns the state the machine moves to when it is in ``state`` and
        reads ``symbol``.

        Args:
            state (State): The current state.
            symbol (str): The input symbol.

        Returns:
            State: The next state.

        Raises:
            UndefinedTransition: If there is no transition for this pair.
        """
        try:
            return self.delta[state][symbol]
        except KeyError:
            raise UndefinedTransition(
                f"No transition from state {describe(state)} on symbol {symbol!r}"
            ) from None

    def maps(self, state, symbol):
        """Returns True if there is a transition from ``state`` on ``symbol``."""
        return symbol in self.delta.get(state, ())

    def labels(self, state):
        """Returns an iterator of the symbols ``state`` has transitions on."""
        return iter(self.delta.get(state, ()))

    @cached_property
    def transitions(self):
        """The transitions of this function, as a frozenset of :class:`Transition`."""
        return frozenset(
            Transition(src, label, dest)
            for src, trans in self.delta.items()
            for label, dest in trans.items()
        )

    def states(self):
        """Returns the set of every state used as a source or a target."""
        stateset = set(self.delta)
        for trans in self.delta.values():
            stateset.update(trans.values())
        return stateset

    # Validation

    def verify_transition_mapping(self, states, alphabet):
        """
        Checks that every transition uses only the given states and symbols.

        Epsilon transitions are not checked against the alphabet here; see
        :meth:`verify_no_epsilon_transitions`. The transitions may hold
        objects of any type, so they are only put in order for reporting.

        Args:
            states (set): The states of the owning machine.
            alphabet (Alphabet): The alphabet of the owning machine.

        Raises:
            DanglingStateReference: If a source or target state is not in
                ``states``.
            UnknownSymbol: If a symbol is not in ``alphabet``.
        """
        for t in ordered(self.transitions):
            if t.from_state not in states:
                raise DanglingStateReference(
                    f"Transition {t!r} leaves state {describe(t.from_state)}, "
                    "which is not a part of the state machine"
                )
            if t.symbol is not EPSILON and t.symbol not in alphabet:
                raise UnknownSymbol(
                    f"Transition {t!r} uses symbol {t.symbol!r}, "
                    "which is not a part of the machine's alphabet",
                    t.symbol,
                )
            if t.to_state not in states:
                raise DanglingStateReference(
                    f"Transition {t!r} enters state {describe(t.to_state)}, "
                    "which is not a part of the state machine"
                )

    def verify_total(self, states, alphabet):
        """
        Checks that every state has exactly one transition on every symbol.

        Raises:
            NondeterministicTransition: If a (state, symbol) pair was given
                more than one target.
            IncompleteTransitionFunction: If a (state, symbol) pair has no
                transition.
        """
        if self._conflicts:
            state, symbol = ordered(self._conflicts)[0]
            raise NondeterministicTransition(
                f"The transition function has more than one transition from state "
                f"{describe(state)} on symbol {symbol!r}"
            )

        for symbol in alphabet:
            for state in ordered(states):
                if not self.maps(state, symbol):
                    raise IncompleteTransitionFunction(
                        f"The transition function is missing a transition from state "
                        f"{describe(state)} on symbol {symbol!r}"
                    )

    def verify_no_epsilon_transitions(self):
        """
        Raises:
            EpsilonNotAllowed: If any transition is keyed on epsilon.
        """
        for src in ordered(self.delta):
            if EPSILON in self.delta[src]:
                raise EpsilonNotAllowed(
                    f"The transition function has an epsilon transition from state "
                    f"{describe(src)}"
                )

    # Output

    def encode(self):
        """Returns the sorted transitions encoded and joined with ``;``."""
        return ";".join(t.encode() for t in sorted(self.transitions))

    def pretty(self):
        return "{" + ", ".join(t.pretty() for t in sorted(self.transitions)) + "}"
