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

"""
Deterministic finite state machines.

A :class:`DFSM` is built either from its components or from a single line of
text (see :meth:`DFSM.from_encoding`), is validated once when it is built, and
never changes afterwards. The algorithms that "change" a machine
(:meth:`DFSM.remove_unreachable_states`, :meth:`DFSM.minimize` and
:meth:`DFSM.to_canonic_form`) return new machines.
"""

import itertools
import sys

from cached_property import cached_property
from loguru import logger

from dfsm.alphabet import (
    EPSILON,
    FIELD_SEPARATOR,
    TRANSITION_SEPARATOR,
    TUPLE_SEPARATOR,
    Alphabet,
    is_symbol,
)
from dfsm.errors import (
    DanglingStateReference,
    InvalidMachine,
    MalformedEncoding,
    UnknownStateId,
    UnknownSymbol,
)
from dfsm.states import (
    State,
    encode_state_set,
    is_state_id,
    ordered,
    parse_state_id_list,
    pretty_state_set,
)
from dfsm.transitions import Transition, TransitionFunction


class DFSM:
    """
    Deterministic Finite State Machine.

    Attributes:
        states (frozenset): The states of the machine.
        alphabet (Alphabet): The input alphabet.
        transition_function (TransitionFunction): The total transition
            function.
        initial (State): The initial state.
        accepting (frozenset): The accepting states, a subset of ``states``.

    Example:
        >>> m = DFSM.from_encoding("0 1/a b/0,a,0;0,b,1;1,a,0;1,b,1/0/1")
        >>> m.compute("aab")
        True
        >>> m.compute("bba")
        False
        >>> m.encode()
        '0 1/a b/0,a,0;0,b,1;1,a,0;1,b,1/0/1'
    """

    def __init__(self, states, alphabet, transitions, initial, accepting=()):
        """
        Builds a machine from its components and validates it.

        Args:
            states (iterable): The :class:`State` objects of the machine.
            alphabet (Alphabet or iterable): The alphabet, or the symbols to
                build one from.
            transitions (TransitionFunction or iterable): The transition
                function, or the :class:`Transition` objects to build one from.
            initial (State): The initial state; must be one of ``states``.
            accepting (iterable, optional): The accepting states; each must be
                one of ``states``. Defaults to no accepting states.

        Raises:
            DanglingStateReference: If the initial state, an accepting state
                or a transition refers to a state outside ``states``.
            UnknownSymbol: If a transition uses a symbol outside the alphabet.
            EpsilonNotAllowed: If there is an epsilon transition.
            IncompleteTransitionFunction: If some state lacks a transition on
                some symbol, or has more than one.
        """
        if not isinstance(alphabet, Alphabet):
            alphabet = Alphabet(alphabet)
        if not isinstance(transitions, TransitionFunction):
            transitions = TransitionFunction(transitions)

        self._states = frozenset(states)
        self._alphabet = alphabet
        self._transitions = transitions
        self._initial = initial
        self._accepting = frozenset(accepting)

        self._validate()

    @classmethod
    def _assemble(cls, states, alphabet, transitions, initial, accepting):
        # Builds a machine without validation. Only for algorithms whose
        # output is consistent by construction.
        machine = cls.__new__(cls)
        machine._states = frozenset(states)
        machine._alphabet = alphabet
        machine._transitions = transitions
        machine._initial = initial
        machine._accepting = frozenset(accepting)
        return machine

    @classmethod
    def from_encoding(cls, encoding):
        """
        Builds a machine from its string encoding.

        Here is an example of the encoding::

            0 1/a b/0 , a , 0; 0,b, 1 ;1, a, 0 ; 1, b, 1/0/ 1

        This is a machine with two states (0 and 1), the alphabet ``{a, b}``,
        four transitions, initial state 0 and the single accepting state 1.
        In general the format is::

            <states> / <alphabet> / <transitions> / <initial state> / <accepting states>

        where ``<states>`` and ``<accepting states>`` are whitespace separated
        integers, ``<alphabet>`` is whitespace separated characters,
        ``<transitions>`` is ``from,symbol,to`` tuples separated by ``;``, and
        ``<initial state>`` is a single integer. Whitespace around fields and
        tokens is ignored. The accepting field may be empty or left out.

        Args:
            encoding (str): The string encoding.

        Returns:
            DFSM: The validated machine.

        Raises:
            MalformedEncoding: If the text does not follow the format.
            UnknownStateId: If an id is used without being declared in the
                states field.
            InvalidMachine: If the parsed components do not form a valid
                deterministic machine (see :meth:`__init__`).
        """
        fields = [field.strip() for field in encoding.split(FIELD_SEPARATOR)]
        if len(fields) == 4:
            fields.append("")
        if len(fields) != 5:
            raise MalformedEncoding(
                f"Expected 5 fields separated by {FIELD_SEPARATOR!r}, found {len(fields)}"
            )
        states_field, alphabet_field, trans_field, initial_field, accepting_field = fields

        states = {sid: State(sid) for sid in parse_state_id_list(states_field)}

        def lookup(sid, field):
            try:
                return states[sid]
            except KeyError:
                raise UnknownStateId(sid, field) from None

        alphabet = Alphabet.parse(alphabet_field)

        transitions = []
        for src, label, dest in _parse_tuples(trans_field):
            transitions.append(
                Transition(lookup(src, "transitions"), label, lookup(dest, "transitions"))
            )

        initial_ids = parse_state_id_list(initial_field)
        if len(initial_ids) != 1:
            raise MalformedEncoding(
                f"The initial field must hold exactly one state id, not {initial_field!r}"
            )
        initial = lookup(initial_ids[0], "initial")

        accepting = [lookup(sid, "accepting") for sid in parse_state_id_list(accepting_field)]

        logger.debug(
            "Parsed {} states, {} symbols, {} transitions",
            len(states),
            len(alphabet),
            len(transitions),
        )
        return cls(states.values(), alphabet, transitions, initial, accepting)

    def _validate(self):
        try:
            if self._initial not in self._states:
                raise DanglingStateReference(
                    f"The initial state {self._initial!r} is not a part of the state machine"
                )
            stray = self._accepting - self._states
            if stray:
                raise DanglingStateReference(
                    f"The accepting state {ordered(stray)[0]!r} is not a part of the state machine"
                )

            transitions = self._transitions
            transitions.verify_no_epsilon_transitions()
            transitions.verify_transition_mapping(self._states, self._alphabet)
            transitions.verify_total(self._states, self._alphabet)
        except InvalidMachine as e:
            logger.debug("Rejected machine ({}): {}", e.__class__.__name__, e.message)
            raise

    # Components

    @property
    def states(self):
        return self._states

    @property
    def alphabet(self):
        return self._alphabet

    @property
    def transition_function(self):
        return self._transitions

    @property
    def initial(self):
        return self._initial

    @property
    def accepting(self):
        return self._accepting

    def __len__(self):
        return len(self._states)

    def __eq__(self, other):
        if not isinstance(other, DFSM):
            return NotImplemented
        return (
            self._initial == other._initial
            and self._states == other._states
            and self._accepting == other._accepting
            and self._alphabet == other._alphabet
            and self._transitions == other._transitions
        )

    def __hash__(self):
        return hash(self.encode())

    def __repr__(self):
        return f"{self.__class__.__name__}.from_encoding({self.encode()!r})"

    # Output

    def encode(self):
        """
        Encodes this machine as a string in the format read by
        :meth:`from_encoding`.

        State sets and transitions are written sorted, so the same machine
        always gives the same text.
        """
        return FIELD_SEPARATOR.join(
            [
                encode_state_set(self._states),
                self._alphabet.encode(),
                self._transitions.encode(),
                self._initial.encode(),
                encode_state_set(self._accepting),
            ]
        )

    def pretty(self):
        """
        Returns a set notation description of this machine, e.g.::

            K = {0, 1}
            Σ = {a, b}
            δ = {(0, a, 0), (0, b, 1), (1, a, 0), (1, b, 1)}
            s = 0
            A = {1}
        """
        return "\n".join(
            [
                f"K = {pretty_state_set(self._states)}",
                f"Σ = {self._alphabet.pretty()}",
                f"δ = {self._transitions.pretty()}",
                f"s = {self._initial.pretty()}",
                f"A = {pretty_state_set(self._accepting)}",
            ]
        )

    def dump(self, stream=sys.stdout):
        """
        Prints the set notation description of this machine to ``stream``.

        Args:
            stream (file-like object, optional): Defaults to sys.stdout.
        """
        print(self.pretty(), file=stream)

    # Running

    def compute(self, string):
        """
        Returns True if and only if ``string`` is in this machine's language.

        Args:
            string (str or iterable): The input symbols.

        Returns:
            bool: True if the machine ends in an accepting state.

        Raises:
            UnknownSymbol: If ``string`` contains a symbol that is not in the
                alphabet.
        """
        symbols = list(string)
        for symbol in symbols:
            if symbol not in self._alphabet:
                raise UnknownSymbol(
                    f"Input symbol {symbol!r} is not a part of the machine's alphabet",
                    symbol,
                )

        state = self._initial
        for symbol in symbols:
            state = self._transitions.apply_to(state, symbol)
        return state in self._accepting

    # Algorithms

    @cached_property
    def reachable_states(self):
        """
        The states that can be reached from the initial state, as a frozenset.

        Computed by expanding the frontier one step at a time until no new
        state is added.
        """
        transitions = self._transitions
        reached = set()
        frontier = {self._initial}
        while frontier:
            reached.update(frontier)
            frontier = {
                transitions.apply_to(state, symbol)
                for state in frontier
                for symbol in self._alphabet
            } - reached

        logger.debug("{} of {} states are reachable", len(reached), len(self._states))
        return frozenset(reached)

    def remove_unreachable_states(self):
        """
        Returns a machine with the same language and no unreachable states.

        Returns:
            DFSM: A new machine over the reachable states of this one, with
            the same alphabet and initial state.
        """
        reachable = self.reachable_states
        transitions = TransitionFunction(
            t
            for t in self._transitions.transitions
            if t.from_state in reachable and t.to_state in reachable
        )
        return self._assemble(
            reachable,
            self._alphabet,
            transitions,
            self._initial,
            self._accepting & reachable,
        )

    def minimize(self):
        """
        Returns a machine with the same language and a minimal number of
        states.

        This method performs the following steps:

        1. Removes unreachable states.
        2. Partitions the remaining states into equivalence classes.
        3. Maps every state to the representative of its class.
        4. Applies the mapping to the transitions, the initial state and the
           accepting states.

        Returns:
            DFSM: A new, minimal machine.
        """
        return self.remove_unreachable_states()._minimize_reachable()

    def _minimize_reachable(self):
        rep = self._equivalent_states()

        transitions = TransitionFunction(
            {
                Transition(rep[t.from_state], t.symbol, rep[t.to_state])
                for t in self._transitions.transitions
            }
        )
        return self._assemble(
            set(rep.values()),
            self._alphabet,
            transitions,
            rep[self._initial],
            {rep[state] for state in self._accepting},
        )

    def _equivalent_states(self):
        # Moore's partition refinement. Returns a dict mapping each state to
        # the representative of its equivalence class.
        #
        # Blocks are identified by integer ids. In every round a state joins
        # the block whose representative was in the same block as the state
        # in the previous round and, on every symbol, moves to the same
        # previous block as the state does. Otherwise it opens a new block
        # with itself as the representative. Visiting states in id order makes
        # each representative the smallest member of its block.
        ordered = sorted(self._states)
        alphabet = list(self._alphabet)
        apply_to = self._transitions.apply_to

        # Initial partition: accepting states and non-accepting states
        accepting = [s for s in ordered if s in self._accepting]
        rejecting = [s for s in ordered if s not in self._accepting]
        block = {}
        rep = {}
        for blocknum, members in enumerate((accepting, rejecting)):
            for state in members:
                block[state] = blocknum
                rep[state] = members[0]

        for roundnum in itertools.count(1):
            prev_block = block
            prev_rep = rep
            block = {}
            rep = {}
            # Signature of a block's representative -> (block id, representative)
            blocks = {}

            for state in ordered:
                signature = (prev_block[state],) + tuple(
                    prev_block[apply_to(state, symbol)] for symbol in alphabet
                )
                if signature not in blocks:
                    blocks[signature] = (len(blocks), state)
                block[state], rep[state] = blocks[signature]

            logger.debug("Refinement round {}: {} blocks", roundnum, len(blocks))
            if rep == prev_rep:
                return rep

    def to_canonic_form(self):
        """
        Returns a canonic version of this machine.

        The states are renumbered 0, 1, 2, ... in the order a depth first
        traversal from the initial state discovers them, taking the symbols
        in alphabet order. Only the states the traversal reaches are kept.
        The canonic encodings of two minimal machines that recognize the same
        language over the same alphabet are identical.

        Returns:
            DFSM: The renumbered machine.
        """
        c = itertools.count()
        mapping = {self._initial: State(next(c))}
        transitions = set()
        stack = [self._initial]
        while stack:
            src = stack.pop()
            for symbol in self._alphabet:
                dest = self._transitions.apply_to(src, symbol)
                if dest not in mapping:
                    mapping[dest] = State(next(c))
                    stack.append(dest)
                transitions.add(Transition(mapping[src], symbol, mapping[dest]))

        logger.debug("Renumbered {} states", len(mapping))
        return self._assemble(
            mapping.values(),
            self._alphabet,
            TransitionFunction(transitions),
            mapping[self._initial],
            {mapping[s] for s in self._accepting if s in mapping},
        )

    def equivalent_to(self, other):
        """
        Returns True if this machine and ``other`` recognize the same
        language.

        Both machines are minimized and put in canonic form, taking the
        symbols in this machine's alphabet order, and their encodings are
        compared.

        Args:
            other (DFSM): The machine to compare with.

        Returns:
            bool: True if the languages are equal. Machines whose alphabets
            hold different symbols are never equivalent.
        """
        if self._alphabet.symbols() != other.alphabet.symbols():
            return False
        if other.alphabet != self._alphabet:
            other = self._assemble(
                other.states,
                self._alphabet,
                other.transition_function,
                other.initial,
                other.accepting,
            )
        mine = self.minimize().to_canonic_form().encode()
        theirs = other.minimize().to_canonic_form().encode()
        return mine == theirs


def _parse_tuples(text):
    # Yields (from id, symbol, to id) for each tuple in the transitions field
    if not text:
        return
    for item in text.split(TRANSITION_SEPARATOR):
        parts = [part.strip() for part in item.split(TUPLE_SEPARATOR)]
        if len(parts) != 3:
            raise MalformedEncoding(
                f"Transition {item.strip()!r} is not of the form from{TUPLE_SEPARATOR}"
                f"symbol{TUPLE_SEPARATOR}to"
            )
        src, label, dest = parts
        if not label:
            label = EPSILON
        elif not is_symbol(label):
            raise MalformedEncoding(
                f"Transition {item.strip()!r} has symbol {label!r}, "
                "which is not a single character"
            )
        yield _parse_id(src, item), label, _parse_id(dest, item)


def _parse_id(token, item):
    if not is_state_id(token):
        raise MalformedEncoding(
            f"Transition {item.strip()!r} has state id {token!r}, which is not an integer"
        )
    return int(token)


def accepts(encoding, string):
    """
    Builds a machine from ``encoding`` and returns whether it accepts
    ``string``.

    Example:
        >>> accepts("0 1/a b/0,a,0;0,b,1;1,a,0;1,b,1/0/1", "aab")
        True
    """
    return DFSM.from_encoding(encoding).compute(string)
