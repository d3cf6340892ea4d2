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

import re
from functools import total_ordering

from dfsm.errors import MalformedEncoding

_id_pattern = re.compile("-?[0-9]+")


@total_ordering
class State:
    """
    A state of a finite state machine, identified by an integer.

    States compare, sort and hash by their id alone, so they can be used as
    dictionary keys and set members. The id cannot be changed after the state
    is created.

    Example:
        >>> State(3) == State(3)
        True
        >>> sorted([State(2), State(0)])
        [State(0), State(2)]
    """

    __slots__ = ("_id",)

    def __init__(self, id):
        if isinstance(id, bool) or not isinstance(id, int):
            raise TypeError(f"State id must be an int, not {id!r}")
        object.__setattr__(self, "_id", id)

    def __setattr__(self, name, value):
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    @property
    def id(self):
        return self._id

    def __eq__(self, other):
        if not isinstance(other, State):
            return NotImplemented
        return self._id == other._id

    def __lt__(self, other):
        if not isinstance(other, State):
            return NotImplemented
        return self._id < other._id

    def __hash__(self):
        return hash(self._id)

    def __repr__(self):
        return f"{self.__class__.__name__}({self._id})"

    def encode(self):
        """Returns the id as a decimal string."""
        return str(self._id)

    pretty = encode


def describe(state):
    """Renders a state for an error message, even if it is not a :class:`State`."""
    if isinstance(state, State):
        return state.encode()
    return repr(state)


def ordered(items):
    """
    Returns ``items`` as a sorted list. Items that cannot be compared with
    each other, such as states mixed with other objects, are sorted by their
    ``repr`` instead.
    """
    items = list(items)
    try:
        return sorted(items)
    except TypeError:
        return sorted(items, key=repr)


def is_state_id(token):
    """Returns True if ``token`` is ASCII digits with an optional leading ``-``."""
    return _id_pattern.fullmatch(token) is not None


def parse_state_id_list(text):
    """
    Parses a whitespace separated list of state ids.

    Args:
        text (str): The text to parse, e.g. ``"0 1 2"``. Blank text gives an
            empty list.

    Returns:
        list: The ids as ints, in the order they appear.

    Raises:
        MalformedEncoding: If a token is not an integer.
    """
    ids = []
    for token in text.split():
        if not is_state_id(token):
            raise MalformedEncoding(f"State id {token!r} is not an integer")
        ids.append(int(token))
    return ids


def encode_state_set(states):
    """
    Encodes a collection of states as their ids, sorted and space separated.

    Sorting makes the result independent of set iteration order.
    """
    return " ".join(state.encode() for state in sorted(states))


def pretty_state_set(states):
    return "{" + ", ".join(state.pretty() for state in sorted(states)) + "}"
