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

from dfsm.errors import MalformedAlphabet

# Marker constants


class Marker:
    """
    Represents a marker object.

    Markers are named sentinels that can never be confused with a real input
    symbol, since every real symbol is a one-character string.

    Attributes:
        name (str): The name of the marker.

    Example:
        >>> marker = Marker("start")
        >>> marker.name
        'start'
        >>> repr(marker)
        '<start>'
    """

    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return f"<{self.name}>"


EPSILON = Marker("EPSILON")

# Delimiters of the machine encoding; they cannot be symbols
FIELD_SEPARATOR = "/"
TRANSITION_SEPARATOR = ";"
TUPLE_SEPARATOR = ","
RESERVED = frozenset(FIELD_SEPARATOR + TRANSITION_SEPARATOR + TUPLE_SEPARATOR)


def is_symbol(symbol):
    """
    Returns True if ``symbol`` can be used as an input symbol: a single
    character that is neither whitespace nor one of the encoding delimiters.
    """
    return (
        isinstance(symbol, str)
        and len(symbol) == 1
        and not symbol.isspace()
        and symbol not in RESERVED
    )


class Alphabet:
    """
    An ordered set of input symbols.

    The iteration order is the order in which the symbols were first given.
    Algorithms walk the alphabet repeatedly and rely on getting the same
    order every time, and :meth:`encode` writes the symbols back out in that
    order.

    Example:
        >>> alphabet = Alphabet.parse("a b a c")
        >>> list(alphabet)
        ['a', 'b', 'c']
        >>> "b" in alphabet
        True
        >>> alphabet.encode()
        'a b c'
    """

    def __init__(self, symbols=()):
        """
        Args:
            symbols (iterable): One-character strings. Repeated symbols are
                kept only once, at their first position.

        Raises:
            MalformedAlphabet: If a symbol is not a one-character string, or
                is whitespace or one of ``/``, ``;`` and ``,``.
        """
        ordered = {}
        for symbol in symbols:
            if not is_symbol(symbol):
                raise MalformedAlphabet(
                    f"Alphabet symbol {symbol!r} is not a usable single character"
                )
            ordered.setdefault(symbol, None)
        self._symbols = tuple(ordered)
        self._lookup = frozenset(self._symbols)

    @classmethod
    def parse(cls, text):
        """
        Parses a whitespace separated list of symbols.

        Args:
            text (str): The alphabet field of an encoding. Blank text gives
                the empty alphabet.

        Returns:
            Alphabet: The parsed alphabet.

        Raises:
            MalformedAlphabet: If a token is longer than one character.
        """
        return cls(text.split())

    def __contains__(self, symbol):
        return symbol in self._lookup

    def __iter__(self):
        return iter(self._symbols)

    def __len__(self):
        return len(self._symbols)

    def __eq__(self, other):
        return isinstance(other, Alphabet) and self._symbols == other._symbols

    def __hash__(self):
        return hash(self._symbols)

    def __repr__(self):
        return f"{self.__class__.__name__}({list(self._symbols)!r})"

    def symbols(self):
        """Returns the symbols as a frozenset, ignoring their order."""
        return self._lookup

    def encode(self):
        return " ".join(self._symbols)

    def pretty(self):
        return "{" + ", ".join(self._symbols) + "}"
