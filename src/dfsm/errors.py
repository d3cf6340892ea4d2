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
Exceptions raised while building and running deterministic finite state
machines.

Everything here derives from :class:`DFSMError`, so callers that only care
whether a machine could be built can catch that one class. The more specific
classes also derive from the matching built-in exception (``ValueError`` or
``LookupError``) where that makes sense.
"""


class DFSMError(Exception):
    """
    Base class for all errors raised by this package.

    Attributes:
        message (str): Explanation of the error.
    """

    def __init__(self, message):
        """
        Initialize a new error.

        Args:
            message (str): Explanation of the error.
        """
        self.message = message
        super().__init__(message)


# Encoding errors


class MalformedEncoding(DFSMError, ValueError):
    """
    Raised when a textual encoding does not follow the
    ``states/alphabet/transitions/initial/accepting`` grammar, e.g. a wrong
    number of fields, a token that is not an integer, or a transition tuple
    without exactly three parts.
    """


class MalformedAlphabet(MalformedEncoding):
    """Raised when an alphabet contains something that is not a single character."""


class UnknownStateId(DFSMError, LookupError):
    """
    Raised when the transitions, initial or accepting field of an encoding
    refers to a state id that the states field does not declare.

    Attributes:
        state_id (int): The undeclared id.
    """

    def __init__(self, state_id, field):
        self.state_id = state_id
        super().__init__(f"State id {state_id} used in the {field} field is not declared")


# Validation errors


class InvalidMachine(DFSMError):
    """
    Base class for errors that mean the components do not form a valid
    deterministic machine.
    """


class DanglingStateReference(InvalidMachine):
    """Raised when a transition, the initial state or an accepting state is not in the state set."""


class UnknownSymbol(InvalidMachine, ValueError):
    """
    Raised when a transition or an input string uses a symbol that is not in
    the machine's alphabet.

    Attributes:
        symbol: The offending symbol.
    """

    def __init__(self, message, symbol=None):
        self.symbol = symbol
        super().__init__(message)


class EpsilonNotAllowed(InvalidMachine):
    """Raised when a deterministic machine has an epsilon transition."""


class IncompleteTransitionFunction(InvalidMachine):
    """Raised when some (state, symbol) pair has no successor."""


class NondeterministicTransition(IncompleteTransitionFunction):
    """Raised when some (state, symbol) pair has more than one successor."""


# Runtime errors


class UndefinedTransition(DFSMError, LookupError):
    """
    Raised by :meth:`dfsm.transitions.TransitionFunction.apply_to` when there
    is no transition for the given state and symbol. A validated machine never
    raises this.
    """
