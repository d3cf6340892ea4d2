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
Deterministic finite state machines: parsing, validation, acceptance,
minimization and canonical relabeling.

The package logs through loguru and is silent by default. Call
``logger.enable("dfsm")`` to see its debug messages.
"""

from loguru import logger

from dfsm.alphabet import EPSILON, Alphabet, Marker
from dfsm.errors import (
    DanglingStateReference,
    DFSMError,
    EpsilonNotAllowed,
    IncompleteTransitionFunction,
    InvalidMachine,
    MalformedAlphabet,
    MalformedEncoding,
    NondeterministicTransition,
    UndefinedTransition,
    UnknownStateId,
    UnknownSymbol,
)
from dfsm.machine import DFSM, accepts
from dfsm.states import State, encode_state_set, parse_state_id_list
from dfsm.transitions import Transition, TransitionFunction
from dfsm.version import __version__, versionstring

logger.disable("dfsm")

__all__ = [
    "Alphabet",
    "DanglingStateReference",
    "DFSM",
    "DFSMError",
    "EPSILON",
    "EpsilonNotAllowed",
    "IncompleteTransitionFunction",
    "InvalidMachine",
    "MalformedAlphabet",
    "MalformedEncoding",
    "Marker",
    "NondeterministicTransition",
    "State",
    "Transition",
    "TransitionFunction",
    "UndefinedTransition",
    "UnknownStateId",
    "UnknownSymbol",
    "__version__",
    "accepts",
    "encode_state_set",
    "parse_state_id_list",
    "versionstring",
]
