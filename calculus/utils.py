#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Copyright 2026 The calculus authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#

"""
calculus.utils
==============
**Errors, warnings and small helpers shared by the parser, evaluator and renderer**

All exceptions raised by calculus derive from :py:class:`CalculusError` and carry an :py:class:`ErrorKind` in their
``kind`` attribute, so callers can either catch them by their builtin base class (``SyntaxError``, ``LookupError``,
...) or dispatch on the kind:

.. code-block:: python

    try:
        expr.calculate()
    except CalculusError as e:
        match e.kind:
            case ErrorKind.UNBOUND_VARIABLE:
                ...
"""

from enum import Enum
import numbers


class ErrorKind(Enum):
    LEXICAL = 'lexical'
    SYNTAX = 'syntax'
    LOOKUP = 'lookup'
    UNBOUND_VARIABLE = 'unbound_variable'
    UNSUPPORTED_OPERATION = 'unsupported_operation'
    COMMAND_UNAVAILABLE = 'command_unavailable'


class CalculusError(Exception):
    """ Base class of all errors raised by calculus """
    kind = None


class ExpressionSyntaxError(CalculusError, SyntaxError):
    """ Malformed expression, e.g. unbalanced parentheses or more than one equals sign. """
    kind = ErrorKind.SYNTAX


class LexicalError(ExpressionSyntaxError):
    """ Unrecognized character sequence in the expression source. """
    kind = ErrorKind.LEXICAL

    def __init__(self, message, pos=None, context=''):
        super().__init__(message)
        self.pos = pos
        self.context = context


class UnknownVariableError(CalculusError, LookupError):
    """ Access to a variable that does not occur in the expression. """
    kind = ErrorKind.LOOKUP

    def __init__(self, name):
        super().__init__(f'No such variable defined: {name}')
        self.name = name


class UnboundVariableError(CalculusError, ValueError):
    """ Numeric evaluation attempted while some variables do not have a value yet. """
    kind = ErrorKind.UNBOUND_VARIABLE

    def __init__(self, names):
        self.names = list(names)
        super().__init__(f'Cannot calculate. Unbound variables found: {", ".join(self.names)}')


class UnsupportedOperationError(CalculusError, NotImplementedError):
    """ The requested operation is not available for this expression, e.g. calculating an equation. """
    kind = ErrorKind.UNSUPPORTED_OPERATION


class CommandNotFoundError(CalculusError, FileNotFoundError):
    """ An external tool required for rendering is not installed. """
    kind = ErrorKind.COMMAND_UNAVAILABLE

    def __init__(self, commands):
        self.commands = list(commands)
        super().__init__(f'Required commands missing in PATH: {", ".join(self.commands)}')


class CalculusWarning(Warning):
    """ calculus accepted some input, but it might not mean what the author intended. """
    pass


class UnbalancedParenthesisWarning(CalculusWarning):
    """ A closing parenthesis without matching opening parenthesis was ignored. """
    pass


def to_number(value):
    """ Convert a variable value to a plain ``int`` or ``float``. ``None`` passes through as "unbound".

    Any real number is accepted, e.g. :py:class:`fractions.Fraction` becomes a ``float``. Booleans are rejected.

    :raises TypeError: for anything else
    """
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise TypeError(f'Variable value must be a real number or None, not {type(value).__name__}')
    if isinstance(value, numbers.Integral):
        return int(value)
    return float(value)


def format_number(value):
    """ Format a number for use inside expression source text.

    Integral floats lose their trailing ``.0`` and values are limited to 12 significant digits, which avoids leaking
    binary floating point noise like ``0.30000000000000004`` into rendered output. Negative numbers are parenthesized so
    that substituting them into e.g. ``x^2`` keeps the meaning of the expression.
    """
    if isinstance(value, int):
        out = str(value)
    else:
        out = f'{value:.12g}'

    if out.startswith('-'):
        return f'({out})'
    return out

