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
calculus.parser
===============
**Conversion of expression source text into postfix notation**

Supported operators, ordered by precedence from the highest to the lowest:

``uminus``          unary minus, written as a ``-`` that does not follow an operand or a closing parenthesis.
``sqrt``, ``exp``   root and power. Written as ``\\sqrt[degree]{radicand}`` and ``x^y``.
``div``, ``mul``    ``a/b`` or ``\\frac{a}{b}``, and ``*``, ``\\cdot`` or ``\\times``.
``plus``, ``minus`` ``+`` and ``-``.
``eql``             the equals sign, turning the expression into an equation.

Parentheses may be written plain or as ``\\left(`` and ``\\right)``. The parser does not distinguish between the two
styles, and it ignores closing parentheses without a matching opening one. Both only matter for display:

.. code-block:: python

    parse('(2 + 3) * 4')            # (2, 3, :plus, 4, :mul)
    parse('\\frac{2}{3} \\cdot x')  # (2, 3, :div, 'x', :mul)
"""

import warnings

from .lexer import Lexer, Op, Number, Identifier, Operator, Open, Close, MAX_NESTING_DEPTH
from .utils import ExpressionSyntaxError, UnbalancedParenthesisWarning


PRECEDENCE = {
        Op.UMINUS: 4,
        Op.SQRT: 3,
        Op.EXP: 3,
        Op.DIV: 2,
        Op.MUL: 2,
        Op.PLUS: 1,
        Op.MINUS: 1,
        Op.EQL: 0,
        }


def arity(op):
    return 1 if op is Op.UMINUS else 2


def parse(source, max_depth=MAX_NESTING_DEPTH):
    """ Parse ``source`` into its postfix notation using the shunting-yard algorithm.

    :param str source: Expression source, plain or TeX-flavored.
    :param int max_depth: Macro argument nesting limit, see :py:class:`.Lexer`.
    :returns: tuple of :py:class:`.Number`, :py:class:`.Identifier` and :py:class:`.Op` instructions.
    :raises ExpressionSyntaxError: on unbalanced parentheses, more than one equals sign or missing operands.
    """
    output, stack = [], []
    prev = None

    for token in Lexer(source, max_depth):
        after_operand = isinstance(prev, (Number, Identifier, Close))

        match token:
            case Open():
                if after_operand:
                    raise ExpressionSyntaxError(f'Missing operator before "(" in "{source}"')
                stack.append(token)

            case Close():
                while stack and not isinstance(stack[-1], Open):
                    output.append(stack.pop())
                if stack:
                    stack.pop()
                else:
                    warnings.warn(f'Ignoring closing parenthesis without opening parenthesis in "{source}"',
                                  UnbalancedParenthesisWarning)
                    continue

            case Operator(kind):
                if not after_operand:
                    if kind is not Op.MINUS:
                        raise ExpressionSyntaxError(f'Missing operand before "{kind.value}" in "{source}"')
                    kind = Op.UMINUS

                # Unary minus is a prefix operator: anything on the stack still lacks its right operand.
                if kind is not Op.UMINUS:
                    while stack and isinstance(stack[-1], Op) and PRECEDENCE[stack[-1]] >= PRECEDENCE[kind]:
                        output.append(stack.pop())
                stack.append(kind)

            case Number() | Identifier():
                if after_operand:
                    raise ExpressionSyntaxError(f'Missing operator before {token!r} in "{source}"')
                output.append(token)

        prev = token

    unclosed = 0
    while stack:
        match stack.pop():
            case Open():
                unclosed += 1
            case op:
                output.append(op)

    if unclosed:
        raise ExpressionSyntaxError(f'Missing closing parenthesis: {unclosed} unclosed "(" in "{source}"')

    program = tuple(output)
    if program.count(Op.EQL) > 1:
        raise ExpressionSyntaxError(f'More than one equals sign in "{source}"')

    _check_operands(program, source)
    return program


def _check_operands(program, source):
    depth = 0
    for instruction in program:
        if isinstance(instruction, Op):
            if depth < arity(instruction):
                raise ExpressionSyntaxError(f'Missing operand for "{instruction.value}" in "{source}"')
            depth -= arity(instruction) - 1
        else:
            depth += 1

    if program and depth != 1:
        raise ExpressionSyntaxError(f'Missing operator between {depth} operands in "{source}"')


def variable_names(program):
    """ Names of all identifiers in ``program``, without duplicates and in order of first appearance """
    return list(dict.fromkeys(elem.name for elem in program if isinstance(elem, Identifier)))


def to_rpn(program):
    """ Serialize a postfix program into plain python values: numbers stay numbers, identifiers become their name and
    operators become their tag string (``'plus'``, ``'uminus'``, ...). The result can be dumped to JSON as-is. """
    out = []
    for instruction in program:
        match instruction:
            case Number(value):
                out.append(value)
            case Identifier(name):
                out.append(name)
            case Op():
                out.append(instruction.value)
    return out


def format_program(program):
    return ' '.join(str(elem) for elem in to_rpn(program))

