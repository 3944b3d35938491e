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

from .lexer import Op, Number, Identifier
from .parser import arity, variable_names
from .utils import ExpressionSyntaxError, UnboundVariableError, UnsupportedOperationError


def traverse(program, combine, bindings={}):
    """ Run ``program`` on a stack machine.

    Numbers are pushed as-is, identifiers are replaced by their value in ``bindings`` or pushed as their name if they
    are unbound. For each operator, its operands are popped and ``combine(op, left, right, stack)`` is pushed in their
    place. Unary operators get their only operand as ``left`` and ``None`` as ``right``.

    :returns: The single value remaining on the stack at the end of the program.
    """
    stack = []
    for instruction in program:
        match instruction:
            case Number(value):
                stack.append(value)

            case Identifier(name):
                value = bindings.get(name)
                stack.append(name if value is None else value)

            case Op():
                if len(stack) < arity(instruction):
                    raise ExpressionSyntaxError(f'Missing operand for "{instruction.value}"')
                right = stack.pop() if arity(instruction) == 2 else None
                left = stack.pop()
                stack.append(combine(instruction, left, right, stack))

    if len(stack) != 1:
        raise ExpressionSyntaxError(f'Malformed program: {len(stack)} values left on stack instead of one')
    return stack[0]


def _power(base, exponent):
    result = base ** exponent
    if isinstance(result, complex):
        raise ValueError(f'{base} ^ {exponent} does not have a real result')
    return result


def _arithmetic(op, l, r, stack):
    match op:
        case Op.UMINUS:
            return -l
        case Op.SQRT:
            # Root via fractional power, so results carry the usual binary floating point rounding errors.
            return _power(l, 1.0 / r)
        case Op.EXP:
            return _power(l, r)
        case Op.DIV:
            return l / r
        case Op.MUL:
            return l * r
        case Op.PLUS:
            return l + r
        case Op.MINUS:
            return l - r


def calculate(program, bindings={}):
    """ Numerically evaluate ``program`` under ``bindings``.

    :raises UnsupportedOperationError: if the program is an equation.
    :raises UnboundVariableError: if any variable of the program has no value in ``bindings``.
    """
    if Op.EQL in program:
        raise UnsupportedOperationError("Equation detected. Equations can't be calculated yet.")

    if (unbound := [name for name in variable_names(program) if bindings.get(name) is None]):
        raise UnboundVariableError(unbound)

    return traverse(program, _arithmetic, bindings)


def abstract_syntax_tree(program, bindings={}):
    """ Build a nested ``[op, left, right]`` list representation of ``program``. Never fails on unbound variables. """
    return traverse(program, lambda op, l, r, stack: [op, l, r], bindings)

