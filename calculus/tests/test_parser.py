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

import json

import pytest

from ..lexer import Op, Number, Identifier
from ..parser import parse, to_rpn, format_program, variable_names
from ..utils import ExpressionSyntaxError, LexicalError, UnbalancedParenthesisWarning, ErrorKind


UMINUS, SQRT, EXP, DIV, MUL, PLUS, MINUS, EQL = Op


def rpn(source):
    return to_rpn(parse(source))


def test_simple_arithmetic():
    assert parse('1+2') == (Number(1), Number(2), Op.PLUS)
    assert rpn('1+2') == [1, 2, PLUS]


def test_whitespace():
    assert rpn('1 + 2') == [1, 2, PLUS]
    assert rpn(' 4 ^ 2 ') == [4, 2, EXP]
    assert rpn(r'\sqrt [  2 ] { 4  }') == [4, 2, SQRT]
    assert rpn(r'\frac {  5 } { 4  }') == [5, 4, DIV]


def test_square_root():
    assert rpn(r'2 * \sqrt{4}') == [2, 4, 2, SQRT, MUL]
    assert rpn(r'\sqrt[3]{8}') == [8, 3, SQRT]
    assert rpn(r'\sqrt[3+2]{8}') == [8, 3, 2, PLUS, SQRT]
    assert rpn(r'\sqrt{4}') == rpn(r'\sqrt[2]{4}')


def test_fractions():
    assert rpn(r'\frac{8}{3}') == [8, 3, DIV]
    assert rpn(r'\frac{3+1}{3-1}') == [3, 1, PLUS, 3, 1, MINUS, DIV]
    assert rpn(r'\frac{3+1}{(3-1)*4}') == [3, 1, PLUS, 3, 1, MINUS, 4, MUL, DIV]


def test_precedence():
    assert rpn('3+2*2') == [3, 2, 2, MUL, PLUS]
    assert rpn('3*5^4+2') == [3, 5, 4, EXP, MUL, 2, PLUS]
    assert rpn('(3*5)^4+2') == [3, 5, MUL, 4, EXP, 2, PLUS]
    assert rpn(r'\sqrt{3*5}+2') == [3, 5, MUL, 2, SQRT, 2, PLUS]


def test_left_associativity():
    assert rpn('8-4-2') == [8, 4, MINUS, 2, MINUS]
    assert rpn('8/4/2') == [8, 4, DIV, 2, DIV]
    assert rpn('2^3^2') == [2, 3, EXP, 2, EXP]


def test_parentheses():
    assert rpn('(3+2)*2') == [3, 2, PLUS, 2, MUL]
    assert rpn(r'\left(3+2\right)*2') == [3, 2, PLUS, 2, MUL]
    assert rpn('((((1))))') == [1]


@pytest.mark.parametrize('grouped, plain', [
    ('(2)^3', '2^3'),
    ('(x) * y', 'x * y'),
    ('(a) - b', 'a - b'),
    ('(2) + 3 * 4', '2 + 3 * 4'),
    ('2 * (x)', '2 * x'),
    ])
def test_redundant_parentheses(grouped, plain):
    assert parse(grouped) == parse(plain)


def test_floats():
    assert rpn('1.2') == [1.2]
    assert rpn('1.2e10') == [1.2e10]
    assert rpn('1.2e-10') == [1.2e-10]
    assert rpn('3 + 4.0 * 4.5e-10') == [3, 4.0, 4.5e-10, MUL, PLUS]


def test_nesting():
    assert rpn(r'\frac{\sqrt{8}}{3}') == [8, 2, SQRT, 3, DIV]
    assert rpn(r'\sqrt[\frac{8}{3}]{4}') == [4, 8, 3, DIV, SQRT]
    assert rpn(r'(\frac{2}{3} + 3) * 4') == [2, 3, DIV, 3, PLUS, 4, MUL]


def test_equals_sign():
    assert rpn(r'2 \cdot \frac{4}{2} = \sqrt{16}') == [2, 4, MUL, 2, DIV, 16, 2, SQRT, EQL]


def test_variables():
    assert rpn(r'2 \cdot x = 16') == [2, 'x', MUL, 16, EQL]
    assert rpn(r'2 \cdot x_i = 16') == [2, 'x_i', MUL, 16, EQL]
    assert rpn(r'2 \cdot x_2 = 16') == [2, 'x_2', MUL, 16, EQL]
    assert rpn(r'2 \cdot x2 = 16') == [2, 'x2', MUL, 16, EQL]
    assert rpn('x_3 + y * E') == ['x_3', 'y', 'E', MUL, PLUS]

    with pytest.raises(LexicalError):
        parse(r'2 \cdot x__2 = 16')


def test_identifier_is_not_operator():
    program = parse('plus * minus')
    assert program == (Identifier('plus'), Identifier('minus'), Op.MUL)
    assert program[0] != Op.PLUS
    assert Op.PLUS not in program


def test_unary_minus():
    assert rpn('-2') == [2, UMINUS]
    assert rpn('-2 * -2') == [2, UMINUS, 2, UMINUS, MUL]
    assert rpn('2 - -3') == [2, 3, UMINUS, MINUS]
    assert rpn('(-2)') == [2, UMINUS]
    assert rpn('--2') == [2, UMINUS, UMINUS]
    assert rpn('-2^2') == [2, UMINUS, 2, EXP]
    assert rpn('2^-x') == [2, 'x', UMINUS, EXP]
    assert rpn('a - b') == ['a', 'b', MINUS]
    assert rpn('(a) - b') == ['a', 'b', MINUS]
    assert rpn('x = -1') == ['x', 1, UMINUS, EQL]


def test_deterministic():
    source = r'\frac{x_1 + 2}{\sqrt[3]{y}} - 4 \cdot z = -1'
    assert parse(source) == parse(source)


def test_empty_input():
    assert parse('') == ()
    assert parse('   ') == ()


def test_unbalanced_parentheses():
    with pytest.raises(ExpressionSyntaxError) as exc_info:
        parse('(2+3')
    assert exc_info.value.kind is ErrorKind.SYNTAX
    assert '1 unclosed' in str(exc_info.value)

    with pytest.raises(SyntaxError):
        parse('((2+3) * (4')


def test_superfluous_closing_parenthesis_is_ignored():
    with pytest.warns(UnbalancedParenthesisWarning):
        assert rpn('(2 + 3)) * 4') == [2, 3, PLUS, 4, MUL]

    with pytest.warns(UnbalancedParenthesisWarning):
        assert rpn(r'2 + 3\right) * 4') == [2, 3, PLUS, 4, MUL]


def test_multiple_equals_signs():
    with pytest.raises(ExpressionSyntaxError):
        parse('2 * 3 = 2 + 2 + 2 = 6')


@pytest.mark.parametrize('source', ['2 +', '* 2', '2 3', 'x y = 1', r'\frac{}{2}', '-'])
def test_missing_operands_or_operators(source):
    with pytest.raises(ExpressionSyntaxError):
        parse(source)


@pytest.mark.parametrize('source', ['2 3 +', '+ 2 3', '2 * * 3', '(+ 2)', '2 (3)', '(2) 3', 'x 2 = 1', '= 2'])
def test_operators_must_be_infix(source):
    with pytest.raises(ExpressionSyntaxError, match='Missing op'):
        parse(source)


def test_variable_names():
    assert variable_names(parse('x + 2^x = y')) == ['x', 'y']
    assert variable_names(parse('b * a + b')) == ['b', 'a']
    assert variable_names(parse('4 + 2^3 = 12')) == []


def test_serialization():
    program = parse(r'\frac{x}{2} - -1.5 = y')
    assert to_rpn(program) == ['x', 2, 'div', 1.5, 'uminus', 'minus', 'y', 'eql']
    assert all(type(elem) in (int, float, str) for elem in to_rpn(program))
    assert json.loads(json.dumps(to_rpn(program))) == to_rpn(program)
    assert format_program(parse('3+2*2')) == '3 2 2 mul plus'

