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

from dataclasses import dataclass
from enum import Enum
import re

from .utils import LexicalError


MAX_NESTING_DEPTH = 64


class Op(str, Enum):
    """ Operator kinds. The values double as the tags used in the serialized postfix notation. """
    UMINUS = 'uminus'
    SQRT = 'sqrt'
    EXP = 'exp'
    DIV = 'div'
    MUL = 'mul'
    PLUS = 'plus'
    MINUS = 'minus'
    EQL = 'eql'

    def __repr__(self):
        return f':{self.value}'


@dataclass(frozen=True, slots=True)
class Number:
    value: float

    def __repr__(self):
        return repr(self.value)


@dataclass(frozen=True, slots=True)
class Identifier:
    name: str

    def __repr__(self):
        return repr(self.name)


@dataclass(frozen=True, slots=True)
class Operator:
    kind: Op


@dataclass(frozen=True, slots=True)
class Open:
    pass


@dataclass(frozen=True, slots=True)
class Close:
    pass


_whitespace_re = re.compile(r'\s+')
_eql_re = re.compile(r'=')
_mul_re = re.compile(r'\*|\\times|\\cdot')
_frac_re = re.compile(r'\\frac\s*')
_div_re = re.compile(r'/')
_plus_re = re.compile(r'\+')
_exp_re = re.compile(r'\^')
_minus_re = re.compile(r'-')
_bare_sqrt_re = re.compile(r'sqrt')
_sqrt_re = re.compile(r'\\sqrt\s*')
_open_re = re.compile(r'\(|\\left\(')
_close_re = re.compile(r'\)|\\right\)')
_number_re = re.compile(r'[0-9]+(\.[0-9]+)?(e[-+]?[0-9]+)?')
_identifier_re = re.compile(r'[a-z0-9]+(?:_[a-z0-9]+)?', re.IGNORECASE)


class Lexer:
    """ Tokenizer for plain or TeX-flavored arithmetic expressions.

    The ``\\frac{A}{B}`` and ``\\sqrt[d]{A}`` macros are desugared while scanning: the macro text is replaced in the
    not yet consumed part of the buffer by ``(A) / (B)`` resp. ``(A) sqrt (d)`` and scanning resumes at the same
    position. Since the expansion is scanned by the same loop, macros nested inside macro arguments are handled without
    any further bookkeeping.

    :param str source: Expression source text
    :param int max_depth: Maximum brace nesting depth of macro arguments. Deeper nesting raises :py:exc:`LexicalError`.
    """

    def __init__(self, source, max_depth=MAX_NESTING_DEPTH):
        self.source = source
        self.buf = source
        self.pos = 0
        self.max_depth = max_depth

    def __iter__(self):
        while (token := self.fetch_token()) is not None:
            yield token

    def _scan(self, regex):
        if (match := regex.match(self.buf, self.pos)):
            self.pos = match.end()
        return match

    def _splice(self, end, replacement):
        """ Replace ``buf[pos:end]`` with ``replacement``, leaving the cursor in front of the replacement. """
        self.buf = self.buf[:self.pos] + replacement + self.buf[end:]

    def _skip_whitespace(self, pos):
        if (match := _whitespace_re.match(self.buf, pos)):
            return match.end()
        return pos

    def _balanced(self, pos, opening, closing):
        """ Match a group delimited by ``opening`` and ``closing`` starting at ``pos``, allowing nested groups of the
        same delimiters. Returns ``(content, end)`` or ``None`` if there is no complete group at ``pos``. """
        if not self.buf.startswith(opening, pos):
            return None

        depth = 0
        for i in range(pos, len(self.buf)):
            c = self.buf[i]
            if c == opening:
                depth += 1
                if depth > self.max_depth:
                    raise LexicalError(f'Macro arguments nested deeper than {self.max_depth} levels at position {i}',
                                       i, self._context(i))
            elif c == closing:
                depth -= 1
                if depth == 0:
                    return self.buf[pos+1:i], i+1
        return None

    def _match_frac(self):
        if not (match := _frac_re.match(self.buf, self.pos)):
            return None

        if not (num := self._balanced(match.end(), '{', '}')):
            return None
        num, end = num

        if not (denom := self._balanced(self._skip_whitespace(end), '{', '}')):
            return None
        denom, end = denom

        return end, f'({num}) / ({denom}) '

    def _match_sqrt(self):
        if not (match := _sqrt_re.match(self.buf, self.pos)):
            return None

        end = match.end()
        degree = '2'
        if (group := self._balanced(end, '[', ']')):
            degree, end = group
            end = self._skip_whitespace(end)

        if not (radicand := self._balanced(end, '{', '}')):
            return None
        radicand, end = radicand

        return end, f'({radicand}) sqrt ({degree}) '

    def _context(self, pos):
        return self.buf[pos:pos+20]

    def fetch_token(self):
        """ Return the next token, or ``None`` at the end of input. """
        while True:
            self.pos = self._skip_whitespace(self.pos)
            if self.pos >= len(self.buf):
                return None

            if self._scan(_eql_re):
                return Operator(Op.EQL)

            elif self._scan(_mul_re):
                return Operator(Op.MUL)

            elif (expansion := self._match_frac()):
                self._splice(*expansion)

            elif self._scan(_div_re):
                return Operator(Op.DIV)

            elif self._scan(_plus_re):
                return Operator(Op.PLUS)

            elif self._scan(_exp_re):
                return Operator(Op.EXP)

            elif self._scan(_minus_re):
                return Operator(Op.MINUS)

            elif self._scan(_bare_sqrt_re):
                return Operator(Op.SQRT)

            elif (expansion := self._match_sqrt()):
                self._splice(*expansion)

            elif self._scan(_open_re):
                return Open()

            elif self._scan(_close_re):
                return Close()

            elif (match := self._scan(_number_re)):
                decimals, exponent = match.groups()
                if decimals or exponent:
                    return Number(float(match[0]))
                return Number(int(match[0]))

            elif (match := self._scan(_identifier_re)):
                return Identifier(match[0])

            else:
                raise LexicalError(f'Invalid character at position {self.pos} near "{self._context(self.pos)}"',
                                   self.pos, self._context(self.pos))


def tokenize(source, max_depth=MAX_NESTING_DEPTH):
    """ Return the list of tokens for ``source`` """
    return list(Lexer(source, max_depth))

