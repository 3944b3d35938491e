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

import copy
import hashlib
import json
import re

from . import evaluator
from . import latex
from . import parser
from .lexer import Op, MAX_NESTING_DEPTH
from .parser import to_rpn, variable_names
from .utils import UnknownVariableError, to_number, format_number


class Expression:
    """ A parsed expression or equation together with the values of its variables.

    The postfix program and the set of variables are fixed when the expression is created. Only the values bound to the
    variables change, and every change refreshes :py:attr:`fingerprint`.

    .. code-block:: python

        >>> expr = Expression('2 + 2 \\cdot x')
        >>> expr.unbound_variables
        ['x']
        >>> expr['x'] = 4
        >>> expr.calculate()
        10
        >>> str(expr)
        '2 + 2 \\cdot 4'

    :param str source: Expression source text, plain (``2*x + 1``) or TeX (``2 \\cdot x + 1``)
    :param dict bindings: Optional initial variable values
    :param bool parse: Set to ``False`` to only keep ``source`` for display, e.g. when it contains TeX that the parser
                       does not understand. The expression then has no program and no variables.
    :param int max_depth: Macro argument nesting limit, see :py:class:`.Lexer`
    """

    def __init__(self, source, bindings=None, parse=True, max_depth=MAX_NESTING_DEPTH):
        self._source = source
        self._program = parser.parse(source, max_depth) if parse else ()
        self._parsed = parse
        self._variables = dict.fromkeys(variable_names(self._program))
        self._update_fingerprint()
        self.bind(bindings)

    @property
    def source(self):
        return self._source

    @property
    def program(self):
        """ Postfix program as a tuple of :py:class:`.Number`, :py:class:`.Identifier` and :py:class:`.Op` """
        return self._program

    @property
    def rpn(self):
        """ Postfix program serialized into plain numbers and strings, see :py:func:`.to_rpn` """
        return to_rpn(self._program)

    postfix_notation = rpn

    @property
    def parsed(self):
        return self._parsed

    @property
    def is_equation(self):
        return Op.EQL in self._program

    @property
    def variables(self):
        return list(self._variables)

    @property
    def unbound_variables(self):
        return [name for name, value in self._variables.items() if value is None]

    @property
    def fingerprint(self):
        """ Hex digest over the program and the current variable values. Suitable as a cache key or file name. """
        return self._fingerprint

    def _fingerprint_of(self, variables):
        data = json.dumps([self.rpn, list(variables.items())]).encode()
        return hashlib.blake2b(data, digest_size=20).hexdigest()

    def _update_fingerprint(self):
        self._fingerprint = self._fingerprint_of(self._variables)

    def __contains__(self, name):
        return name in self._variables

    def __getitem__(self, name):
        if name not in self._variables:
            raise UnknownVariableError(name)
        return self._variables[name]

    def __setitem__(self, name, value):
        self.bind({name: value})

    def bind(self, mapping=None, **kwargs):
        """ Set several variables at once. ``None`` values unbind a variable. Returns the expression itself.

        All names and values are checked before any of them is assigned, so a failing call leaves the expression
        unchanged. """
        variables = dict(self._variables)
        for name, value in {**(mapping or {}), **kwargs}.items():
            if name not in variables:
                raise UnknownVariableError(name)
            variables[name] = to_number(value)

        self._fingerprint = self._fingerprint_of(variables)
        self._variables = variables
        return self

    def copy(self):
        """ Return an independent copy sharing the (immutable) program but not the variable values """
        new = copy.copy(self)
        new._variables = dict(self._variables)
        return new

    def calculate(self):
        return evaluator.calculate(self._program, self._variables)

    def abstract_syntax_tree(self):
        return evaluator.abstract_syntax_tree(self._program, self._variables)

    ast = abstract_syntax_tree

    def __str__(self):
        """ Source text with the values of all bound variables substituted in """
        bound = {name: format_number(value) for name, value in self._variables.items() if value is not None}
        if not bound:
            return self._source

        names = '|'.join(re.escape(name) for name in sorted(bound, key=len, reverse=True))
        return re.sub(rf'(?<![\w\\])(?:{names})(?!\w)', lambda match: bound[match[0]], self._source)

    def __repr__(self):
        return f'<Expression {self._fingerprint} rpn={self.rpn} variables={self._variables}>'

    def to_png(self, background='White', density=700, outdir=None):
        """ Render this expression with its current variable values to a PNG file using LaTeX. See
        :py:func:`.latex.render`. """
        return latex.render(str(self), self._fingerprint, background=background, density=density, outdir=outdir)

