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
Calculus
========

calculus parses arithmetic expressions and equations written in plain notation (``2*x^2 + 1``) or in TeX
(``2 \\cdot \\frac{x}{3} + \\sqrt[3]{8}``) into postfix notation, builds abstract syntax trees from them and evaluates
them against a table of variable values. Expressions can be rendered to PNG images using LaTeX.
"""

from .expression import Expression
from .lexer import Op, Number, Identifier, tokenize
from .parser import parse, to_rpn
from .utils import (ErrorKind, CalculusError, ExpressionSyntaxError, LexicalError, UnknownVariableError,
                    UnboundVariableError, UnsupportedOperationError, CommandNotFoundError, CalculusWarning)

__version__ = '0.3.0'
