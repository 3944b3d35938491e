#! /usr/bin/env python
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
import shutil
import subprocess
import sys
import tempfile
import warnings
from pathlib import Path

import click

from . import __version__
from .expression import Expression
from .parser import format_program
from .utils import CalculusError, CalculusWarning


def _showwarning(message, category, filename, lineno, file=None, line=None):
    if file is None:
        file = sys.stderr

    filename = Path(filename)
    calculus_module_install_location = Path(__file__).parent.parent
    if filename.is_relative_to(calculus_module_install_location):
        filename = filename.relative_to(calculus_module_install_location)

    print(f'{filename}:{lineno}: {message}', file=file)
warnings.showwarning = _showwarning

def _print_version(ctx, param, value):
    if value and not ctx.resilient_parsing:
        click.echo(f'Version {__version__}')
        ctx.exit()


class Binding(click.ParamType):
    name = 'binding'

    def convert(self, value, param, ctx):
        if isinstance(value, tuple):
            return value

        name, sep, number = value.partition('=')
        name, number = name.strip(), number.strip()
        try:
            if not name or not sep:
                raise ValueError()

            try:
                return name, int(number)
            except ValueError:
                return name, float(number)

        except ValueError:
            self.fail(f'{value!r} is not a valid variable binding. A binding has the form "[name]=[number]", e.g. '
                      '"x_1=2.5".')


def _load(source, bindings=(), format_warnings='default'):
    with warnings.catch_warnings():
        warnings.simplefilter(format_warnings)
        try:
            return Expression(source, dict(bindings))
        except (CalculusError, CalculusWarning) as e:
            raise click.ClickException(str(e)) from e


_warnings_option = click.option('--warnings', 'format_warnings',
                                type=click.Choice(['default', 'ignore', 'once', 'error']), default='default',
                                help='''Enable, disable or escalate warnings about suspicious input during parsing.
                                "error" turns warnings into errors (default: on)''')
_bind_option = click.option('-v', '--var', 'bindings', type=Binding(), multiple=True, help='''Bind a variable to a
                            value, given as "[name]=[number]". May be given multiple times.''')


@click.group()
@click.option('--version', is_flag=True, callback=_print_version, expose_value=False, is_eager=True)
def cli():
    """ The calculus CLI parses plain or TeX-flavored arithmetic expressions, evaluates them and renders them to
    images. Expressions starting with a minus sign must be separated from the options by "--". """
    pass


@cli.command()
@_warnings_option
@click.option('--json', 'as_json', is_flag=True, help='Print the postfix notation as a JSON array')
@click.argument('expression')
def rpn(expression, as_json, format_warnings):
    """ Print the postfix (reverse polish) notation of an expression. """
    expr = _load(expression, format_warnings=format_warnings)
    if as_json:
        print(json.dumps(expr.rpn))
    else:
        print(format_program(expr.program))


@cli.command()
@_warnings_option
@_bind_option
@click.argument('expression')
def ast(expression, bindings, format_warnings):
    """ Print the abstract syntax tree of an expression as nested JSON arrays of the form [operator, left, right]. """
    expr = _load(expression, bindings, format_warnings)
    print(json.dumps(expr.ast()))


@cli.command()
@_warnings_option
@_bind_option
@click.argument('expression')
def variables(expression, bindings, format_warnings):
    """ List the variables of an expression in order of first appearance along with their values. """
    expr = _load(expression, bindings, format_warnings)
    for name in expr.variables:
        if (value := expr[name]) is None:
            print(f'{name} (unbound)')
        else:
            print(f'{name} = {value}')


@cli.command()
@_warnings_option
@_bind_option
@click.argument('expression')
def calc(expression, bindings, format_warnings):
    """ Calculate the numeric value of an expression. All variables must be bound using --var. """
    expr = _load(expression, bindings, format_warnings)
    try:
        print(expr.calculate())
    except (CalculusError, ArithmeticError, ValueError) as e:
        raise click.ClickException(str(e)) from e


@cli.command()
@_warnings_option
@_bind_option
@click.option('-b', '--background', default='White', help='Background color, see dvipng(1) (default: White)')
@click.option('-d', '--density', type=int, default=700, help='Output resolution in dpi (default: 700)')
@click.option('--no-parse', is_flag=True, help='''Do not parse the expression, only render it. Useful for TeX that
              calculus does not understand. Cannot be combined with --var.''')
@click.argument('expression')
@click.argument('outfile', type=click.Path(dir_okay=False, writable=True, path_type=Path))
def render(expression, outfile, bindings, background, density, no_parse, format_warnings):
    """ Render an expression, with the values of bound variables substituted in, to a PNG image using latex and
    dvipng. """
    if no_parse:
        if bindings:
            raise click.UsageError('--var cannot be used together with --no-parse.')
        expr = Expression(expression, parse=False)
    else:
        expr = _load(expression, bindings, format_warnings)

    with tempfile.TemporaryDirectory() as tmpdir:
        try:
            png = expr.to_png(background=background, density=density, outdir=tmpdir)
        except CalculusError as e:
            raise click.ClickException(str(e)) from e
        except subprocess.CalledProcessError as e:
            msg = f'Error rendering expression: {e.cmd[0]} exited with status {e.returncode}'
            raise click.ClickException(msg) from e
        shutil.copy(png, outfile)


if __name__ == '__main__':
    cli()

