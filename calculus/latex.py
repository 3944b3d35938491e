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
calculus.latex
==============
**Rendering of expressions to PNG images using** ``latex`` **and** ``dvipng``

Both tools are looked up in ``PATH``. The ``LATEX`` and ``DVIPNG`` environment variables can be used to point to
specific executables instead.
"""

import os
import shutil
import subprocess
import tempfile
from pathlib import Path

from .utils import CommandNotFoundError


REQUIRED_COMMANDS = ('latex', 'dvipng')


def document(display_text):
    """ Wrap ``display_text`` into a minimal LaTeX document setting it off as display math """
    return '\n'.join([
        r'\documentclass{article}',
        r'\usepackage{amsmath,amssymb}',
        r'\begin{document}',
        r'\thispagestyle{empty}',
        f'$$ {display_text} $$',
        r'\end{document}',
        ''])


def tool_command(name):
    return os.environ.get(name.upper(), name)


def missing_commands():
    """ Return the list of required tools that cannot be found """
    return [name for name in REQUIRED_COMMANDS if shutil.which(tool_command(name)) is None]


def render(display_text, fingerprint, background='White', density=700, outdir=None):
    """ Render ``display_text`` to a PNG image.

    :param str display_text: TeX source of the expression, without surrounding ``$$``
    :param str fingerprint: Unique name for the output file, usually :py:attr:`.Expression.fingerprint`
    :param str background: Background color, see ``dvipng(1)``
    :param int density: Output resolution in dpi
    :param outdir: Directory to place the image in. A fresh temporary directory is used by default.
    :returns: :py:class:`pathlib.Path` of the image. The caller is responsible for removing it.
    :raises CommandNotFoundError: if ``latex`` or ``dvipng`` are not installed.
    :raises subprocess.CalledProcessError: if either tool fails.
    """
    if (missing := missing_commands()):
        raise CommandNotFoundError(missing)

    own_outdir = outdir is None
    outdir = Path(tempfile.mkdtemp()) if own_outdir else Path(outdir)
    tex = outdir / f'{fingerprint}.tex'
    dvi, png = tex.with_suffix('.dvi'), tex.with_suffix('.png')

    try:
        tex.write_text(document(display_text))
        subprocess.run([tool_command('latex'), '-interaction=nonstopmode', tex.name],
                       cwd=outdir, check=True, stdout=subprocess.DEVNULL)
        subprocess.run([tool_command('dvipng'), '-q', '-T', 'tight', '-bg', background, '-D', str(int(density)),
                        '-o', png.name, dvi.name],
                       cwd=outdir, check=True, stdout=subprocess.DEVNULL)
    except Exception:
        if own_outdir:
            shutil.rmtree(outdir, ignore_errors=True)
        raise
    finally:
        for suffix in ('.tex', '.dvi', '.aux', '.log'):
            tex.with_suffix(suffix).unlink(missing_ok=True)

    return png

