
import subprocess
from pathlib import Path

import pytest
from click.testing import CliRunner

from .. import latex
from ..expression import Expression


@pytest.fixture()
def expression():
    def make(source, **bindings):
        return Expression(source, bindings)
    return make


@pytest.fixture()
def runner():
    return CliRunner()


@pytest.fixture()
def fake_toolchain(monkeypatch):
    """ Stand in for latex and dvipng. Returns the list of recorded ``(args, kwargs)`` tool invocations. dvipng
    invocations create a dummy output file. """
    calls = []

    def run(args, **kwargs):
        calls.append((list(args), kwargs))
        if '-o' in args:
            Path(kwargs['cwd'], args[args.index('-o') + 1]).write_bytes(b'\x89PNG fake image')
        return subprocess.CompletedProcess(args, 0)

    monkeypatch.delenv('LATEX', raising=False)
    monkeypatch.delenv('DVIPNG', raising=False)
    monkeypatch.setattr(latex.shutil, 'which', lambda cmd: f'/usr/bin/{cmd}')
    monkeypatch.setattr(latex.subprocess, 'run', run)
    return calls


@pytest.fixture()
def no_toolchain(monkeypatch):
    monkeypatch.setattr(latex.shutil, 'which', lambda cmd: None)

