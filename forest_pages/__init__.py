"""Compile graphs of shallow documents into cross-linked HTML sections.

This package exposes the resolution engine that turns embedding and linking
documents into compiled sections, plus the ``forest`` CLI that drives it from
a YAML manifest.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``CompileState``: Memoizing, cycle-safe compiler for one run.

Examples
--------
>>> from forest_pages import CompileState
>>> state = CompileState()
>>> state.compile_all()
>>> state.compiled
{}
"""

from __future__ import annotations

from .cli import app, main
from .compiler import CompileState

__all__ = ["CompileState", "app", "main"]
