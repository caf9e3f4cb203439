"""
Code generation backends.
"""

from __future__ import annotations

from .base import CodeBackend, render_literal
from .python_backend import PythonBackend

__all__ = [
    "CodeBackend",
    "PythonBackend",
    "render_literal",
]
