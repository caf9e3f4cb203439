"""
Ruff formatter for generated modules.
"""

from __future__ import annotations

from ..config import FormatterConfig
from .base import Formatter


class RuffFormatter(Formatter):
    """Formats Python code with `ruff format`."""

    def __init__(self, executable: str = "ruff"):
        super().__init__(executable)

    def command(self, config: FormatterConfig) -> list[str]:
        cmd = [self.executable, "format", "--stdin-filename", "generated.py"]
        if config.line_length:
            cmd.extend(["--line-length", str(config.line_length)])
        if config.target_version:
            cmd.extend(["--target-version", config.target_version])
        return cmd
