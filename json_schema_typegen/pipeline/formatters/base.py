"""
Formatters that pipe generated code through an external command.
"""

from __future__ import annotations

import subprocess
from abc import ABC, abstractmethod

from ..config import FormatterConfig, logger


class Formatter(ABC):
    """
    Runs a formatter executable over generated code.

    The executable reads code on stdin and writes the formatted code to
    stdout. Generated code is never lost to a formatter problem: when the
    executable is missing, fails or times out, the code comes back as it was.
    """

    def __init__(self, executable: str):
        self.executable = executable
        self._available: bool | None = None

    @abstractmethod
    def command(self, config: FormatterConfig) -> list[str]:
        """Command line formatting stdin to stdout under config."""

    def is_available(self) -> bool:
        """Check once whether the executable runs."""
        if self._available is None:
            try:
                result = subprocess.run(
                    [self.executable, "--version"],
                    capture_output=True,
                    text=True,
                    timeout=5,
                )
                self._available = result.returncode == 0
            except (subprocess.SubprocessError, OSError):
                self._available = False
        return self._available

    def format(self, code: str, config: FormatterConfig) -> str:
        if not self.is_available():
            return code

        try:
            result = subprocess.run(self.command(config), input=code, capture_output=True, text=True, timeout=30)
        except subprocess.SubprocessError as e:
            logger.debug("%s failed: %s", self.executable, e)
            return code

        if result.returncode != 0:
            logger.debug("%s exited with %d: %s", self.executable, result.returncode, result.stderr.strip())
            return code
        return result.stdout
