# output.py
from pathlib import Path
from typing import Optional, TextIO

from rich.console import Console


class Reporter:
    """Console output with an optional plain-text mirror file."""

    def __init__(self, console: Optional[Console] = None, errors: Optional[Console] = None):
        self.console = console or Console(highlight=False, emoji=False, soft_wrap=True)
        self.errors = errors or Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)
        self.mirror_path: Optional[Path] = None
        self._mirror: Optional[TextIO] = None

    @property
    def saving(self) -> bool:
        return self._mirror is not None

    def open_mirror(self, path) -> None:
        # overwritten on every run
        self.mirror_path = Path(path)
        self._mirror = self.mirror_path.open("w", encoding="utf-8")

    def line(self, text: str = "", style: Optional[str] = None) -> None:
        text = text.replace("\n", "")
        self.console.print(text, style=style, markup=False, highlight=False, emoji=False)
        if self._mirror is not None:
            self._mirror.write(text + "\n")

    def error(self, text: str) -> None:
        self.errors.print(text, style="red", markup=False, highlight=False, emoji=False)

    def close(self) -> None:
        if self._mirror is not None:
            self._mirror.flush()
            self._mirror.close()
            self._mirror = None
