"""
Output plumbing for Go literal emission.

`EmitOptions` holds the knobs a Printer is configured with, `EmitResult` is what
the one-shot `emit_literal` helper returns, and `SourceWriter` wraps the caller's
text sink with the single indentation counter shared by a whole emission call.
The emitted text is not run through gofmt; callers embedding it in a file are
expected to format the file themselves.
"""

from __future__ import annotations

import io
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, TextIO

from gotypes import TypeDescriptor


@dataclass(frozen=True)
class EmitOptions:
    max_depth: int = 100
    indent: str = "\t"
    max_inline_string: int = 20
    max_inline_elements: int = 10
    max_inline_pairs: int = 5
    trailing_newline: bool = False


@dataclass(frozen=True)
class EmitResult:
    source: str
    type: Optional[TypeDescriptor]


class SourceWriter:
    """Text sink with a nesting counter for multi-line composites."""

    def __init__(self, sink: TextIO, indent: str = "\t") -> None:
        self._sink = sink
        self._indent = indent
        self.depth = 0

    def write(self, text: str) -> None:
        if text:
            self._sink.write(text)

    def newline(self) -> None:
        self._sink.write("\n" + self._indent * self.depth)

    @contextmanager
    def indented(self) -> Iterator[None]:
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    @contextmanager
    def capture(self) -> Iterator[io.StringIO]:
        """Redirect writes into a buffer, keeping the current indentation."""
        saved = self._sink
        buffer = io.StringIO()
        self._sink = buffer
        try:
            yield buffer
        finally:
            self._sink = saved


__all__ = ["EmitOptions", "EmitResult", "SourceWriter"]
