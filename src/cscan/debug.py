"""--debug token dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from cscan.scanner import ScanResult
from cscan.tokens import Token


def dump_tokens(result: ScanResult, *, file: TextIO = sys.stderr) -> None:
    """Print one line per token and diagnostic to *file*, in source order."""
    file.write(f"ScanResult tokens={len(result.tokens)} diagnostics={len(result.diagnostics)}\n")
    for event in result.events():
        if isinstance(event, Token):
            span = event.span
            file.write(f"  {span.start:>5}:{span.end:<5} {event.type.name:<13} {event.raw!r}\n")
        else:
            file.write(f"  {event.offset:>5}       {event.kind.name:<13} {event.text!r}\n")
