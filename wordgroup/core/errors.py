"""Exception types raised by the merge core and the token adapter.

RULES:
- Every error raised on purpose derives from WordgroupError
- Errors that describe bad input also derive from ValueError so callers
  that only know the standard library can still catch them
- Unknown tags are never errors (see the engine's stand-alone fallback)
"""

from __future__ import annotations

from typing import Optional


class WordgroupError(Exception):
    """Base class for wordgroup errors."""


class TokenSequenceError(WordgroupError, ValueError):
    """Token offsets violate the contiguity contract.

    Raised before any Word is produced, so callers never see a partial
    word sequence for a malformed input.

    Attributes:
        index: Position of the offending token in the input sequence.
        kind: "empty-span", "gap", "overlap" or "out-of-order".
        start_offset / end_offset: Offsets of the offending token.
        previous_end: End offset of the token before it, if any.
    """

    def __init__(
        self,
        index: int,
        kind: str,
        start_offset: int,
        end_offset: int,
        previous_end: Optional[int] = None,
    ) -> None:
        self.index = index
        self.kind = kind
        self.start_offset = start_offset
        self.end_offset = end_offset
        self.previous_end = previous_end
        message = "Token {} ({}..{}) breaks offset contiguity: {}".format(
            index, start_offset, end_offset, kind,
        )
        if previous_end is not None:
            message += " (previous token ends at {})".format(previous_end)
        super().__init__(message)


class AdapterError(WordgroupError, ValueError):
    """Analyzer output could not be converted into tokens."""

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = "line {}: {}".format(line_number, message)
        super().__init__(message)
