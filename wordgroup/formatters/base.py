"""Formatter interface and the output record formatters return.

WHY: Plain text, JSON and the TSV table all render the same sentences of
merged words. A shared interface lets the CLI pick a formatter by name
from the registry without knowing anything about the format itself.

HOW: A formatter subclasses BaseFormatter, providing a display ``name``
and ``format(sentences)``. Each rendered file comes back as a
FormatterOutput holding its suffix, text content and media type.

RULES:
- ``name`` and ``format()`` are abstract; a formatter without either
  cannot be instantiated
- ``format()`` takes sentences (lists of Words, in input order) and
  returns a list of outputs; every current formatter returns one
- ``suffix`` starts with a hyphen, e.g. ``"-words.json"``
- Output file names are built by the caller as {stem}{suffix}
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Sequence

from wordgroup.core.ir import Word

Sentences = Sequence[Sequence[Word]]


@dataclass
class FormatterOutput:
    """A rendered file.

    Attributes:
        suffix: Appended to the input stem (``"-words.tsv"`` gives
                ``"novel-words.tsv"``).
        content: Text written to stdout or to the file.
        media_type: e.g. ``"text/tab-separated-values"``.
    """

    suffix: str
    content: str
    media_type: str


class BaseFormatter(ABC):
    """Renders sentences of Words into one or more output files.

    New formats live in their own module under formatters/ and are added
    to FORMATTERS in formatters/__init__.py under their CLI name.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'Plain Text'."""

    @abstractmethod
    def format(self, sentences: Sentences) -> List[FormatterOutput]:
        """Render merged words, grouped into sentences, as output files."""
