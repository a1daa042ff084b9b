"""Plain text formatter: words separated by spaces, one sentence per line.

WHY: The quickest way to check a merge is to read it. Putting a space
between words (食べさせられた ところ です 。) makes every boundary the
engine chose visible at a glance, and is also the usual input format of
tools that expect space-delimited text.

HOW: For each sentence, the surfaces of its words are joined with a single
space. Whitespace-only words (re-inserted spaces and newlines) are dropped
since the separator already marks the boundary.

RULES:
- One line per sentence, words joined by " "
- Whitespace-only words are omitted
- Sentences with no visible words produce no line
- Output suffix: "-words.txt"
- Media type: "text/plain"
"""

from __future__ import annotations

from typing import List, Sequence

from wordgroup.core.ir import Word
from wordgroup.formatters.base import BaseFormatter, FormatterOutput, Sentences


def sentence_to_text(words: Sequence[Word]) -> str:
    return " ".join(word.surface for word in words if word.surface.strip())


class PlainTextFormatter(BaseFormatter):
    """Space-separated words, one sentence per line."""

    @property
    def name(self) -> str:
        return "Plain Text"

    def format(self, sentences: Sentences) -> List[FormatterOutput]:
        lines = [sentence_to_text(sentence) for sentence in sentences]
        content = "\n".join(line for line in lines if line)
        if content:
            content += "\n"
        return [
            FormatterOutput(
                suffix="-words.txt",
                content=content,
                media_type="text/plain",
            )
        ]
