"""Tab-separated detail table of merged words.

WHY: When a merge looks wrong, the reason is in the details: which tokens
went into the word, what category it got and which base form the assembler
derived. A TSV puts all of that in columns that diff well and open in any
spreadsheet.

HOW: One header row, then one row per word. A blank line separates
sentences.

RULES:
- Columns: surface, base_form, reading, category, part_of_speech,
  start, end, tokens
- Unknown readings print as "*", like the analyzer's own placeholder
- The tokens column joins token surfaces with "|"
- Output suffix: "-words.tsv"
"""

from __future__ import annotations

from typing import List

from wordgroup.core.ir import Word
from wordgroup.formatters.base import BaseFormatter, FormatterOutput, Sentences

COLUMNS = (
    "surface", "base_form", "reading", "category",
    "part_of_speech", "start", "end", "tokens",
)


def _row(word: Word) -> str:
    return "\t".join([
        word.surface,
        word.base_form,
        word.reading if word.reading is not None else "*",
        word.label,
        word.part_of_speech.value,
        str(word.start_offset),
        str(word.end_offset),
        "|".join(token.surface for token in word.tokens),
    ])


class TableFormatter(BaseFormatter):

    @property
    def name(self) -> str:
        return "Word Table (TSV)"

    def format(self, sentences: Sentences) -> List[FormatterOutput]:
        blocks: List[str] = []
        for sentence in sentences:
            rows = [_row(word) for word in sentence if word.surface.strip()]
            if rows:
                blocks.append("\n".join(rows))
        content = "\t".join(COLUMNS) + "\n"
        if blocks:
            content += "\n\n".join(blocks) + "\n"
        return [
            FormatterOutput(
                suffix="-words.tsv",
                content=content,
                media_type="text/tab-separated-values",
            )
        ]
