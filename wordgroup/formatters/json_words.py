"""JSON formatter: merged words with their tokens and derived fields.

WHY: Downstream tools (flashcard builders, search indexers) need every
derived field of a word in a machine-readable form, and they need to rely
on its shape. The output is therefore validated against a JSON schema
shipped with the package (words_schema.json) before it is returned.

HOW: Sentences become objects holding their offset range and word list;
each word lists its surface, base form, reading, category label, coarse
part of speech and constituent tokens. The dict is validated with
jsonschema and serialised with ensure_ascii=False so Japanese stays
readable.

RULES:
- Top level: {"version": "1.0.0", "sentences": [...]}
- Unknown reading / pronunciation serialise as null
- category is the word label ("predicate-chain", or "noun/general" for
  an unmerged token)
- Output suffix: "-words.json"
- Schema validation is mandatory; raises on invalid output
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import jsonschema

from wordgroup.core.ir import Token, Word
from wordgroup.formatters.base import BaseFormatter, FormatterOutput, Sentences

SCHEMA_VERSION = "1.0.0"

_SCHEMA_PATH = Path(__file__).resolve().parent / "words_schema.json"

_CACHED_SCHEMA: Optional[Dict[str, Any]] = None


def get_schema() -> Dict[str, Any]:
    """Load the output schema from disk, once."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def _token_to_dict(token: Token) -> Dict[str, Any]:
    conjugation = None
    if token.conjugation is not None:
        conjugation = "{}/{}".format(token.conjugation.type.value, token.conjugation.form.value)
    return {
        "surface": token.surface,
        "category": token.category.label,
        "base_form": token.base_form,
        "conjugation": conjugation,
    }


def word_to_dict(word: Word) -> Dict[str, Any]:
    return {
        "surface": word.surface,
        "base_form": word.base_form,
        "reading": word.reading,
        "pronunciation": word.pronunciation,
        "category": word.label,
        "part_of_speech": word.part_of_speech.value,
        "grammar": word.grammar.value if word.grammar is not None else None,
        "start": word.start_offset,
        "end": word.end_offset,
        "tokens": [_token_to_dict(token) for token in word.tokens],
    }


def _sentence_to_dict(words: Sequence[Word]) -> Dict[str, Any]:
    return {
        "start": words[0].start_offset,
        "end": words[-1].end_offset,
        "words": [word_to_dict(word) for word in words],
    }


class JsonWordsFormatter(BaseFormatter):
    """Schema-validated JSON of merged words, grouped by sentence."""

    @property
    def name(self) -> str:
        return "Words JSON"

    def format(self, sentences: Sentences) -> List[FormatterOutput]:
        """Serialise the sentences.

        Raises:
            jsonschema.ValidationError: If the generated JSON does not
                conform to words_schema.json.
        """
        output: Dict[str, Any] = {
            "version": SCHEMA_VERSION,
            "sentences": [_sentence_to_dict(s) for s in sentences if s],
        }

        jsonschema.validate(instance=output, schema=get_schema())

        content = json.dumps(output, indent=2, ensure_ascii=False)

        return [
            FormatterOutput(
                suffix="-words.json",
                content=content,
                media_type="application/json",
            )
        ]
