"""Adapter: analyzer output to Token sequences.

WHY: The merge core consumes typed Tokens with contiguous codepoint
offsets, but analyzers hand out text: MeCab prints one morpheme per line
("surface<TAB>f1,f2,...") with an EOS line after each sentence, and
pipelines that already ran an analyzer often store tokens as JSON records.
This adapter bridges both into the core's Token contract.

HOW: Each MeCab line is split at the tab; the feature string is split as
CSV (UniDic quotes fields that contain commas) and handed to the dictionary
profile, which normalises tags. Offsets are assigned cumulatively from the
surfaces. When the original text is supplied, each surface is located in
it and any whitespace the analyzer skipped is re-inserted as an explicit
記号,空白 token, so the words always tile the text exactly. JSON records are
validated with jsonschema before conversion.

RULES:
- Blank lines are ignored; "EOS" ends a sentence
- A line without a tab, or with fewer than profile.min_fields features,
  raises AdapterError carrying the 1-based line number
- With text realignment, only whitespace may be skipped; anything else is
  a misalignment and raises AdapterError
- Trailing whitespace after the last morpheme becomes a final space token
- JSON records may carry "start"/"end"; missing offsets continue from the
  previous record's end
- Tags the profile does not know become PosTag.UNRECOGNIZED (not an error)
"""

from __future__ import annotations

import csv
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

import jsonschema

from wordgroup.core.errors import AdapterError
from wordgroup.core.ir import Category, PosTag, Token
from wordgroup.core.profiles import BaseProfile, FeatureRow, get_profile

logger = logging.getLogger(__name__)

EOS_MARKER = "EOS"

SPACE_CATEGORY = Category(PosTag.SYMBOL, PosTag.SPACE)

TOKEN_RECORDS_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "array",
    "items": {
        "type": "object",
        "required": ["surface", "features"],
        "properties": {
            "surface": {"type": "string", "minLength": 1},
            "features": {
                "oneOf": [
                    {"type": "string"},
                    {"type": "array", "items": {"type": "string"}},
                ]
            },
            "start": {"type": "integer", "minimum": 0},
            "end": {"type": "integer", "minimum": 0},
        },
    },
}

ProfileArg = Union[str, BaseProfile]


def _resolve_profile(profile: ProfileArg) -> BaseProfile:
    if isinstance(profile, BaseProfile):
        return profile
    return get_profile(profile)


def split_features(feature_text: str) -> List[str]:
    """Split a comma-separated feature string, honouring CSV quoting."""
    return next(csv.reader([feature_text]))


def parse_mecab_line(
    line: str,
    profile: BaseProfile,
    line_number: Optional[int] = None,
) -> Tuple[str, FeatureRow]:
    """Parse one "surface<TAB>features" line into (surface, FeatureRow)."""
    surface, tab, feature_text = line.partition("\t")
    if not tab or not surface:
        raise AdapterError(
            "Expected 'surface<TAB>features', got {!r}".format(line), line_number,
        )
    fields = split_features(feature_text)
    if len(fields) < profile.min_fields:
        raise AdapterError(
            "Expected at least {} feature fields for {!r}, got {}".format(
                profile.min_fields, surface, len(fields),
            ),
            line_number,
        )
    return surface, profile.read_features(surface, fields)


def _space_token(text: str, start: int) -> Token:
    return Token(
        surface=text,
        start_offset=start,
        end_offset=start + len(text),
        reading=text,
        base_form=text,
        category=SPACE_CATEGORY,
        pronunciation=text,
    )


def _make_token(surface: str, row: FeatureRow, start: int) -> Token:
    return Token(
        surface=surface,
        start_offset=start,
        end_offset=start + len(surface),
        reading=row.reading,
        base_form=row.base_form,
        category=row.category,
        conjugation=row.conjugation,
        pronunciation=row.pronunciation,
    )


def build_tokens(
    morphemes: Iterable[Tuple[str, FeatureRow]],
    text: Optional[str] = None,
    start_offset: int = 0,
) -> List[Token]:
    """Assign contiguous offsets, optionally realigning against ``text``."""
    tokens: List[Token] = []
    cursor = start_offset

    if text is None:
        for surface, row in morphemes:
            tokens.append(_make_token(surface, row, cursor))
            cursor += len(surface)
        return tokens

    position = 0
    for surface, row in morphemes:
        found = text.find(surface, position)
        skipped = text[position:found] if found >= 0 else ""
        if found < 0 or skipped.strip():
            raise AdapterError(
                "Surface {!r} does not follow offset {} of the text".format(
                    surface, cursor,
                )
            )
        if skipped:
            tokens.append(_space_token(skipped, cursor))
            cursor += len(skipped)
        tokens.append(_make_token(surface, row, cursor))
        cursor += len(surface)
        position = found + len(surface)

    trailing = text[position:]
    if trailing.strip():
        raise AdapterError(
            "Text continues after the last morpheme: {!r}".format(trailing[:20])
        )
    if trailing:
        tokens.append(_space_token(trailing, cursor))
    return tokens


def _read_sentences(
    lines: Iterable[str],
    profile: BaseProfile,
) -> List[List[Tuple[str, FeatureRow]]]:
    sentences: List[List[Tuple[str, FeatureRow]]] = []
    current: List[Tuple[str, FeatureRow]] = []
    for line_number, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue
        if line.strip() == EOS_MARKER:
            sentences.append(current)
            current = []
            continue
        current.append(parse_mecab_line(line, profile, line_number))
    if current:
        sentences.append(current)
    return sentences


def tokens_from_mecab(
    lines: Iterable[str],
    profile: ProfileArg = "ipadic",
    text: Optional[str] = None,
) -> List[Token]:
    """Read MeCab output as one token sequence (EOS markers are skipped).

    Args:
        lines: Analyzer output lines (a file object works).
        profile: Profile name or instance matching the analyzer dictionary.
        text: The analysed text; when given, skipped whitespace is restored
              as space tokens and offsets index into this text.
    """
    resolved = _resolve_profile(profile)
    morphemes = [m for sentence in _read_sentences(lines, resolved) for m in sentence]
    tokens = build_tokens(morphemes, text=text)
    logger.debug("Read %d tokens with profile %s", len(tokens), resolved.name)
    return tokens


def documents_from_mecab(
    lines: Iterable[str],
    profile: ProfileArg = "ipadic",
) -> List[List[Token]]:
    """Read MeCab output as one token sequence per EOS-terminated sentence.

    Offsets of every sequence start at 0; empty sentences are dropped.
    """
    resolved = _resolve_profile(profile)
    return [
        build_tokens(sentence)
        for sentence in _read_sentences(lines, resolved)
        if sentence
    ]


def tokens_from_records(
    records: Sequence[Dict[str, Any]],
    profile: ProfileArg = "ipadic",
) -> List[Token]:
    """Convert JSON token records ({"surface", "features", ["start", "end"]}).

    Raises:
        AdapterError: The records violate TOKEN_RECORDS_SCHEMA or carry too
            few feature fields.
    """
    try:
        jsonschema.validate(instance=records, schema=TOKEN_RECORDS_SCHEMA)
    except jsonschema.ValidationError as exc:
        location = "/".join(str(part) for part in exc.absolute_path) or "<root>"
        raise AdapterError(
            "Invalid token records at {}: {}".format(location, exc.message)
        ) from exc

    resolved = _resolve_profile(profile)
    tokens: List[Token] = []
    cursor = 0
    for index, record in enumerate(records):
        surface = record["surface"]
        features = record["features"]
        fields = split_features(features) if isinstance(features, str) else list(features)
        if len(fields) < resolved.min_fields:
            raise AdapterError(
                "Record {} ({!r}) has {} feature fields, expected at least {}".format(
                    index, surface, len(fields), resolved.min_fields,
                )
            )
        row = resolved.read_features(surface, fields)
        start = record.get("start", cursor)
        end = record.get("end", start + len(surface))
        tokens.append(Token(
            surface=surface,
            start_offset=start,
            end_offset=end,
            reading=row.reading,
            base_form=row.base_form,
            category=row.category,
            conjugation=row.conjugation,
            pronunciation=row.pronunciation,
        ))
        cursor = end
    return tokens
