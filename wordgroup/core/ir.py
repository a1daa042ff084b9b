"""Intermediate representation dataclasses for tokens and merged words.

WHY: Morphological analyzers emit flat morpheme arrays whose tags are
dictionary-specific strings ("名詞", "サ変・スル", "助数詞"...). The merge
engine needs a typed, dictionary-independent view of those tags, and its
callers need a single well-typed Word form that every formatter consumes.

HOW: Tags are normalised by a profile (see core/profiles.py) into the
closed PosTag enumeration. A Token carries a Category (four hierarchical
PosTags) and an optional Conjugation (type/form pair). A Word is one or more
contiguous Tokens plus the fields computed by the assembler.

RULES:
- Token and Word are frozen; nothing mutates them after construction
- PosTag.UNSET is the analyzer's "*" placeholder, PosTag.UNRECOGNIZED is any
  string the active profile does not know; both are ordinary values
- A Category whose major class is UNSET or UNRECOGNIZED is not recognized,
  which drives the engine's stand-alone fallback
- Word.tokens holds the same Token objects as the input sequence
- Word.reading / Word.pronunciation are None when any constituent is unknown
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Tuple, Union


class PosTag(enum.Enum):
    """Canonical tag values shared by every dictionary profile."""

    # Major classes
    NOUN = "noun"
    VERB = "verb"
    ADJECTIVE = "adjective"
    AUXILIARY_VERB = "auxiliary-verb"
    PARTICLE = "particle"
    PREFIX = "prefix"
    ADVERB = "adverb"
    ADNOMINAL = "adnominal"
    CONJUNCTION = "conjunction"
    INTERJECTION = "interjection"
    FILLER = "filler"
    SYMBOL = "symbol"
    OTHER = "other"

    # Noun subclasses
    GENERAL = "general"
    PROPER_NOUN = "proper-noun"
    PRONOUN = "pronoun"
    NUMERAL = "numeral"
    SUFFIX = "suffix"
    DEPENDENT = "dependent"
    SPECIAL = "special"
    ADVERBIAL_POSSIBLE = "adverbial-possible"
    SURU_CONNECTION = "suru-connection"
    ADJECTIVAL_NOUN_STEM = "adjectival-noun-stem"
    NAI_ADJECTIVE_STEM = "nai-adjective-stem"
    AUXILIARY_STEM = "auxiliary-stem"
    CONJUNCTION_LIKE = "conjunction-like"
    VERB_DEPENDENT_LIKE = "verb-dependent-like"
    COUNTER = "counter"
    PERSON_NAME = "person-name"
    INDEPENDENT = "independent"

    # Particle subclasses
    CASE_PARTICLE = "case-particle"
    BINDING_PARTICLE = "binding-particle"
    CONJUNCTIVE_PARTICLE = "conjunctive-particle"
    SENTENCE_FINAL_PARTICLE = "sentence-final-particle"
    ADVERBIALIZER = "adverbializer"
    ADNOMINALIZER = "adnominalizer"

    # Prefix subclasses
    NOUN_CONNECTION = "noun-connection"
    NUMERAL_CONNECTION = "numeral-connection"
    VERB_CONNECTION = "verb-connection"
    ADJECTIVE_CONNECTION = "adjective-connection"

    # Symbol subclasses
    PERIOD = "period"
    COMMA = "comma"
    BRACKET_OPEN = "bracket-open"
    BRACKET_CLOSE = "bracket-close"
    SPACE = "space"

    # Conjugation types
    SAHEN_SURU = "sahen-suru"
    SPECIAL_TA = "special-ta"
    SPECIAL_NAI = "special-nai"
    SPECIAL_TAI = "special-tai"
    SPECIAL_DESU = "special-desu"
    SPECIAL_DA = "special-da"
    SPECIAL_MASU = "special-masu"
    SPECIAL_NU = "special-nu"
    INVARIANT = "invariant"

    # Conjugation forms
    NOMINAL_CONNECTION = "nominal-connection"
    IMPERATIVE_I = "imperative-i"

    UNSET = "*"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class Category:
    """Hierarchical part-of-speech of a token (major class + subclasses)."""

    major: PosTag
    minor: PosTag = PosTag.UNSET
    sub3: PosTag = PosTag.UNSET
    sub4: PosTag = PosTag.UNSET

    @property
    def is_recognized(self) -> bool:
        return self.major not in (PosTag.UNSET, PosTag.UNRECOGNIZED)

    @property
    def label(self) -> str:
        parts = [self.major.value]
        for tag in (self.minor, self.sub3, self.sub4):
            if tag is PosTag.UNSET:
                break
            parts.append(tag.value)
        return "/".join(parts)


@dataclass(frozen=True)
class Conjugation:
    """Inflection type and form of an inflecting token."""

    type: PosTag
    form: PosTag = PosTag.UNSET


@dataclass(frozen=True)
class Token:
    """One morpheme from the analyzer, normalised by the token adapter.

    Attributes:
        surface: Exact text the morpheme occupies.
        start_offset / end_offset: Codepoint offsets into the original text.
        reading: Katakana reading, "" when the analyzer did not know it.
        base_form: Dictionary form; the surface for non-inflecting tokens.
        category: Normalised hierarchical part-of-speech.
        conjugation: Inflection type/form, None for non-inflecting tokens.
        pronunciation: Pronunciation (hatsuon), "" when unknown.
    """

    surface: str
    start_offset: int
    end_offset: int
    reading: str = ""
    base_form: str = ""
    category: Category = Category(PosTag.UNRECOGNIZED)
    conjugation: Optional[Conjugation] = None
    pronunciation: str = ""

    @property
    def inflects(self) -> bool:
        return self.conjugation is not None

    def __repr__(self) -> str:
        return "Token({!r}, {}..{}, {})".format(
            self.surface, self.start_offset, self.end_offset, self.category.label,
        )


class WordCategory(enum.Enum):
    """Word-level category of a merged word, declared in precedence order."""

    PREDICATE_CHAIN = "predicate-chain"
    COMPOUND_NOUN = "compound-noun"
    NUMERAL_COUNTER = "numeral-counter"
    SYMBOL_ABSORPTION = "symbol-absorption"


class PartOfSpeech(enum.Enum):
    """Coarse, learner-facing part of speech of a whole word."""

    NOUN = "noun"
    PROPER_NOUN = "proper-noun"
    PRONOUN = "pronoun"
    ADJECTIVE = "adjective"
    ADVERB = "adverb"
    DETERMINER = "determiner"
    POSTPOSITION = "postposition"
    VERB = "verb"
    SUFFIX = "suffix"
    PREFIX = "prefix"
    CONJUNCTION = "conjunction"
    INTERJECTION = "interjection"
    NUMBER = "number"
    SYMBOL = "symbol"
    OTHER = "other"
    UNKNOWN = "unknown"


class Grammar(enum.Enum):
    """Grammatical role hint for words that behave like function words."""

    AUXILIARY = "auxiliary"
    NOMINAL = "nominal"


@dataclass(frozen=True)
class Word:
    """One linguistically meaningful word assembled from contiguous tokens.

    RULES:
    - tokens is non-empty and covers input indexes [start_index, end_index)
    - surface is the exact concatenation of the token surfaces
    - category is a WordCategory for merged words, or the sole token's
      Category when the word is a single unmerged token
    - start_offset / end_offset come from the first / last token
    """

    tokens: Tuple[Token, ...]
    start_index: int
    end_index: int
    surface: str
    reading: Optional[str]
    pronunciation: Optional[str]
    base_form: str
    category: Union[WordCategory, Category]
    part_of_speech: PartOfSpeech
    grammar: Optional[Grammar] = None

    @property
    def start_offset(self) -> int:
        return self.tokens[0].start_offset

    @property
    def end_offset(self) -> int:
        return self.tokens[-1].end_offset

    @property
    def is_merged(self) -> bool:
        return len(self.tokens) > 1

    @property
    def label(self) -> str:
        if isinstance(self.category, WordCategory):
            return self.category.value
        return self.category.label
