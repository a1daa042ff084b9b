"""Word assembly: turn a closed run of tokens into one Word.

WHY: The engine only decides where word boundaries fall. Everything a
caller actually reads off a word (its surface, reading, dictionary form,
category and coarse part of speech) is derived from the run of tokens
after the fact, and that derivation is independent of how the boundary
was found. Keeping it here lets it be tested on hand-built token runs.

HOW: assemble() concatenates the token fields, picks the word category
from the tiers that fired (by precedence), derives the base form from the
lexical head of the run and classifies the word's part of speech from its
lead token and the token that follows it.

RULES:
- surface is the exact concatenation of token surfaces
- reading / pronunciation are None if any token's value is unknown ("")
- A single-token word keeps the token's own Category
- Merged words take the highest-precedence WordCategory among fired tiers:
  predicate chain > compound noun > numeral-counter > symbol absorption
- Base form of a predicate chain: surfaces up to the lexical head, then the
  head's run of verb suffixes with the last one in dictionary form
  (食べさせられた -> 食べさせられる, 勉強します -> 勉強する)
- Compound nouns and numeral-counters keep their surface as base form
  (brackets included); a bracket-absorbed word drops its brackets
- Part of speech comes from the first token that is not a prefix or an
  opening bracket; a nominalising suffix (高さ) turns the word into a noun
"""

from __future__ import annotations

from typing import AbstractSet, Optional, Sequence, Tuple

from wordgroup.core.ir import (
    Category,
    Grammar,
    PartOfSpeech,
    PosTag,
    Token,
    Word,
    WordCategory,
)
from wordgroup.core.profiles import DEFAULT_PROFILE, BaseProfile, get_profile
from wordgroup.core.rules import STEM_MINORS, Tier

# Precedence order for merged-word categories (first wins).
_CATEGORY_PRECEDENCE: Tuple[Tuple[Tier, WordCategory], ...] = (
    (Tier.PREDICATE_CHAIN, WordCategory.PREDICATE_CHAIN),
    (Tier.COMPOUND_NOUN, WordCategory.COMPOUND_NOUN),
    (Tier.NUMERAL_COUNTER, WordCategory.NUMERAL_COUNTER),
    (Tier.SYMBOL_ABSORPTION, WordCategory.SYMBOL_ABSORPTION),
)

_MAJOR_TO_POS = {
    PosTag.PREFIX: PartOfSpeech.PREFIX,
    PosTag.VERB: PartOfSpeech.VERB,
    PosTag.ADJECTIVE: PartOfSpeech.ADJECTIVE,
    PosTag.PARTICLE: PartOfSpeech.POSTPOSITION,
    PosTag.ADNOMINAL: PartOfSpeech.DETERMINER,
    PosTag.CONJUNCTION: PartOfSpeech.CONJUNCTION,
    PosTag.ADVERB: PartOfSpeech.ADVERB,
    PosTag.SYMBOL: PartOfSpeech.SYMBOL,
    PosTag.FILLER: PartOfSpeech.INTERJECTION,
    PosTag.INTERJECTION: PartOfSpeech.INTERJECTION,
    PosTag.OTHER: PartOfSpeech.OTHER,
}


def _join_known(values: Sequence[str]) -> Optional[str]:
    if any(not value for value in values):
        return None
    return "".join(values)


def _is_bracket(token: Token) -> bool:
    category = token.category
    return category.major is PosTag.SYMBOL and category.minor in (
        PosTag.BRACKET_OPEN, PosTag.BRACKET_CLOSE,
    )


def _strip_brackets(tokens: Sequence[Token]) -> Sequence[Token]:
    start, end = 0, len(tokens)
    while start < end and _is_bracket(tokens[start]):
        start += 1
    while end > start and _is_bracket(tokens[end - 1]):
        end -= 1
    return tokens[start:end]


def _is_verbal(token: Token) -> bool:
    return token.category.major in (PosTag.VERB, PosTag.ADJECTIVE)


def _is_lexical_head(token: Token) -> bool:
    if not _is_verbal(token):
        return False
    if token.conjugation is not None and token.conjugation.type is PosTag.SAHEN_SURU:
        return True
    return token.category.minor not in (PosTag.SUFFIX, PosTag.DEPENDENT)


def _is_head_suffix(token: Token, profile: BaseProfile) -> bool:
    if _is_verbal(token) and token.category.minor is PosTag.SUFFIX:
        return True
    # UniDic tags させる/られる as auxiliaries rather than verb suffixes
    return token.category.major is PosTag.AUXILIARY_VERB and token.base_form in profile.suffix_auxiliaries


def _chain_base_form(tokens: Sequence[Token], profile: BaseProfile) -> str:
    head: Optional[int] = None
    for i, token in enumerate(tokens):
        if _is_lexical_head(token):
            head = i
            break
    if head is None:
        for i, token in enumerate(tokens):
            if _is_verbal(token):
                head = i
                break

    if head is None:
        # No verb or adjective: 静かな -> 静か, ように -> よう
        end = 0
        for i, token in enumerate(tokens):
            if token.category.major not in (PosTag.AUXILIARY_VERB, PosTag.PARTICLE):
                end = i + 1
        kept = tokens[:end] if end else tokens
        return "".join(token.surface for token in kept)

    last = head
    while last + 1 < len(tokens) and _is_head_suffix(tokens[last + 1], profile):
        last += 1

    stem = "".join(token.surface for token in tokens[:last])
    return stem + (tokens[last].base_form or tokens[last].surface)


def _base_form(tokens: Sequence[Token], category: object, profile: BaseProfile) -> str:
    if len(tokens) == 1:
        return tokens[0].base_form or tokens[0].surface
    if category in (WordCategory.COMPOUND_NOUN, WordCategory.NUMERAL_COUNTER):
        return "".join(token.surface for token in tokens)
    core = _strip_brackets(tokens) or tokens
    if len(core) == 1:
        return core[0].base_form or core[0].surface
    if category is WordCategory.PREDICATE_CHAIN:
        return _chain_base_form(core, profile)
    return "".join(token.surface for token in core)


def _word_category(tokens: Sequence[Token], tiers: AbstractSet[Tier]):
    if len(tokens) == 1:
        return tokens[0].category
    for tier, category in _CATEGORY_PRECEDENCE:
        if tier in tiers:
            return category
    raise ValueError(
        "Merged word {!r} has no tier recorded".format("".join(t.surface for t in tokens))
    )


def classify(
    token: Token,
    following: Optional[Token],
) -> Tuple[PartOfSpeech, Optional[Grammar]]:
    """Coarse part of speech of a word led by ``token``.

    ``following`` is the token right after ``token`` (inside or outside
    the word); stems look at it to decide between noun, verb, adjective
    and adverb readings.
    """
    category = token.category
    major = category.major

    if major is PosTag.NOUN:
        return _classify_noun(category, following)

    if major is PosTag.AUXILIARY_VERB:
        conjugation = token.conjugation
        if (
            conjugation is not None
            and conjugation.type in (PosTag.SPECIAL_DA, PosTag.SPECIAL_DESU)
            and token.surface != "な"
        ):
            return PartOfSpeech.VERB, None
        return PartOfSpeech.POSTPOSITION, None

    return _MAJOR_TO_POS.get(major, PartOfSpeech.UNKNOWN), None


def _classify_noun(
    category: Category,
    following: Optional[Token],
) -> Tuple[PartOfSpeech, Optional[Grammar]]:
    minor = category.minor

    if minor is PosTag.PROPER_NOUN:
        return PartOfSpeech.PROPER_NOUN, None
    if minor is PosTag.PRONOUN:
        return PartOfSpeech.PRONOUN, None
    if minor is PosTag.NUMERAL:
        return PartOfSpeech.NUMBER, None
    if minor is PosTag.CONJUNCTION_LIKE:
        return PartOfSpeech.CONJUNCTION, None
    if minor is PosTag.VERB_DEPENDENT_LIKE:
        return PartOfSpeech.VERB, Grammar.NOMINAL
    if minor is PosTag.SUFFIX:
        if category.sub3 is PosTag.PERSON_NAME:
            return PartOfSpeech.SUFFIX, None
        return PartOfSpeech.NOUN, None

    if following is None:
        return PartOfSpeech.NOUN, None

    conjugation_type = (
        following.conjugation.type if following.conjugation is not None else PosTag.UNSET
    )

    if minor in STEM_MINORS:
        if conjugation_type is PosTag.SAHEN_SURU:
            return PartOfSpeech.VERB, None
        if conjugation_type in (PosTag.SPECIAL_NAI, PosTag.SPECIAL_DA):
            return PartOfSpeech.ADJECTIVE, None
        if following.category.major is PosTag.PARTICLE and following.surface == "に":
            return PartOfSpeech.ADVERB, None
        return PartOfSpeech.NOUN, None

    if minor in (PosTag.DEPENDENT, PosTag.SPECIAL):
        sub3 = category.sub3
        following_minor = following.category.minor
        if sub3 is PosTag.ADVERBIAL_POSSIBLE:
            if following.category.major is PosTag.PARTICLE and following.surface == "に":
                return PartOfSpeech.ADVERB, None
        elif sub3 is PosTag.AUXILIARY_STEM:
            if conjugation_type is PosTag.SPECIAL_DA:
                return PartOfSpeech.VERB, Grammar.AUXILIARY
            if following_minor is PosTag.ADVERBIALIZER:
                return PartOfSpeech.ADVERB, None
        elif sub3 is PosTag.ADJECTIVAL_NOUN_STEM:
            return PartOfSpeech.ADJECTIVE, None

    return PartOfSpeech.NOUN, None


def _part_of_speech(
    tokens: Sequence[Token],
    following: Optional[Token],
    profile: BaseProfile,
) -> Tuple[PartOfSpeech, Optional[Grammar]]:
    lead = 0
    for i, token in enumerate(tokens):
        category = token.category
        if category.major is PosTag.PREFIX:
            continue
        if category.major is PosTag.SYMBOL and category.minor is PosTag.BRACKET_OPEN:
            continue
        lead = i
        break

    after = tokens[lead + 1] if lead + 1 < len(tokens) else following
    pos, grammar = classify(tokens[lead], after)

    for token in tokens[lead + 1:]:
        category = token.category
        if (
            category.major is PosTag.NOUN
            and category.minor is PosTag.SUFFIX
            and token.surface == profile.nominalizing_suffix
        ):
            return PartOfSpeech.NOUN, None
    return pos, grammar


def assemble(
    tokens: Sequence[Token],
    start_index: int,
    tiers: AbstractSet[Tier] = frozenset(),
    following: Optional[Token] = None,
    profile: Optional[BaseProfile] = None,
) -> Word:
    """Build one Word from a contiguous, non-empty run of tokens.

    Args:
        tokens: The run, in input order.
        start_index: Index of the first token in the input sequence.
        tiers: Rule tiers that attached tokens into this run.
        following: The input token right after the run, if any.
        profile: Dictionary profile (default: ipadic).

    Raises:
        ValueError: Empty run, or a multi-token run with no tier recorded.
    """
    if not tokens:
        raise ValueError("Cannot assemble a word from an empty token run")
    if profile is None:
        profile = get_profile(DEFAULT_PROFILE)

    run: Tuple[Token, ...] = tuple(tokens)
    category = _word_category(run, tiers)
    pos, grammar = _part_of_speech(run, following, profile)

    return Word(
        tokens=run,
        start_index=start_index,
        end_index=start_index + len(run),
        surface="".join(token.surface for token in run),
        reading=_join_known([token.reading for token in run]),
        pronunciation=_join_known([token.pronunciation for token in run]),
        base_form=_base_form(run, category, profile),
        category=category,
        part_of_speech=pos,
        grammar=grammar,
    )
