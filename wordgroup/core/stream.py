"""Public word stream: lazy, restartable iteration over merged words.

WHY: Callers want to hand over a token sequence once and then iterate
words, sentence by sentence, possibly several times. Structural problems
with the input must surface at hand-over, not halfway through a loop.

HOW: WordStream validates the token offsets when it is constructed and
resolves the rule table for its MergeConfig. Each iteration runs a fresh
MergeEngine pass over the same tokens. merge() and merge_many() are the
one-shot helpers; merge_many() fans independent sequences out over a
thread pool since the rule table is immutable and shared.

RULES:
- Construction raises TokenSequenceError for malformed offsets
- Iteration is lazy and may be restarted; every pass yields equal words
- The stream holds the caller's Token objects, never copies of them
- Sentences end after a word whose last non-bracket token is a period or
  a sentence terminator, or whose surface contains a newline; closing
  brackets right after the terminator (。」) belong to that sentence
- merge_many() returns results in input order; the first failing
  sequence's exception propagates
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from wordgroup.config import MergeConfig, load_config
from wordgroup.core.engine import MergeEngine, validate_tokens
from wordgroup.core.ir import PosTag, Token, Word
from wordgroup.core.profiles import BaseProfile
from wordgroup.core.rules import get_rule_table

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 4


def is_sentence_end(word: Word, profile: BaseProfile) -> bool:
    if "\n" in word.surface:
        return True
    for token in reversed(word.tokens):
        category = token.category
        if category.major is PosTag.SYMBOL and category.minor is PosTag.BRACKET_CLOSE:
            continue
        if category.major is PosTag.SYMBOL and category.minor is PosTag.PERIOD:
            return True
        return token.surface in profile.sentence_terminators
    return False


def _only_closing_brackets(word: Word) -> bool:
    return all(
        token.category.major is PosTag.SYMBOL and token.category.minor is PosTag.BRACKET_CLOSE
        for token in word.tokens
    )


def split_sentences(words: Iterable[Word], profile: BaseProfile) -> Iterator[List[Word]]:
    """Group words into sentences; a trailing unterminated run is yielded too."""
    sentence: List[Word] = []
    ended = False
    for word in words:
        closing = _only_closing_brackets(word)
        if ended and not closing:
            yield sentence
            sentence = []
        sentence.append(word)
        ended = (ended and closing) or is_sentence_end(word, profile)
    if sentence:
        yield sentence


class WordStream:
    """Restartable iterable of Words over one validated token sequence."""

    def __init__(self, tokens: Iterable[Token], config: Optional[MergeConfig] = None) -> None:
        self._tokens: Tuple[Token, ...] = tuple(tokens)
        validate_tokens(self._tokens)
        self._config = config if config is not None else load_config()
        self._engine = MergeEngine(get_rule_table(self._config))

    @property
    def tokens(self) -> Tuple[Token, ...]:
        return self._tokens

    @property
    def config(self) -> MergeConfig:
        return self._config

    def __iter__(self) -> Iterator[Word]:
        return self._engine.scan(self._tokens)

    def words(self) -> List[Word]:
        return list(self)

    def sentences(self) -> Iterator[List[Word]]:
        return split_sentences(self, self._engine.table.profile)

    def __repr__(self) -> str:
        return "WordStream({} tokens, profile={!r})".format(
            len(self._tokens), self._config.rule_profile,
        )


def merge(tokens: Iterable[Token], config: Optional[MergeConfig] = None) -> List[Word]:
    """Merge one token sequence into a list of Words."""
    return WordStream(tokens, config).words()


def merge_many(
    sequences: Sequence[Sequence[Token]],
    config: Optional[MergeConfig] = None,
    max_workers: Optional[int] = None,
) -> List[List[Word]]:
    """Merge independent token sequences concurrently, preserving order."""
    if not sequences:
        return []
    if config is None:
        config = load_config()
    workers = max_workers or min(DEFAULT_MAX_WORKERS, len(sequences))
    logger.debug("Merging %d sequences with %d workers", len(sequences), workers)

    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(lambda tokens: merge(tokens, config), sequences))
