"""Merge engine: left-to-right grouping of tokens into words.

WHY: Word boundaries in Japanese analyzer output are a property of the
boundary between two adjacent morphemes, decided by the rule table. The
engine is the small state machine that applies those decisions in a single
pass, so every token is visited once and no closed word is ever revisited.

HOW: validate_tokens() checks the offset contract up front. MergeEngine
then keeps one open buffer (a run [start, index) of the input). At each
step it asks the rule table about (last buffered token, next token):
Attach extends the buffer, Break closes it into a Word and seeds a new
one, AttachIfLookaheadMatches extends it by the candidate plus the
matched tokens, or breaks when the tokens ahead do not match.

RULES:
- Token offsets must be contiguous: start < end and start == previous end
- Validation happens before the first Word is produced; a malformed
  sequence yields no words at all
- A token whose major category is unrecognized never merges (it becomes a
  stand-alone word); this is logged at DEBUG, not raised
- Lookahead consumes the candidate and the matched tokens atomically
- Empty input yields no words
- The engine holds no per-run state between calls and is thread-safe
"""

from __future__ import annotations

import enum
import logging
from typing import Iterable, Iterator, List, Optional, Sequence, Set

from wordgroup.core.assembler import assemble
from wordgroup.core.errors import TokenSequenceError
from wordgroup.core.ir import Token, Word
from wordgroup.core.rules import DecisionKind, RuleTable, Tier

logger = logging.getLogger(__name__)


class MergeState(enum.Enum):
    IDLE = "idle"
    ACCUMULATING = "accumulating"
    CLOSED = "closed"


def validate_tokens(tokens: Sequence[Token]) -> None:
    """Raise TokenSequenceError on the first offset violation."""
    previous: Optional[Token] = None
    for index, token in enumerate(tokens):
        if token.end_offset <= token.start_offset:
            raise TokenSequenceError(
                index, "empty-span", token.start_offset, token.end_offset,
            )
        if previous is not None and token.start_offset != previous.end_offset:
            if token.start_offset > previous.end_offset:
                kind = "gap"
            elif token.start_offset < previous.start_offset:
                kind = "out-of-order"
            else:
                kind = "overlap"
            raise TokenSequenceError(
                index, kind, token.start_offset, token.end_offset, previous.end_offset,
            )
        previous = token


class MergeEngine:
    """Single-pass merger driven by a RuleTable."""

    def __init__(self, table: RuleTable) -> None:
        self._table = table

    @property
    def table(self) -> RuleTable:
        return self._table

    def run(self, tokens: Iterable[Token]) -> Iterator[Word]:
        """Validate ``tokens`` and yield the merged words in order.

        Raises:
            TokenSequenceError: Raised by this call, before any word is
                produced, if the offsets are not contiguous.
        """
        sequence = tokens if isinstance(tokens, (list, tuple)) else list(tokens)
        validate_tokens(sequence)
        return self.scan(sequence)

    def merge(self, tokens: Iterable[Token]) -> List[Word]:
        return list(self.run(tokens))

    def scan(self, tokens: Sequence[Token]) -> Iterator[Word]:
        """Yield words from an already validated token sequence."""
        count = len(tokens)
        state = MergeState.IDLE
        start = 0
        index = 0
        tiers: Set[Tier] = set()

        while index < count:
            if state is not MergeState.ACCUMULATING:
                start = index
                tiers = set()
                index += 1
                state = MergeState.ACCUMULATING
                continue

            consumed = self._step(tokens, index, tiers)
            if consumed:
                index += consumed
                continue

            yield self._close(tokens, start, index, tiers)
            state = MergeState.CLOSED

        if state is MergeState.ACCUMULATING:
            yield self._close(tokens, start, count, tiers)

    def _step(self, tokens: Sequence[Token], index: int, tiers: Set[Tier]) -> int:
        """Number of tokens to attach at ``index`` (0 means Break)."""
        last = tokens[index - 1]
        candidate = tokens[index]

        if not last.category.is_recognized or not candidate.category.is_recognized:
            logger.debug(
                "Unrecognized category at token %d (%r -> %r); not merging",
                index, last.surface, candidate.surface,
            )
            return 0

        outcome = self._table.decide(last, candidate)
        decision = outcome.decision

        if decision.kind is DecisionKind.ATTACH:
            tiers.add(outcome.rule.tier)
            return 1

        if decision.kind is DecisionKind.LOOKAHEAD:
            pattern = decision.pattern
            window = tokens[index + 1:index + 1 + len(pattern)]
            if pattern.matches(window):
                tiers.add(outcome.rule.tier)
                return 1 + len(pattern)
            logger.debug(
                "Rule %s: lookahead (%s) did not match after %r",
                outcome.rule.name, pattern.description, candidate.surface,
            )

        return 0

    def _close(
        self,
        tokens: Sequence[Token],
        start: int,
        end: int,
        tiers: Set[Tier],
    ) -> Word:
        following = tokens[end] if end < len(tokens) else None
        return assemble(
            tokens[start:end],
            start,
            frozenset(tiers),
            following=following,
            profile=self._table.profile,
        )
