"""Attachment rule table: ordered, declarative merge decisions.

WHY: Deciding whether the next morpheme belongs to the word being built is
a large conditional dispatch over tag combinations. Written as nested
branches it is impossible to test rule by rule or to see which rule beats
which. As data, every rule has a name, a tier and a decision, and the
priority order is simply the order of the tuple.

HOW: A Rule pairs a predicate over (last buffered token, candidate token)
with a Decision. RuleTable.decide() walks the rules in order and returns
the first match; no match means Break. Rules whose decision needs to see
further ahead return AttachIfLookaheadMatches with a LookaheadPattern that
the engine checks against the tokens after the candidate.

RULES:
- Tier order: predicate chain, numeral-counter, compound noun, symbol
  absorption; the first matching rule wins, later rules are not consulted
- Break rules inside a tier are explicit non-attach exceptions
- Lookahead patterns cover at most MAX_LOOKAHEAD tokens after the candidate
- A table is built once per MergeConfig (get_rule_table caches it) and is
  never mutated afterwards, so it is shared freely between threads
- merge_compounds=False drops the compound tier, absorb_symbols=False drops
  the symbol tier; the other tiers are always present
"""

from __future__ import annotations

import enum
import functools
from dataclasses import dataclass
from typing import Callable, FrozenSet, Iterator, List, NamedTuple, Optional, Sequence, Tuple

from wordgroup.config import MergeConfig
from wordgroup.core.ir import PosTag, Token
from wordgroup.core.profiles import BaseProfile, get_profile

# Furthest the engine may peek past the candidate token.
MAX_LOOKAHEAD = 2

TokenPredicate = Callable[[Token], bool]
PairPredicate = Callable[[Token, Token], bool]


class Tier(enum.IntEnum):
    """Rule tiers in priority order (lower value = consulted first)."""

    PREDICATE_CHAIN = 1
    NUMERAL_COUNTER = 2
    COMPOUND_NOUN = 3
    SYMBOL_ABSORPTION = 4


class DecisionKind(enum.Enum):
    ATTACH = "attach"
    BREAK = "break"
    LOOKAHEAD = "attach-if-lookahead-matches"


@dataclass(frozen=True)
class LookaheadPattern:
    """Predicates for the tokens that follow the candidate, in order."""

    predicates: Tuple[TokenPredicate, ...]
    description: str = ""

    def __post_init__(self) -> None:
        if not 1 <= len(self.predicates) <= MAX_LOOKAHEAD:
            raise ValueError(
                "lookahead patterns cover 1 to {} tokens, got {}".format(
                    MAX_LOOKAHEAD, len(self.predicates),
                )
            )

    def __len__(self) -> int:
        return len(self.predicates)

    def matches(self, window: Sequence[Token]) -> bool:
        if len(window) < len(self.predicates):
            return False
        return all(check(token) for check, token in zip(self.predicates, window))


@dataclass(frozen=True)
class Decision:
    kind: DecisionKind
    pattern: Optional[LookaheadPattern] = None

    def __str__(self) -> str:
        if self.pattern is not None:
            return "{}({})".format(self.kind.value, self.pattern.description)
        return self.kind.value


ATTACH = Decision(DecisionKind.ATTACH)
BREAK = Decision(DecisionKind.BREAK)


def attach_if_lookahead_matches(description: str, *predicates: TokenPredicate) -> Decision:
    return Decision(DecisionKind.LOOKAHEAD, LookaheadPattern(tuple(predicates), description))


@dataclass(frozen=True)
class Rule:
    name: str
    tier: Tier
    applies: PairPredicate
    decision: Decision = ATTACH


class Outcome(NamedTuple):
    """Result of a table lookup; rule is None when the default Break applied."""

    decision: Decision
    rule: Optional[Rule]


# ---------------------------------------------------------------------------
# Token predicates
# ---------------------------------------------------------------------------

# Noun subclasses that behave as stems of a following predicate.
STEM_MINORS = frozenset({
    PosTag.ADVERBIAL_POSSIBLE,
    PosTag.SURU_CONNECTION,
    PosTag.ADJECTIVAL_NOUN_STEM,
    PosTag.NAI_ADJECTIVE_STEM,
})

# Noun subclasses that form compounds with each other.
COMPOUNDABLE_MINORS = frozenset({
    PosTag.GENERAL,
    PosTag.SURU_CONNECTION,
    PosTag.PROPER_NOUN,
})

# Auxiliary conjugation types that always continue a predicate chain.
CHAIN_AUXILIARY_TYPES = frozenset({
    PosTag.SPECIAL_TA,
    PosTag.SPECIAL_NAI,
    PosTag.SPECIAL_TAI,
    PosTag.SPECIAL_MASU,
    PosTag.SPECIAL_NU,
})

CONTENT_MAJORS = frozenset({PosTag.NOUN, PosTag.VERB, PosTag.ADJECTIVE})

# What a prefix of each subclass may attach to; other prefixes take any content.
PREFIX_TARGETS = {
    PosTag.NOUN_CONNECTION: frozenset({PosTag.NOUN}),
    PosTag.NUMERAL_CONNECTION: frozenset({PosTag.NOUN}),
    PosTag.VERB_CONNECTION: frozenset({PosTag.VERB}),
    PosTag.ADJECTIVE_CONNECTION: frozenset({PosTag.ADJECTIVE}),
}

# Majors an opening bracket may attach forward to.
BRACKETABLE_MAJORS = frozenset({
    PosTag.NOUN, PosTag.VERB, PosTag.ADJECTIVE, PosTag.ADVERB,
    PosTag.ADNOMINAL, PosTag.CONJUNCTION, PosTag.INTERJECTION,
    PosTag.FILLER, PosTag.PREFIX, PosTag.OTHER,
})


def is_major(token: Token, *majors: PosTag) -> bool:
    return token.category.major in majors


def is_noun(token: Token, *minors: PosTag) -> bool:
    category = token.category
    return category.major is PosTag.NOUN and (not minors or category.minor in minors)


def is_numeral(token: Token) -> bool:
    return is_noun(token, PosTag.NUMERAL)


def is_counter(token: Token) -> bool:
    return is_noun(token, PosTag.SUFFIX) and token.category.sub3 is PosTag.COUNTER


def is_symbol(token: Token, *minors: PosTag) -> bool:
    category = token.category
    return category.major is PosTag.SYMBOL and (not minors or category.minor in minors)


def is_particle(token: Token, *minors: PosTag) -> bool:
    category = token.category
    return category.major is PosTag.PARTICLE and (not minors or category.minor in minors)


def conjugation_type(token: Token) -> PosTag:
    return token.conjugation.type if token.conjugation is not None else PosTag.UNSET


def is_attributive_copula(token: Token) -> bool:
    """だ in its attributive form (the な of 静かな)."""
    return (
        token.conjugation is not None
        and token.conjugation.type is PosTag.SPECIAL_DA
        and token.conjugation.form is PosTag.NOMINAL_CONNECTION
    )


def is_verb_suffix(token: Token) -> bool:
    return is_major(token, PosTag.VERB, PosTag.ADJECTIVE) and token.category.minor is PosTag.SUFFIX


def is_chain_particle(token: Token, profile: BaseProfile) -> bool:
    return (
        is_particle(token, PosTag.CONJUNCTIVE_PARTICLE)
        and token.surface in profile.chain_particles
    )


def is_chain_capable(token: Token, profile: BaseProfile) -> bool:
    """Whether predicate-chain attachments may follow this token."""
    return token.inflects or is_chain_particle(token, profile)


def is_negative_auxiliary(token: Token, profile: BaseProfile) -> bool:
    """ない/ぬ/ん, or the ませ of ません; a plain polite ます is not negative."""
    if not is_major(token, PosTag.AUXILIARY_VERB):
        return False
    kind = conjugation_type(token)
    if kind in (PosTag.SPECIAL_NAI, PosTag.SPECIAL_NU):
        return True
    if kind is PosTag.SPECIAL_MASU:
        return token.surface in profile.negative_polite_stems
    return kind is PosTag.INVARIANT and token.base_form == "ん"


def is_adverbial_dependent(token: Token) -> bool:
    """Dependent noun usable as an adverb (the ため of ために)."""
    return (
        is_noun(token, PosTag.DEPENDENT, PosTag.SPECIAL)
        and token.category.sub3 is PosTag.ADVERBIAL_POSSIBLE
    )


def is_obligation_verb(token: Token, profile: BaseProfile) -> bool:
    return is_major(token, PosTag.VERB) and token.base_form in profile.obligation_verbs


def _prefix_accepts(prefix: Token, candidate: Token) -> bool:
    if is_noun(candidate, PosTag.DEPENDENT, PosTag.SUFFIX):
        return False
    targets = PREFIX_TARGETS.get(prefix.category.minor, CONTENT_MAJORS)
    if prefix.category.minor is PosTag.NUMERAL_CONNECTION:
        return is_numeral(candidate)
    return candidate.category.major in targets


# ---------------------------------------------------------------------------
# Rule catalogue
# ---------------------------------------------------------------------------

def _predicate_chain_rules(profile: BaseProfile) -> List[Rule]:
    tier = Tier.PREDICATE_CHAIN

    def chain(last: Token) -> bool:
        return is_chain_capable(last, profile)

    def negative(token: Token) -> bool:
        return is_negative_auxiliary(token, profile)

    def obligation(token: Token) -> bool:
        return is_obligation_verb(token, profile)

    return [
        Rule(
            "chain-auxiliary", tier,
            lambda last, cand: chain(last)
            and is_major(cand, PosTag.AUXILIARY_VERB)
            and (
                conjugation_type(cand) in CHAIN_AUXILIARY_TYPES
                or cand.base_form in profile.suffix_auxiliaries
            ),
        ),
        Rule(
            "chain-invariant-auxiliary", tier,
            lambda last, cand: chain(last)
            and is_major(cand, PosTag.AUXILIARY_VERB)
            and conjugation_type(cand) is PosTag.INVARIANT
            and cand.base_form in profile.invariant_auxiliaries,
        ),
        Rule(
            "verb-suffix", tier,
            lambda last, cand: is_verb_suffix(cand)
            and (chain(last) or is_major(last, *CONTENT_MAJORS)),
        ),
        Rule(
            "dependent-verb", tier,
            lambda last, cand: chain(last)
            and is_major(cand, PosTag.VERB)
            and cand.category.minor is PosTag.DEPENDENT
            and (cand.conjugation is None or cand.conjugation.form is not PosTag.IMPERATIVE_I),
        ),
        Rule(
            "conjunctive-particle", tier,
            lambda last, cand: chain(last) and is_chain_particle(cand, profile),
        ),
        Rule(
            "verbal-noun-suru", tier,
            lambda last, cand: is_noun(last, *STEM_MINORS)
            and conjugation_type(cand) is PosTag.SAHEN_SURU,
        ),
        Rule(
            "adjectival-noun-attributive", tier,
            lambda last, cand: is_noun(last, *STEM_MINORS) and is_attributive_copula(cand),
        ),
        Rule(
            "nai-adjective", tier,
            lambda last, cand: is_noun(last, *STEM_MINORS)
            and is_major(cand, PosTag.AUXILIARY_VERB)
            and conjugation_type(cand) is PosTag.SPECIAL_NAI,
        ),
        Rule(
            "auxiliary-stem", tier,
            lambda last, cand: is_noun(last, PosTag.DEPENDENT, PosTag.SPECIAL)
            and last.category.sub3 is PosTag.AUXILIARY_STEM
            and (is_attributive_copula(cand) or is_particle(cand, PosTag.ADVERBIALIZER)),
        ),
        Rule(
            "dependent-adverbial-ni", tier,
            lambda last, cand: is_adverbial_dependent(last)
            and is_particle(cand)
            and cand.surface == profile.adverbial_particle,
        ),
        Rule(
            "dependent-adjectival-stem", tier,
            lambda last, cand: is_noun(last, PosTag.DEPENDENT, PosTag.SPECIAL)
            and last.category.sub3 is PosTag.ADJECTIVAL_NOUN_STEM
            and (is_attributive_copula(cand) or is_particle(cand, PosTag.ADNOMINALIZER)),
        ),
        Rule(
            "obligation-after-ba", tier,
            lambda last, cand: is_chain_particle(last, profile)
            and last.surface == "ば"
            and obligation(cand),
            attach_if_lookahead_matches("negative auxiliary", negative),
        ),
        Rule(
            "obligation-after-te-wa", tier,
            lambda last, cand: is_chain_particle(last, profile)
            and last.surface in ("て", "で")
            and is_particle(cand, PosTag.BINDING_PARTICLE)
            and cand.surface in profile.obligation_particles,
            attach_if_lookahead_matches("obligation verb + negative auxiliary", obligation, negative),
        ),
    ]


def _numeral_counter_rules(profile: BaseProfile) -> List[Rule]:
    tier = Tier.NUMERAL_COUNTER
    return [
        Rule(
            "numeral-chain", tier,
            lambda last, cand: is_numeral(last) and is_numeral(cand),
        ),
        Rule(
            "numeral-counter", tier,
            lambda last, cand: is_numeral(last) and is_counter(cand),
        ),
        Rule(
            "decimal-number", tier,
            lambda last, cand: is_numeral(last)
            and is_symbol(cand)
            and cand.surface in profile.decimal_separators,
            attach_if_lookahead_matches("numeral", is_numeral),
        ),
    ]


def _compound_noun_rules() -> List[Rule]:
    tier = Tier.COMPOUND_NOUN
    return [
        Rule(
            "honorific-suffix-stands-alone", tier,
            lambda last, cand: is_noun(cand, PosTag.SUFFIX)
            and cand.category.sub3 is PosTag.PERSON_NAME,
            BREAK,
        ),
        Rule(
            "dependent-noun-stands-alone", tier,
            lambda last, cand: is_noun(cand, PosTag.DEPENDENT),
            BREAK,
        ),
        Rule(
            "noun-suffix", tier,
            lambda last, cand: is_noun(cand, PosTag.SUFFIX) and is_major(last, *CONTENT_MAJORS),
        ),
        Rule(
            "prefix", tier,
            lambda last, cand: is_major(last, PosTag.PREFIX) and _prefix_accepts(last, cand),
        ),
        Rule(
            "common-noun-compound", tier,
            lambda last, cand: is_noun(last, *COMPOUNDABLE_MINORS)
            and is_noun(cand, *COMPOUNDABLE_MINORS),
        ),
    ]


def _symbol_absorption_rules() -> List[Rule]:
    tier = Tier.SYMBOL_ABSORPTION
    return [
        Rule(
            "space-never-absorbs", tier,
            lambda last, cand: is_symbol(last, PosTag.SPACE) or is_symbol(cand, PosTag.SPACE),
            BREAK,
        ),
        Rule(
            "closing-bracket", tier,
            lambda last, cand: is_symbol(cand, PosTag.BRACKET_CLOSE)
            and not is_particle(last)
            # Nested closers stack (猫」」); punctuation keeps its bracket apart (。」)
            and (not is_symbol(last) or is_symbol(last, PosTag.BRACKET_CLOSE)),
        ),
        Rule(
            "opening-bracket", tier,
            lambda last, cand: is_symbol(last, PosTag.BRACKET_OPEN)
            and (is_major(cand, *BRACKETABLE_MAJORS) or is_symbol(cand, PosTag.BRACKET_OPEN)),
        ),
    ]


class RuleTable:
    """Immutable, ordered rule catalogue for one configuration."""

    def __init__(self, rules: Sequence[Rule], profile: BaseProfile) -> None:
        self._rules: Tuple[Rule, ...] = tuple(rules)
        self._profile = profile

    @property
    def profile(self) -> BaseProfile:
        return self._profile

    @property
    def tiers(self) -> FrozenSet[Tier]:
        return frozenset(rule.tier for rule in self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def decide(self, last: Token, candidate: Token) -> Outcome:
        """Return the decision of the first rule matching the token pair."""
        for rule in self._rules:
            if rule.applies(last, candidate):
                return Outcome(rule.decision, rule)
        return Outcome(BREAK, None)

    def describe(self) -> List[Tuple[int, str, str]]:
        """(tier, rule name, decision) rows in priority order."""
        return [(int(rule.tier), rule.name, str(rule.decision)) for rule in self._rules]


def build_rule_table(
    profile: BaseProfile,
    absorb_symbols: bool = True,
    merge_compounds: bool = True,
) -> RuleTable:
    rules = _predicate_chain_rules(profile) + _numeral_counter_rules(profile)
    if merge_compounds:
        rules += _compound_noun_rules()
    if absorb_symbols:
        rules += _symbol_absorption_rules()
    return RuleTable(rules, profile)


@functools.lru_cache(maxsize=None)
def get_rule_table(config: MergeConfig) -> RuleTable:
    """Shared rule table for a configuration, built on first use."""
    return build_rule_table(
        get_profile(config.rule_profile),
        absorb_symbols=config.absorb_symbols,
        merge_compounds=config.merge_compounds,
    )
