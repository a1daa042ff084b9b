"""Unit tests for the attachment rule table.

WHY: The rule table is data; its order is its semantics. These tests pin
which rule answers for a given token pair so a reordering or a new rule
cannot silently change earlier decisions.

HOW: Token pairs come from the verified IPADIC samples in conftest.py.
Each test asks RuleTable.decide() directly, without running the engine.

RULES:
- Rule names are part of the table's public description (--list-rules)
"""

import pytest

from conftest import (
    BENKYOU_SHIMASU,
    DECIMAL,
    OCHA,
    SANBIKI,
    TABENAKEREBA_NARANAI,
    TANAKA_SAN,
)
from wordgroup.config import MergeConfig
from wordgroup.core.ir import Category, Conjugation, PosTag, Token
from wordgroup.core.profiles import get_profile
from wordgroup.core.rules import (
    ATTACH,
    BREAK,
    DecisionKind,
    LookaheadPattern,
    Tier,
    build_rule_table,
    get_rule_table,
    is_chain_capable,
    is_negative_auxiliary,
)


@pytest.fixture
def table():
    return get_rule_table(MergeConfig())


class TestDecide:

    def test_first_matching_rule_wins(self, table, chain_tokens):
        outcome = table.decide(chain_tokens[0], chain_tokens[1])
        assert outcome.decision == ATTACH
        assert outcome.rule.name == "verb-suffix"
        assert outcome.rule.tier is Tier.PREDICATE_CHAIN

    def test_chain_auxiliary(self, table, chain_tokens):
        outcome = table.decide(chain_tokens[2], chain_tokens[3])
        assert outcome.rule.name == "chain-auxiliary"

    def test_default_is_break(self, table, neko_tokens):
        outcome = table.decide(neko_tokens[0], neko_tokens[1])
        assert outcome.decision == BREAK
        assert outcome.rule is None

    def test_verbal_noun(self, table, analyze):
        tokens = analyze(BENKYOU_SHIMASU)
        assert table.decide(tokens[0], tokens[1]).rule.name == "verbal-noun-suru"

    def test_numeral_counter(self, table, analyze):
        tokens = analyze(SANBIKI)
        outcome = table.decide(tokens[0], tokens[1])
        assert outcome.rule.name == "numeral-counter"
        assert outcome.rule.tier is Tier.NUMERAL_COUNTER

    def test_prefix(self, table, analyze):
        tokens = analyze(OCHA)
        assert table.decide(tokens[0], tokens[1]).rule.name == "prefix"

    def test_explicit_break_exception(self, table, analyze):
        tokens = analyze(TANAKA_SAN)
        outcome = table.decide(tokens[0], tokens[1])
        assert outcome.decision == BREAK
        assert outcome.rule.name == "honorific-suffix-stands-alone"


class TestLookaheadDecisions:

    def test_obligation_returns_lookahead(self, table, analyze):
        tokens = analyze(TABENAKEREBA_NARANAI)
        outcome = table.decide(tokens[2], tokens[3])
        assert outcome.decision.kind is DecisionKind.LOOKAHEAD
        assert outcome.decision.pattern.matches(tokens[4:])
        assert not outcome.decision.pattern.matches([])

    def test_decimal_returns_lookahead(self, table, analyze):
        tokens = analyze(DECIMAL)
        outcome = table.decide(tokens[0], tokens[1])
        assert outcome.rule.name == "decimal-number"
        assert outcome.decision.pattern.matches(tokens[2:])

    def test_pattern_length_is_bounded(self):
        with pytest.raises(ValueError):
            LookaheadPattern(())
        with pytest.raises(ValueError):
            LookaheadPattern((bool, bool, bool))


class TestTableConstruction:

    def test_cached_per_config(self):
        assert get_rule_table(MergeConfig()) is get_rule_table(MergeConfig())

    def test_tiers_follow_config(self):
        full = get_rule_table(MergeConfig())
        bare = get_rule_table(MergeConfig(absorb_symbols=False, merge_compounds=False))
        assert full.tiers == set(Tier)
        assert bare.tiers == {Tier.PREDICATE_CHAIN, Tier.NUMERAL_COUNTER}

    def test_rules_in_tier_order(self, table):
        tiers = [rule.tier for rule in table]
        assert tiers == sorted(tiers)

    def test_describe(self, table):
        rows = table.describe()
        assert len(rows) == len(table)
        assert rows[0] == (1, "chain-auxiliary", "attach")
        assert "attach-if-lookahead-matches(numeral)" in [row[2] for row in rows]

    def test_unidic_table(self):
        table = build_rule_table(get_profile("unidic"))
        assert table.profile.name == "unidic"


class TestChainCapable:

    def test_inflecting_token(self, chain_tokens):
        assert is_chain_capable(chain_tokens[0], get_profile("ipadic"))

    def test_noun_is_not(self, neko_tokens):
        assert not is_chain_capable(neko_tokens[0], get_profile("ipadic"))

    def test_te_particle(self):
        te = Token(
            "て", 0, 1,
            category=Category(PosTag.PARTICLE, PosTag.CONJUNCTIVE_PARTICLE),
        )
        assert is_chain_capable(te, get_profile("ipadic"))


class TestNegativeAuxiliary:

    @staticmethod
    def _masu(surface):
        return Token(
            surface, 0, len(surface), base_form="ます",
            category=Category(PosTag.AUXILIARY_VERB),
            conjugation=Conjugation(PosTag.SPECIAL_MASU),
        )

    def test_plain_masu_is_not_negative(self):
        assert not is_negative_auxiliary(self._masu("ます"), get_profile("ipadic"))

    def test_mase_of_masen_is_negative(self):
        assert is_negative_auxiliary(self._masu("ませ"), get_profile("ipadic"))

    def test_nai(self):
        nai = Token(
            "ない", 0, 2, base_form="ない",
            category=Category(PosTag.AUXILIARY_VERB),
            conjugation=Conjugation(PosTag.SPECIAL_NAI),
        )
        assert is_negative_auxiliary(nai, get_profile("ipadic"))


class TestAdverbialDependent:

    def test_tame_takes_ni(self, table):
        tame = Token(
            "ため", 0, 2, base_form="ため",
            category=Category(PosTag.NOUN, PosTag.DEPENDENT, PosTag.ADVERBIAL_POSSIBLE),
        )
        ni = Token("に", 2, 3, base_form="に", category=Category(PosTag.PARTICLE, PosTag.CASE_PARTICLE))
        outcome = table.decide(tame, ni)
        assert outcome.decision == ATTACH
        assert outcome.rule.name == "dependent-adverbial-ni"

    def test_precedes_dependent_noun_break(self, table):
        names = [name for _, name, _ in table.describe()]
        assert names.index("dependent-adverbial-ni") < names.index("dependent-noun-stands-alone")
