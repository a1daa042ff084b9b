"""Unit tests for the word assembler.

WHY: The assembler derives everything a caller reads off a word. A wrong
base form sends a dictionary lookup to the wrong entry; a reading that
pretends to be known when one morpheme's reading is missing corrupts
furigana.

HOW: Token runs are built from the verified IPADIC samples and handed to
assemble() directly with explicit tiers, independent of the engine:
  - Field concatenation and unknown readings
  - Category precedence among fired tiers
  - Base form policy (predicate chains, stems, brackets)
  - Coarse part of speech and grammar hints

RULES:
- Inputs are the same Token objects the adapter produced; no copies
"""

import pytest

from conftest import (
    BENKYOU_SHIMASU,
    DECIMAL,
    OCHA,
    QUOTED_NEKO,
    SANBIKI,
    SHIZUKANA_HEYA,
    TAKASA,
    TANAKA_SAN,
    YAKYUUJOU,
)
from wordgroup.core.assembler import assemble, classify
from wordgroup.core.ir import (
    Category,
    Grammar,
    PartOfSpeech,
    PosTag,
    WordCategory,
)
from wordgroup.core.rules import Tier

YOU_NI = """\
よう	名詞,非自立,助動詞語幹,*,*,*,よう,ヨウ,ヨー
に	助詞,副詞化,*,*,*,*,に,ニ,ニ
EOS
"""

YOU_NA = """\
よう	名詞,非自立,助動詞語幹,*,*,*,よう,ヨウ,ヨー
な	助動詞,*,*,*,特殊・ダ,体言接続,だ,ナ,ナ
EOS
"""

YOU_DA = """\
よう	名詞,非自立,助動詞語幹,*,*,*,よう,ヨウ,ヨー
だ	助動詞,*,*,*,特殊・ダ,基本形,だ,ダ,ダ
EOS
"""

SHIZUKA_DA = """\
静か	名詞,形容動詞語幹,*,*,*,*,静か,シズカ,シズカ
だ	助動詞,*,*,*,特殊・ダ,基本形,だ,ダ,ダ
EOS
"""

DA = """\
だ	助動詞,*,*,*,特殊・ダ,基本形,だ,ダ,ダ
EOS
"""

CHAIN = frozenset({Tier.PREDICATE_CHAIN})


class TestFields:

    def test_surface_and_offsets(self, chain_tokens):
        word = assemble(chain_tokens, 0, CHAIN)
        assert word.surface == "食べさせられた"
        assert word.start_offset == 0
        assert word.end_offset == 7
        assert (word.start_index, word.end_index) == (0, 4)

    def test_index_range_uses_start_index(self, chain_tokens):
        word = assemble(chain_tokens[1:], 1, CHAIN)
        assert (word.start_index, word.end_index) == (1, 4)

    def test_tokens_are_the_input_objects(self, chain_tokens):
        word = assemble(chain_tokens, 0, CHAIN)
        assert all(a is b for a, b in zip(word.tokens, chain_tokens))

    def test_reading_and_pronunciation_concatenate(self, chain_tokens):
        word = assemble(chain_tokens, 0, CHAIN)
        assert word.reading == "タベサセラレタ"
        assert word.pronunciation == "タベサセラレタ"

    def test_unknown_reading_is_none(self, analyze):
        tokens = analyze(DECIMAL)
        word = assemble(tokens, 0, frozenset({Tier.NUMERAL_COUNTER}))
        assert word.reading is None
        assert word.pronunciation is None
        assert word.base_form == "3．14"

    def test_empty_run_rejected(self):
        with pytest.raises(ValueError):
            assemble([], 0)

    def test_merged_run_without_tier_rejected(self, chain_tokens):
        with pytest.raises(ValueError):
            assemble(chain_tokens, 0, frozenset())


class TestCategory:

    def test_single_token_keeps_its_category(self, neko_tokens):
        word = assemble(neko_tokens[:1], 0)
        assert word.category == Category(PosTag.NOUN, PosTag.GENERAL)
        assert word.label == "noun/general"
        assert not word.is_merged

    def test_compound_beats_numeral(self, analyze):
        tiers = frozenset({Tier.NUMERAL_COUNTER, Tier.COMPOUND_NOUN})
        word = assemble(analyze(SANBIKI), 0, tiers)
        assert word.category is WordCategory.COMPOUND_NOUN

    def test_predicate_chain_beats_everything(self, chain_tokens):
        word = assemble(chain_tokens, 0, frozenset(Tier))
        assert word.category is WordCategory.PREDICATE_CHAIN

    def test_symbol_absorption_is_lowest(self, analyze):
        tiers = frozenset({Tier.SYMBOL_ABSORPTION, Tier.NUMERAL_COUNTER})
        word = assemble(analyze(SANBIKI), 0, tiers)
        assert word.category is WordCategory.NUMERAL_COUNTER


class TestBaseForm:

    def test_verb_suffix_run(self, chain_tokens):
        assert assemble(chain_tokens, 0, CHAIN).base_form == "食べさせられる"

    def test_verbal_noun(self, analyze):
        word = assemble(analyze(BENKYOU_SHIMASU), 0, CHAIN)
        assert word.base_form == "勉強する"

    def test_adjectival_noun_drops_copula(self, analyze):
        word = assemble(analyze(SHIZUKANA_HEYA)[:2], 0, CHAIN)
        assert word.base_form == "静か"

    def test_compound_uses_surface(self, analyze):
        word = assemble(analyze(YAKYUUJOU), 0, frozenset({Tier.COMPOUND_NOUN}))
        assert word.base_form == "野球場"

    def test_brackets_stripped(self, analyze):
        word = assemble(analyze(QUOTED_NEKO), 0, frozenset({Tier.SYMBOL_ABSORPTION}))
        assert word.base_form == "猫"

    def test_single_token_uses_dictionary_form(self, neko_tokens):
        word = assemble(neko_tokens[2:3], 2)
        assert word.base_form == "来る"


class TestPartOfSpeech:

    def test_verb_chain(self, chain_tokens):
        assert assemble(chain_tokens, 0, CHAIN).part_of_speech is PartOfSpeech.VERB

    def test_verbal_noun_is_verb(self, analyze):
        word = assemble(analyze(BENKYOU_SHIMASU), 0, CHAIN)
        assert word.part_of_speech is PartOfSpeech.VERB

    def test_adjectival_noun_is_adjective(self, analyze):
        tokens = analyze(SHIZUKANA_HEYA)
        word = assemble(tokens[:2], 0, CHAIN, following=tokens[2])
        assert word.part_of_speech is PartOfSpeech.ADJECTIVE

    def test_plain_noun(self, analyze):
        tokens = analyze(SHIZUKANA_HEYA)
        word = assemble(tokens[2:], 2)
        assert word.part_of_speech is PartOfSpeech.NOUN

    def test_numeral_counter_is_number(self, analyze):
        word = assemble(analyze(SANBIKI), 0, frozenset({Tier.NUMERAL_COUNTER}))
        assert word.part_of_speech is PartOfSpeech.NUMBER

    def test_proper_noun_and_honorific(self, analyze):
        tokens = analyze(TANAKA_SAN)
        assert assemble(tokens[:1], 0, following=tokens[1]).part_of_speech is PartOfSpeech.PROPER_NOUN
        assert assemble(tokens[1:], 1).part_of_speech is PartOfSpeech.SUFFIX

    def test_nominalizing_suffix_makes_noun(self, analyze):
        word = assemble(analyze(TAKASA), 0, frozenset({Tier.COMPOUND_NOUN}))
        assert word.part_of_speech is PartOfSpeech.NOUN

    def test_prefix_is_skipped(self, analyze):
        word = assemble(analyze(OCHA), 0, frozenset({Tier.COMPOUND_NOUN}))
        assert word.part_of_speech is PartOfSpeech.NOUN

    def test_bracketed_word_uses_content(self, analyze):
        word = assemble(analyze(QUOTED_NEKO), 0, frozenset({Tier.SYMBOL_ABSORPTION}))
        assert word.part_of_speech is PartOfSpeech.NOUN

    def test_particle_and_symbol(self, neko_tokens):
        assert assemble(neko_tokens[1:2], 1).part_of_speech is PartOfSpeech.POSTPOSITION
        assert assemble(neko_tokens[4:], 4).part_of_speech is PartOfSpeech.SYMBOL

    def test_auxiliary_stem_with_adverbializer(self, analyze):
        word = assemble(analyze(YOU_NI), 0, CHAIN)
        assert word.part_of_speech is PartOfSpeech.ADVERB
        assert word.base_form == "よう"

    def test_auxiliary_stem_with_copula(self, analyze):
        word = assemble(analyze(YOU_NA), 0, CHAIN)
        assert word.part_of_speech is PartOfSpeech.VERB
        assert word.grammar is Grammar.AUXILIARY

    def test_adjectival_noun_before_plain_copula(self, analyze):
        shizuka, da = analyze(SHIZUKA_DA)
        assert classify(shizuka, da) == (PartOfSpeech.ADJECTIVE, None)
        word = assemble([shizuka], 0, following=da)
        assert word.part_of_speech is PartOfSpeech.ADJECTIVE

    def test_auxiliary_stem_before_plain_copula(self, analyze):
        you, da = analyze(YOU_DA)
        assert classify(you, da) == (PartOfSpeech.VERB, Grammar.AUXILIARY)

    def test_copula_is_verb(self, analyze):
        (da,) = analyze(DA)
        assert classify(da, None) == (PartOfSpeech.VERB, None)
