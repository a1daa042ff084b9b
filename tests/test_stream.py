"""Unit tests for the public word stream and the merge helpers.

WHY: WordStream is what library callers hold on to. It must reject bad
input at hand-over, restart cleanly, batch sentences the way the
formatters expect, and stay correct when sequences are merged in parallel.

HOW: Tests use the verified IPADIC samples from conftest.py.

RULES:
- merge_many results are compared to sequential merge() results
"""

import pytest

from conftest import NEKO_GA_KITA, QUOTED_NEKO, TWO_SENTENCES
from wordgroup.adapters.token_adapter import documents_from_mecab
from wordgroup.config import MergeConfig
from wordgroup.core.errors import TokenSequenceError
from wordgroup.core.ir import Token
from wordgroup.core.stream import WordStream, merge, merge_many


QUOTED_SENTENCE = """\
「	記号,括弧開,*,*,*,*,「,「,「
猫	名詞,一般,*,*,*,*,猫,ネコ,ネコ
。	記号,句点,*,*,*,*,。,。,。
」	記号,括弧閉,*,*,*,*,」,」,」
EOS
"""


class TestWordStream:

    def test_validates_on_construction(self, neko_tokens):
        broken = list(neko_tokens)
        broken[2] = Token("来", 10, 11)
        with pytest.raises(TokenSequenceError):
            WordStream(broken)

    def test_restartable(self, neko_tokens):
        stream = WordStream(neko_tokens)
        assert list(stream) == list(stream)

    def test_holds_caller_tokens(self, neko_tokens):
        stream = WordStream(neko_tokens)
        assert all(a is b for a, b in zip(stream.tokens, neko_tokens))

    def test_accepts_generator(self, neko_tokens):
        stream = WordStream(token for token in neko_tokens)
        assert [w.surface for w in stream] == ["猫", "が", "来た", "。"]
        assert [w.surface for w in stream] == ["猫", "が", "来た", "。"]

    def test_uses_environment_config(self, monkeypatch, analyze):
        monkeypatch.setenv("WORDGROUP_ABSORB_SYMBOLS", "false")
        stream = WordStream(analyze(QUOTED_NEKO))
        assert not stream.config.absorb_symbols
        assert len(stream.words()) == 3

    def test_explicit_config_wins(self, monkeypatch, analyze):
        monkeypatch.setenv("WORDGROUP_ABSORB_SYMBOLS", "false")
        stream = WordStream(analyze(QUOTED_NEKO), MergeConfig())
        assert len(stream.words()) == 1


class TestSentences:

    def test_split_at_period(self, analyze):
        stream = WordStream(analyze(TWO_SENTENCES))
        sentences = [[w.surface for w in s] for s in stream.sentences()]
        assert sentences == [["猫", "が", "来た", "。"], ["食べさせられた"]]

    def test_closing_bracket_stays_with_its_sentence(self, analyze):
        stream = WordStream(analyze(QUOTED_SENTENCE + NEKO_GA_KITA))
        sentences = [[w.surface for w in s] for s in stream.sentences()]
        assert sentences == [["「猫", "。", "」"], ["猫", "が", "来た", "。"]]

    def test_unterminated_text_is_one_sentence(self, chain_tokens):
        sentences = list(WordStream(chain_tokens).sentences())
        assert len(sentences) == 1

    def test_empty_stream_has_no_sentences(self):
        assert list(WordStream([]).sentences()) == []


class TestMergeHelpers:

    def test_merge(self, neko_tokens):
        assert [w.surface for w in merge(neko_tokens)] == ["猫", "が", "来た", "。"]

    def test_merge_many_preserves_order(self):
        lines = (NEKO_GA_KITA * 3 + TWO_SENTENCES).splitlines()
        documents = documents_from_mecab(lines)
        parallel = merge_many(documents, max_workers=4)
        sequential = [merge(tokens) for tokens in documents]
        assert parallel == sequential
        assert len(parallel) == 5

    def test_merge_many_empty(self):
        assert merge_many([]) == []

    def test_merge_many_propagates_errors(self, neko_tokens):
        broken = [Token("猫", 0, 1), Token("が", 3, 4)]
        with pytest.raises(TokenSequenceError):
            merge_many([neko_tokens, broken])
