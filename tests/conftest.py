"""Shared test fixtures for the wordgroup test suite.

WHY: Most test modules need the same analyzer output. Centralizing it here
avoids duplication and keeps every test on the same verified samples.

HOW: Sample sentences are stored as the exact MeCab + IPADIC output
(surface<TAB>品詞,細分類1,細分類2,細分類3,活用型,活用形,原形,読み,発音).
The ``analyze`` fixture turns such text into Tokens through the real
adapter; named fixtures expose the samples used by several modules.

RULES:
- Feature rows match what MeCab 0.996 prints with mecab-ipadic 2.7.0
- WORDGROUP_* environment variables are cleared for every test so a local
  .env never changes the defaults under test
"""

from typing import Callable, List

import pytest

from wordgroup.adapters.token_adapter import tokens_from_mecab
from wordgroup.config import MergeConfig
from wordgroup.core.ir import Token


# ---------------------------------------------------------------------------
# Verified MeCab + IPADIC output
# ---------------------------------------------------------------------------

NEKO_GA_KITA = """\
猫	名詞,一般,*,*,*,*,猫,ネコ,ネコ
が	助詞,格助詞,一般,*,*,*,が,ガ,ガ
来	動詞,自立,*,*,カ変・来ル,連用形,来る,キ,キ
た	助動詞,*,*,*,特殊・タ,基本形,た,タ,タ
。	記号,句点,*,*,*,*,。,。,。
EOS
"""

TABESASERARETA = """\
食べ	動詞,自立,*,*,一段,未然形,食べる,タベ,タベ
させ	動詞,接尾,*,*,一段,未然形,させる,サセ,サセ
られ	動詞,接尾,*,*,一段,連用形,られる,ラレ,ラレ
た	助動詞,*,*,*,特殊・タ,基本形,た,タ,タ
EOS
"""

SANBIKI = """\
三	名詞,数,*,*,*,*,三,サン,サン
匹	名詞,接尾,助数詞,*,*,*,匹,ヒキ,ヒキ
EOS
"""

YAKYUUJOU = """\
野球	名詞,一般,*,*,*,*,野球,ヤキュウ,ヤキュー
場	名詞,接尾,一般,*,*,*,場,ジョウ,ジョー
EOS
"""

BENKYOU_SHIMASU = """\
勉強	名詞,サ変接続,*,*,*,*,勉強,ベンキョウ,ベンキョー
し	動詞,自立,*,*,サ変・スル,連用形,する,シ,シ
ます	助動詞,*,*,*,特殊・マス,基本形,ます,マス,マス
EOS
"""

SHIZUKANA_HEYA = """\
静か	名詞,形容動詞語幹,*,*,*,*,静か,シズカ,シズカ
な	助動詞,*,*,*,特殊・ダ,体言接続,だ,ナ,ナ
部屋	名詞,一般,*,*,*,*,部屋,ヘヤ,ヘヤ
EOS
"""

TABENAKEREBA_NARANAI = """\
食べ	動詞,自立,*,*,一段,未然形,食べる,タベ,タベ
なけれ	助動詞,*,*,*,特殊・ナイ,仮定形,ない,ナケレ,ナケレ
ば	助詞,接続助詞,*,*,*,*,ば,バ,バ
なら	動詞,自立,*,*,五段・ラ行,未然形,なる,ナラ,ナラ
ない	助動詞,*,*,*,特殊・ナイ,基本形,ない,ナイ,ナイ
EOS
"""

TABETEWA_IKENAI = """\
食べ	動詞,自立,*,*,一段,連用形,食べる,タベ,タベ
て	助詞,接続助詞,*,*,*,*,て,テ,テ
は	助詞,係助詞,*,*,*,*,は,ハ,ワ
いけ	動詞,自立,*,*,一段,未然形,いける,イケ,イケ
ない	助動詞,*,*,*,特殊・ナイ,基本形,ない,ナイ,ナイ
EOS
"""

TABETE_IRU = """\
食べ	動詞,自立,*,*,一段,連用形,食べる,タベ,タベ
て	助詞,接続助詞,*,*,*,*,て,テ,テ
いる	動詞,非自立,*,*,一段,基本形,いる,イル,イル
EOS
"""

QUOTED_NEKO = """\
「	記号,括弧開,*,*,*,*,「,「,「
猫	名詞,一般,*,*,*,*,猫,ネコ,ネコ
」	記号,括弧閉,*,*,*,*,」,」,」
EOS
"""

TANAKA_SAN = """\
田中	名詞,固有名詞,人名,姓,*,*,田中,タナカ,タナカ
さん	名詞,接尾,人名,*,*,*,さん,サン,サン
EOS
"""

TAKASA = """\
高	形容詞,自立,*,*,形容詞・アウオ段,ガル接続,高い,タカ,タカ
さ	名詞,接尾,特殊,*,*,*,さ,サ,サ
EOS
"""

OCHA = """\
お	接頭詞,名詞接続,*,*,*,*,お,オ,オ
茶	名詞,一般,*,*,*,*,茶,チャ,チャ
EOS
"""

TOUKYOU_DAIGAKU = """\
東京	名詞,固有名詞,地域,一般,*,*,東京,トウキョウ,トーキョー
大学	名詞,一般,*,*,*,*,大学,ダイガク,ダイガク
EOS
"""

MITE_KUDASAI = """\
見	動詞,自立,*,*,一段,連用形,見る,ミ,ミ
て	助詞,接続助詞,*,*,*,*,て,テ,テ
ください	動詞,非自立,*,*,五段・ラ行特殊,命令ｉ,くださる,クダサイ,クダサイ
EOS
"""

TABEMASEN = """\
食べ	動詞,自立,*,*,一段,連用形,食べる,タベ,タベ
ませ	助動詞,*,*,*,特殊・マス,未然形,ます,マセ,マセ
ん	助動詞,*,*,*,不変化型,基本形,ん,ン,ン
EOS
"""

DECIMAL = """\
3	名詞,数,*,*,*,*,*
．	記号,一般,*,*,*,*,．,．,．
14	名詞,数,*,*,*,*,*
EOS
"""

# Two sentences, the way MeCab prints a two-line input.
TWO_SENTENCES = NEKO_GA_KITA + TABESASERARETA


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    """Keep WORDGROUP_* settings from the developer's shell or .env out."""
    for name in (
        "WORDGROUP_RULE_PROFILE",
        "WORDGROUP_ABSORB_SYMBOLS",
        "WORDGROUP_MERGE_COMPOUNDS",
        "WORDGROUP_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def analyze() -> Callable[[str], List[Token]]:
    """Parse MeCab + IPADIC output text into one token sequence."""

    def _analyze(mecab_output: str) -> List[Token]:
        return tokens_from_mecab(mecab_output.splitlines(), "ipadic")

    return _analyze


@pytest.fixture
def default_config() -> MergeConfig:
    return MergeConfig()


@pytest.fixture
def neko_tokens(analyze) -> List[Token]:
    """猫が来た。: noun, particle, verb + past auxiliary, period."""
    return analyze(NEKO_GA_KITA)


@pytest.fixture
def chain_tokens(analyze) -> List[Token]:
    """食べさせられた: verb stem, two verb suffixes, past auxiliary."""
    return analyze(TABESASERARETA)
