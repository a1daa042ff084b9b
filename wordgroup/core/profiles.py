"""Dictionary tag-scheme profiles (IPADIC, UniDic).

WHY: Analyzers emit their dictionary's own part-of-speech strings and
feature layout. The rule table must not care whether a numeral is spelled
"名詞,数" (IPADIC) or "名詞,数詞" (UniDic), so every profile normalises its
scheme into the canonical PosTag enumeration and exposes the handful of
lexical constants the rules need (chain particles, obligation verbs, ...).

HOW: BaseProfile reads one feature row (the comma-separated fields after
the surface) into a Category, an optional Conjugation and the base form /
reading / pronunciation strings. IPADIC maps each field independently
through a flat string table, the way the analyzer's own tag set is built.
UniDic's hierarchy differs (suffixes are a major class, adjectival nouns
are 形状詞), so it maps the (pos1, pos2, pos3) triple as a whole.

RULES:
- Unknown strings become PosTag.UNRECOGNIZED, never an error
- "*" becomes PosTag.UNSET; a conjugation whose type is UNSET is None
- A base form of "*" or "" falls back to the surface
- Missing reading / pronunciation fields become "" (unknown)
- PROFILES maps profile names to shared, immutable instances
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, FrozenSet, NamedTuple, Optional, Sequence, Tuple

from wordgroup.core.ir import Category, Conjugation, PosTag

_UNSET = "*"


class FeatureRow(NamedTuple):
    """Normalised content of one analyzer feature row."""

    category: Category
    conjugation: Optional[Conjugation]
    base_form: str
    reading: str
    pronunciation: str


def _field(fields: Sequence[str], index: Optional[int]) -> str:
    if index is None or index >= len(fields):
        return ""
    value = fields[index].strip()
    return "" if value == _UNSET else value


class BaseProfile(ABC):
    """A dictionary tag scheme and the lexical constants calibrated for it.

    To add a new profile:
    1. Subclass BaseProfile and implement name, categorize() and the
       field indexes
    2. Register an instance in PROFILES
    """

    # Fewest feature fields a row may have (POS x4 + conjugation x2).
    min_fields = 6

    base_form_index: Optional[int] = None
    fallback_base_form_index: Optional[int] = None
    reading_index: Optional[int] = None
    fallback_reading_index: Optional[int] = None
    pronunciation_index: Optional[int] = None

    # Conjunctive particles that continue a predicate chain.
    chain_particles: FrozenSet[str] = frozenset({"て", "で", "ば"})
    # Auxiliaries the dictionary tags with a verb-like conjugation type that
    # still continue a chain (UniDic tags させる/られる this way).
    suffix_auxiliaries: FrozenSet[str] = frozenset()
    # Base forms of invariant auxiliaries that attach to a predicate.
    invariant_auxiliaries: FrozenSet[str] = frozenset({"ん", "う", "まい"})
    # Base forms of the verbs in "...なければならない" style obligation patterns.
    obligation_verbs: FrozenSet[str] = frozenset({"なる", "いける"})
    # Binding particles allowed between て/で and an obligation verb.
    obligation_particles: FrozenSet[str] = frozenset({"は"})
    # Surfaces of the polite auxiliary ます that only occur before ん (ませ+ん).
    negative_polite_stems: FrozenSet[str] = frozenset({"ませ"})
    # Particle that joins an adverbial dependent noun into an adverb (ために).
    adverbial_particle = "に"
    # Base form of the nominalising suffix that turns a word into a noun (高さ).
    nominalizing_suffix = "さ"
    # Symbols that join the two halves of a decimal number.
    decimal_separators: FrozenSet[str] = frozenset({".", "．"})
    # Surfaces that end a sentence even when not tagged as a period.
    sentence_terminators: FrozenSet[str] = frozenset({"。", "！", "？", "!", "?"})

    @property
    @abstractmethod
    def name(self) -> str:
        """Profile key used in configuration, e.g. 'ipadic'."""

    @abstractmethod
    def categorize(self, fields: Sequence[str]) -> Tuple[Category, Optional[Conjugation]]:
        """Map the raw POS and conjugation fields to canonical tags."""

    def read_features(self, surface: str, fields: Sequence[str]) -> FeatureRow:
        """Normalise one feature row for a token with the given surface."""
        category, conjugation = self.categorize(fields)
        base_form = (
            _field(fields, self.base_form_index)
            or _field(fields, self.fallback_base_form_index)
            or surface
        )
        reading = (
            _field(fields, self.reading_index)
            or _field(fields, self.fallback_reading_index)
        )
        return FeatureRow(
            category=category,
            conjugation=conjugation,
            base_form=base_form,
            reading=reading,
            pronunciation=_field(fields, self.pronunciation_index),
        )


# ---------------------------------------------------------------------------
# IPADIC
# ---------------------------------------------------------------------------

IPADIC_TAGS: Dict[str, PosTag] = {
    "名詞": PosTag.NOUN,
    "動詞": PosTag.VERB,
    "形容詞": PosTag.ADJECTIVE,
    "助動詞": PosTag.AUXILIARY_VERB,
    "助詞": PosTag.PARTICLE,
    "接頭詞": PosTag.PREFIX,
    "副詞": PosTag.ADVERB,
    "連体詞": PosTag.ADNOMINAL,
    "接続詞": PosTag.CONJUNCTION,
    "感動詞": PosTag.INTERJECTION,
    "フィラー": PosTag.FILLER,
    "記号": PosTag.SYMBOL,
    "その他": PosTag.OTHER,
    "一般": PosTag.GENERAL,
    "固有名詞": PosTag.PROPER_NOUN,
    "代名詞": PosTag.PRONOUN,
    "数": PosTag.NUMERAL,
    "接尾": PosTag.SUFFIX,
    "非自立": PosTag.DEPENDENT,
    "特殊": PosTag.SPECIAL,
    "副詞可能": PosTag.ADVERBIAL_POSSIBLE,
    "サ変接続": PosTag.SURU_CONNECTION,
    "形容動詞語幹": PosTag.ADJECTIVAL_NOUN_STEM,
    "ナイ形容詞語幹": PosTag.NAI_ADJECTIVE_STEM,
    "助動詞語幹": PosTag.AUXILIARY_STEM,
    "接続詞的": PosTag.CONJUNCTION_LIKE,
    "動詞非自立的": PosTag.VERB_DEPENDENT_LIKE,
    "助数詞": PosTag.COUNTER,
    "人名": PosTag.PERSON_NAME,
    "自立": PosTag.INDEPENDENT,
    "格助詞": PosTag.CASE_PARTICLE,
    "係助詞": PosTag.BINDING_PARTICLE,
    "接続助詞": PosTag.CONJUNCTIVE_PARTICLE,
    "終助詞": PosTag.SENTENCE_FINAL_PARTICLE,
    "副詞化": PosTag.ADVERBIALIZER,
    "連体化": PosTag.ADNOMINALIZER,
    "名詞接続": PosTag.NOUN_CONNECTION,
    "数接続": PosTag.NUMERAL_CONNECTION,
    "動詞接続": PosTag.VERB_CONNECTION,
    "形容詞接続": PosTag.ADJECTIVE_CONNECTION,
    "句点": PosTag.PERIOD,
    "読点": PosTag.COMMA,
    "括弧開": PosTag.BRACKET_OPEN,
    "括弧閉": PosTag.BRACKET_CLOSE,
    "空白": PosTag.SPACE,
    "サ変・スル": PosTag.SAHEN_SURU,
    "特殊・タ": PosTag.SPECIAL_TA,
    "特殊・ナイ": PosTag.SPECIAL_NAI,
    "特殊・タイ": PosTag.SPECIAL_TAI,
    "特殊・デス": PosTag.SPECIAL_DESU,
    "特殊・ダ": PosTag.SPECIAL_DA,
    "特殊・マス": PosTag.SPECIAL_MASU,
    "特殊・ヌ": PosTag.SPECIAL_NU,
    "不変化型": PosTag.INVARIANT,
    "体言接続": PosTag.NOMINAL_CONNECTION,
    "命令ｉ": PosTag.IMPERATIVE_I,
    _UNSET: PosTag.UNSET,
}


def ipadic_tag(value: str) -> PosTag:
    return IPADIC_TAGS.get(value.strip(), PosTag.UNRECOGNIZED)


class IpadicProfile(BaseProfile):
    """IPADIC: 品詞,細分類1,細分類2,細分類3,活用型,活用形,原形,読み,発音."""

    base_form_index = 6
    reading_index = 7
    pronunciation_index = 8

    @property
    def name(self) -> str:
        return "ipadic"

    def categorize(self, fields: Sequence[str]) -> Tuple[Category, Optional[Conjugation]]:
        tags = [ipadic_tag(value) for value in fields[:6]]
        category = Category(*tags[:4])
        conjugation = None
        if tags[4] is not PosTag.UNSET:
            conjugation = Conjugation(type=tags[4], form=tags[5])
        return category, conjugation


# ---------------------------------------------------------------------------
# UniDic
# ---------------------------------------------------------------------------

_N = PosTag.NOUN

# (pos1, pos2, pos3) -> canonical category; "*" entries act as wildcards.
UNIDIC_CATEGORIES: Dict[Tuple[str, str, str], Category] = {
    ("名詞", "普通名詞", "一般"): Category(_N, PosTag.GENERAL),
    ("名詞", "普通名詞", "サ変可能"): Category(_N, PosTag.SURU_CONNECTION),
    ("名詞", "普通名詞", "サ変形状詞可能"): Category(_N, PosTag.SURU_CONNECTION),
    ("名詞", "普通名詞", "形状詞可能"): Category(_N, PosTag.ADJECTIVAL_NOUN_STEM),
    ("名詞", "普通名詞", "副詞可能"): Category(_N, PosTag.ADVERBIAL_POSSIBLE),
    ("名詞", "普通名詞", "助数詞可能"): Category(_N, PosTag.GENERAL),
    ("名詞", "普通名詞", "*"): Category(_N, PosTag.GENERAL),
    ("名詞", "固有名詞", "人名"): Category(_N, PosTag.PROPER_NOUN, PosTag.PERSON_NAME),
    ("名詞", "固有名詞", "*"): Category(_N, PosTag.PROPER_NOUN),
    ("名詞", "数詞", "*"): Category(_N, PosTag.NUMERAL),
    ("名詞", "助動詞語幹", "*"): Category(_N, PosTag.DEPENDENT, PosTag.AUXILIARY_STEM),
    ("代名詞", "*", "*"): Category(_N, PosTag.PRONOUN),
    ("形状詞", "一般", "*"): Category(_N, PosTag.ADJECTIVAL_NOUN_STEM),
    ("形状詞", "タリ", "*"): Category(_N, PosTag.ADJECTIVAL_NOUN_STEM),
    ("形状詞", "助動詞語幹", "*"): Category(_N, PosTag.DEPENDENT, PosTag.AUXILIARY_STEM),
    ("接尾辞", "名詞的", "助数詞"): Category(_N, PosTag.SUFFIX, PosTag.COUNTER),
    ("接尾辞", "名詞的", "一般"): Category(_N, PosTag.SUFFIX, PosTag.GENERAL),
    ("接尾辞", "名詞的", "サ変可能"): Category(_N, PosTag.SUFFIX, PosTag.SURU_CONNECTION),
    ("接尾辞", "名詞的", "副詞可能"): Category(_N, PosTag.SUFFIX, PosTag.ADVERBIAL_POSSIBLE),
    ("接尾辞", "形状詞的", "*"): Category(_N, PosTag.SUFFIX, PosTag.ADJECTIVAL_NOUN_STEM),
    ("接尾辞", "動詞的", "*"): Category(PosTag.VERB, PosTag.SUFFIX),
    ("接尾辞", "形容詞的", "*"): Category(PosTag.ADJECTIVE, PosTag.SUFFIX),
    ("接頭辞", "*", "*"): Category(PosTag.PREFIX),
    ("動詞", "一般", "*"): Category(PosTag.VERB, PosTag.INDEPENDENT),
    ("動詞", "非自立可能", "*"): Category(PosTag.VERB, PosTag.DEPENDENT),
    ("形容詞", "一般", "*"): Category(PosTag.ADJECTIVE, PosTag.INDEPENDENT),
    ("形容詞", "非自立可能", "*"): Category(PosTag.ADJECTIVE, PosTag.DEPENDENT),
    ("助動詞", "*", "*"): Category(PosTag.AUXILIARY_VERB),
    ("助詞", "格助詞", "*"): Category(PosTag.PARTICLE, PosTag.CASE_PARTICLE),
    ("助詞", "係助詞", "*"): Category(PosTag.PARTICLE, PosTag.BINDING_PARTICLE),
    ("助詞", "接続助詞", "*"): Category(PosTag.PARTICLE, PosTag.CONJUNCTIVE_PARTICLE),
    ("助詞", "終助詞", "*"): Category(PosTag.PARTICLE, PosTag.SENTENCE_FINAL_PARTICLE),
    ("助詞", "*", "*"): Category(PosTag.PARTICLE, PosTag.UNRECOGNIZED),
    ("連体詞", "*", "*"): Category(PosTag.ADNOMINAL),
    ("副詞", "*", "*"): Category(PosTag.ADVERB),
    ("接続詞", "*", "*"): Category(PosTag.CONJUNCTION),
    ("感動詞", "フィラー", "*"): Category(PosTag.FILLER),
    ("感動詞", "*", "*"): Category(PosTag.INTERJECTION),
    ("記号", "*", "*"): Category(PosTag.SYMBOL, PosTag.GENERAL),
    ("補助記号", "句点", "*"): Category(PosTag.SYMBOL, PosTag.PERIOD),
    ("補助記号", "読点", "*"): Category(PosTag.SYMBOL, PosTag.COMMA),
    ("補助記号", "括弧開", "*"): Category(PosTag.SYMBOL, PosTag.BRACKET_OPEN),
    ("補助記号", "括弧閉", "*"): Category(PosTag.SYMBOL, PosTag.BRACKET_CLOSE),
    ("補助記号", "*", "*"): Category(PosTag.SYMBOL, PosTag.GENERAL),
    ("空白", "*", "*"): Category(PosTag.SYMBOL, PosTag.SPACE),
}

UNIDIC_CONJUGATION_TYPES: Dict[str, PosTag] = {
    "サ行変格": PosTag.SAHEN_SURU,
    "助動詞-タ": PosTag.SPECIAL_TA,
    "助動詞-ナイ": PosTag.SPECIAL_NAI,
    "助動詞-タイ": PosTag.SPECIAL_TAI,
    "助動詞-デス": PosTag.SPECIAL_DESU,
    "助動詞-ダ": PosTag.SPECIAL_DA,
    "助動詞-マス": PosTag.SPECIAL_MASU,
    "助動詞-ヌ": PosTag.SPECIAL_NU,
    "無変化型": PosTag.INVARIANT,
}


def _unidic_form(value: str) -> PosTag:
    if value == _UNSET or not value:
        return PosTag.UNSET
    if value.startswith("連体形"):
        return PosTag.NOMINAL_CONNECTION
    if value.startswith("命令形"):
        return PosTag.IMPERATIVE_I
    return PosTag.UNRECOGNIZED


class UnidicProfile(BaseProfile):
    """UniDic: pos1..pos4,cType,cForm,lForm,lemma,orth,pron,orthBase,pronBase,...

    The surface reading is the ``kana`` field of the 26+ field layout; the
    17 field layout has none, so the pronunciation stands in for it.
    """

    base_form_index = 10
    fallback_base_form_index = 7
    reading_index = 20
    fallback_reading_index = 9
    pronunciation_index = 9

    obligation_verbs = frozenset({"なる", "成る", "いける", "行ける"})
    invariant_auxiliaries = frozenset({"ん", "う", "まい", "ず"})
    suffix_auxiliaries = frozenset({"せる", "させる", "れる", "られる"})

    @property
    def name(self) -> str:
        return "unidic"

    def categorize(self, fields: Sequence[str]) -> Tuple[Category, Optional[Conjugation]]:
        pos1, pos2, pos3 = (value.strip() for value in fields[:3])
        category = (
            UNIDIC_CATEGORIES.get((pos1, pos2, pos3))
            or UNIDIC_CATEGORIES.get((pos1, pos2, _UNSET))
            or UNIDIC_CATEGORIES.get((pos1, _UNSET, _UNSET))
            or Category(PosTag.UNRECOGNIZED)
        )
        conjugation_type = fields[4].strip()
        if conjugation_type == _UNSET or not conjugation_type:
            return category, None
        return category, Conjugation(
            type=UNIDIC_CONJUGATION_TYPES.get(conjugation_type, PosTag.UNRECOGNIZED),
            form=_unidic_form(fields[5].strip()),
        )


PROFILES: Dict[str, BaseProfile] = {
    "ipadic": IpadicProfile(),
    "unidic": UnidicProfile(),
}

DEFAULT_PROFILE = "ipadic"


def get_profile(name: str) -> BaseProfile:
    """Look up a profile by name; raises ValueError for unknown names."""
    try:
        return PROFILES[name.strip().lower()]
    except KeyError:
        raise ValueError(
            "Unknown rule profile {!r}. Available: {}".format(
                name, ", ".join(sorted(PROFILES)),
            )
        ) from None
