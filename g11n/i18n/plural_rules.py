"""CLDR plural rules by language family.

Implements cardinal and ordinal plural categories for the supported
language families. Rules are keyed by primary language subtag; unknown
languages use the English rule. Rules operate on the CLDR operand n,
the absolute value of the count.

Reference: https://cldr.unicode.org/index/cldr-spec/plural-rules
"""

from enum import Enum
from typing import Callable, Dict, List, Union

from g11n.locale_utils import normalize_locale

Number = Union[int, float]


class PluralForm(str, Enum):
    """CLDR plural categories."""

    ZERO = "zero"
    ONE = "one"
    TWO = "two"
    FEW = "few"
    MANY = "many"
    OTHER = "other"


PluralRule = Callable[[Number, bool], PluralForm]

# Representative counts used to enumerate the forms a rule can produce
SAMPLE_COUNTS = (0, 1, 2, 3, 4, 5, 10, 11, 20, 21, 22, 23, 100, 101, 102, 103)


def _is_integer(count: Number) -> bool:
    return float(count).is_integer()


def english_rule(count: Number, ordinal: bool) -> PluralForm:
    """English: one (1); ordinal one/two/few for 1/2/3 outside the teens."""
    n = abs(count)
    if ordinal:
        mod10 = n % 10
        mod100 = n % 100
        if mod10 == 1 and mod100 != 11:
            return PluralForm.ONE
        if mod10 == 2 and mod100 != 12:
            return PluralForm.TWO
        if mod10 == 3 and mod100 != 13:
            return PluralForm.FEW
        return PluralForm.OTHER
    return PluralForm.ONE if n == 1 else PluralForm.OTHER


def spanish_rule(count: Number, ordinal: bool) -> PluralForm:
    """Spanish and similar: one (1); ordinals always other."""
    n = abs(count)
    if ordinal:
        return PluralForm.OTHER
    return PluralForm.ONE if n == 1 else PluralForm.OTHER


def french_rule(count: Number, ordinal: bool) -> PluralForm:
    """French: one (0, 1); ordinal one (1)."""
    n = abs(count)
    if ordinal:
        return PluralForm.ONE if n == 1 else PluralForm.OTHER
    return PluralForm.ONE if n in (0, 1) else PluralForm.OTHER


def portuguese_rule(count: Number, ordinal: bool) -> PluralForm:
    """Portuguese: one (0, 1); ordinals always other."""
    n = abs(count)
    if ordinal:
        return PluralForm.OTHER
    return PluralForm.ONE if n in (0, 1) else PluralForm.OTHER


def arabic_rule(count: Number, ordinal: bool) -> PluralForm:
    """Arabic: zero, one, two, few (3-10 mod 100), many (11-99 mod 100)."""
    n = abs(count)
    if ordinal:
        return PluralForm.OTHER
    if n == 0:
        return PluralForm.ZERO
    if n == 1:
        return PluralForm.ONE
    if n == 2:
        return PluralForm.TWO
    mod100 = n % 100
    if 3 <= mod100 <= 10:
        return PluralForm.FEW
    if 11 <= mod100 <= 99:
        return PluralForm.MANY
    return PluralForm.OTHER


def russian_rule(count: Number, ordinal: bool) -> PluralForm:
    """Russian: one (1, 21, 31...), few (2-4, 22-24...), many (rest); fractions other."""
    n = abs(count)
    if ordinal or not _is_integer(n):
        return PluralForm.OTHER
    mod10 = n % 10
    mod100 = n % 100
    if mod10 == 1 and mod100 != 11:
        return PluralForm.ONE
    if 2 <= mod10 <= 4 and not 12 <= mod100 <= 14:
        return PluralForm.FEW
    return PluralForm.MANY


def polish_rule(count: Number, ordinal: bool) -> PluralForm:
    """Polish: one (1), few (2-4, 22-24...), many (rest); fractions other."""
    n = abs(count)
    if ordinal or not _is_integer(n):
        return PluralForm.OTHER
    if n == 1:
        return PluralForm.ONE
    mod10 = n % 10
    mod100 = n % 100
    if 2 <= mod10 <= 4 and not 12 <= mod100 <= 14:
        return PluralForm.FEW
    return PluralForm.MANY


def invariant_rule(count: Number, ordinal: bool) -> PluralForm:
    """Languages without grammatical number (Japanese, Chinese, Korean)."""
    return PluralForm.OTHER


PLURAL_RULES: Dict[str, PluralRule] = {
    "en": english_rule,
    "es": spanish_rule,
    "de": spanish_rule,
    "nl": spanish_rule,
    "da": spanish_rule,
    "fi": spanish_rule,
    "no": spanish_rule,
    "nb": spanish_rule,
    "tr": spanish_rule,
    "fr": french_rule,
    "pt": portuguese_rule,
    "ar": arabic_rule,
    "ru": russian_rule,
    "pl": polish_rule,
    "ja": invariant_rule,
    "zh": invariant_rule,
    "ko": invariant_rule,
}


def get_plural_rule(locale: str) -> PluralRule:
    """Get the plural rule for a locale's language family.

    Args:
        locale: Locale code in any casing or region form ("en-GB", "fr_CA").

    Returns:
        The family rule, or the English rule for unknown languages.
    """
    return PLURAL_RULES.get(normalize_locale(locale) or "en", english_rule)


def get_plural_form(locale: str, count: Number, ordinal: bool = False) -> PluralForm:
    """Get the plural form for a count in a locale."""
    return get_plural_rule(locale)(count, ordinal)


def has_plural_form(locale: str, form: Union[PluralForm, str], ordinal: bool = False) -> bool:
    """Check whether a locale ever produces a plural form.

    The rule is sampled at SAMPLE_COUNTS; forms only reachable outside
    that set are not reported.
    """
    rule = get_plural_rule(locale)
    return any(rule(count, ordinal) == form for count in SAMPLE_COUNTS)


def get_plural_forms(locale: str, ordinal: bool = False) -> List[PluralForm]:
    """List the distinct plural forms a locale produces over SAMPLE_COUNTS.

    Returns:
        Forms in order of first appearance.
    """
    rule = get_plural_rule(locale)
    forms: List[PluralForm] = []
    for count in SAMPLE_COUNTS:
        form = rule(count, ordinal)
        if form not in forms:
            forms.append(form)
    return forms
