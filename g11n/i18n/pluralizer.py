"""Plural form selection for translations.

Resolution order, first match wins:
1. Exact count ("3") or interval ("2-5", "11+") override
2. Grammatical context ("male", "female") forms
3. CLDR form for the locale, falling back to "other"
4. The stringified count
"""

import re
from typing import Any, Mapping, Optional, Union

from g11n.i18n.plural_rules import PluralForm, get_plural_form

Number = Union[int, float]

_RANGE_KEY = re.compile(r"^(\d+)-(\d+)$")
_OPEN_RANGE_KEY = re.compile(r"^(\d+)\+$")


def format_count(count: Number) -> str:
    """Render a count the way exact-count keys are written ("3", "2.5")."""
    if isinstance(count, float) and count.is_integer():
        return str(int(count))
    return str(count)


class Pluralizer:
    """Selects a translation from a plural-form object."""

    def pluralize(
        self,
        locale: str,
        count: Number,
        forms: Mapping[str, Any],
        ordinal: bool = False,
        context: Optional[str] = None,
    ) -> str:
        """Pluralize a translation based on count and locale.

        Args:
            locale: Locale whose plural rules apply.
            count: Count selecting the form.
            forms: Plural-form object, optionally holding context sub-objects.
            ordinal: Use ordinal rules.
            context: Optional grammatical context name.

        Returns:
            The selected template, or the stringified count if none applies.
        """
        override = self._match_override(count, forms)
        if override is not None:
            return override

        if context:
            contextual = forms.get(context)
            if isinstance(contextual, Mapping):
                selected = self._select_form(locale, count, contextual, ordinal)
                if selected is not None:
                    return selected

        selected = self._select_form(locale, count, forms, ordinal)
        if selected is not None:
            return selected
        return format_count(count)

    def get_plural_form(
        self, locale: str, count: Number, ordinal: bool = False
    ) -> PluralForm:
        return get_plural_form(locale, count, ordinal)

    def _select_form(
        self,
        locale: str,
        count: Number,
        forms: Mapping[str, Any],
        ordinal: bool,
    ) -> Optional[str]:
        form = self.get_plural_form(locale, count, ordinal)
        value = forms.get(form.value)
        if _is_template(value):
            return str(value)
        if form is not PluralForm.OTHER:
            other = forms.get(PluralForm.OTHER.value)
            if _is_template(other):
                return str(other)
        return None

    def _match_override(self, count: Number, forms: Mapping[str, Any]) -> Optional[str]:
        exact = forms.get(format_count(count))
        if _is_template(exact):
            return str(exact)

        for key, value in forms.items():
            if not _is_template(value):
                continue
            if self._in_interval(count, key):
                return str(value)
        return None

    @staticmethod
    def _in_interval(count: Number, key: str) -> bool:
        match = _RANGE_KEY.match(key)
        if match:
            low, high = int(match.group(1)), int(match.group(2))
            return low <= count <= high
        match = _OPEN_RANGE_KEY.match(key)
        if match:
            return count >= int(match.group(1))
        return False


def _is_template(value: Any) -> bool:
    # Context sub-objects share the slot with templates
    return value is not None and not isinstance(value, Mapping)
