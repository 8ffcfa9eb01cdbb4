"""Translation models for the i18n system.

Defines core data structures for bundles, bundle leaves, locale metadata
and translation options.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Union

# A loaded (locale, namespace) key tree
Bundle = Dict[str, Any]

RESERVED_OPTION_KEYS = frozenset(
    {"count", "ordinal", "context", "default_value", "ns", "interpolation"}
)


class TextDirection(str, Enum):
    """Writing direction of a locale."""

    LTR = "ltr"
    RTL = "rtl"


@dataclass(frozen=True)
class LocaleInfo:
    """Display metadata for a locale.

    Attributes:
        code: Normalized locale code (e.g., "en").
        name: English name of the locale.
        native_name: Name of the locale in its own language.
        direction: Text direction.
    """

    code: str
    name: str
    native_name: str
    direction: TextDirection = TextDirection.LTR


@dataclass(frozen=True)
class TextLeaf:
    """Bundle leaf holding a plain template string."""

    value: str


@dataclass(frozen=True)
class FormsLeaf:
    """Bundle leaf holding a plural-form object.

    Keys are CLDR form names, exact counts ("3") or intervals ("2-5", "11+").
    String-valued entries may sit beside grammatical-context entries.
    """

    forms: Mapping[str, Any]


@dataclass(frozen=True)
class ContextLeaf:
    """Bundle leaf holding only grammatical-context plural-form objects."""

    contexts: Mapping[str, Mapping[str, Any]]

    @property
    def forms(self) -> Mapping[str, Any]:
        return self.contexts


Leaf = Union[TextLeaf, FormsLeaf, ContextLeaf]


def classify_leaf(raw: Any) -> Optional[Leaf]:
    """Resolve a raw bundle value into a tagged leaf.

    Args:
        raw: Value found at the end of a key path.

    Returns:
        TextLeaf for strings, ContextLeaf for non-empty mappings whose values
        are all mappings, FormsLeaf for other mappings (empty included),
        None otherwise.
    """
    if isinstance(raw, str):
        return TextLeaf(raw)
    if isinstance(raw, Mapping):
        if raw and all(isinstance(value, Mapping) for value in raw.values()):
            return ContextLeaf(raw)
        return FormsLeaf(raw)
    return None


@dataclass
class TranslationOptions:
    """Options for a single translate() call.

    Attributes:
        count: Count for pluralization; triggers the plural path when set.
        ordinal: Use ordinal plural rules (1st, 2nd, 3rd).
        context: Grammatical context name (e.g., "male", "female").
        default_value: Returned when the key is unresolved everywhere.
        ns: Namespace to resolve in instead of the default namespace.
        interpolation: Explicit variable bag; replaces ``variables`` when set.
        variables: Loose variables gathered from extra keyword arguments.
    """

    count: Optional[Union[int, float]] = None
    ordinal: bool = False
    context: Optional[str] = None
    default_value: Optional[str] = None
    ns: Optional[str] = None
    interpolation: Optional[Mapping[str, Any]] = None
    variables: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_kwargs(cls, **kwargs: Any) -> "TranslationOptions":
        """Build options from keyword arguments.

        Reserved names (count, ordinal, context, default_value, ns,
        interpolation) map to fields; everything else becomes a variable.

        Example:
            >>> TranslationOptions.from_kwargs(count=2, name="Ada").variables
            {'name': 'Ada'}
        """
        reserved, variables = _split_option_kwargs(kwargs)
        return cls(**reserved, variables=variables)

    def merged(self, **kwargs: Any) -> "TranslationOptions":
        """Return a copy updated with keyword options and variables.

        Reserved names replace fields; other names are added to ``variables``.
        """
        reserved, variables = _split_option_kwargs(kwargs)
        return replace(self, **reserved, variables={**self.variables, **variables})

    def interpolation_values(self) -> Dict[str, Any]:
        """Variable bag for interpolation.

        Returns:
            ``interpolation`` verbatim when present, otherwise the loose variables.
        """
        if self.interpolation is not None:
            return dict(self.interpolation)
        return dict(self.variables)


def _split_option_kwargs(
    kwargs: Mapping[str, Any]
) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    reserved = {k: v for k, v in kwargs.items() if k in RESERVED_OPTION_KEYS}
    variables = {k: v for k, v in kwargs.items() if k not in RESERVED_OPTION_KEYS}
    # ordinal=None means "not given"
    if reserved.get("ordinal") is None:
        reserved.pop("ordinal", None)
    return reserved, variables
