"""Variable interpolation for translation templates.

Replaces ``{{name}}`` style placeholders (configurable delimiters) with
values from a nested variable bag, escaping HTML in substituted values.
Unresolved placeholders are left in the output verbatim.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional

from g11n.configuration.settings import InterpolationSettings
from g11n.logging import get_module_logger

logger = get_module_logger()

MissingVariablesHandler = Callable[[str, List[str]], None]

HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
    "/": "&#x2F;",
}
_HTML_ESCAPE_PATTERN = re.compile(r"[&<>\"'/]")

_NOT_FOUND = object()


def escape_html(value: str) -> str:
    """Escape HTML special characters, one pass per character."""
    return _HTML_ESCAPE_PATTERN.sub(lambda m: HTML_ESCAPES[m.group(0)], value)


@dataclass
class InterpolationResult:
    """Outcome of a single interpolation pass.

    Attributes:
        text: Rendered string.
        missing: Placeholder paths left unresolved, in template order.
    """

    text: str
    missing: List[str] = field(default_factory=list)


class Interpolator:
    """Template substitution engine.

    Attributes:
        prefix: Opening delimiter.
        suffix: Closing delimiter.
        escape_value: Whether substituted values are HTML-escaped.
    """

    def __init__(
        self,
        settings: Optional[InterpolationSettings] = None,
        on_missing_variables: Optional[MissingVariablesHandler] = None,
    ):
        settings = settings or InterpolationSettings()
        self.prefix = settings.prefix
        self.suffix = settings.suffix
        self.escape_value = settings.escape_value
        self.on_missing_variables = on_missing_variables
        excluded = "".join(re.escape(char) for char in dict.fromkeys(self.suffix))
        self._pattern = re.compile(
            f"{re.escape(self.prefix)}\\s*([^{excluded}]+?)\\s*{re.escape(self.suffix)}"
        )

    def interpolate(self, template: str, values: Optional[Mapping[str, Any]] = None) -> str:
        """Interpolate variables into a template.

        Args:
            template: String with placeholders.
            values: Variable bag; dotted placeholder paths descend into it.

        Returns:
            The rendered string.
        """
        return self.render(template, values).text

    def render(
        self, template: str, values: Optional[Mapping[str, Any]] = None
    ) -> InterpolationResult:
        """Interpolate and report unresolved placeholders."""
        if not template:
            return InterpolationResult(template)

        values = values or {}
        missing: List[str] = []

        def replace(match: "re.Match[str]") -> str:
            path = match.group(1).strip()
            value = self._resolve_path(values, path)
            if value is _NOT_FOUND or value is None:
                missing.append(path)
                return match.group(0)
            text = str(value)
            return escape_html(text) if self.escape_value else text

        result = InterpolationResult(self._pattern.sub(replace, template), missing)
        if missing:
            self._report_missing(template, missing)
        return result

    def _report_missing(self, template: str, missing: List[str]) -> None:
        logger.warning("missing_interpolation_values", variables=missing)
        if self.on_missing_variables is None:
            return
        try:
            self.on_missing_variables(template, list(missing))
        except Exception as e:
            logger.error("missing_variables_handler_failed", error=str(e))

    @staticmethod
    def _resolve_path(values: Mapping[str, Any], path: str) -> Any:
        if not path:
            return _NOT_FOUND
        current: Any = values
        for segment in path.split("."):
            if not isinstance(current, Mapping):
                return _NOT_FOUND
            current = current.get(segment, _NOT_FOUND)
            if current is _NOT_FOUND or current is None:
                return _NOT_FOUND
        return current
