"""g11n configuration settings - main aggregator."""

from typing import List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import SettingsConfigDict

from g11n.configuration.base import G11nSettings
from g11n.locale_utils import normalize_locale


class LoggingSettings(G11nSettings):
    """Logging configuration.

    Environment Variables:
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        ENVIRONMENT: Deployment environment; "production" switches to JSON logs
    """

    LOG_LEVEL: str = Field(default="INFO", alias="LOG_LEVEL")
    ENVIRONMENT: str = Field(default="development", alias="ENVIRONMENT")

    @property
    def is_production(self) -> bool:
        """Check if running in production.

        Returns:
            True if ENVIRONMENT is "production", False otherwise.
        """
        return self.ENVIRONMENT.lower() == "production"


class InterpolationSettings(G11nSettings):
    """Template interpolation configuration.

    Environment Variables:
        I18N_INTERPOLATION_PREFIX: Opening delimiter (default: "{{")
        I18N_INTERPOLATION_SUFFIX: Closing delimiter (default: "}}")
        I18N_INTERPOLATION_ESCAPE_VALUE: Escape HTML in values (default: True)
    """

    prefix: str = Field(default="{{", alias="I18N_INTERPOLATION_PREFIX")
    suffix: str = Field(default="}}", alias="I18N_INTERPOLATION_SUFFIX")
    escape_value: bool = Field(default=True, alias="I18N_INTERPOLATION_ESCAPE_VALUE")

    @field_validator("prefix", "suffix")
    @classmethod
    def validate_delimiter(cls, v: str) -> str:
        """Reject empty delimiters."""
        if not v:
            raise ValueError("interpolation delimiters must not be empty")
        return v


class PluralizationSettings(G11nSettings):
    """Pluralization configuration.

    Environment Variables:
        I18N_SIMPLIFY_PLURAL_SUFFIX: Reserved toggle (default: True)
    """

    simplify_plural_suffix: bool = Field(
        default=True, alias="I18N_SIMPLIFY_PLURAL_SUFFIX"
    )


class I18nSettings(G11nSettings):
    """Translation system configuration.

    Environment Variables:
        I18N_DEFAULT_LOCALE: Default locale code (required)
        I18N_SUPPORTED_LOCALES: JSON list of supported locale codes (required)
        I18N_FALLBACK_LOCALE: Locale retried when a key is missing (default: default locale)
        I18N_NAMESPACES: JSON list of namespaces to preload (default: ["common"])
        I18N_DEFAULT_NAMESPACE: Namespace used when none is given (default: "common")
        I18N_LOAD_PATH: Bundle path template (default: locales/{{locale}}/{{namespace}}.json)
        I18N_DEBUG: Emit verbose diagnostics (default: False)

    Example:
        ```python
        settings = I18nSettings(default_locale="en", supported_locales=["en", "fr"])
        settings.effective_fallback_locale  # "en"
        ```
    """

    default_locale: str = Field(alias="I18N_DEFAULT_LOCALE")
    supported_locales: List[str] = Field(alias="I18N_SUPPORTED_LOCALES")
    fallback_locale: Optional[str] = Field(default=None, alias="I18N_FALLBACK_LOCALE")
    namespaces: List[str] = Field(
        default_factory=lambda: ["common"], alias="I18N_NAMESPACES"
    )
    default_namespace: str = Field(default="common", alias="I18N_DEFAULT_NAMESPACE")
    load_path: str = Field(
        default="locales/{{locale}}/{{namespace}}.json", alias="I18N_LOAD_PATH"
    )
    debug: bool = Field(default=False, alias="I18N_DEBUG")
    interpolation: InterpolationSettings = Field(default_factory=InterpolationSettings)
    pluralization: PluralizationSettings = Field(default_factory=PluralizationSettings)

    @field_validator("default_locale", "fallback_locale")
    @classmethod
    def normalize_locale_code(cls, v: Optional[str]) -> Optional[str]:
        """Normalize locale codes to their primary language subtag."""
        if v is None:
            return None
        normalized = normalize_locale(v)
        if not normalized:
            raise ValueError("locale code must not be empty")
        return normalized

    @field_validator("supported_locales")
    @classmethod
    def normalize_supported_locales(cls, v: List[str]) -> List[str]:
        """Normalize and de-duplicate supported locales, keeping order."""
        result: List[str] = []
        for locale in v:
            normalized = normalize_locale(locale)
            if normalized and normalized not in result:
                result.append(normalized)
        if not result:
            raise ValueError("at least one supported locale is required")
        return result

    @model_validator(mode="after")
    def validate_locales_supported(self) -> "I18nSettings":
        """Ensure default and fallback locales are part of the supported set."""
        if self.default_locale not in self.supported_locales:
            raise ValueError(
                f"default locale {self.default_locale!r} is not in supported locales"
            )
        if (
            self.fallback_locale is not None
            and self.fallback_locale not in self.supported_locales
        ):
            raise ValueError(
                f"fallback locale {self.fallback_locale!r} is not in supported locales"
            )
        if self.default_namespace not in self.namespaces:
            self.namespaces = [self.default_namespace, *self.namespaces]
        return self

    @property
    def effective_fallback_locale(self) -> str:
        """Fallback locale, defaulting to the default locale."""
        return self.fallback_locale or self.default_locale


class Settings(G11nSettings):
    """g11n configuration settings - main aggregator.

    Aggregates all settings sections into a single configuration object:

    - **logging**: log level and rendering mode
    - **i18n**: locales, namespaces, interpolation and pluralization

    Example:
        ```python
        from g11n.configuration import Settings

        settings = Settings()
        settings.i18n.default_locale
        settings.logging.is_production
        ```
    """

    logging: LoggingSettings
    i18n: I18nSettings

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            "logging": LoggingSettings,
            "i18n": I18nSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
