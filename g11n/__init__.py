"""g11n - locale state, bundle caching and translation resolution.

Main entry points:
- g11n.i18n: translation components (cache, pluralizer, interpolator, translator)
- g11n.configuration: pydantic-settings configuration
- g11n.logging: structlog setup
"""

__version__ = "0.1.0"
