from .formatters import format_localisation, format_traits

__all__ = ["format_localisation", "format_traits"]
