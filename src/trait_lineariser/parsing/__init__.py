from .errors import ParseError
from .localisation import parse_localisation
from .marker import GENERATION_MARKER, has_generation_marker
from .script import parse_traits, parse_traits_structure

__all__ = [
    "GENERATION_MARKER",
    "ParseError",
    "has_generation_marker",
    "parse_localisation",
    "parse_traits",
    "parse_traits_structure",
]
