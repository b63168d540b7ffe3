from cssnest.parser.errors import ParseError
from cssnest.parser.transformer import parse_css

__all__ = ["ParseError", "parse_css"]
