"""cssnest: compact flat stylesheets into nested, de-duplicated rules."""

__version__ = "0.1.0"

from cssnest.config import NestOptions  # noqa: E402
from cssnest.errors import ConfigError, NestError, NodeConstructionError  # noqa: E402
from cssnest.factory import CloneNodeFactory, LiteralNodeFactory, NodeFactory  # noqa: E402
from cssnest.parser import ParseError, parse_css  # noqa: E402
from cssnest.serialize import to_css  # noqa: E402
from cssnest.transforms import apply_transforms, nest, nest_css  # noqa: E402

__all__ = [
    "__version__",
    "CloneNodeFactory",
    "ConfigError",
    "LiteralNodeFactory",
    "NestError",
    "NestOptions",
    "NodeConstructionError",
    "NodeFactory",
    "ParseError",
    "apply_transforms",
    "nest",
    "nest_css",
    "parse_css",
    "to_css",
]
