from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path

from cssnest.errors import ConfigError

# Option spellings accepted besides the field names themselves.
_CAMEL_CASE = {
    "nestDescendants": "nest_descendants",
    "collapseNestedSiblings": "collapse_nested_siblings",
    "factorCommonProps": "factor_common_properties",
    "nestPseudos": "nest_pseudos",
}


@dataclass(frozen=True)
class NestOptions:
    """Which rewrite passes run; every pass is enabled by default."""

    nest_descendants: bool = True
    collapse_nested_siblings: bool = True
    factor_common_properties: bool = True
    nest_pseudos: bool = True

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, object] | None) -> NestOptions:
        """Build options from ``nest-descendants``-style keys.

        Underscore and camelCase spellings are accepted too.  Missing keys
        keep their default.
        """
        if not mapping:
            return cls()
        aliases = dict(_CAMEL_CASE)
        for f in fields(cls):
            aliases[f.name] = f.name
            aliases[f.name.replace("_", "-")] = f.name

        values: dict[str, bool] = {}
        for key, value in mapping.items():
            name = aliases.get(key)
            if name is None:
                raise ConfigError(f"Unknown option: {key!r}")
            if not isinstance(value, bool):
                raise ConfigError(f"Option {key!r} must be a boolean, got {value!r}")
            values[name] = value
        return cls(**values)

    @classmethod
    def from_toml(cls, path: str | Path) -> NestOptions:
        """Load options from a TOML file, top level or a ``[cssnest]`` table."""
        try:
            data = tomllib.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise ConfigError(f"Cannot read config {str(path)!r}: {exc}") from exc
        table = data.get("cssnest", data)
        if not isinstance(table, dict):
            raise ConfigError(f"[cssnest] in {str(path)!r} must be a table")
        return cls.from_mapping(table)

    def merged(self, **overrides: bool | None) -> NestOptions:
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
