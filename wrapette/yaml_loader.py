from __future__ import annotations
"""Minimal YAML → Wrap loader.

A declarative alternative to the fluent API. Example YAML:

```yaml
id: page
selector: "#main"
defaults:
  lang: en
parallel:
  header: header_unit         # key → symbol
  body: myapp.units:body      # module:attr import path
series:
  - session_unit              # list → keyless units, results merged
eventually:
  analytics: analytics_unit
```

Usage:
    from wrapette.yaml_loader import load_wrap
    page = load_wrap("page.yml", symbols=globals())
"""
from importlib import import_module
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml
from jsonschema import validate as _js_validate

from wrapette.core.flow import ORDER
from wrapette.core.wrap import Wrap

__all__ = ["load_wrap", "build_wrap"]

_ATTRIBUTES = ("id", "selector", "prepend", "append", "el", "editable", "place")


# --------------------------------------------------------------------------- #

def _resolve(name: str, symbols: Mapping[str, Any]):  # noqa: D401
    """Return python object for *name* (look in *symbols* then import)."""
    if name in symbols:
        return symbols[name]
    if ":" in name:  # module:path style
        mod_name, attr = name.split(":", 1)
        obj: Any = import_module(mod_name)
        for part in attr.split("."):
            obj = getattr(obj, part)
        return obj
    raise KeyError(f"Symbol '{name}' not found in symbols nor importable")


def build_wrap(data: Mapping[str, Any], symbols: Mapping[str, Any] | None = None) -> Wrap:  # noqa: D401
    """Validate *data* and build the Wrap it describes."""
    _js_validate(instance=data, schema=_SCHEMA)
    symbols = symbols or {}
    wrap = Wrap()

    if "defaults" in data:
        wrap.defaults(data["defaults"])

    for group in ORDER:
        members = data.get(group.value)
        if not members:
            continue
        if isinstance(members, list):
            for name in members:
                wrap.register(_resolve(name, symbols), None, group)
        else:
            for key, name in members.items():
                wrap.register(key, _resolve(name, symbols), group)

    # attributes last so editable/place reach the children
    for attribute in _ATTRIBUTES:
        if attribute in data:
            getattr(wrap, attribute)(data[attribute])
    return wrap


def load_wrap(path: str | Path, symbols: Mapping[str, Any] | None = None) -> Wrap:  # noqa: D401
    """Load YAML file at *path* into a Wrap."""
    data = yaml.safe_load(Path(path).read_text())
    return build_wrap(data, symbols)


# --------------------------------------------------------------------------- #
# Minimal JSON Schema for YAML files
# --------------------------------------------------------------------------- #

_GROUP: Dict[str, Any] = {
    "anyOf": [
        {"type": "array", "items": {"type": "string"}},
        {"type": "object", "additionalProperties": {"type": "string"}},
    ]
}

_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "id": {"type": "string"},
        "selector": {"type": "string"},
        "prepend": {"type": "string"},
        "append": {"type": "string"},
        "el": {"type": "string"},
        "editable": {"type": "boolean"},
        "place": {"type": "string"},
        "defaults": {"type": "object"},
        "parallel": _GROUP,
        "series": _GROUP,
        "eventually": _GROUP,
    },
}
