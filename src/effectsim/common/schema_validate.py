from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

import jsonschema

SchemaLike = Union[Mapping[str, Any], Path]


def load_schema(schema_path: Path) -> Dict[str, Any]:
    with open(schema_path, "r", encoding="utf-8") as f:
        return json.load(f)


def _as_schema(schema: SchemaLike) -> Mapping[str, Any]:
    if isinstance(schema, Path):
        return load_schema(schema)
    return schema


def schema_errors(instance: Any, schema: SchemaLike) -> List[str]:
    """Return one message per violation, ordered by location in ``instance``."""
    validator = jsonschema.Draft202012Validator(_as_schema(schema))
    errors = sorted(validator.iter_errors(instance), key=lambda e: [str(p) for p in e.absolute_path])
    out: List[str] = []
    for err in errors:
        location = "/".join(str(p) for p in err.absolute_path) or "<root>"
        out.append(f"{location}: {err.message}")
    return out

