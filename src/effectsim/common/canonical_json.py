from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Mapping


JsonLike = Any


def _to_primitive(obj: JsonLike) -> JsonLike:
    if is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: getattr(obj, f.name) for f in fields(obj)}
    if hasattr(obj, "model_dump") and callable(getattr(obj, "model_dump")):
        return obj.model_dump(mode="json")
    return obj


def _sort_key(item: JsonLike) -> str:
    return json.dumps(item, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def canonicalize(obj: JsonLike, *, drop_keys: set[str] | None = None) -> JsonLike:
    """Reduce ``obj`` to JSON primitives with a stable shape.

    Bytes become hex strings, datetimes ISO-8601 strings, timedeltas seconds
    and enums their values. Sets become lists sorted by their canonical JSON
    so the result does not depend on hash seeding. Anything else unknown
    falls back to ``str``.
    """
    drop_keys = drop_keys or set()
    obj = _to_primitive(obj)

    if isinstance(obj, Mapping):
        out: dict[str, JsonLike] = {}
        for k, v in obj.items():
            ks = k if isinstance(k, str) else str(k)
            if ks in drop_keys:
                continue
            out[ks] = canonicalize(v, drop_keys=drop_keys)
        return out

    if isinstance(obj, (list, tuple)):
        return [canonicalize(item, drop_keys=drop_keys) for item in obj]
    if isinstance(obj, (set, frozenset)):
        items = [canonicalize(item, drop_keys=drop_keys) for item in obj]
        return sorted(items, key=_sort_key)

    if isinstance(obj, (bytes, bytearray, memoryview)):
        return bytes(obj).hex()
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, timedelta):
        return obj.total_seconds()
    if isinstance(obj, Enum):
        return obj.value

    if isinstance(obj, (str, int, float, bool)) or obj is None:
        return obj

    return str(obj)


def canonical_dumps_str(obj: Any) -> str:
    return json.dumps(
        canonicalize(obj),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )


def canonical_dumps_bytes(obj: Any) -> bytes:
    return canonical_dumps_str(obj).encode("utf-8")

