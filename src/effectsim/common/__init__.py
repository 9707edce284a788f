from .canonical_json import canonical_dumps_bytes, canonical_dumps_str, canonicalize
from .hashing import sha256_hex, sha256_prefixed
from .schema_validate import load_schema, schema_errors
