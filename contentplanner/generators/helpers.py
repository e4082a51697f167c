"""
Generator Helper Functions

Shared plumbing for the rule engine: the embedded-JSON wrapper used for
text columns that hold serialized structures, enum coercion and the
random-source default.
"""

import json
import random
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class EmbeddedJSON:
    """
    A text column that should contain JSON.

    Holds either the parsed structure (is_valid=True) or the raw text it
    failed to parse. Missing or blank text counts as invalid.
    """
    raw: Optional[str]
    value: Any = None
    is_valid: bool = False

    @classmethod
    def parse(cls, raw: Optional[str]) -> "EmbeddedJSON":
        if raw is None or not raw.strip():
            return cls(raw=raw)
        try:
            return cls(raw=raw, value=json.loads(raw), is_valid=True)
        except (TypeError, ValueError):
            return cls(raw=raw)

    def as_list(self) -> list:
        """Parsed value if it is a JSON array, else an empty list."""
        if self.is_valid and isinstance(self.value, list):
            return self.value
        return []


def to_json(value: Any) -> str:
    """Serialize a structure for storage in a JSON text column."""
    return json.dumps(value, ensure_ascii=False)


def enum_value(value: Any) -> Any:
    """Plain value of an enum member, passthrough for anything else."""
    return getattr(value, "value", value)


def resolve_rng(rng: Optional[random.Random]) -> random.Random:
    """Use the injected generator, or a fresh unseeded one."""
    return rng if rng is not None else random.Random()
