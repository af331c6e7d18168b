"""Make property maps safe to hand to Neo4j.

Neo4j properties must be primitives (or homogeneous lists of them), so
nested values are stored as JSON text and missing values are dropped.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any


def clean_properties(props: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``props`` without None values and with nested values JSON-encoded."""
    cleaned: dict[str, Any] = {}
    for key, value in props.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple, Mapping)):
            cleaned[key] = json.dumps(value, default=str)
        else:
            cleaned[key] = value
    return cleaned
