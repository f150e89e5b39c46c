from typing import Any, Mapping
import json


def to_json(mapping: Mapping[str, Any], *, indent=None) -> str:
    return json.dumps(mapping, indent=indent, ensure_ascii=False)
