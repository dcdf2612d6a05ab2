from __future__ import annotations

import json
import re
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any, Iterable

import yaml

from .elements import Element
from .model import SourceRange


def _type_name(obj: Any) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", type(obj).__name__).lower()


def to_data(obj: Any) -> Any:
    """Convert elements into plain dicts and lists tagged with a ``type`` key."""
    if isinstance(obj, SourceRange):
        return {"start": obj.start, "end": obj.end}
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (list, tuple)):
        return [to_data(item) for item in obj]
    if is_dataclass(obj):
        data = {"type": _type_name(obj)}
        for field in fields(obj):
            data[field.name] = to_data(getattr(obj, field.name))
        return data
    return obj


def dump_yaml(elements: Iterable[Element]) -> str:
    return yaml.safe_dump(
        [to_data(element) for element in elements],
        sort_keys=False,
        allow_unicode=True,
    )


def dump_json(elements: Iterable[Element], indent: int | None = 2) -> str:
    return json.dumps([to_data(element) for element in elements], indent=indent, ensure_ascii=False)
