"""Recursive merge of structured configuration documents.

Merge policy:
    - mapping onto mapping: merged key by key, recursively
    - anything else (scalars, lists, a mapping onto a scalar): the overlay
      value replaces the base value entirely

Lists are never concatenated or merged element-wise.
"""

from copy import deepcopy
from typing import Any, Dict, Mapping


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge ``override`` onto ``base`` and return a new dict.

    Neither input is mutated. Keys absent from ``override`` keep their
    ``base`` value.

    Example:
        >>> deep_merge({"db": {"host": "a", "port": 5432}}, {"db": {"host": "b"}})
        {'db': {'host': 'b', 'port': 5432}}
    """
    result: Dict[str, Any] = deepcopy(dict(base))

    for key, value in override.items():
        current = result.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            result[key] = deep_merge(current, value)
        else:
            result[key] = deepcopy(value)

    return result


def merge_documents(*documents: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge documents left to right, later ones taking precedence."""
    merged: Dict[str, Any] = {}
    for document in documents:
        merged = deep_merge(merged, document)
    return merged


__all__ = ["deep_merge", "merge_documents"]
