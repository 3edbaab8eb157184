"""Deep merge used for layering YAML configuration.

Array override semantics:
  - Default: replace the array entirely
  - First element "+": append the remaining items to the existing array
  - First element "=": explicit replace with the remaining items
"""
from __future__ import annotations

from typing import Any, Dict, List


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge dictionaries without mutating inputs.

    Example:
        >>> deep_merge({"a": 1, "b": {"c": 2}}, {"b": {"d": 3}})
        {'a': 1, 'b': {'c': 2, 'd': 3}}
    """
    result: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        if key in result:
            if isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = deep_merge(result[key], value)
            elif isinstance(result[key], list) and isinstance(value, list):
                result[key] = merge_arrays(result[key], value)
            else:
                result[key] = value
        else:
            result[key] = _strip_array_markers(value)
    return result


def merge_arrays(base: List[Any], override: List[Any]) -> List[Any]:
    """Merge two lists following the "+" / "=" prefix rules.

    Example:
        >>> merge_arrays([1, 2], ["+", 3])
        [1, 2, 3]
    """
    if not override:
        return list(override)
    first = override[0]
    if isinstance(first, str):
        if first == "+":
            return [*base, *override[1:]]
        if first == "=":
            return list(override[1:])
    return list(override)


def _strip_array_markers(value: Any) -> Any:
    if isinstance(value, list) and value and value[0] in ("+", "="):
        return list(value[1:])
    return value


__all__ = ["deep_merge", "merge_arrays"]
