"""Deep, type-strict equality for decoded YAML values."""

import math
from typing import Any


def _scalar_kind(value: Any) -> type:
    # bool must be checked before int: bool subclasses int
    if isinstance(value, bool):
        return bool
    if isinstance(value, int):
        return int
    if isinstance(value, float):
        return float
    if isinstance(value, str):
        return str
    return type(value)


def deep_equal(a: Any, b: Any) -> bool:
    """
    True when two nodes hold the same data.

    Mappings compare key sets and values, lists compare element-wise in
    order. Scalars must share a kind: True, 1 and 1.0 are all different.
    NaN is equal to NaN so that comparing a value with itself never
    reports a change.
    """
    if a is b:
        return True

    if isinstance(a, dict) or isinstance(b, dict):
        if not (isinstance(a, dict) and isinstance(b, dict)):
            return False
        if a.keys() != b.keys():
            return False
        return all(deep_equal(a[key], b[key]) for key in a)

    if isinstance(a, list) or isinstance(b, list):
        if not (isinstance(a, list) and isinstance(b, list)):
            return False
        if len(a) != len(b):
            return False
        return all(deep_equal(x, y) for x, y in zip(a, b))

    if _scalar_kind(a) is not _scalar_kind(b):
        return False
    if isinstance(a, float) and math.isnan(a) and math.isnan(b):
        return True
    return a == b
