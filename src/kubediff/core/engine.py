#!/usr/bin/env python3
"""
KUBEDIFF ENGINE - The Recursive Comparator
------------------------------------------
Walks two decoded YAML trees value-by-value and streams DiffEvents.
Dispatch happens on the runtime shape of both sides:

1. Equivalent values produce nothing (deep-equal, or named records
   that only changed order).
2. Two mappings are compared key by key.
3. Two lists are matched by identity (named records) when both qualify,
   otherwise index by index.
4. Anything else is reported as a full replacement.

Author: KubeDiff Team
Date: 2026-02-03
"""

import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

from kubediff.core.config import DiffOptions
from kubediff.core.equality import deep_equal
from kubediff.core.identity import IdentityListClassifier
from kubediff.core.models import ChangeType, DiffEvent, DiffPath

logger = logging.getLogger("kubediff.engine")


def _sort_key(key: Any) -> str:
    return str(key)


class DiffEngine:
    """
    Stateless recursive differ. A single instance can be shared across
    comparisons; every call owns its own traversal.
    """

    def __init__(self, options: Optional[DiffOptions] = None):
        self.options = options or DiffOptions()
        self.classifier = IdentityListClassifier(
            name_key=self.options.name_key,
            type_key=self.options.type_key,
        )

    def diff(self, path: DiffPath, a: Any, b: Any) -> Iterator[DiffEvent]:
        """Entry point for any pair of nodes found at the same path."""
        if self.equivalent(a, b):
            return

        if isinstance(a, dict) and isinstance(b, dict):
            yield from self.diff_maps(path, a, b)
        elif isinstance(a, list) and isinstance(b, list):
            indexes = self._identity_indexes(a, b)
            if indexes is not None:
                yield from self.diff_identity_lists(path, indexes[0], indexes[1], len(a), len(b))
            else:
                yield from self.diff_lists(path, a, b)
        else:
            yield self._replacement(path, a, b)

    def equivalent(self, a: Any, b: Any) -> bool:
        """
        deep_equal, except that identity-keyed lists are compared by
        identity. Two values are equivalent exactly when diff() would
        report nothing for them.
        """
        if deep_equal(a, b):
            return True
        if isinstance(a, dict) and isinstance(b, dict):
            return a.keys() == b.keys() and all(self.equivalent(a[key], b[key]) for key in a)
        if isinstance(a, list) and isinstance(b, list):
            indexes = self._identity_indexes(a, b)
            if indexes is not None:
                index_a, index_b = indexes
                return (index_a.keys() == index_b.keys()
                        and all(self.equivalent(index_a[key], index_b[key]) for key in index_a))
            return len(a) == len(b) and all(self.equivalent(x, y) for x, y in zip(a, b))
        return False

    def _identity_indexes(self, a: List[Any], b: List[Any]) -> Optional[Tuple[Dict[str, Any], Dict[str, Any]]]:
        """Identity maps for both lists, or None when they must be diffed positionally."""
        if not (self.classifier.is_identity_list(a) and self.classifier.is_identity_list(b)):
            return None
        index_a = self.classifier.index(a)
        index_b = self.classifier.index(b)
        if index_a is None or index_b is None:
            logger.debug("Unnamed or duplicate list elements, falling back to positional diff")
            return None
        return index_a, index_b

    def diff_maps(self, path: DiffPath, a: Dict[Any, Any], b: Dict[Any, Any]) -> Iterator[DiffEvent]:
        """
        Union of keys, sorted. Each key yields at most one event at this
        depth (an addition, a removal, or a header followed by nested events).
        """
        depth = path.depth
        for key in sorted(set(a) | set(b), key=_sort_key):
            child = path.child(key)
            if key not in a:
                yield DiffEvent(ChangeType.ADDED, child, depth, key=str(key), new=b[key])
            elif key not in b:
                yield DiffEvent(ChangeType.REMOVED, child, depth, key=str(key), old=a[key])
            elif not self.equivalent(a[key], b[key]):
                yield DiffEvent(ChangeType.NESTED, child, depth, key=str(key), old=a[key], new=b[key])
                yield from self.diff(child, a[key], b[key])

    def diff_lists(self, path: DiffPath, a: List[Any], b: List[Any]) -> Iterator[DiffEvent]:
        """
        Index-by-index comparison. Lists of different lengths are shown as
        a whole replacement; elements are not re-aligned.
        """
        if len(a) != len(b):
            yield self._replacement(path, a, b)
            return

        depth = path.depth
        for i, (old, new) in enumerate(zip(a, b)):
            if self.equivalent(old, new):
                continue
            child = path.index(i)
            yield DiffEvent(ChangeType.NESTED, child, depth, key=i, old=old, new=new)
            yield from self.diff(child, old, new)

    def diff_identity_lists(self, path: DiffPath, a: Dict[str, Any], b: Dict[str, Any],
                            count_a: int, count_b: int) -> Iterator[DiffEvent]:
        """
        Matches elements by identity, so reordering alone is not a change.
        Presence changes are 'tainted' when the two lists differ in length;
        modifications of an element present on both sides never are.
        """
        depth = path.depth
        label = self.options.identity_label
        tainted = count_a != count_b

        for identity in sorted(set(a) | set(b)):
            child = path.identity(label, identity)
            if identity not in a:
                yield DiffEvent(ChangeType.STRUCTURAL_ADDED, child, depth, key=identity,
                                new=b[identity], tainted=tainted, label=label)
            elif identity not in b:
                yield DiffEvent(ChangeType.STRUCTURAL_REMOVED, child, depth, key=identity,
                                old=a[identity], tainted=tainted, label=label)
            elif not self.equivalent(a[identity], b[identity]):
                yield DiffEvent(ChangeType.ITEM_MODIFIED, child, depth, key=identity,
                                old=a[identity], new=b[identity], label=label)
                yield from self.diff(child, a[identity], b[identity])

    def _replacement(self, path: DiffPath, a: Any, b: Any) -> DiffEvent:
        return DiffEvent(ChangeType.MODIFIED, path, path.depth, old=a, new=b)
