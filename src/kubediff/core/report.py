#!/usr/bin/env python3
"""
KUBEDIFF REPORT - Object-Level Comparison
-----------------------------------------
Matches the objects of two manifests by identity key and feeds every
pair that changed into the DiffEngine, section by section.

Output order is fixed: removed objects, added objects, then one block
per modified object (apiVersion, kind, metadata, data, spec, then any
other top-level key alphabetically).

Author: KubeDiff Team
Date: 2026-02-03
"""

import logging
from typing import Any, Dict, Iterator, List, Optional

from kubediff.core.config import DiffOptions
from kubediff.core.engine import DiffEngine
from kubediff.core.models import MISSING, ChangeType, DiffEvent, DiffPath, K8sObject

logger = logging.getLogger("kubediff.report")


def _empty_like(value: Any) -> Any:
    """Counterpart for a section that only one side has."""
    if isinstance(value, dict):
        return {}
    if isinstance(value, list):
        return []
    return None


def _is_structured(value: Any) -> bool:
    return isinstance(value, (dict, list))


class ManifestComparator:
    """
    Top-level driver: object matching plus per-section dispatch.
    """

    def __init__(self, options: Optional[DiffOptions] = None, engine: Optional[DiffEngine] = None):
        self.options = options or DiffOptions()
        self.engine = engine or DiffEngine(self.options)

    def index_objects(self, objects: List[K8sObject]) -> Dict[str, K8sObject]:
        indexed: Dict[str, K8sObject] = {}
        for obj in objects:
            key = obj.identity_key
            if key in indexed:
                logger.warning(f"Duplicate object '{key}' in {obj.source}; keeping document {obj.position}")
            indexed[key] = obj
        return indexed

    def compare(self, objects_a: List[K8sObject], objects_b: List[K8sObject]) -> Iterator[DiffEvent]:
        """Streams the whole report for two object collections."""
        map_a = self.index_objects(objects_a)
        map_b = self.index_objects(objects_b)

        for key in sorted(set(map_a) - set(map_b)):
            obj = map_a[key]
            yield DiffEvent(ChangeType.OBJECT_REMOVED, DiffPath((key,)), 0,
                            key=obj.qualified_name, old=obj.body, label=obj.kind)

        for key in sorted(set(map_b) - set(map_a)):
            obj = map_b[key]
            yield DiffEvent(ChangeType.OBJECT_ADDED, DiffPath((key,)), 0,
                            key=obj.qualified_name, new=obj.body, label=obj.kind)

        for key in sorted(set(map_a) & set(map_b)):
            yield from self.diff_object(map_a[key], map_b[key])

    def diff_object(self, obj_a: K8sObject, obj_b: K8sObject) -> Iterator[DiffEvent]:
        """Nothing for identical objects; otherwise a header and every section."""
        if self.engine.equivalent(obj_a.body, obj_b.body):
            return

        yield DiffEvent(ChangeType.OBJECT_HEADER, DiffPath((obj_a.identity_key,)), 0,
                        key=obj_a.identity_key, label=obj_a.kind)

        for section in self._section_keys(obj_a.body, obj_b.body):
            yield from self.diff_section(section,
                                         obj_a.body.get(section, MISSING),
                                         obj_b.body.get(section, MISSING))

    def diff_section(self, section: str, a: Any, b: Any) -> Iterator[DiffEvent]:
        path = DiffPath((section,))

        if a is MISSING and b is MISSING:
            return

        if self.engine.equivalent(a, b):
            if self.options.show_unchanged:
                yield DiffEvent(ChangeType.UNCHANGED, path, 0, key=section, old=a, new=b)
            return

        one_sided_empty = (a is MISSING and not b) or (b is MISSING and not a)
        if (_is_structured(a) or _is_structured(b)) and not one_sided_empty:
            if a is MISSING:
                a = _empty_like(b)
            if b is MISSING:
                b = _empty_like(a)
            yield DiffEvent(ChangeType.SECTION, path, 0, key=section, old=a, new=b)
            yield from self.engine.diff(path, a, b)
            return

        # Scalar fields (apiVersion, kind, type, ...) and one-sided empty sections
        if a is MISSING:
            yield DiffEvent(ChangeType.ADDED, path, 0, key=section, new=b)
        elif b is MISSING:
            yield DiffEvent(ChangeType.REMOVED, path, 0, key=section, old=a)
        else:
            yield DiffEvent(ChangeType.MODIFIED, path, 0, key=section, old=a, new=b)

    def _section_keys(self, body_a: Dict[str, Any], body_b: Dict[str, Any]) -> List[str]:
        fixed = list(self.options.section_order)
        extra = sorted((set(body_a) | set(body_b)) - set(fixed), key=str)
        return fixed + extra
