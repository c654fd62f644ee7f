#!/usr/bin/env python3
"""
KUBEDIFF CORE MODELS
--------------------
Defines the fundamental data structures used across the KubeDiff engine.
Document nodes themselves stay plain Python values (dict / list / scalar)
exactly as the YAML loader produced them; these models describe what
surrounds them: the identified top-level object, the path to a node,
and the diff events streamed out of the engine.

Author: KubeDiff Team
Date: 2026-02-03
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union


class _Missing:
    """Sentinel for 'no value on this side' (distinct from YAML null)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<MISSING>"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


class ChangeType(Enum):
    """Semantic tag carried by every emitted report line."""

    UNCHANGED = "unchanged"
    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"
    NESTED = "nested"                          # header: key/index whose value changed
    ITEM_MODIFIED = "item_modified"            # header: identity-list element changed
    STRUCTURAL_ADDED = "structural_added"
    STRUCTURAL_REMOVED = "structural_removed"
    SECTION = "section"                        # header: changed top-level section
    OBJECT_ADDED = "object_added"
    OBJECT_REMOVED = "object_removed"
    OBJECT_HEADER = "object_header"


def _needs_quoting(key: str) -> bool:
    return not key or any(ch in key for ch in ".[]")


@dataclass(frozen=True)
class DiffPath:
    """
    Location of a node inside one object.

    Segments keep their kind: mapping keys are strings, positional
    indices are ints and identity-list elements are (label, identity)
    pairs. Keys that would read as nesting or indexing are quoted.
    """
    segments: Tuple[Any, ...] = ()

    def child(self, key: Any) -> "DiffPath":
        return DiffPath(self.segments + (str(key),))

    def index(self, position: int) -> "DiffPath":
        return DiffPath(self.segments + (position,))

    def identity(self, label: str, name: str) -> "DiffPath":
        return DiffPath(self.segments + ((label, name),))

    @property
    def depth(self) -> int:
        return len(self.segments)

    def __str__(self) -> str:
        rendered = ""
        for segment in self.segments:
            if isinstance(segment, int):
                rendered += f"[{segment}]"
                continue
            if isinstance(segment, tuple):
                text = f"{segment[0]}[{segment[1]}]"
            elif _needs_quoting(segment):
                rendered += f'["{segment}"]'
                continue
            else:
                text = segment
            rendered += f".{text}" if rendered else text
        return rendered


@dataclass(frozen=True)
class DiffEvent:
    """
    One annotated report line.

    Events are produced lazily by the engine and the comparator and are
    consumed in order by a formatter; nothing stores or re-sorts them.
    """
    change: ChangeType
    path: DiffPath = field(default_factory=DiffPath)
    depth: int = 0                                   # indentation level
    key: Optional[Union[str, int]] = None            # display key, list index or identity
    old: Any = MISSING
    new: Any = MISSING
    tainted: bool = False                            # only set on structural events
    label: Optional[str] = None                      # 'container', or the object Kind

    @property
    def is_header(self) -> bool:
        return self.change in (
            ChangeType.NESTED, ChangeType.ITEM_MODIFIED,
            ChangeType.SECTION, ChangeType.OBJECT_HEADER,
        )


@dataclass
class K8sObject:
    """
    A validated top-level Kubernetes document.

    The identity key is what the comparator matches objects on across
    the two manifests: 'Kind/name', or 'Kind/namespace/name' when an
    explicit non-default namespace is set.
    """
    body: Dict[str, Any]                 # The decoded document, never mutated
    source: str = "<string>"             # File the object was loaded from
    position: int = 0                    # 1-based document number in the source
    default_namespace: str = "default"

    @property
    def api_version(self) -> str:
        return self.body.get("apiVersion", "")

    @property
    def kind(self) -> str:
        return self.body.get("kind", "")

    @property
    def metadata(self) -> Dict[str, Any]:
        return self.body.get("metadata") or {}

    @property
    def name(self) -> str:
        name = self.metadata.get("name")
        return name if isinstance(name, str) else "unknown"

    @property
    def namespace(self) -> str:
        namespace = self.metadata.get("namespace")
        return namespace if isinstance(namespace, str) else ""

    @property
    def qualified_name(self) -> str:
        """Name as shown in add/remove lines ('ns/name' outside the default namespace)."""
        if self.namespace and self.namespace != self.default_namespace:
            return f"{self.namespace}/{self.name}"
        return self.name

    @property
    def identity_key(self) -> str:
        return f"{self.kind}/{self.qualified_name}"
