#!/usr/bin/env python3
"""
KUBEDIFF OPTIONS
----------------
Immutable settings shared by the engine, the comparator and the
terminal formatter. Built once per run (usually from CLI flags).

Author: KubeDiff Team
Date: 2026-02-03
"""

from dataclasses import dataclass
from typing import Tuple

DEFAULT_SECTION_ORDER = ("apiVersion", "kind", "metadata", "data", "spec")


@dataclass(frozen=True)
class DiffOptions:
    """
    Attributes:
        name_key: Key that names an element of an identity-keyed list.
        type_key: Second key the first element must carry for the list to
            be treated as identity-keyed ('image' for containers).
        identity_label: Word used for identity-list elements in paths and output.
        show_unchanged: Emit unchanged top-level fields/sections as context.
        truncation_marker: Appended to a one-line rendering of a multi-line value.
        default_namespace: Namespace that is omitted from identity keys.
        section_order: Top-level keys compared first, in this order.
    """
    name_key: str = "name"
    type_key: str = "image"
    identity_label: str = "container"
    show_unchanged: bool = True
    truncation_marker: str = " ..."
    default_namespace: str = "default"
    section_order: Tuple[str, ...] = DEFAULT_SECTION_ORDER
