#!/usr/bin/env python3
"""
KUBEDIFF IDENTITY - Named Record Lists
--------------------------------------
Recognises lists whose elements are records named by a key
(containers, initContainers, ...) so they can be matched by name
rather than by position.

Author: KubeDiff Team
Date: 2026-02-03
"""

from typing import Any, Dict, List, Optional


class IdentityListClassifier:
    """
    Decides whether a list is identity-keyed and builds its
    identity -> element index.
    """

    def __init__(self, name_key: str = "name", type_key: str = "image"):
        self.name_key = name_key
        self.type_key = type_key

    def is_identity_list(self, value: Any) -> bool:
        """
        Shallow check: a non-empty list whose first element is a mapping
        carrying both the name key and the type key.
        """
        if not isinstance(value, list) or not value:
            return False
        first = value[0]
        return isinstance(first, dict) and self.name_key in first and self.type_key in first

    def identity_of(self, element: Any) -> Optional[str]:
        if not isinstance(element, dict):
            return None
        name = element.get(self.name_key)
        return name if isinstance(name, str) else None

    def index(self, elements: List[Any]) -> Optional[Dict[str, Any]]:
        """
        Maps identity -> element, or None when the list cannot be matched
        by identity (an element without a string name, or a repeated name).
        Callers diff such lists positionally instead.
        """
        indexed: Dict[str, Any] = {}
        for element in elements:
            identity = self.identity_of(element)
            if identity is None or identity in indexed:
                return None
            indexed[identity] = element
        return indexed
