#!/usr/bin/env python3
"""
KUBEDIFF VALIDATOR - The Gatekeeper
-----------------------------------
Checks that every decoded document is a usable Kubernetes object
before it is identified and compared: apiVersion, kind, metadata and
metadata.name must be present, and metadata.namespace (optional)
must be a string.

Author: KubeDiff Team
Date: 2026-02-03
"""

from typing import Any, Tuple


def _type_name(value: Any) -> str:
    return "null" if value is None else type(value).__name__


class ManifestValidator:
    """
    Enforces the minimum structure needed to build an identity key.
    Returns (ok, message) pairs; the loader decides how to fail.
    """

    def __init__(self):
        # Core fields that must hold a non-empty value in every K8s resource
        self.required_fields = ["apiVersion", "kind"]

    def validate(self, doc: Any, position: int) -> Tuple[bool, str]:
        """
        Validates one decoded document.

        Args:
            doc: The decoded YAML document.
            position: 1-based document number, used in messages.
        """
        if not isinstance(doc, dict):
            return False, f"object {position}: document must be a mapping, got {_type_name(doc)}"

        # --- TEST 1: Identity fields ---
        for field in self.required_fields:
            value = doc.get(field)
            if value is None or value == "":
                return False, f"object {position}: missing required field '{field}'"
            if not isinstance(value, str):
                return False, f"object {position}: '{field}' must be a string, got {_type_name(value)}"

        kind = doc["kind"]

        # --- TEST 2: Metadata block ---
        metadata = doc.get("metadata")
        if metadata is None:
            return False, f"object {position} ({kind}): missing required field 'metadata'"
        if not isinstance(metadata, dict):
            return False, f"object {position} ({kind}): 'metadata' must be a mapping, got {_type_name(metadata)}"

        # --- TEST 3: Name & Namespace ---
        if "name" not in metadata:
            return False, f"object {position} ({kind}): missing required field 'metadata.name'"
        name = metadata["name"]
        if not isinstance(name, str) or not name:
            return False, (f"object {position} ({kind}): 'metadata.name' must be a non-empty string, "
                           f"got {_type_name(name)}")

        if "namespace" in metadata and not isinstance(metadata["namespace"], str):
            return False, (f"object {position} ({kind}/{name}): 'metadata.namespace' must be a string, "
                           f"got {_type_name(metadata['namespace'])}")

        return True, "Manifest passes identity checks."
