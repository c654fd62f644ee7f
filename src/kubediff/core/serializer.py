#!/usr/bin/env python3
"""
KUBEDIFF SERIALIZER - Inline & Block Rendering
----------------------------------------------
Turns decoded nodes back into YAML text for the report:
a single line for +/-/~ annotations and a full block for
unchanged context sections.

Author: KubeDiff Team
Date: 2026-02-03
"""

import io
import logging
from typing import Any, List

from ruamel.yaml import YAML

logger = logging.getLogger("kubediff.serializer")

# Emitted after a bare top-level scalar ("nginx\n...\n")
DOCUMENT_END = "..."


class ValueSerializer:
    """
    The Renderer: converts any node to YAML text using the manifest's
    own notation. Rendering never raises; unrepresentable values fall
    back to their plain string form.
    """

    def __init__(self, truncation_marker: str = " ..."):
        self.truncation_marker = truncation_marker
        self.yaml = YAML(typ='safe', pure=True)
        self.yaml.default_flow_style = False
        # Standard K8s: 2 spaces, but sequences are indented 4 (offset 2)
        self.yaml.indent(mapping=2, sequence=4, offset=2)
        self.yaml.width = 4096

    def dump(self, value: Any) -> str:
        """Full YAML rendering without the trailing document-end marker."""
        stream = io.StringIO()
        self.yaml.dump(value, stream)
        lines = stream.getvalue().rstrip("\n").split("\n")
        if len(lines) > 1 and lines[-1] == DOCUMENT_END:
            lines.pop()
        return "\n".join(lines)

    def dump_lines(self, value: Any) -> List[str]:
        """Block rendering split into lines, used for unchanged subtrees."""
        try:
            return self.dump(value).splitlines()
        except Exception as e:
            logger.debug(f"Block rendering failed for {type(value).__name__}: {e}")
            return [self._stringify(value)]

    def format_value(self, value: Any) -> str:
        """
        Single display line for a node.
        Multi-line renderings keep their first line plus the truncation marker.
        """
        try:
            text = self.dump(value).strip()
        except Exception as e:
            logger.debug(f"YAML rendering failed for {type(value).__name__}: {e}")
            text = self._stringify(value)

        if "\n" in text:
            return text.split("\n", 1)[0] + self.truncation_marker
        return text

    def _stringify(self, value: Any) -> str:
        try:
            return str(value)
        except Exception:
            return object.__repr__(value)
