#!/usr/bin/env python3
"""
KUBEDIFF LOADER - Manifest Intake
---------------------------------
Reads a (multi-document) manifest file, decodes every document with
ruamel.yaml, skips empty documents and wraps each validated document
in a K8sObject.

Author: KubeDiff Team
Date: 2026-02-03
"""

import logging
from pathlib import Path
from typing import List, Optional

from ruamel.yaml import YAML, YAMLError

from kubediff.core.config import DiffOptions
from kubediff.core.errors import ManifestNotFoundError, ManifestParseError, ManifestValidationError
from kubediff.core.models import K8sObject
from kubediff.validator.validator import ManifestValidator

logger = logging.getLogger("kubediff.loader")


class ManifestLoader:
    """
    Turns manifest text into validated K8sObjects.
    """

    def __init__(self, options: Optional[DiffOptions] = None):
        self.options = options or DiffOptions()
        self.yaml = YAML(typ='safe', pure=True)
        self.validator = ManifestValidator()

    def load_file(self, file_path: str) -> List[K8sObject]:
        path = Path(file_path)
        if not path.exists():
            raise ManifestNotFoundError(f"file '{file_path}' does not exist")
        if not path.is_file():
            raise ManifestNotFoundError(f"'{file_path}' is not a regular file")

        # BOM-aware read
        try:
            text = path.read_text(encoding='utf-8-sig')
        except UnicodeDecodeError as e:
            raise ManifestParseError(f"not valid UTF-8 (byte {e.start}): {e.reason}") from e
        except OSError as e:
            raise ManifestNotFoundError(f"cannot read file '{file_path}': {e.strerror or e}") from e
        return self.load_text(text, source=str(file_path))

    def load_text(self, text: str, source: str = "<string>") -> List[K8sObject]:
        """Decodes every document of a manifest; empty documents are skipped."""
        objects: List[K8sObject] = []
        position = 0

        try:
            for position, doc in enumerate(self.yaml.load_all(text), 1):
                if doc is None:
                    continue

                valid, message = self.validator.validate(doc, position)
                if not valid:
                    raise ManifestValidationError(message)

                objects.append(K8sObject(
                    body=doc,
                    source=source,
                    position=position,
                    default_namespace=self.options.default_namespace,
                ))
        except YAMLError as e:
            mark = getattr(e, 'problem_mark', None) or getattr(e, 'context_mark', None)
            location = f" (line {mark.line + 1}, column {mark.column + 1})" if mark else ""
            raise ManifestParseError(f"failed to parse object {position + 1}{location}: {e}") from e

        logger.info(f"Loaded {len(objects)} object(s) from {source}")
        return objects
