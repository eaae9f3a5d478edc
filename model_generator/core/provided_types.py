"""
Provided type mappings.

A provided type mapping replaces schema type qualifiers with qualifiers of
types that already exist in the target code base, e.g. mapping
``com.acme.schema.Address`` to ``com.acme.domain.Address``.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Union

from ..logging_config import get_logger

logger = get_logger(__name__)


class ProvidedTypeError(Exception):
    """Exception raised when a provided type mapping cannot be loaded."""

    pass


class ProvidedTypeReader(ABC):
    """Source of a qualifier -> qualifier mapping."""

    @abstractmethod
    def get_mapping(self) -> Dict[str, str]:
        pass


class ProvidedTypeFileReader(ProvidedTypeReader):
    """Reads a provided type mapping from a JSON object file."""

    def __init__(self, file_path: Union[str, Path]):
        self.file_path = Path(file_path)

    def get_mapping(self) -> Dict[str, str]:
        path = self.file_path
        if not path.exists():
            raise ProvidedTypeError(f"Provided types file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                mapping = json.load(f)
        except json.JSONDecodeError as e:
            raise ProvidedTypeError(f"Invalid JSON in provided types file {path}: {e}") from e
        except OSError as e:
            raise ProvidedTypeError(f"Failed to read provided types file {path}: {e}") from e

        if not isinstance(mapping, dict):
            raise ProvidedTypeError(f"Provided types file must contain a JSON object: {path}")

        for key, value in mapping.items():
            if not isinstance(value, str):
                raise ProvidedTypeError(
                    f"Provided type for '{key}' must be a string, got {type(value).__name__}"
                )

        logger.info("Loaded %d provided types from %s", len(mapping), path)
        return mapping
