"""
Naming utilities for class model compilation and rendering.

Holds the naming strategy consulted by the compiler (simple names from
qualifiers, enum names from field names) and the case conversion and
keyword escaping helpers used by the language backends.
"""

import re
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Optional, Sequence, Set, Tuple


class NamingCase(Enum):
    """Different naming case styles."""
    SNAKE_CASE = "snake"      # user_name
    CAMEL_CASE = "camel"      # userName
    PASCAL_CASE = "pascal"    # UserName
    SCREAMING_SNAKE = "screaming_snake"  # USER_NAME
    ORIGINAL = "original"     # leave untouched


class NamingStrategy(ABC):
    """Language-specific naming decisions made while compiling components."""

    @abstractmethod
    def simple_name(self, qualifier: str) -> str:
        """Target-language short name for a fully-qualified type name."""
        pass

    @abstractmethod
    def enum_name(self, field_name: str) -> str:
        """Name of the enum synthesized for a field with literal values."""
        pass

    def parameterize(self, base: str, parameters: Sequence[str]) -> str:
        """Apply generic parameters to a base type name."""
        return f"{base}<{', '.join(parameters)}>"


class DefaultNamingStrategy(NamingStrategy):
    """Substring after the last separator; enum names get a capital first letter."""

    def __init__(self, separator: str = "."):
        self.separator = separator

    def simple_name(self, qualifier: str) -> str:
        return qualifier.rsplit(self.separator, 1)[-1]

    def enum_name(self, field_name: str) -> str:
        return field_name[:1].upper() + field_name[1:]


def to_snake_case(name: str) -> str:
    """Convert to snake_case."""
    # Replace hyphens with underscores
    name = name.replace('-', '_')

    # Insert underscore before uppercase letters
    name = re.sub(r'([a-z0-9])([A-Z])', r'\1_\2', name)

    name = name.lower()
    name = re.sub(r'_+', '_', name)

    return name.strip('_')


def to_camel_case(name: str) -> str:
    """Convert to camelCase."""
    parts = to_snake_case(name).split('_')
    return parts[0] + ''.join(part.capitalize() for part in parts[1:])


def to_pascal_case(name: str) -> str:
    """Convert to PascalCase."""
    return ''.join(part.capitalize() for part in to_snake_case(name).split('_') if part)


def convert_case(name: str, target_case: NamingCase) -> str:
    """Convert name to target case style."""
    if target_case == NamingCase.SNAKE_CASE:
        return to_snake_case(name)
    elif target_case == NamingCase.CAMEL_CASE:
        return to_camel_case(name)
    elif target_case == NamingCase.PASCAL_CASE:
        return to_pascal_case(name)
    elif target_case == NamingCase.SCREAMING_SNAKE:
        return to_snake_case(name).upper()
    return name


class NameSanitizer:
    """Turns schema names into identifiers that are safe in a target language."""

    def __init__(self, reserved_words: Optional[Set[str]] = None,
                 escape_format: str = "{}_"):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of language reserved words
            escape_format: Format applied to a name that collides with a reserved word
        """
        self.reserved_words = reserved_words or set()
        self.escape_format = escape_format
        self._name_cache: Dict[Tuple[str, NamingCase], str] = {}

    def sanitize_name(self, name: str, target_case: NamingCase = NamingCase.ORIGINAL) -> str:
        """
        Sanitize a name for safe use in target language.

        Args:
            name: Original name to sanitize
            target_case: Desired case style

        Returns:
            Sanitized name safe for use
        """
        cache_key = (name, target_case)
        if cache_key in self._name_cache:
            return self._name_cache[cache_key]

        cleaned = self._clean_basic(name)
        converted = convert_case(cleaned, target_case) or cleaned

        # Ensure doesn't start with number
        if converted[0].isdigit():
            converted = f"_{converted}"

        if converted in self.reserved_words:
            converted = self.escape_format.format(converted)

        self._name_cache[cache_key] = converted
        return converted

    def _clean_basic(self, name: str) -> str:
        """Basic name cleanup - remove invalid characters."""
        cleaned = re.sub(r'[^a-zA-Z0-9_]', '_', name).strip('_')
        return cleaned or "field"
