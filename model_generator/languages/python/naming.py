"""
Python-specific naming utilities and sanitization.

Handles Python reserved words and the naming strategy used when compiling
components for Python.
"""

from typing import Sequence

from ...core.naming import DefaultNamingStrategy, NameSanitizer, to_pascal_case


# Python reserved keywords
PYTHON_RESERVED_WORDS = {
    "False",
    "None",
    "True",
    "and",
    "as",
    "assert",
    "async",
    "await",
    "break",
    "class",
    "continue",
    "def",
    "del",
    "elif",
    "else",
    "except",
    "finally",
    "for",
    "from",
    "global",
    "if",
    "import",
    "in",
    "is",
    "lambda",
    "nonlocal",
    "not",
    "or",
    "pass",
    "raise",
    "return",
    "try",
    "while",
    "with",
    "yield",
}

# Modules whose names never need an import statement
PYTHON_IMPLICIT_MODULES = {"builtins"}


class PythonNamingStrategy(DefaultNamingStrategy):
    """PascalCase enum names and subscripted generics (``list[str]``)."""

    def enum_name(self, field_name: str) -> str:
        return to_pascal_case(field_name) or super().enum_name(field_name)

    def parameterize(self, base: str, parameters: Sequence[str]) -> str:
        return f"{base}[{', '.join(parameters)}]"


def create_python_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for Python."""
    return NameSanitizer(PYTHON_RESERVED_WORDS)
