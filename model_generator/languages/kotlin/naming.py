"""
Kotlin-specific naming utilities.

Handles Kotlin hard keywords, default imports and the naming strategy
used when compiling components for Kotlin.
"""

from ...core.naming import DefaultNamingStrategy, NameSanitizer


# Kotlin hard keywords, these cannot be used as identifiers without backticks
KOTLIN_RESERVED_WORDS = {
    "as",
    "break",
    "class",
    "continue",
    "do",
    "else",
    "false",
    "for",
    "fun",
    "if",
    "in",
    "interface",
    "is",
    "null",
    "object",
    "package",
    "return",
    "super",
    "this",
    "throw",
    "true",
    "try",
    "typealias",
    "typeof",
    "val",
    "var",
    "when",
    "while",
}

# Packages imported by default in every Kotlin file
KOTLIN_DEFAULT_PACKAGES = {
    "kotlin",
    "kotlin.annotation",
    "kotlin.collections",
    "kotlin.comparisons",
    "kotlin.io",
    "kotlin.ranges",
    "kotlin.sequences",
    "kotlin.text",
    "java.lang",
}


class KotlinNamingStrategy(DefaultNamingStrategy):
    """Kotlin keeps simple class names and capitalized field names for enums."""

    pass


def create_kotlin_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for Kotlin."""
    return NameSanitizer(KOTLIN_RESERVED_WORDS, escape_format="`{}`")


def escape_enum_literal(literal: str) -> str:
    """Enum entries keep their literal, backticked when it is not an identifier."""
    if literal.isidentifier() and literal not in KOTLIN_RESERVED_WORDS:
        return literal
    return f"`{literal}`"
