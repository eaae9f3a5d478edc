"""
Kotlin code generator module.

Generates Kotlin data classes and sealed class hierarchies from components.
"""

from .generator import KotlinGenerator, create_kotlin_generator
from .naming import KotlinNamingStrategy, create_kotlin_sanitizer

__all__ = [
    "KotlinGenerator",
    "KotlinNamingStrategy",
    "create_kotlin_generator",
    "create_kotlin_sanitizer",
]
