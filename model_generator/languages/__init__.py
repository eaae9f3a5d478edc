"""
Language-specific code generators.

Each language ships a naming strategy for the compiler and a renderer.
"""

from .kotlin import KotlinGenerator, KotlinNamingStrategy
from .python import PythonGenerator, PythonNamingStrategy

__all__ = [
    "KotlinGenerator",
    "KotlinNamingStrategy",
    "PythonGenerator",
    "PythonNamingStrategy",
]
