"""
Python code generator module.

Generates Python dataclasses and enum classes from components.
"""

from .generator import PythonGenerator, create_python_generator
from .naming import PythonNamingStrategy, create_python_sanitizer

__all__ = [
    "PythonGenerator",
    "PythonNamingStrategy",
    "create_python_generator",
    "create_python_sanitizer",
]
