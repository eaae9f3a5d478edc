"""
Exceptions raised while compiling components into class descriptors.
"""

from typing import Any, Optional


class CompilerError(Exception):
    """Base exception for component compilation errors."""

    pass


class IllegalOperationError(CompilerError):
    """A discriminator-only operation was requested on a plain component."""

    def __init__(self, component_name: str, operation: str = "this operation"):
        self.component_name = component_name
        self.operation = operation
        super().__init__(
            f"Component '{component_name}' is not a oneOf component, "
            f"{operation} requires a discriminator"
        )


class SchemaValidationError(CompilerError):
    """The input schema cannot be compiled as written."""

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        first: Any = None,
        second: Any = None,
    ):
        self.field_name = field_name
        self.first = first
        self.second = second
        super().__init__(message)
