"""
Class descriptors: the output side of the compiler.

Descriptors are read-only trees handed to a renderer. They carry resolved
type strings and names only, never references back to the definitions
they were compiled from.
"""

from dataclasses import dataclass
from typing import Iterator, Mapping, Optional, Tuple, Union


@dataclass(frozen=True)
class EnumDescriptor:
    """An enum synthesized from a field's literal values."""

    name: str
    literals: Tuple[str, ...]


@dataclass(frozen=True)
class ResolvedField:
    """A field with its target-language type resolved."""

    name: str
    resolved_type: str
    enum: Optional[EnumDescriptor] = None
    is_required: bool = False
    abstract: bool = False  # lifted to a union's common fields
    overridden: bool = False  # declared by an ancestor union

    @property
    def shape(self) -> Tuple[str, Optional[EnumDescriptor], bool]:
        return (self.resolved_type, self.enum, self.is_required)

    def describe(self) -> str:
        """Human readable shape, used in validation messages."""
        text = f"{self.name}: {self.resolved_type}"
        if self.enum:
            text += f" (enum {self.enum.name}{list(self.enum.literals)})"
        return text + (" required" if self.is_required else " optional")


@dataclass(frozen=True)
class SingleClassDescriptor:
    """A plain class: a component without a discriminator, or a union leaf."""

    name: str
    qualifier: str
    imports: Tuple[str, ...]
    fields: Tuple[ResolvedField, ...]

    is_union = False

    @property
    def enums(self) -> Tuple[EnumDescriptor, ...]:
        return tuple(f.enum for f in self.fields if f.enum is not None)


@dataclass(frozen=True)
class UnionClassDescriptor:
    """A discriminated union with its subclasses."""

    name: str
    qualifier: str
    imports: Tuple[str, ...]
    common_fields: Tuple[ResolvedField, ...]
    subclasses: Tuple["ClassDescriptor", ...]
    discriminator_field_name: str
    variant_mapping: Mapping[str, str]  # leaf class name -> discriminator literal

    is_union = True

    @property
    def enums(self) -> Tuple[EnumDescriptor, ...]:
        return tuple(f.enum for f in self.common_fields if f.enum is not None)

    def iter_leaves(self) -> Iterator[SingleClassDescriptor]:
        """Yield every leaf class of this union, depth first."""
        for subclass in self.subclasses:
            if subclass.is_union:
                yield from subclass.iter_leaves()
            else:
                yield subclass


ClassDescriptor = Union[SingleClassDescriptor, UnionClassDescriptor]
