"""Typed, named columnar arrays decoded from a TGPH stream."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

U32_MAX = 0xFFFFFFFF


class ElementType(IntEnum):
    """Wire tag for a container's element type."""

    UINT32 = 1
    FLOAT32 = 2
    STRING = 3

    @property
    def is_numeric(self) -> bool:
        return self is not ElementType.STRING

    @classmethod
    def for_value(cls, value: Any) -> ElementType:
        """Infer the element type for a Python value.

        bool is rejected because it is an int subclass with no wire type.
        """
        if isinstance(value, bool):
            raise TypeError("bool values have no TGPH element type")
        if isinstance(value, int):
            return cls.UINT32
        if isinstance(value, float):
            return cls.FLOAT32
        if isinstance(value, str):
            return cls.STRING
        raise TypeError(f"unsupported element value type: {type(value).__name__}")


def _matches(element_type: ElementType, value: Any) -> bool:
    if element_type is ElementType.UINT32:
        return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= U32_MAX
    if element_type is ElementType.FLOAT32:
        return isinstance(value, float)
    return isinstance(value, str)


@dataclass(frozen=True)
class Container:
    """An immutable, named array whose elements all share one type.

    Args:
        name: Container name, unique by convention but not by format.
        element_type: The wire type shared by every element.
        elements: The element values. Stored as a tuple.
    """

    name: str
    element_type: ElementType
    elements: tuple = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "element_type", ElementType(self.element_type))
        if not isinstance(self.elements, tuple):
            object.__setattr__(self, "elements", tuple(self.elements))
        for value in self.elements:
            if not _matches(self.element_type, value):
                raise TypeError(
                    f"container {self.name!r}: {value!r} is not a valid "
                    f"{self.element_type.name} element"
                )

    @property
    def is_numeric(self) -> bool:
        return self.element_type.is_numeric

    def as_floats(self) -> list[float]:
        """Elements converted to float. Only valid for numeric containers."""
        if not self.is_numeric:
            raise TypeError(f"container {self.name!r} holds strings, not numbers")
        return [float(v) for v in self.elements]

    def __len__(self) -> int:
        return len(self.elements)

    def __repr__(self) -> str:
        return (
            f"Container(name={self.name!r}, element_type={self.element_type.name}, "
            f"len={len(self.elements)})"
        )
