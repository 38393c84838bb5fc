"""Read-only lookup over decoded containers."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import TYPE_CHECKING

from tgph.errors import AmbiguousNameError, NotFoundError, ValidationError
from tgph.format.container import Container
from tgph.format.decoder import decode

if TYPE_CHECKING:
    import pandas as pd


class ContainerStore:
    """Owns the containers of one decoded snapshot.

    The store is built once after decoding and never mutated. Lookups return
    the stored Container objects themselves; they are immutable, so sharing
    them with charts is safe.
    """

    def __init__(self, containers: Iterable[Container]) -> None:
        self._containers: tuple[Container, ...] = tuple(containers)

    @classmethod
    def from_bytes(cls, data: bytes, *, strict: bool = False) -> ContainerStore:
        """Decode a raw TGPH buffer into a new store."""
        return cls(decode(data, strict=strict))

    def by_exact_name(self, name: str) -> Container:
        """Return the single container called ``name``.

        Raises:
            NotFoundError: No container has this name.
            AmbiguousNameError: More than one container has this name.
        """
        matches = [c for c in self._containers if c.name == name]
        if not matches:
            raise NotFoundError(f"no container named {name!r}")
        if len(matches) > 1:
            raise AmbiguousNameError(f"{len(matches)} containers named {name!r}")
        return matches[0]

    def by_name_contains(self, substring: str) -> list[Container]:
        """All containers whose name contains ``substring``, in stream order."""
        return [c for c in self._containers if substring in c.name]

    def names(self) -> list[str]:
        return [c.name for c in self._containers]

    def to_frame(self, names: Sequence[str], index: str | None = None) -> pd.DataFrame:
        """Build a DataFrame with one column per named numeric container.

        Args:
            names: Exact container names to include as columns.
            index: Optional exact name of a container to use as the index
                (typically the unix timestamp container).

        Raises:
            ValidationError: Columns differ in length or hold strings.
        """
        import pandas as pd

        columns = {name: self.by_exact_name(name) for name in names}
        index_container = self.by_exact_name(index) if index is not None else None

        expected = {len(c) for c in columns.values()}
        if index_container is not None:
            expected.add(len(index_container))
        if len(expected) > 1:
            raise ValidationError(f"containers differ in length: {sorted(expected)}")
        for container in columns.values():
            if not container.is_numeric:
                raise ValidationError(f"container {container.name!r} is not numeric")

        frame = pd.DataFrame({name: list(c.elements) for name, c in columns.items()})
        if index_container is not None:
            frame.index = pd.Index(list(index_container.elements), name=index_container.name)
        return frame

    def __iter__(self) -> Iterator[Container]:
        return iter(self._containers)

    def __len__(self) -> int:
        return len(self._containers)

    def __contains__(self, name: object) -> bool:
        return any(c.name == name for c in self._containers)
