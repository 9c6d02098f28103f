from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence

from .enums import AccessClass

__all__ = [ 'Catalogue', 'CatalogueValidationError', 'RegisterDescriptor', 'merge', ]


class CatalogueValidationError(ValueError):
    """Raised when a register descriptor is invalid."""
    pass


@dataclass(frozen=True)
class RegisterDescriptor:
    address: int
    name: str
    access: AccessClass = AccessClass.RO
    description: str = ''

    def __post_init__(self) -> None:
        if not isinstance(self.address, int) or self.address < 0:
            raise CatalogueValidationError(f'Register address must be a non-negative integer, got {self.address!r}')

        if not self.name or not isinstance(self.name, str):
            raise CatalogueValidationError(f'Register 0x{self.address:X}: name must be a non-empty string')

        if not isinstance(self.access, AccessClass):
            raise CatalogueValidationError(f"Register '{self.name}': access must be an AccessClass, got {type(self.access).__name__}")


class Catalogue:
    """Immutable ordered collection of register descriptors.

    The address is the only stable key, but it is not unique: a catalogue
    assembled from several provenance lists may hold the same address more
    than once, and every occurrence is kept in its position.
    """

    def __init__(self, descriptors: Iterable[RegisterDescriptor] = (), name: str = '') -> None:
        self.name = name
        self._descriptors: tuple[RegisterDescriptor, ...] = tuple(descriptors)

        for d in self._descriptors:
            if not isinstance(d, RegisterDescriptor):
                raise CatalogueValidationError(f'Catalogue entries must be RegisterDescriptors, got {type(d).__name__}')

    def all(self) -> tuple[RegisterDescriptor, ...]:
        return self._descriptors

    def find(self, address: int) -> list[RegisterDescriptor]:
        return [d for d in self._descriptors if d.address == address]

    def __len__(self) -> int:
        return len(self._descriptors)

    def __iter__(self) -> Iterator[RegisterDescriptor]:
        return iter(self._descriptors)

    def __getitem__(self, idx: int) -> RegisterDescriptor:
        return self._descriptors[idx]

    def __repr__(self) -> str:
        return f'Catalogue({self.name!r}, {len(self)} registers)'


def merge(base: Sequence[RegisterDescriptor] | Catalogue,
          supplemental: Sequence[RegisterDescriptor] | Catalogue) -> Catalogue:
    """Concatenate two catalogues, preserving both orders and any duplicates."""
    names = [c.name for c in (base, supplemental) if isinstance(c, Catalogue) and c.name]
    return Catalogue([*base, *supplemental], name='+'.join(names))
