"""Property contracts for configurable types.

A property contract is the canonical form of the property names a type
declares. Authors write a raw declaration, an ordered list of names where a
leading REQUIRED_MARKER marks a name as required:

    properties = ("!type", "category")

The builder turns that into a PropertyContract:

    contract.names     == ("type", "category")
    contract.required  == ("type",)
    contract.optional  == ("category",)

Ordering rules:
- Required names always precede optional names, whatever their position in
  the declaration.
- Within each partition, names keep the order of their first occurrence.
- Duplicates collapse. A name marked required anywhere in the declaration is
  required, positioned at its first marked occurrence.

Because ancestor contracts re-enter a merge through to_declaration() (with
their markers restored), building in steps is equivalent to building the
concatenation once:

    build(build(a).to_declaration() + b) == build(a + b)

This module is a leaf: it depends on nothing else in protean.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any, overload

import structlog

# Bound to stdlib logging: silent until the application configures handlers
logger = structlog.wrap_logger(logging.getLogger(__name__), wrapper_class=structlog.stdlib.BoundLogger)

REQUIRED_MARKER = "!"

# Anything a type author may write as its `properties` attribute.
# A PropertyContract is accepted too (it is re-rendered with its markers).
RawDeclaration = Iterable[str]


@dataclass(frozen=True, slots=True, eq=False)
class PropertyContract(Sequence[str]):
    """Immutable required/optional partition of a type's property names.

    The contract is itself a sequence of names (required first), so code that
    only wants "the list of properties" can iterate, index and test membership
    directly. Contract-aware code reads `required` and `optional`.

    Two contracts are equal only when their partitions match. Against a plain
    tuple or list, equality compares the names alone, and `+` concatenates
    the names into a tuple.

    Attributes:
        required: Names that must resolve to a non-None value after configure
        optional: Names that may be absent
    """

    required: tuple[str, ...] = ()
    optional: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Coerce partitions to tuples and check they partition the names.

        Raises:
            ValueError: If a name repeats within or across partitions
        """
        object.__setattr__(self, "required", tuple(self.required))
        object.__setattr__(self, "optional", tuple(self.optional))

        names = self.required + self.optional
        if len(names) != len(set(names)):
            duplicates = sorted({n for n in names if names.count(n) > 1})
            raise ValueError(f"Property names must be unique across required and optional: {duplicates}")

    @property
    def names(self) -> tuple[str, ...]:
        """All property names, required first."""
        return self.required + self.optional

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[str, ...]: ...

    def __getitem__(self, index: int | slice) -> str | tuple[str, ...]:
        return self.names[index]

    def __len__(self) -> int:
        return len(self.required) + len(self.optional)

    def __iter__(self) -> Iterator[str]:
        yield from self.required
        yield from self.optional

    def __contains__(self, name: object) -> bool:
        return name in self.required or name in self.optional

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PropertyContract):
            return self.required == other.required and self.optional == other.optional
        if isinstance(other, (tuple, list)):
            return self.names == tuple(other)
        return NotImplemented

    def __hash__(self) -> int:
        # equal to a tuple of the same names, so hash like one
        return hash(self.names)

    def __add__(self, other: object) -> tuple[str, ...]:
        if isinstance(other, (tuple, list, PropertyContract)):
            return self.names + tuple(other)
        return NotImplemented

    def __radd__(self, other: object) -> tuple[str, ...]:
        if isinstance(other, (tuple, list)):
            return tuple(other) + self.names
        return NotImplemented

    def is_required(self, name: str) -> bool:
        return name in self.required

    def to_declaration(self, marker: str = REQUIRED_MARKER) -> tuple[str, ...]:
        """Render the contract back to raw declaration form.

        Required names get the marker back, so feeding the result to the
        builder reproduces this contract exactly.
        """
        return tuple(f"{marker}{name}" for name in self.required) + self.optional

    def merge(self, declaration: RawDeclaration | None, *, marker: str = REQUIRED_MARKER) -> PropertyContract:
        """Return the contract of this contract followed by `declaration`.

        This is the inheritance step: base properties first, the derived
        type's own declaration appended, then re-partitioned.
        """
        entries = self.to_declaration(marker) + _declared_entries(declaration, marker)
        return PropertyContract.from_declaration(entries, marker=marker)

    def as_dict(self) -> dict[str, list[str]]:
        return {
            "names": list(self.names),
            "required": list(self.required),
            "optional": list(self.optional),
        }

    @classmethod
    def from_declaration(
        cls,
        declaration: RawDeclaration | None,
        *,
        marker: str = REQUIRED_MARKER,
    ) -> PropertyContract:
        """Build a contract from a raw declaration.

        Never fails: None, a bare string or a non-iterable yields the empty
        contract, and entries that are not usable names are skipped. Both
        cases are logged as warnings.

        Args:
            declaration: Ordered names, required ones prefixed with `marker`
            marker: Prefix that marks a name as required

        Returns:
            The canonical PropertyContract
        """
        # dicts as insertion-ordered sets
        required: dict[str, None] = {}
        seen: dict[str, None] = {}

        for entry in _declared_entries(declaration, marker):
            if entry.startswith(marker):
                name = entry[len(marker) :]
                required.setdefault(name, None)
            else:
                name = entry
            seen.setdefault(name, None)

        return cls(
            required=tuple(required),
            optional=tuple(name for name in seen if name not in required),
        )


EMPTY_CONTRACT = PropertyContract()


def build_contract(declaration: RawDeclaration | None, *, marker: str = REQUIRED_MARKER) -> PropertyContract:
    """Build a PropertyContract from a raw declaration.

    Shorthand for PropertyContract.from_declaration().
    """
    return PropertyContract.from_declaration(declaration, marker=marker)


def _declared_entries(declaration: Any, marker: str) -> tuple[str, ...]:
    """Flatten a declaration into usable string entries."""
    if declaration is None:
        return ()
    if isinstance(declaration, PropertyContract):
        return declaration.to_declaration(marker)
    if isinstance(declaration, (str, bytes)) or not isinstance(declaration, Iterable):
        logger.warning(
            "malformed_declaration",
            reason="expected an iterable of names",
            declaration_type=type(declaration).__name__,
        )
        return ()

    entries: list[str] = []
    for entry in declaration:
        if not isinstance(entry, str):
            logger.warning("declaration_entry_skipped", reason="not a string", entry=repr(entry))
            continue
        if entry in ("", marker):
            logger.warning("declaration_entry_skipped", reason="empty name", entry=entry)
            continue
        entries.append(entry)
    return tuple(entries)
