"""Finite enumerations and the bit-set container built on them.

A `Finite` value witnesses a bijection between the inhabitants of a type and the integers
`0 .. cardinality - 1`.  `EnumSet` stores a set of such inhabitants as a bitarray with
exactly `cardinality` bits, so membership tests and set algebra are single bitwise operations.
"""

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

from bitarray import bitarray, frozenbitarray
from bitarray.util import ba2int, int2ba, zeros

A = TypeVar("A")

ENDIAN = "little"
"""Bit `i` of every `EnumSet` corresponds to the value with index `i`."""


@dataclass(frozen=True, eq=False)
class Finite(Generic[A]):
    """Capability for types usable as `EnumSet` elements.

    Laws:
        - `to_index` is total and injective onto `range(cardinality)`
        - `from_index(to_index(x)) == x` for every value `x`
    """

    name: str
    """Name used in error messages and reprs."""

    cardinality: int
    """Number of inhabitants of the type."""

    to_index: Callable[[A], int]
    """Maps a value to its index."""

    from_index: Callable[[int], A]
    """Maps an index back to its value.  Only defined on `range(cardinality)`."""

    def values(self) -> list[A]:
        """All inhabitants in ascending index order."""
        return [self.from_index(i) for i in range(self.cardinality)]

    def __repr__(self) -> str:
        return f"Finite({self.name}, cardinality={self.cardinality})"


class EnumSet(Generic[A]):
    """Immutable set of values of a `Finite` domain, stored as a bitarray.

    The bitarray always has exactly `domain.cardinality` bits, so there are no bits outside
    the domain that could be set by accident.
    """

    __slots__ = ("domain", "bits")

    def __init__(self, domain: Finite[A], bits: frozenbitarray) -> None:
        if len(bits) != domain.cardinality:
            raise ValueError(
                f"Bit width {len(bits)} does not match cardinality {domain.cardinality} "
                f"of {domain.name}."
            )
        self.domain: Finite[A] = domain
        self.bits: frozenbitarray = bits

    @classmethod
    def empty(cls, domain: Finite[A]) -> "EnumSet[A]":
        """The set without members."""
        return cls(domain, frozenbitarray(zeros(domain.cardinality, endian=ENDIAN)))

    @classmethod
    def full(cls, domain: Finite[A]) -> "EnumSet[A]":
        """The set of all values of `domain`."""
        return ~cls.empty(domain)

    @classmethod
    def of(cls, domain: Finite[A], values: Iterable[A]) -> "EnumSet[A]":
        """The set of the given values."""
        bits = zeros(domain.cardinality, endian=ENDIAN)
        for value in values:
            bits[domain.to_index(value)] = 1
        return cls(domain, frozenbitarray(bits))

    @classmethod
    def from_index(cls, domain: Finite[A], index: int) -> "EnumSet[A]":
        """Inverse of `to_index`: bit `i` of `index` marks the value with index `i`."""
        if not 0 <= index < 2**domain.cardinality:
            raise ValueError(f"Index {index} out of range for sets of {domain.name}.")
        return cls(domain, frozenbitarray(int2ba(index, length=domain.cardinality, endian=ENDIAN)))

    def to_index(self) -> int:
        """The set as an integer, the value with index `i` contributing `2**i`."""
        return ba2int(self.bits)

    def _check_domain(self, other: "EnumSet[A]") -> None:
        if other.domain is not self.domain:
            raise TypeError(
                f"Cannot combine a set of {self.domain.name} with a set of {other.domain.name}."
            )

    def __contains__(self, value: A) -> bool:
        return bool(self.bits[self.domain.to_index(value)])

    def contains(self, value: A) -> bool:
        """Whether `value` is a member."""
        return value in self

    def inserted(self, value: A) -> "EnumSet[A]":
        """Copy of the set with `value` added."""
        bits = bitarray(self.bits, endian=ENDIAN)
        bits[self.domain.to_index(value)] = 1
        return EnumSet(self.domain, frozenbitarray(bits))

    def removed(self, value: A) -> "EnumSet[A]":
        """Copy of the set with `value` removed."""
        bits = bitarray(self.bits, endian=ENDIAN)
        bits[self.domain.to_index(value)] = 0
        return EnumSet(self.domain, frozenbitarray(bits))

    def union(self, other: "EnumSet[A]") -> "EnumSet[A]":
        self._check_domain(other)
        return EnumSet(self.domain, self.bits | other.bits)

    def intersection(self, other: "EnumSet[A]") -> "EnumSet[A]":
        self._check_domain(other)
        return EnumSet(self.domain, self.bits & other.bits)

    def difference(self, other: "EnumSet[A]") -> "EnumSet[A]":
        self._check_domain(other)
        return EnumSet(self.domain, self.bits & ~other.bits)

    def complement(self) -> "EnumSet[A]":
        """All values of the domain that are not members."""
        return EnumSet(self.domain, ~self.bits)

    __or__ = union
    __and__ = intersection
    __sub__ = difference
    __invert__ = complement

    def is_empty(self) -> bool:
        return not self.bits.any()

    def is_singleton(self) -> bool:
        return self.bits.count() == 1

    def only_member(self) -> A:
        """The single member of a singleton set.

        Raises:
            ValueError: If the set does not have exactly one member.
        """
        if not self.is_singleton():
            raise ValueError(f"Expected a singleton set, got {len(self)} members.")
        return self.domain.from_index(self.bits.find(1))

    def __iter__(self) -> Iterator[A]:
        """Members in ascending index order."""
        return (self.domain.from_index(i) for i in self.bits.search(1))

    def __len__(self) -> int:
        return self.bits.count()

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EnumSet):
            return NotImplemented
        return self.domain is other.domain and self.bits == other.bits

    def __hash__(self) -> int:
        return hash((self.domain.name, self.bits))

    def __repr__(self) -> str:
        members = ", ".join(str(value) for value in self)
        return f"EnumSet[{self.domain.name}]{{{members}}}"
