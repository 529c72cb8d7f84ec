import itertools
from functools import total_ordering
from typing import Any, Callable, Iterable, Iterator, List, Optional

from .errors import PreconditionViolation


@total_ordering
class Cardinal:
    """
    The size of an index set, comparable without enumerating the set.

    A cardinal is either a finite count or an aleph ℵ_k. Only ordering, equality and
    the arithmetic needed for covering arguments are supported: sums and products
    involving an infinite cardinal collapse to the larger operand.
    """

    __slots__ = ("_count", "_aleph")

    def __init__(self, count: Optional[int] = None, aleph: Optional[int] = None):
        if (count is None) == (aleph is None):
            raise ValueError("Exactly one of count and aleph must be given")
        if count is not None and count < 0:
            raise ValueError(f"Cardinality must be non-negative, got {count}")
        if aleph is not None and aleph < 0:
            raise ValueError(f"Aleph index must be non-negative, got {aleph}")
        self._count = count
        self._aleph = aleph

    @classmethod
    def finite(cls, count: int) -> 'Cardinal':
        return cls(count=count)

    @classmethod
    def aleph(cls, index: int) -> 'Cardinal':
        return cls(aleph=index)

    @property
    def is_finite(self) -> bool:
        return self._count is not None

    @property
    def is_infinite(self) -> bool:
        return self._aleph is not None

    @property
    def count(self) -> Optional[int]:
        return self._count

    def _key(self):
        return (0, self._count) if self.is_finite else (1, self._aleph)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cardinal):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: 'Cardinal') -> bool:
        if not isinstance(other, Cardinal):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __add__(self, other: 'Cardinal') -> 'Cardinal':
        if self.is_finite and other.is_finite:
            return Cardinal.finite(self._count + other._count)
        return max(self, other)

    def __mul__(self, other: 'Cardinal') -> 'Cardinal':
        if self == ZERO or other == ZERO:
            return ZERO
        if self.is_finite and other.is_finite:
            return Cardinal.finite(self._count * other._count)
        return max(self, other)

    def __str__(self) -> str:
        return str(self._count) if self.is_finite else f"ℵ{self._aleph}"

    def __repr__(self) -> str:
        return f"Cardinal({self})"


ZERO = Cardinal.finite(0)
ALEPH_0 = Cardinal.aleph(0)


class _Adjoined:
    """
    Label of the element adjoined to a family when it is extended.

    Repeated extensions need distinct labels, so each label carries the depth at
    which it was adjoined; ADJOINED is the first.
    """

    __slots__ = ("depth",)

    def __init__(self, depth: int = 0):
        self.depth = depth

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, _Adjoined):
            return NotImplemented
        return self.depth == other.depth

    def __hash__(self) -> int:
        return hash((_Adjoined, self.depth))

    def __repr__(self) -> str:
        return "ADJOINED" if self.depth == 0 else f"ADJOINED_{self.depth}"


ADJOINED = _Adjoined()


class IndexSet:
    """
    An abstract set of labels for basis or family members.

    Only membership and equality of labels are assumed. Infinite index sets are
    never enumerated in full: they answer membership, report a cardinal, and can
    always pick a label outside any finite set.
    """

    name: str = ""

    @property
    def is_finite(self) -> bool:
        return self.cardinality.is_finite

    @property
    def is_infinite(self) -> bool:
        return self.cardinality.is_infinite

    @property
    def cardinality(self) -> Cardinal:
        raise NotImplementedError

    @property
    def enumerable(self) -> bool:
        return self.is_finite

    def __contains__(self, label: Any) -> bool:
        raise NotImplementedError

    def __iter__(self) -> Iterator[Any]:
        raise NotImplementedError

    def sample(self, n: int) -> List[Any]:
        """Return the first n labels of an enumerable index set."""
        if not self.enumerable:
            raise PreconditionViolation(f"Index set {self} cannot be enumerated")
        return list(itertools.islice(iter(self), n))

    def pick_outside(self, labels: Iterable[Any]) -> Optional[Any]:
        """
        Choose a label that is not in the given finite collection.

        Infinite index sets always succeed; finite ones return None when
        the collection already exhausts them.
        """
        raise NotImplementedError

    def __str__(self) -> str:
        return self.name or f"{type(self).__name__}(|{self.cardinality}|)"


class FiniteIndexSet(IndexSet):
    """A finite index set, kept in the order the labels were given."""

    def __init__(self, labels: Iterable[Any], name: str = ""):
        self.name = name
        self._labels = tuple(dict.fromkeys(labels))

    @property
    def cardinality(self) -> Cardinal:
        return Cardinal.finite(len(self._labels))

    def __len__(self) -> int:
        return len(self._labels)

    def __contains__(self, label: Any) -> bool:
        return label in self._labels

    def __iter__(self) -> Iterator[Any]:
        return iter(self._labels)

    def pick_outside(self, labels: Iterable[Any]) -> Optional[Any]:
        taken = set(labels)
        return next((label for label in self._labels if label not in taken), None)


class NaturalNumbers(IndexSet):
    """The countably infinite index set 0, 1, 2, ..."""

    def __init__(self, name: str = "ℕ"):
        self.name = name

    @property
    def cardinality(self) -> Cardinal:
        return ALEPH_0

    @property
    def enumerable(self) -> bool:
        return True

    def __contains__(self, label: Any) -> bool:
        return isinstance(label, int) and not isinstance(label, bool) and label >= 0

    def __iter__(self) -> Iterator[int]:
        return itertools.count()

    def pick_outside(self, labels: Iterable[Any]) -> int:
        taken = set(labels)
        # A finite set of naturals misses one of 0..len(taken)
        return next(n for n in itertools.count() if n not in taken)


class AbstractIndexSet(IndexSet):
    """
    An infinite index set described by oracles instead of elements.

    Args:
        name: Display name
        cardinality: Its (infinite) cardinal
        contains: Membership test
        pick_outside: Returns a member outside a given finite set
        enumerate: Optional zero-argument callable returning an iterator over
            members, used only to draw finite samples
    """

    def __init__(self, name: str, cardinality: Cardinal, contains: Callable[[Any], bool],
                 pick_outside: Callable[[frozenset], Any], enumerate: Optional[Callable[[], Iterator[Any]]] = None):
        if not cardinality.is_infinite:
            raise PreconditionViolation(
                "Abstract index sets must be infinite; use FiniteIndexSet for finite ones",
                {"cardinality": cardinality},
            )
        self.name = name
        self._cardinality = cardinality
        self._contains = contains
        self._pick_outside = pick_outside
        self._enumerate = enumerate

    @property
    def cardinality(self) -> Cardinal:
        return self._cardinality

    @property
    def enumerable(self) -> bool:
        return self._enumerate is not None

    def __contains__(self, label: Any) -> bool:
        return bool(self._contains(label))

    def __iter__(self) -> Iterator[Any]:
        if self._enumerate is None:
            raise PreconditionViolation(f"Index set {self} cannot be enumerated")
        return iter(self._enumerate())

    def pick_outside(self, labels: Iterable[Any]) -> Any:
        taken = frozenset(labels)
        label = self._pick_outside(taken)
        if label in taken or label not in self:
            raise PreconditionViolation(
                f"pick_outside oracle of {self} returned an invalid label",
                {"label": label},
            )
        return label


class ExtendedIndexSet(IndexSet):
    """
    A family index set with one extra label.

    The extra label is ADJOINED unless the base already has it, as it does after an
    earlier extension; then the first unused deeper label is taken.
    """

    def __init__(self, base: IndexSet):
        self.base = base
        labels = itertools.chain([ADJOINED], (_Adjoined(depth) for depth in itertools.count(1)))
        self.label = next(label for label in labels if label not in base)
        self.name = f"{base} + 1" if base.name else ""

    @property
    def cardinality(self) -> Cardinal:
        return self.base.cardinality + Cardinal.finite(1)

    @property
    def enumerable(self) -> bool:
        return self.base.enumerable

    def __contains__(self, label: Any) -> bool:
        return label == self.label or label in self.base

    def __iter__(self) -> Iterator[Any]:
        # The new label comes first so that it is reached when the base is infinite
        yield self.label
        yield from self.base

    def pick_outside(self, labels: Iterable[Any]) -> Optional[Any]:
        taken = set(labels)
        if self.label not in taken:
            return self.label
        return self.base.pick_outside(taken - {self.label})
