from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from .field import Field


class SparseCoefficients:
    """
    A finitely supported map from basis labels to scalars.

    Zero entries are dropped on construction, so the support is exactly the set of
    stored labels and is finite even when the label set is not. Values are never
    mutated; every operation returns a new object.
    """

    __slots__ = ("field", "_entries")

    def __init__(self, field: Field, entries: Optional[Mapping[Any, Any]] = None):
        self.field = field
        self._entries: Dict[Any, Any] = {}
        for label, value in (entries or {}).items():
            value = field.element(value)
            if not field.is_zero(value):
                self._entries[label] = value

    @classmethod
    def zero(cls, field: Field) -> 'SparseCoefficients':
        return cls(field)

    @classmethod
    def single(cls, field: Field, label: Any, value: Any = None) -> 'SparseCoefficients':
        """The indicator coefficients at label (scaled by value when given)."""
        return cls(field, {label: field.one if value is None else value})

    @property
    def support(self) -> frozenset:
        return frozenset(self._entries)

    def __getitem__(self, label: Any) -> Any:
        return self._entries.get(label, self.field.zero)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def items(self) -> Iterable[Tuple[Any, Any]]:
        return self._entries.items()

    def is_zero(self) -> bool:
        return not self._entries

    def _combine(self, other: 'SparseCoefficients', sign: int) -> 'SparseCoefficients':
        if other.field is not self.field:
            raise ValueError("Coefficients must be over the same field")
        entries = dict(self._entries)
        for label, value in other.items():
            entry = entries.get(label, self.field.zero)
            entries[label] = entry + value if sign > 0 else entry - value
        return SparseCoefficients(self.field, entries)

    def __add__(self, other: 'SparseCoefficients') -> 'SparseCoefficients':
        return self._combine(other, 1)

    def __sub__(self, other: 'SparseCoefficients') -> 'SparseCoefficients':
        return self._combine(other, -1)

    def __neg__(self) -> 'SparseCoefficients':
        return SparseCoefficients(self.field, {label: -value for label, value in self.items()})

    def scale(self, scalar: Any) -> 'SparseCoefficients':
        scalar = self.field.element(scalar)
        return SparseCoefficients(self.field, {label: scalar * value for label, value in self.items()})

    def restrict(self, labels: Iterable[Any]) -> 'SparseCoefficients':
        keep = set(labels)
        return SparseCoefficients(self.field, {label: v for label, v in self.items() if label in keep})

    def to_dense(self, order: Sequence[Any]) -> List[Any]:
        """Coefficients at the given labels, in that order."""
        return [self[label] for label in order]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SparseCoefficients):
            return NotImplemented
        if self.support != other.support:
            return False
        return all(self.field.is_zero(value - other[label]) for label, value in self.items())

    __hash__ = None

    def __repr__(self) -> str:
        terms = ", ".join(f"{label!r}: {value}" for label, value in self.items())
        return f"SparseCoefficients({{{terms}}})"
