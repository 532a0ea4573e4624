"""
Specification Pattern Implementation

Encapsulates query criteria in small objects that can be combined with
&, | and ~, evaluated in memory or rendered as a SQLAlchemy filter.
"""

from abc import ABC, abstractmethod
from typing import Generic, Iterable, Optional, TypeVar
from sqlalchemy import and_, or_, not_, true
from sqlalchemy.orm import Query


T = TypeVar('T')


class Specification(ABC, Generic[T]):
    """
    Abstract base class for specifications.

    A specification encapsulates a single business rule or query criterion.
    """

    @abstractmethod
    def is_satisfied_by(self, candidate: T) -> bool:
        """Check if a candidate object satisfies this specification."""

    @abstractmethod
    def to_sql_filter(self):
        """Convert specification to SQLAlchemy filter expression."""

    def apply(self, query: Query) -> Query:
        """Narrow query to rows satisfying this specification."""
        return query.filter(self.to_sql_filter())

    def __and__(self, other: "Specification[T]") -> "Specification[T]":
        return AndSpecification(self, other)

    def __or__(self, other: "Specification[T]") -> "Specification[T]":
        return OrSpecification(self, other)

    def __invert__(self) -> "Specification[T]":
        return NotSpecification(self)


class AllSpecification(Specification[T]):
    """Matches everything; the identity element for AND."""

    def is_satisfied_by(self, candidate: T) -> bool:
        return True

    def to_sql_filter(self):
        return true()


class AndSpecification(Specification[T]):

    def __init__(self, left: Specification[T], right: Specification[T]):
        self.left = left
        self.right = right

    def is_satisfied_by(self, candidate: T) -> bool:
        return self.left.is_satisfied_by(candidate) and self.right.is_satisfied_by(candidate)

    def to_sql_filter(self):
        return and_(self.left.to_sql_filter(), self.right.to_sql_filter())


class OrSpecification(Specification[T]):

    def __init__(self, left: Specification[T], right: Specification[T]):
        self.left = left
        self.right = right

    def is_satisfied_by(self, candidate: T) -> bool:
        return self.left.is_satisfied_by(candidate) or self.right.is_satisfied_by(candidate)

    def to_sql_filter(self):
        return or_(self.left.to_sql_filter(), self.right.to_sql_filter())


class NotSpecification(Specification[T]):

    def __init__(self, spec: Specification[T]):
        self.spec = spec

    def is_satisfied_by(self, candidate: T) -> bool:
        return not self.spec.is_satisfied_by(candidate)

    def to_sql_filter(self):
        return not_(self.spec.to_sql_filter())


def all_of(specs: Iterable[Optional[Specification[T]]]) -> Specification[T]:
    """
    AND together the given specifications, skipping None entries.

    Returns AllSpecification when nothing is left.
    """
    combined: Specification[T] = AllSpecification()
    for spec in specs:
        if spec is None:
            continue
        combined = spec if isinstance(combined, AllSpecification) else combined & spec
    return combined
