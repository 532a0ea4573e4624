"""
Address Value Object

Immutable postal address, mapped onto member and delivery rows as a
SQLAlchemy composite.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Address:
    """
    Immutable address value object.

    Field order matches the composite column order (city, street, zipcode).
    """

    city: Optional[str] = None
    street: Optional[str] = None
    zipcode: Optional[str] = None

    def __str__(self) -> str:
        return " ".join(part for part in (self.city, self.street, self.zipcode) if part)
