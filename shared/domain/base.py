"""
Base Domain Classes

This module provides the foundational building blocks shared by the
hotel domain apps:
- ValueObject: Immutable objects compared by value
- HotelError: Root of every business rule violation raised by services
"""

from abc import ABC
from dataclasses import dataclass


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects

    Value objects are immutable and have no identity.
    Two value objects are equal if all their attributes are equal.
    """
    pass


class HotelError(Exception):
    """
    Base class for domain errors

    Services raise subclasses of this error when a business rule is
    violated; the API layer turns them into 4xx responses.
    """
