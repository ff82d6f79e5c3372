"""Shared tables for the in-memory repositories.

Repositories built on the same store see each other's records, the way
SQLAlchemy repositories sharing a database do.
"""
from dataclasses import dataclass, field
from typing import Dict

from catalog.domain.entities.attraction import Attraction
from catalog.domain.entities.category import Category
from catalog.domain.entities.image import Image
from catalog.domain.entities.metro_station import MetroStation
from catalog.domain.entities.user import User


@dataclass
class InMemoryStore:
    attractions: Dict[int, Attraction] = field(default_factory=dict)
    categories: Dict[int, Category] = field(default_factory=dict)
    metro_stations: Dict[int, MetroStation] = field(default_factory=dict)
    images: Dict[int, Image] = field(default_factory=dict)
    users: Dict[int, User] = field(default_factory=dict)
    _sequences: Dict[str, int] = field(default_factory=dict)

    def next_id(self, table: str) -> int:
        value = self._sequences.get(table, 0) + 1
        self._sequences[table] = value
        return value


def contains(haystack, needle: str) -> bool:
    """Case-insensitive substring test matching SQL ILIKE '%needle%'."""
    return bool(haystack) and needle.casefold() in haystack.casefold()
