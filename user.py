from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    """Kütüphane rolleri"""
    LIBRARIAN = "LIBRARIAN"
    MEMBER = "MEMBER"


@dataclass(frozen=True)
class User:
    """Kütüphanede işlem yapan kişi (sadece rol etiketiyle ayrışır)."""
    name: str
    age: int
    role: Role

    def get_role(self) -> Role:
        return self.role

    @classmethod
    def librarian(cls, name: str, age: int) -> "User":
        return cls(name=name, age=age, role=Role.LIBRARIAN)

    @classmethod
    def member(cls, name: str, age: int) -> "User":
        return cls(name=name, age=age, role=Role.MEMBER)
