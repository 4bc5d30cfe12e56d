from __future__ import annotations

import uuid
from datetime import datetime


class Book:
    """Kütüphanedeki tek bir kitap öğesini temsil eder.

    Katalog ve ödünç defteri kitapları nesne kimliğiyle eşleştirir; ``==`` ise
    tüm alanları (``book_id`` dahil) karşılaştırır, böylece bir anlık görüntü
    kopyası orijinaline eşittir ama onunla aynı nesne değildir.
    """

    def __init__(self, title: str, author: str, published_date: datetime | None = None,
                 book_id: str | None = None) -> None:
        self.title = title.strip()
        self.author = author.strip()
        self.published_date = published_date or datetime.now()
        self.book_id = book_id or uuid.uuid4().hex

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self.title} by {self.author} ({self.published_date:%Y-%m-%d})"

    def __repr__(self) -> str:
        return f"Book(title={self.title!r}, author={self.author!r}, book_id={self.book_id!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Book):
            return NotImplemented
        return (
            self.book_id == other.book_id
            and self.title == other.title
            and self.author == other.author
            and self.published_date == other.published_date
        )

    # Değiştirilebilir kayıt; sözlük anahtarı olarak kullanılmaz
    __hash__ = None  # type: ignore[assignment]

    def copy(self) -> "Book":
        """Alan alan bağımsız bir kopya döndür."""
        return Book(
            title=self.title,
            author=self.author,
            published_date=self.published_date,
            book_id=self.book_id,
        )

    def to_dict(self) -> dict:
        return {
            "book_id": self.book_id,
            "title": self.title,
            "author": self.author,
            "published_date": self.published_date.isoformat(),
        }

    @staticmethod
    def from_dict(data: dict) -> "Book":
        published = data.get("published_date")
        if isinstance(published, str):
            published = datetime.fromisoformat(published)
        return Book(
            title=data["title"],
            author=data["author"],
            published_date=published,
            book_id=data.get("book_id"),
        )
