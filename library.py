import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Dict, Any

from book import Book
from user import Role, User


logger = logging.getLogger(__name__)


class OutcomeKind(Enum):
    SUCCESS = "SUCCESS"
    NOT_AUTHORIZED = "NOT_AUTHORIZED"
    ALREADY_BORROWING = "ALREADY_BORROWING"
    NOT_BORROWED = "NOT_BORROWED"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class Outcome:
    """Result of a single Library operation."""
    kind: OutcomeKind
    operation: str
    actor_name: str
    book_title: str
    message: str

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "kind": self.kind.value,
            "operation": self.operation,
            "actor": self.actor_name,
            "book": self.book_title,
            "message": self.message,
        }


class Library:
    """Manages the catalog and the lending ledger, and enforces who may do what.

    None of the operations raise for a denied request; every call returns an
    Outcome and logs it.
    """

    def __init__(self) -> None:
        self._books: List[Book] = []
        self._rented_books: Dict[str, Book] = {}

    # ------------------------- Catalog ------------------------- #
    def get_books(self) -> List[Book]:
        """Return an independent copy of the catalog in insertion order."""
        return [book.copy() for book in self._books]

    def add_book(self, user: User, book: Book) -> Outcome:
        if user.get_role() is not Role.LIBRARIAN:
            return self._report("add_book", OutcomeKind.NOT_AUTHORIZED, user, book,
                                "Only librarians can add books.")

        self._books.append(book)
        return self._report("add_book", OutcomeKind.SUCCESS, user, book,
                            f"{user.name} added [{book.title}] to the catalog.")

    def remove_book(self, user: User, book: Book) -> Outcome:
        if user.get_role() is not Role.LIBRARIAN:
            return self._report("remove_book", OutcomeKind.NOT_AUTHORIZED, user, book,
                                "Only librarians can remove books.")

        index = self._index_of(book)
        if index is None:
            return self._report("remove_book", OutcomeKind.NOT_FOUND, user, book,
                                f"[{book.title}] is not in the catalog; nothing removed.")

        del self._books[index]
        return self._report("remove_book", OutcomeKind.SUCCESS, user, book,
                            f"{user.name} removed [{book.title}] from the catalog.")

    # ------------------------- Lending ------------------------- #
    def rent_book(self, user: User, book: Book) -> Outcome:
        if user.get_role() is not Role.MEMBER:
            return self._report("rent_book", OutcomeKind.NOT_AUTHORIZED, user, book,
                                "Only members can rent books.")

        # Catalog membership is not checked here
        if user.name in self._rented_books:
            return self._report("rent_book", OutcomeKind.ALREADY_BORROWING, user, book,
                                f"{user.name} is already borrowing another book and cannot rent.")

        self._rented_books[user.name] = book
        return self._report("rent_book", OutcomeKind.SUCCESS, user, book,
                            f"{user.name} rented [{book.title}].")

    def return_book(self, user: User, book: Book) -> Outcome:
        if user.get_role() is not Role.MEMBER:
            return self._report("return_book", OutcomeKind.NOT_AUTHORIZED, user, book,
                                "Only members can return books.")

        if self._rented_books.get(user.name) is book:
            del self._rented_books[user.name]
            return self._report("return_book", OutcomeKind.SUCCESS, user, book,
                                f"{user.name} returned [{book.title}].")

        return self._report("return_book", OutcomeKind.NOT_BORROWED, user, book,
                            f"{user.name} never borrowed [{book.title}].")

    def get_loans(self) -> Dict[str, Book]:
        """Copy of the lending ledger: member name -> copy of the borrowed book."""
        return {name: book.copy() for name, book in self._rented_books.items()}

    def current_loan(self, name: str) -> Optional[Book]:
        book = self._rented_books.get(name)
        return book.copy() if book is not None else None

    def get_statistics(self) -> Dict[str, Any]:
        """Get library statistics."""
        return {
            "total_books": len(self._books),
            "unique_authors": len({book.author for book in self._books}),
            "active_loans": len(self._rented_books),
        }

    # ------------------------- Utilities ------------------------- #
    def _index_of(self, book: Book) -> Optional[int]:
        # Identity match: equal-valued but distinct books are different entities
        for index, candidate in enumerate(self._books):
            if candidate is book:
                return index
        return None

    @staticmethod
    def _report(operation: str, kind: OutcomeKind, user: User, book: Book, message: str) -> Outcome:
        outcome = Outcome(
            kind=kind,
            operation=operation,
            actor_name=user.name,
            book_title=book.title,
            message=message,
        )
        if outcome.ok or kind is OutcomeKind.NOT_FOUND:
            logger.info(message)
        else:
            logger.warning(f"{operation} denied ({kind.value}): {message}")
        return outcome
