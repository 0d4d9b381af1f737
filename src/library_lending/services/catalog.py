"""
Book catalog maintenance and search.

ISBNs are unique across the catalog (compared case-insensitively so a
trailing ``X`` check digit matches either way). New books start out
available; only the loan ledger flips the borrowed flag.
"""

import logging

from ..database.record_store import RecordStore
from ..errors import DuplicateError, InvalidArgumentError, NotFoundError
from ..models import Book
from .identifiers import next_identifier

logger = logging.getLogger(__name__)

BOOK_ID_PREFIX = "B"


class Catalog:
    """Adds and finds books in the record store."""

    def __init__(self, store: RecordStore):
        self.store = store

    def add_book(self, title: str, author: str, isbn: str) -> Book:
        """
        Add a new book to the catalog.

        Raises:
            DuplicateError: If a book with the same ISBN exists
            InvalidArgumentError: If a field is not a string
            pydantic.ValidationError: If a field is blank or malformed
        """
        if not all(isinstance(value, str) for value in (title, author, isbn)):
            raise InvalidArgumentError("Title, author and ISBN must be strings")

        with self.store.locked():
            books = self.store.load_books()
            if any(b.isbn.lower() == isbn.strip().lower() for b in books):
                raise DuplicateError(f"A book with ISBN {isbn} already exists")

            book = Book(
                id=next_identifier(self.store, BOOK_ID_PREFIX, (b.id for b in books)),
                title=title,
                author=author,
                isbn=isbn.strip(),
            )
            books.append(book)
            self.store.save_books(books)

        logger.info("Book %s added: %s by %s", book.id, book.title, book.author)
        return book

    def get_book(self, book_id: str) -> Book:
        """
        Raises:
            NotFoundError: If no book has this id
        """
        book = next((b for b in self.store.load_books() if b.id == book_id), None)
        if book is None:
            raise NotFoundError(f"Book with id {book_id} not found")
        return book

    def search_by_title(self, title_part: str) -> list[Book]:
        keyword = title_part.lower()
        return [b for b in self.store.load_books() if keyword in b.title.lower()]

    def search_by_author(self, author_part: str) -> list[Book]:
        keyword = author_part.lower()
        return [b for b in self.store.load_books() if keyword in b.author.lower()]

    def find_by_isbn(self, isbn: str) -> Book | None:
        if not isinstance(isbn, str):
            raise InvalidArgumentError("ISBN must be a string")
        wanted = isbn.strip().lower()
        return next((b for b in self.store.load_books() if b.isbn.lower() == wanted), None)

    def all_books(self) -> list[Book]:
        return self.store.load_books()

    def available_books(self) -> list[Book]:
        return [b for b in self.store.load_books() if b.is_available]
