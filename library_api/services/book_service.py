import math
import re

from library_api.errors import BookNotFoundError, ValidationError
from library_api.models.book import (
    AUTHOR_MAX_LENGTH,
    MAX_PUBLISHED_YEAR,
    MIN_PUBLISHED_YEAR,
    TITLE_MAX_LENGTH,
)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1
_INTEGER = re.compile(r"[+-]?[0-9]+", re.ASCII)

INVALID_PAYLOAD = "Invalid JSON payload"
YEAR_OUT_OF_RANGE = f"Published year must be between {MIN_PUBLISHED_YEAR} and {MAX_PUBLISHED_YEAR}"


def _parse_int(raw):
    """Decimal ASCII integer that fits in 64 bits, else ``None``."""
    if not isinstance(raw, str) or not _INTEGER.fullmatch(raw):
        return None
    value = int(raw)
    if value < INT64_MIN or value > INT64_MAX:
        return None
    return value


def _parse_positive(raw, default: int, maximum: int = None) -> int:
    value = _parse_int(raw)
    if value is None:
        return default
    if value <= 0 or (maximum is not None and value > maximum):
        return default
    return value


def parse_book_id(raw) -> int:
    value = _parse_int(raw)
    if value is None:
        raise ValidationError("Invalid book ID")
    return value


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


def _field(data: dict, key: str, expected):
    """Return ``data[key]``; ``None`` when absent or null, 400 when mistyped."""
    value = data.get(key)
    if value is None:
        return None
    # bool is an int subclass; years must be real integers
    if expected is int and isinstance(value, bool):
        raise ValidationError(INVALID_PAYLOAD)
    if not isinstance(value, expected):
        raise ValidationError(INVALID_PAYLOAD)
    return value


def _check_year(year):
    if year < MIN_PUBLISHED_YEAR or year > MAX_PUBLISHED_YEAR:
        raise ValidationError(YEAR_OUT_OF_RANGE)


def _check_length(label: str, value: str, maximum: int):
    if len(value) > maximum:
        raise ValidationError(f"{label} must be at most {maximum} characters")


class BookService:
    def __init__(self, repo):
        self.repo = repo

    def list_books(self, page=None, limit=None, q=None):
        """Return ``(books, pagination)`` for the listing endpoint.

        ``page`` and ``limit`` are the raw query-string values: anything that
        is not a positive integer (or a limit above 100) keeps the default.
        A blank ``q`` lists everything.
        """
        page = _parse_positive(page, DEFAULT_PAGE)
        limit = _parse_positive(limit, DEFAULT_LIMIT, MAX_LIMIT)
        q = (q or "").strip()

        if q:
            books, total = self.repo.search(q, page, limit)
        else:
            books, total = self.repo.list_page(page, limit)

        pagination = {
            "page": page,
            "limit": limit,
            "total": total,
            "total_pages": total_pages(total, limit),
        }
        return books, pagination

    def get_book(self, book_id: int):
        book = self.repo.get(book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        return book

    def create_book(self, data):
        if not isinstance(data, dict):
            raise ValidationError(INVALID_PAYLOAD)

        title = _field(data, "title", str)
        author = _field(data, "author", str)
        year = _field(data, "published_year", int)
        available = _field(data, "available", bool)

        title = (title or "").strip()
        if not title:
            raise ValidationError("Title is required")
        _check_length("Title", title, TITLE_MAX_LENGTH)

        author = (author or "").strip()
        if not author:
            raise ValidationError("Author is required")
        _check_length("Author", author, AUTHOR_MAX_LENGTH)

        _check_year(year or 0)

        return self.repo.create(
            title=title,
            author=author,
            published_year=year,
            available=True if available is None else available,
        )

    def update_book(self, book_id: int, data):
        if not isinstance(data, dict):
            raise ValidationError(INVALID_PAYLOAD)

        title = _field(data, "title", str)
        author = _field(data, "author", str)
        year = _field(data, "published_year", int)
        available = _field(data, "available", bool)

        fields = []
        if title is not None:
            title = title.strip()
            if not title:
                raise ValidationError("Title cannot be empty")
            _check_length("Title", title, TITLE_MAX_LENGTH)
            fields.append(("title", title))
        if author is not None:
            author = author.strip()
            if not author:
                raise ValidationError("Author cannot be empty")
            _check_length("Author", author, AUTHOR_MAX_LENGTH)
            fields.append(("author", author))
        if year is not None:
            _check_year(year)
            fields.append(("published_year", year))
        if available is not None:
            fields.append(("available", available))

        book = self.repo.update(book_id, fields)
        if book is None:
            raise BookNotFoundError(book_id)
        return book

    def delete_book(self, book_id: int):
        if not self.repo.delete(book_id):
            raise BookNotFoundError(book_id)
