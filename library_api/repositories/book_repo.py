from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError

from library_api.models.book import Book

OFFSET_MAX = 2 ** 63 - 1
UPDATABLE_COLUMNS = ("title", "author", "published_year", "available")


def _matches(q: str):
    return or_(
        Book.title.icontains(q, autoescape=True),
        Book.author.icontains(q, autoescape=True),
    )


def _offset(page: int, limit: int) -> int:
    # far past the last row either way; keep the bound value inside BIGINT
    return min((page - 1) * limit, OFFSET_MAX)


class BookRepo:
    """SQL access for the books table.

    Missing rows come back as ``None`` (or ``False`` from ``delete``); every
    other failure propagates as ``SQLAlchemyError`` after the session has
    been rolled back.
    """

    def __init__(self, session):
        self.session = session

    def count_all(self) -> int:
        return self.session.scalar(select(func.count()).select_from(Book))

    def count_matching(self, q: str) -> int:
        return self.session.scalar(select(func.count()).select_from(Book).where(_matches(q)))

    def list_page(self, page: int, limit: int):
        total = self.count_all()
        stmt = (
            select(Book)
            .order_by(Book.created_at.desc(), Book.id.desc())
            .limit(limit)
            .offset(_offset(page, limit))
        )
        return self.session.scalars(stmt).all(), total

    def search(self, q: str, page: int, limit: int):
        total = self.count_matching(q)
        stmt = (
            select(Book)
            .where(_matches(q))
            .order_by(Book.created_at.desc(), Book.id.desc())
            .limit(limit)
            .offset(_offset(page, limit))
        )
        return self.session.scalars(stmt).all(), total

    def get(self, book_id: int):
        return self.session.get(Book, book_id)

    def create(self, title: str, author: str, published_year: int, available: bool = True):
        book = Book(title=title, author=author, published_year=published_year, available=available)
        try:
            self.session.add(book)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        # re-read so timestamps are the ones the database assigned
        return self.get(book.id)

    def update(self, book_id: int, fields):
        """Apply ``fields``, an ordered list of ``(column, value)`` pairs.

        Returns the stored book, ``None`` when it does not exist. With no
        pairs the existing row is returned untouched.
        """
        existing = self.get(book_id)
        if existing is None:
            return None
        if not fields:
            return existing

        values = {}
        for column, value in fields:
            if column not in UPDATABLE_COLUMNS:
                raise ValueError(f"column {column!r} is not updatable")
            values[column] = value
        values["updated_at"] = func.current_timestamp()

        stmt = (
            update(Book)
            .where(Book.id == book_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        try:
            self.session.execute(stmt)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        return self.get(book_id)

    def delete(self, book_id: int) -> bool:
        book = self.get(book_id)
        if book is None:
            return False
        try:
            self.session.delete(book)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        return True
