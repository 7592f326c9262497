from datetime import timezone

from sqlalchemy import text, true

from library_api.extensions import db

TITLE_MAX_LENGTH = 255
AUTHOR_MAX_LENGTH = 255
MIN_PUBLISHED_YEAR = 1000
MAX_PUBLISHED_YEAR = 2100


def _rfc3339(value):
    if value is None:
        return None
    # stored naive, sessions run in UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


class Book(db.Model):
    __tablename__ = "books"
    __table_args__ = (
        db.CheckConstraint(
            f"published_year >= {MIN_PUBLISHED_YEAR} AND published_year <= {MAX_PUBLISHED_YEAR}",
            name="ck_books_published_year",
        ),
    )

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    title = db.Column(db.String(TITLE_MAX_LENGTH), nullable=False, index=True)
    author = db.Column(db.String(AUTHOR_MAX_LENGTH), nullable=False, index=True)
    published_year = db.Column(db.Integer, nullable=False, index=True)
    available = db.Column(db.Boolean, nullable=False, default=True, server_default=true(), index=True)

    created_at = db.Column(db.DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP"), index=True)
    updated_at = db.Column(db.DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP"))

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "published_year": self.published_year,
            "available": bool(self.available),
            "created_at": _rfc3339(self.created_at),
            "updated_at": _rfc3339(self.updated_at),
        }

    def __repr__(self):
        return f"<Book {self.id} {self.title!r}>"
