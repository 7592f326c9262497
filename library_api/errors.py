class ValidationError(ValueError):
    """Client input rejected before reaching storage (HTTP 400)."""


class BookNotFoundError(LookupError):
    """No book with the requested id (HTTP 404)."""

    def __init__(self, book_id=None):
        super().__init__("Book not found")
        self.book_id = book_id
