# library_api/controllers/book_controller.py

from flask import Blueprint, current_app, request
from sqlalchemy.exc import SQLAlchemyError

from library_api.errors import BookNotFoundError, ValidationError
from library_api.services.book_service import parse_book_id
from library_api.utils.responses import json_error, json_ok

book_bp = Blueprint("books", __name__)


def _service():
    return current_app.extensions["book_service"]


def _payload():
    # decode regardless of Content-Type; None when the body is not JSON
    return request.get_json(force=True, silent=True)


@book_bp.get("")
def list_books():
    q = request.args.get("q")
    try:
        books, pagination = _service().list_books(
            page=request.args.get("page"),
            limit=request.args.get("limit"),
            q=q,
        )
    except SQLAlchemyError:
        current_app.logger.exception(f"[books] list failed (q={q!r})")
        return json_error("Failed to retrieve books", 500)

    return json_ok(data=[b.to_dict() for b in books], pagination=pagination)


@book_bp.get("/<book_id>")
def get_book(book_id):
    try:
        book = _service().get_book(parse_book_id(book_id))
        return json_ok(data=book.to_dict())
    except ValidationError as e:
        return json_error(str(e), 400)
    except BookNotFoundError as e:
        current_app.logger.debug(f"[books] book_id={e.book_id} not found")
        return json_error(str(e), 404)
    except SQLAlchemyError:
        current_app.logger.exception(f"[books] get failed (book_id={book_id})")
        return json_error("Failed to retrieve book", 500)


@book_bp.post("")
def create_book():
    try:
        book = _service().create_book(_payload())
        return json_ok(data=book.to_dict(), message="Book created successfully", code=201)
    except ValidationError as e:
        return json_error(str(e), 400)
    except SQLAlchemyError:
        current_app.logger.exception("[books] create failed")
        return json_error("Failed to create book", 500)


@book_bp.put("/<book_id>")
def update_book(book_id):
    try:
        book = _service().update_book(parse_book_id(book_id), _payload())
        return json_ok(data=book.to_dict(), message="Book updated successfully")
    except ValidationError as e:
        return json_error(str(e), 400)
    except BookNotFoundError as e:
        current_app.logger.debug(f"[books] book_id={e.book_id} not found")
        return json_error(str(e), 404)
    except SQLAlchemyError:
        current_app.logger.exception(f"[books] update failed (book_id={book_id})")
        return json_error("Failed to update book", 500)


@book_bp.delete("/<book_id>")
def delete_book(book_id):
    try:
        _service().delete_book(parse_book_id(book_id))
        return json_ok(message="Book deleted successfully")
    except ValidationError as e:
        return json_error(str(e), 400)
    except BookNotFoundError as e:
        current_app.logger.debug(f"[books] book_id={e.book_id} not found")
        return json_error(str(e), 404)
    except SQLAlchemyError:
        current_app.logger.exception(f"[books] delete failed (book_id={book_id})")
        return json_error("Failed to delete book", 500)
