# lendtrack/controllers/book_controller.py

from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required, get_jwt_identity

from lendtrack.repositories.book_repo import BookRepo
from lendtrack.repositories.user_repo import UserRepo
from lendtrack.services.book_service import BookService
from lendtrack.services.mail_service import MailService
from lendtrack.utils.penalty import parse_date

book_bp = Blueprint("books", __name__)


def _owner_id() -> int:
    return int(get_jwt_identity())


def _as_of():
    # test / geçmiş görünüm için ?as_of=YYYY-MM-DD, yoksa bugün
    raw = request.args.get("as_of")
    return parse_date(raw) if raw else None


def _json_error(message, code=400):
    return jsonify({"success": False, "message": message}), code


@book_bp.get("/")
@jwt_required()
def list_books():
    try:
        as_of = _as_of()
        books = BookService.list_books(_owner_id(), request.args.get("filter", "all"), as_of)
    except ValueError as e:
        return _json_error(str(e))

    return jsonify({"success": True, "data": [BookService.serialize(b, as_of) for b in books]})


@book_bp.get("/stats")
@jwt_required()
def book_stats():
    try:
        as_of = _as_of()
    except ValueError as e:
        return _json_error(str(e))
    return jsonify({"success": True, "data": BookService.stats(_owner_id(), as_of)})


@book_bp.get("/<book_id>")
@jwt_required()
def get_book(book_id: str):
    try:
        as_of = _as_of()
        b = BookService.get_book(book_id, _owner_id())
        return jsonify({"success": True, "data": BookService.serialize(b, as_of)})
    except LookupError as e:
        return _json_error(str(e), 404)
    except ValueError as e:
        return _json_error(str(e))


@book_bp.post("/")
@jwt_required()
def create_book():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return _json_error("JSON object expected")
    try:
        b = BookService.add_book(_owner_id(), data)
        return jsonify({"success": True, "id": b.id, "data": BookService.serialize(b)}), 201
    except ValueError as e:
        return _json_error(str(e))


@book_bp.post("/<book_id>/return")
@jwt_required()
def mark_returned(book_id: str):
    try:
        b = BookService.mark_returned(book_id, _owner_id())
        return jsonify({"success": True, "returned_date": b.returned_date.isoformat()})
    except LookupError as e:
        return _json_error(str(e), 404)
    except ValueError as e:
        return _json_error(str(e))


@book_bp.delete("/<book_id>")
@jwt_required()
def delete_book(book_id: str):
    try:
        BookService.delete_book(book_id, _owner_id())
        return jsonify({"success": True})
    except LookupError as e:
        return _json_error(str(e), 404)


@book_bp.post("/reminders/run")
@jwt_required()
def run_reminder():
    user = UserRepo.get_by_id(_owner_id())
    if not user:
        return _json_error("User not found", 404)

    try:
        as_of = _as_of()
    except ValueError as e:
        return _json_error(str(e))

    books = BookRepo.list_by_owner(user.id, status="borrowed")
    result = MailService.send_due_digest(user, books, as_of)
    return jsonify({"success": True, "data": result})
