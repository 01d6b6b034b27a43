from datetime import date

from flask import current_app

from lendtrack.extensions import db
from lendtrack.models.book import Book
from lendtrack.repositories.book_repo import BookRepo
from lendtrack.utils.penalty import (
    LendingState,
    StatusLabel,
    calculate_penalty,
    format_amount,
    format_date,
    get_book_status,
    get_days_display,
    loan_progress,
    parse_date,
)

FILTERS = ("all", "borrowed", "returned", "overdue")


class BookService:
    @staticmethod
    def list_books(owner_id: int, filter_by: str = "all", as_of: date | None = None):
        if filter_by not in FILTERS:
            raise ValueError(f"Unknown filter: {filter_by}")

        if filter_by == "overdue":
            # overdue saklanmaz, her okumada tarihten hesaplanır
            books = BookRepo.list_by_owner(owner_id, status=LendingState.BORROWED.value)
            return [
                b for b in books
                if get_book_status(b.return_deadline, b.status, as_of).label is StatusLabel.OVERDUE
            ]

        status = None if filter_by == "all" else filter_by
        return BookRepo.list_by_owner(owner_id, status=status)

    @staticmethod
    def get_book(book_id: str, owner_id: int):
        book = BookRepo.get_for_owner(book_id, owner_id)
        if not book:
            raise LookupError("Book not found")
        return book

    @staticmethod
    def add_book(owner_id: int, data: dict, as_of: date | None = None):
        title = data.get("title") or ""
        borrower_name = data.get("borrower_name") or ""
        if not isinstance(title, str) or not isinstance(borrower_name, str):
            raise ValueError("title and borrower_name must be text")

        title, borrower_name = title.strip(), borrower_name.strip()
        if not title or not borrower_name:
            raise ValueError("title and borrower_name are required")

        if not data.get("return_deadline"):
            raise ValueError("return_deadline is required")

        borrowed_date = parse_date(data.get("borrowed_date") or as_of or date.today())
        return_deadline = parse_date(data["return_deadline"])
        if return_deadline < borrowed_date:
            raise ValueError("return_deadline cannot be before borrowed_date")

        book = Book(
            owner_id=owner_id,
            title=title,
            borrower_name=borrower_name,
            borrowed_date=borrowed_date,
            return_deadline=return_deadline,
            status=LendingState.BORROWED.value,
        )
        BookRepo.create(book)
        current_app.logger.info(f"[books] added id={book.id} owner={owner_id}")
        return book

    @staticmethod
    def mark_returned(book_id: str, owner_id: int):
        book = BookService.get_book(book_id, owner_id)

        # tek yönlü geçiş: borrowed -> returned
        if book.status == LendingState.RETURNED.value:
            raise ValueError("Book already returned")

        book.status = LendingState.RETURNED.value
        # iade tarihi her zaman bugün; as_of sadece görünümler için
        book.returned_date = date.today()
        try:
            BookRepo.update()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(f"[books] returned id={book.id} on {book.returned_date}")
        return book

    @staticmethod
    def delete_book(book_id: str, owner_id: int):
        book = BookService.get_book(book_id, owner_id)
        BookRepo.delete(book)
        current_app.logger.info(f"[books] deleted id={book_id}")

    @staticmethod
    def serialize(book: Book, as_of: date | None = None) -> dict:
        status = get_book_status(book.return_deadline, book.status, as_of)
        penalty = calculate_penalty(book.return_deadline, as_of, book.status)
        return {
            "id": book.id,
            "title": book.title,
            "borrower_name": book.borrower_name,
            "borrowed_date": book.borrowed_date.isoformat(),
            "return_deadline": book.return_deadline.isoformat(),
            "returned_date": book.returned_date.isoformat() if book.returned_date else None,
            "status": book.status,
            "status_label": status.label.value,
            "severity": status.severity.value,
            "days_display": get_days_display(book.return_deadline, book.status, as_of),
            "penalty": penalty,
            "penalty_display": format_amount(penalty),
            "progress": loan_progress(book.borrowed_date, book.return_deadline, book.status, as_of),
            "borrowed_display": format_date(book.borrowed_date),
            "deadline_display": format_date(book.return_deadline),
            "created_at": book.created_at.isoformat() if book.created_at else None,
        }

    @staticmethod
    def stats(owner_id: int, as_of: date | None = None) -> dict:
        books = BookRepo.list_by_owner(owner_id)
        borrowed = [b for b in books if b.status == LendingState.BORROWED.value]
        labels = [get_book_status(b.return_deadline, b.status, as_of).label for b in borrowed]

        total_debt = sum(calculate_penalty(b.return_deadline, as_of) for b in borrowed)
        return {
            "total": len(books),
            "borrowed": len(borrowed),
            "returned": len(books) - len(borrowed),
            "due_soon": labels.count(StatusLabel.DUE_SOON),
            "overdue": labels.count(StatusLabel.OVERDUE),
            "total_debt": total_debt,
            "total_debt_display": format_amount(total_debt),
        }
