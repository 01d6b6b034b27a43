# lendtrack/services/mail_service.py
from __future__ import annotations

from flask import current_app
from flask_mail import Message

from lendtrack.extensions import mail
from lendtrack.utils.penalty import (
    StatusLabel,
    calculate_penalty,
    format_amount,
    format_date,
    get_book_status,
    get_days_display,
)


class MailService:
    @staticmethod
    def send_email(to_email: str, subject: str, body: str) -> tuple[bool, str | None]:
        """
        return: (success, error_text)
        """
        try:
            msg = Message(subject=subject, recipients=[to_email], body=body)
            mail.send(msg)
            return True, None
        except Exception as e:
            current_app.logger.warning(f"[MailService] Mail could not be sent: {e}")
            return False, str(e)

    @staticmethod
    def split_due(books, as_of=None):
        """Ödünçteki kitapları (overdue, due_soon) olarak ayırır."""
        overdue, due_soon = [], []
        for b in books:
            label = get_book_status(b.return_deadline, b.status, as_of).label
            if label is StatusLabel.OVERDUE:
                overdue.append(b)
            elif label is StatusLabel.DUE_SOON:
                due_soon.append(b)
        return overdue, due_soon

    @staticmethod
    def _line(book, as_of) -> str:
        line = (
            f"- '{book.title}' ({book.borrower_name}), due {format_date(book.return_deadline)}: "
            f"{get_days_display(book.return_deadline, book.status, as_of)}"
        )
        penalty = calculate_penalty(book.return_deadline, as_of, book.status)
        if penalty > 0:
            line += f", penalty {format_amount(penalty)}"
        return line

    @staticmethod
    def build_digest(user, overdue, due_soon, as_of=None) -> tuple[str, str]:
        subject = f"Lending reminder: {len(overdue)} overdue, {len(due_soon)} due soon"

        parts = [f"Hi {user.name or user.username},", ""]
        if overdue:
            parts.append("Overdue:")
            parts.extend(MailService._line(b, as_of) for b in overdue)
            parts.append("")
        if due_soon:
            parts.append("Due soon:")
            parts.extend(MailService._line(b, as_of) for b in due_soon)
            parts.append("")
        parts.append("Mark books as returned once you get them back.")
        return subject, "\n".join(parts)

    @staticmethod
    def send_due_digest(user, books, as_of=None) -> dict:
        """
        Tek kullanıcı için özet mail.
        Gönderilecek bir şey yoksa mail atılmaz.
        """
        overdue, due_soon = MailService.split_due(books, as_of)
        result = {"sent": False, "overdue": len(overdue), "due_soon": len(due_soon), "error": None}

        if not overdue and not due_soon:
            return result
        if not user.email:
            result["error"] = "missing_email"
            return result

        subject, body = MailService.build_digest(user, overdue, due_soon, as_of)
        ok, err = MailService.send_email(user.email, subject, body)
        result["sent"] = ok
        result["error"] = err
        return result
