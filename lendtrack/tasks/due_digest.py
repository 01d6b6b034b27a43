# lendtrack/tasks/due_digest.py
from itertools import groupby

from flask import current_app

from lendtrack.repositories.book_repo import BookRepo
from lendtrack.repositories.user_repo import UserRepo
from lendtrack.services.mail_service import MailService


def run_due_digest_job(app, as_of=None) -> dict:
    """
    Ödünçteki tüm kitapları sahibine göre gruplar,
    overdue / due soon olanı varsa sahibine tek bir özet mail atar.
    """
    counts = {"users": 0, "sent": 0, "failed": 0, "overdue": 0, "due_soon": 0}

    with app.app_context():
        try:
            books = BookRepo.list_borrowed()

            for owner_id, owned in groupby(books, key=lambda b: b.owner_id):
                user = UserRepo.get_by_id(owner_id)
                if not user:
                    continue

                result = MailService.send_due_digest(user, list(owned), as_of)
                counts["overdue"] += result["overdue"]
                counts["due_soon"] += result["due_soon"]

                if not result["overdue"] and not result["due_soon"]:
                    continue
                counts["users"] += 1
                if result["sent"]:
                    counts["sent"] += 1
                else:
                    counts["failed"] += 1

            current_app.logger.info(
                f"[due_digest] users={counts['users']} sent={counts['sent']} failed={counts['failed']} "
                f"overdue={counts['overdue']} due_soon={counts['due_soon']}"
            )
        except Exception as e:
            current_app.logger.exception(f"[due_digest] Error: {e}")

    return counts
