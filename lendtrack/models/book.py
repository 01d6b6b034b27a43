import uuid
from datetime import datetime
from lendtrack.extensions import db


def _new_id() -> str:
    return uuid.uuid4().hex


class Book(db.Model):
    __tablename__ = "books"

    id = db.Column(db.String(32), primary_key=True, default=_new_id)
    owner_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)

    title = db.Column(db.String(200), nullable=False)
    borrower_name = db.Column(db.String(200), nullable=False)

    borrowed_date = db.Column(db.Date, nullable=False)
    return_deadline = db.Column(db.Date, nullable=False)
    returned_date = db.Column(db.Date, nullable=True)

    status = db.Column(db.String(20), nullable=False, default="borrowed")  # borrowed/returned

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)
