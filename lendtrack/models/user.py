from datetime import datetime
from lendtrack.extensions import db


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    name = db.Column(db.String(120), nullable=False, default="")
    password_hash = db.Column(db.String(255), nullable=False)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    books = db.relationship("Book", backref="owner", lazy="dynamic", cascade="all, delete-orphan")

    @property
    def initials(self) -> str:
        # "Ada Lovelace" -> "AL", isim yoksa "U"
        parts = (self.name or "").split()
        return "".join(p[0] for p in parts).upper() or "U"
