from lendtrack.models.book import Book
from lendtrack.extensions import db


class BookRepo:
    @staticmethod
    def list_by_owner(owner_id: int, status: str | None = None):
        q = Book.query.filter_by(owner_id=owner_id)
        if status:
            q = q.filter_by(status=status)
        # created_at eşitse id ile deterministik (kronolojik değil) sıralama
        return q.order_by(Book.created_at.desc(), Book.id.desc()).all()

    @staticmethod
    def list_borrowed():
        return Book.query.filter_by(status="borrowed").order_by(Book.owner_id, Book.return_deadline).all()

    @staticmethod
    def get_for_owner(book_id: str, owner_id: int):
        return Book.query.filter_by(id=book_id, owner_id=owner_id).first()

    @staticmethod
    def create(book: Book):
        db.session.add(book)
        db.session.commit()
        return book

    @staticmethod
    def update():
        db.session.commit()

    @staticmethod
    def delete(book: Book):
        db.session.delete(book)
        db.session.commit()
