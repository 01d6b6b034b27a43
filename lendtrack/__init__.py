from flask import Flask, jsonify
from lendtrack.config import Config
from lendtrack.extensions import db, migrate, jwt, mail


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    # 1) Önce db init (db.engine / db.session için şart)
    db.init_app(app)

    # 2) Modeller import edilmeli ki create_all tabloları görsün
    from lendtrack.models import user, book  # noqa: F401
    if app.config.get("AUTO_CREATE_TABLES"):
        with app.app_context():
            db.create_all()

    # 3) Diğer extension'lar
    migrate.init_app(app, db)
    jwt.init_app(app)
    mail.init_app(app)

    # 4) API blueprintleri
    from lendtrack.controllers.auth_controller import auth_bp
    from lendtrack.controllers.book_controller import book_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(book_bp, url_prefix="/books")

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    # Scheduler (hatırlatma maili)
    from lendtrack.tasks.scheduler import start_scheduler
    start_scheduler(app)

    return app
