from werkzeug.security import generate_password_hash, check_password_hash
from flask_jwt_extended import create_access_token
from lendtrack.models.user import User
from lendtrack.repositories.user_repo import UserRepo


class AuthService:
    @staticmethod
    def register(username: str, email: str, password: str, name: str = ""):
        if UserRepo.get_by_username(username) or UserRepo.get_by_email(email):
            raise ValueError("Username or email already registered")

        user = User(
            username=username,
            email=email,
            name=name or username,
            password_hash=generate_password_hash(password)
        )
        UserRepo.create(user)
        return user

    @staticmethod
    def login(username: str, password: str):
        user = UserRepo.get_by_username(username)
        if not user or not check_password_hash(user.password_hash, password):
            raise ValueError("Invalid username or password")

        token = create_access_token(
            identity=str(user.id),
            additional_claims={"username": user.username, "name": user.name}
        )
        return token, user
