from flask import current_app
from flask_login import current_user, login_user, logout_user
from sqlalchemy.exc import IntegrityError

from db.models import User
from errors import DuplicateUserError, MissingCredentialsError


def get_user_by_username(session, username):
    return session.query(User).filter_by(username=username).first()


def signup(session, username, password):
    """Регистрирует пользователя и сразу выполняет вход."""
    if not username or not password:
        raise MissingCredentialsError()
    if get_user_by_username(session, username):
        raise DuplicateUserError()

    user = User(username=username)
    user.set_password(password)
    session.add(user)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise DuplicateUserError()

    login_user(user)
    current_app.logger.info('Зарегистрирован пользователь %s', username)
    return user


def login(session, username, password):
    """Возвращает пользователя после входа или None при неверных данных."""
    user = get_user_by_username(session, username) if username else None
    if user is None or not password or not user.check_password(password):
        current_app.logger.warning('Неудачная попытка входа: %s', username)
        return None

    login_user(user)
    current_app.logger.info('Пользователь %s вошёл', username)
    return user


def logout():
    if current_user.is_authenticated:
        current_app.logger.info('Пользователь %s вышел', current_user.username)
    logout_user()
