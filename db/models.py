import hashlib
import random
import string
from datetime import datetime

from flask import current_app, has_app_context
from flask_login import UserMixin
from sqlalchemy import event, select
from werkzeug.security import check_password_hash, generate_password_hash

from . import db


DEFAULT_CODE_LENGTH = 5
TITLE_MAX_LENGTH = 255


class User(db.Model, UserMixin):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), nullable=False, unique=True)
    password = db.Column(db.String(1024), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def set_password(self, raw_password):
        """Сохраняет хэш пароля вместо самого пароля."""
        self.password = generate_password_hash(raw_password)

    def check_password(self, raw_password):
        return check_password_hash(self.password, raw_password)

    def __repr__(self):
        return f'<User {self.username}>'


class Link(db.Model):
    __tablename__ = 'links'

    id = db.Column(db.Integer, primary_key=True)
    url = db.Column(db.String(2048), nullable=False, unique=True)
    code = db.Column(db.String(40), nullable=False, unique=True, index=True)
    title = db.Column(db.String(TITLE_MAX_LENGTH), nullable=False, default='')
    base_url = db.Column(db.String(255), nullable=False, default='')
    visits = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def short_url(self):
        return f'{self.base_url}/{self.code}'

    def to_dict(self):
        return {
            'id': self.id,
            'url': self.url,
            'code': self.code,
            'title': self.title,
            'base_url': self.base_url,
            'short_url': self.short_url,
            'visits': self.visits,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<Link {self.code}>'


def _code_taken(connection, code):
    return connection.execute(select(Link.id).where(Link.code == code)).first() is not None


def generate_random_code(length=6):
    characters = string.ascii_letters + string.digits
    return ''.join(random.choice(characters) for _ in range(length))


def generate_code(connection, url):
    """
    Строит короткий код из SHA-1 адреса.

    Начинаем с первых CODE_LENGTH символов хэша и удлиняем префикс, пока он
    занят другой ссылкой. Если занят весь хэш, берём случайный код.
    """
    length = DEFAULT_CODE_LENGTH
    if has_app_context():
        length = current_app.config.get('CODE_LENGTH', DEFAULT_CODE_LENGTH)

    digest = hashlib.sha1(url.encode('utf-8')).hexdigest()
    for end in range(length, len(digest) + 1):
        candidate = digest[:end]
        if not _code_taken(connection, candidate):
            return candidate

    candidate = generate_random_code(length + 1)
    while _code_taken(connection, candidate):
        candidate = generate_random_code(length + 1)
    return candidate


# --- Код ссылки генерируется при сохранении, если не задан явно ---
@event.listens_for(Link, 'before_insert')
def assign_code(mapper, connection, target):
    if not target.code and target.url:
        target.code = generate_code(connection, target.url)
