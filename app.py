import os

from flask import Flask, jsonify, redirect, url_for

# Импорт собственных модулей
from config import Config
from db import db  # Импорт объекта базы данных
from db.models import User
from errors import ShortenerError
from extensions import cache, limiter, login_manager
from views import shortener


# --- Функция загрузки пользователя по ID ---
@login_manager.user_loader
def load_user(user_id):
    """Загружает пользователя из базы данных по его ID."""
    return db.session.get(User, int(user_id))


# --- Неавторизованный доступ ведёт на /login без параметра next ---
@login_manager.unauthorized_handler
def unauthorized():
    return redirect(url_for('shortener.login'))


def handle_shortener_error(exc):
    return jsonify({'error': exc.message}), exc.status_code


# --- Инициализация приложения и компонентов ---
def create_app(config_class=Config):
    """Собирает приложение: конфигурация, расширения, маршруты, таблицы."""
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config['LOG_LEVEL'])

    # Инициализация базы данных, кэша, лимитера и менеджера логинов
    db.init_app(app)
    cache.init_app(app)
    limiter.init_app(app)
    login_manager.init_app(app)
    login_manager.login_view = 'shortener.login'

    app.register_blueprint(shortener)
    app.register_error_handler(ShortenerError, handle_shortener_error)

    with app.app_context():
        db.create_all()  # Создание таблиц базы данных

    return app


# --- Запуск приложения ---
if __name__ == '__main__':
    create_app().run(port=int(os.environ.get('PORT', 4568)), debug=True)
