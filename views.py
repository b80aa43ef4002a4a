from flask import (
    Blueprint,
    current_app,
    flash,
    jsonify,
    redirect,
    render_template,
    request,
    url_for,
)
from flask_login import login_required

import auth
import links
from db import db
from errors import InvalidUrlError, ShortenerError
from extensions import limiter


shortener = Blueprint('shortener', __name__)


def _payload():
    """Данные запроса: JSON или форма."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else request.form


# --- Главная страница со списком ссылок ---
@shortener.route('/')
@login_required
def index():
    return render_template('index.html', links=links.list_links(db.session))


# --- Форма создания ссылки ---
@shortener.route('/create', methods=['GET', 'POST'])
@limiter.limit(lambda: current_app.config['CREATE_RATE_LIMIT'], methods=['POST'])
@login_required
def create():
    if request.method == 'GET':
        return render_template('create.html')

    try:
        link = links.create_or_get_link(
            db.session,
            request.form.get('url'),
            base_url=request.host_url.rstrip('/'),
        )
    except InvalidUrlError as exc:
        flash(exc.message, 'error')
        return redirect(url_for('shortener.create'))
    flash(f'Ваш короткий URL: {link.short_url}', 'success')
    return redirect(url_for('shortener.index'))


# --- Список ссылок в JSON ---
@shortener.route('/links', methods=['GET'])
@login_required
def list_links():
    return jsonify([link.to_dict() for link in links.list_links(db.session)])


# --- Создание короткой ссылки ---
@shortener.route('/links', methods=['POST'])
@limiter.limit(lambda: current_app.config['CREATE_RATE_LIMIT'])
def create_link():
    """Возвращает код существующей ссылки или создаёт новую (404 для некорректного URL)."""
    link = links.create_or_get_link(
        db.session,
        _payload().get('url'),
        base_url=request.host_url.rstrip('/'),
    )
    return jsonify(link.to_dict())


# --- Вход ---
@shortener.route('/login', methods=['GET', 'POST'])
def login():
    if request.method == 'GET':
        return render_template('login.html')

    data = _payload()
    user = auth.login(db.session, data.get('username'), data.get('password'))
    if user is None:
        flash('Неверный логин или пароль', 'error')
        return redirect(url_for('shortener.login'))
    return redirect(url_for('shortener.index'))


# --- Регистрация ---
@shortener.route('/signup', methods=['GET', 'POST'])
def signup():
    if request.method == 'GET':
        return render_template('signup.html')

    data = _payload()
    try:
        auth.signup(db.session, data.get('username'), data.get('password'))
    except ShortenerError as exc:
        flash(exc.message, 'error')
        return redirect(url_for('shortener.signup'))
    return redirect(url_for('shortener.index'))


# --- Выход ---
@shortener.route('/logout')
def logout():
    auth.logout()
    return render_template('login.html')


# --- Перенаправление по короткому коду ---
@shortener.route('/<code>')
@limiter.limit(lambda: current_app.config['REDIRECT_RATE_LIMIT'])
def redirect_to_original(code):
    return redirect(links.resolve_code(db.session, code))
