import html
import re
from urllib.parse import urlparse

import requests
from flask import current_app
from sqlalchemy.exc import IntegrityError

from db.models import TITLE_MAX_LENGTH, Link
from errors import InvalidUrlError, LinkNotFound
from extensions import cache


TITLE_PATTERN = re.compile(r'<title[^>]*>(.*?)</title>', re.IGNORECASE | re.DOTALL)
USER_AGENT = 'shortly-title-fetcher/1.0'
MAX_PAGE_BYTES = 64 * 1024  # заголовок ищем только в начале страницы
CHUNK_SIZE = 8192


def is_valid_url(url):
    """Проверяет, что строка является абсолютным http(s) URL с хостом."""
    if not isinstance(url, str) or not url or any(ch.isspace() for ch in url):
        return False
    parsed = urlparse(url)
    return parsed.scheme in ('http', 'https') and bool(parsed.hostname)


def extract_title(document):
    match = TITLE_PATTERN.search(document or '')
    if not match:
        return ''
    return ' '.join(html.unescape(match.group(1)).split())[:TITLE_MAX_LENGTH]


def _read_prefix(response):
    data = b''
    for chunk in response.iter_content(CHUNK_SIZE):
        data += chunk
        if len(data) >= MAX_PAGE_BYTES:
            break
    try:
        return data[:MAX_PAGE_BYTES].decode(response.encoding or 'utf-8', errors='replace')
    except LookupError:
        return data[:MAX_PAGE_BYTES].decode('utf-8', errors='replace')


def fetch_title(url):
    """Загружает начало HTML-страницы и возвращает её <title>; при ошибке пустую строку."""
    try:
        with requests.get(
            url,
            timeout=current_app.config.get('TITLE_FETCH_TIMEOUT', 5),
            headers={'User-Agent': USER_AGENT},
            stream=True,
        ) as response:
            response.raise_for_status()
            content_type = response.headers.get('Content-Type', '')
            if 'html' not in content_type.lower():
                current_app.logger.info('Пропущен заголовок %s: тип %r', url, content_type)
                return ''
            document = _read_prefix(response)
    except requests.RequestException as exc:
        current_app.logger.warning('Не удалось получить заголовок %s: %s', url, exc)
        return ''

    return extract_title(document)


def get_link_by_url(session, url):
    return session.query(Link).filter_by(url=url).first()


def create_or_get_link(session, url, base_url):
    """Возвращает существующую ссылку для url или создаёт новую."""
    if not isinstance(url, str):
        raise InvalidUrlError()
    url = url.strip()
    if not is_valid_url(url):
        raise InvalidUrlError()

    existing = get_link_by_url(session, url)
    if existing:
        return existing

    # Код назначается моделью при вставке
    link = Link(url=url, title=fetch_title(url), base_url=base_url, visits=0)
    session.add(link)
    try:
        session.commit()
    except IntegrityError:
        # Параллельный запрос успел сохранить тот же url
        session.rollback()
        existing = get_link_by_url(session, url)
        if existing is None:
            raise
        return existing

    current_app.logger.info('Создана ссылка %s -> %s', link.code, link.url)
    return link


def resolve_code(session, code):
    """Увеличивает счётчик переходов и возвращает исходный URL."""
    updated = (
        session.query(Link)
        .filter_by(code=code)
        .update({Link.visits: Link.visits + 1}, synchronize_session=False)
    )
    if not updated:
        session.rollback()
        cache.delete(f'link:{code}')
        raise LinkNotFound()

    url = cache.get(f'link:{code}')
    if url is None:
        url = session.query(Link.url).filter_by(code=code).scalar()
        cache.set(f'link:{code}', url)
    session.commit()
    return url


def list_links(session):
    return session.query(Link).order_by(Link.visits.desc(), Link.created_at.desc()).all()
