class ShortenerError(Exception):
    """Базовая ошибка сервиса; status_code уходит в HTTP-ответ."""
    status_code = 400
    message = 'Ошибка запроса'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.message = message or self.message


class InvalidUrlError(ShortenerError):
    status_code = 404
    message = 'Некорректный URL'


class LinkNotFound(ShortenerError):
    status_code = 404
    message = 'URL не найден'


class DuplicateUserError(ShortenerError):
    status_code = 409
    message = 'Пользователь с таким логином уже существует'


class MissingCredentialsError(ShortenerError):
    status_code = 400
    message = 'Пожалуйста, заполните все поля'
