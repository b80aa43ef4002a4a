import requests


class FakeResponse:
    """Ответ requests с потоковым чтением тела, как при stream=True."""

    def __init__(self, text, status_code=200, content_type='text/html; charset=utf-8'):
        self.content = text.encode('utf-8')
        self.status_code = status_code
        self.headers = {'Content-Type': content_type}
        self.encoding = 'utf-8'
        self.read_bytes = 0

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f'{self.status_code} Error')

    def iter_content(self, chunk_size=1):
        for start in range(0, len(self.content), chunk_size):
            self.read_bytes += chunk_size
            yield self.content[start:start + chunk_size]
