import httpx
import pytest

from http_api_handler import ApiLogger
from http_api_handler import client as handler_client


class SyncClientStub:
    def __init__(self, response, calls, error=None):
        self.response = response
        self.calls = calls
        self.error = error

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    def request(self, method, url, content=None, data=None, files=None, headers=None):
        self.calls.append(
            {"method": method, "url": url, "content": content, "data": data, "files": files, "headers": headers}
        )
        if self.error is not None:
            raise self.error
        return self.response


class AsyncClientStub:
    def __init__(self, response, calls, error=None):
        self.response = response
        self.calls = calls
        self.error = error

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def request(self, method, url, content=None, data=None, files=None, headers=None):
        self.calls.append(
            {"method": method, "url": url, "content": content, "data": data, "files": files, "headers": headers}
        )
        if self.error is not None:
            raise self.error
        return self.response


class RecordingLogger(ApiLogger):
    def __init__(self):
        super().__init__(name="http_api_handler.tests")
        self.records = []

    def info(self, message):
        self.records.append(("info", message))

    def debug(self, message):
        self.records.append(("debug", message))

    def warning(self, message):
        self.records.append(("warning", message))

    def error(self, message, error=None, stack_trace=None):
        self.records.append(("error", message, error))


@pytest.fixture
def response_factory():
    def _factory(status_code, text="", content=None):
        if content is not None:
            return httpx.Response(status_code, content=content)
        return httpx.Response(status_code, text=text)

    return _factory


@pytest.fixture
def mock_sync_client(monkeypatch):
    def _install(response=None, error=None):
        calls = []

        def client_factory(*_args, **_kwargs):
            return SyncClientStub(response, calls, error)

        monkeypatch.setattr(handler_client.httpx, "Client", client_factory)
        return calls

    return _install


@pytest.fixture
def mock_async_client(monkeypatch):
    def _install(response=None, error=None):
        calls = []

        def async_client_factory(*_args, **_kwargs):
            return AsyncClientStub(response, calls, error)

        monkeypatch.setattr(handler_client.httpx, "AsyncClient", async_client_factory)
        return calls

    return _install


@pytest.fixture(params=["sync", "async"], ids=["sync", "async"])
def mode_and_mock(request, mock_sync_client, mock_async_client):
    mode = request.param
    install = mock_sync_client if mode == "sync" else mock_async_client
    return mode, install


@pytest.fixture
def recording_logger():
    return RecordingLogger()
