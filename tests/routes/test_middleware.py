import asyncio

from fastapi.testclient import TestClient
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.responses import PlainTextResponse
from starlette.routing import Route

from api.middleware.access_log import AccessLogMiddleware
from api.middleware.errors import DeadlineMiddleware, UnhandledErrorMiddleware
from api.middleware.tracing import TracingMiddleware, next_request_id


class SpyLogger:
    def __init__(self):
        self.events = []

    def info(self, event, **fields):
        self.events.append((event, fields))


async def ok(request):
    return PlainTextResponse("ok")


async def boom(request):
    raise RuntimeError("kaboom")


async def slow(request):
    await asyncio.sleep(1)
    return PlainTextResponse("late")


def _client(spy, timeout=5.0):
    app = Starlette(
        routes=[Route("/ok", ok), Route("/boom", boom), Route("/slow", slow)],
        middleware=[
            Middleware(TracingMiddleware, id_factory=lambda: "generated-id"),
            Middleware(AccessLogMiddleware, logger=spy),
            Middleware(UnhandledErrorMiddleware),
            Middleware(DeadlineMiddleware, timeout=timeout),
        ],
    )
    return TestClient(app)


def test_request_id_is_echoed_check():
    client = _client(SpyLogger())

    response = client.get("/ok", headers={"X-Request-Id": "abc-123"})

    assert response.headers["x-request-id"] == "abc-123"


def test_request_id_is_generated_check():
    client = _client(SpyLogger())

    response = client.get("/ok")

    assert response.headers["x-request-id"] == "generated-id"


def test_next_request_id_is_numeric_check():
    assert next_request_id().isdigit()


def test_access_log_fields_check():
    spy = SpyLogger()
    client = _client(spy)

    client.get("/ok", headers={"X-Request-Id": "rid-1", "User-Agent": "pytest-agent"})

    assert len(spy.events) == 1
    event, fields = spy.events[0]
    assert event == "http.request"
    assert fields["request_id"] == "rid-1"
    assert fields["method"] == "GET"
    assert fields["path"] == "/ok"
    assert fields["proto"] == "HTTP/1.1"
    assert fields["user_agent"] == "pytest-agent"
    assert fields["remote_addr"]


def test_unhandled_error_is_logged_and_converted_check():
    spy = SpyLogger()
    client = _client(spy)

    response = client.get("/boom")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error"}
    assert "kaboom" not in response.text
    assert response.headers["x-request-id"] == "generated-id"
    assert len(spy.events) == 1


def test_deadline_check():
    client = _client(SpyLogger(), timeout=0.05)

    response = client.get("/slow")

    assert response.status_code == 503
    assert response.json() == {"error": "Request timed out"}


def test_app_responses_carry_request_id_check(client):
    response = client.get("/conversations/")

    assert response.status_code == 404
    assert response.headers["x-request-id"].isdigit()
