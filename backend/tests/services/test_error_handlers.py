"""Error Handlers — envelope shape for domain, validation and unexpected failures."""

import json

from starlette.requests import Request

from classroom.api.error_handlers import handle_classroom_error, handle_unexpected_error
from classroom.core.errors import BackendFaultError, ConcurrencyError


def _request(path: str = "/api/v1/courses/1/comments") -> Request:
    return Request({
        "type": "http", "method": "POST", "path": path,
        "headers": [], "query_string": b"",
    })


async def test_unexpected_error_hides_details():
    res = await handle_unexpected_error(_request(), RuntimeError("secret stack detail"))
    body = json.loads(res.body)
    assert res.status_code == 500
    assert body["error"]["code"] == "INTERNAL_ERROR"
    assert "secret" not in res.body.decode()


async def test_backend_fault_is_500_without_driver_text():
    res = await handle_classroom_error(
        _request(), BackendFaultError("could not connect to 10.0.0.5", "execute"),
    )
    assert res.status_code == 500
    assert "10.0.0.5" not in res.body.decode()


async def test_concurrency_conflict_is_409():
    res = await handle_classroom_error(_request(), ConcurrencyError("stale"))
    assert res.status_code == 409
    assert json.loads(res.body)["error"]["category"] == "conflict"
    assert "www-authenticate" not in res.headers
