"""JSend response envelopes (https://github.com/omniti-labs/jsend).

- ``success``: the request worked; ``data`` holds the payload.
- ``fail``: the client sent something we reject (4xx).
- ``error``: we failed to process a valid request (5xx).
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class JSendStatus(str, Enum):
    SUCCESS = "success"
    FAIL = "fail"
    ERROR = "error"


def success(data: Any) -> dict[str, Any]:
    return {"status": JSendStatus.SUCCESS.value, "data": data}


def fail(data: dict[str, Any]) -> dict[str, Any]:
    return {"status": JSendStatus.FAIL.value, "data": data}


def error(
    message: str,
    code: int | None = None,
    data: dict[str, Any] | None = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {"status": JSendStatus.ERROR.value, "message": message}
    if code is not None:
        body["code"] = code
    if data is not None:
        body["data"] = data
    return body
