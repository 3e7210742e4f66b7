from typing import Any


def success_response(data: Any = None, message: str = "Success", code: int = 200, **extra) -> dict:
    """Success envelope: ``{code, message, data}`` plus any extra top-level keys."""
    body = {"code": code, "message": message}
    if data is not None:
        body["data"] = data
    body.update(extra)
    return body
