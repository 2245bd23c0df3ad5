"""One-shot flash messages stored in the signed session cookie.

Requires Starlette's ``SessionMiddleware``. Messages survive exactly one
redirect: they are appended by ``flash`` and removed by
``pop_flashed_messages`` when the next page renders them.
"""

from typing import TypedDict

from starlette.requests import Request

_FLASH_KEY = "_flashes"


class FlashMessage(TypedDict):
    category: str
    message: str


def flash(request: Request, message: str, category: str = "info") -> None:
    """Queue *message* for display on the next rendered page."""
    messages: list[FlashMessage] = list(request.session.get(_FLASH_KEY, []))
    messages.append({"category": category, "message": message})
    request.session[_FLASH_KEY] = messages


def pop_flashed_messages(request: Request) -> list[FlashMessage]:
    """Return and clear all queued messages."""
    return request.session.pop(_FLASH_KEY, [])
