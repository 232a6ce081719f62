from __future__ import annotations

from typing import Optional

from fastapi import Request, Response

from taskboard.domain.common.ids import SessionToken


class SessionTokenCookie:
    """Reads the session token from a request and writes it to a response."""

    def __init__(self, name: str, request: Request, response: Optional[Response] = None) -> None:
        self._name = name
        self._request = request
        self._response = response

    def read(self) -> Optional[SessionToken]:
        return SessionToken.parse(self._request.cookies.get(self._name))

    def write(self, token: SessionToken) -> None:
        if self._response is None:
            raise RuntimeError("cannot write a cookie without a response")
        self._response.set_cookie(self._name, token.value, httponly=True, samesite="lax")
