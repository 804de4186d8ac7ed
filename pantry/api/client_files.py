"""Static serving for the single-page client bundle."""

from __future__ import annotations

from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException
from starlette.responses import Response
from starlette.types import Scope

API_PATH_PREFIX = "api/"


class SinglePageFiles(StaticFiles):
    """``StaticFiles`` that answers unknown client paths with ``index.html``.

    Deep links such as ``/recipes/123`` are resolved by the client router, so
    any missing file outside ``/api`` gets the app shell instead of a 404.
    """

    def __init__(self, *, directory: str, index_file: str = "index.html") -> None:
        super().__init__(directory=directory, html=True)
        self.index_file = index_file

    async def get_response(self, path: str, scope: Scope) -> Response:
        try:
            return await super().get_response(path, scope)
        except HTTPException as exc:
            if exc.status_code != 404 or path.startswith(API_PATH_PREFIX):
                raise
        return await super().get_response(self.index_file, scope)
