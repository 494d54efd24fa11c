"""Per-request session start on top of Starlette's signed-cookie sessions."""

from __future__ import annotations

import logging
import uuid

from fastapi import FastAPI, Request
from starlette.middleware.sessions import SessionMiddleware

from app.core.config import Settings

logger = logging.getLogger(__name__)

SESSION_ID_KEY = "sid"


class SessionManager:
    """Starts or resumes the client session; calling it twice is a no-op."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def install(self, app: FastAPI) -> None:
        app.add_middleware(
            SessionMiddleware,
            secret_key=self._settings.session.secret_key,
            session_cookie=self._settings.session.cookie_name,
            max_age=self._settings.session.max_age,
            https_only=self._settings.session.https_only,
        )

    def start(self, request: Request) -> str:
        session = request.session
        session_id = session.get(SESSION_ID_KEY)
        if not session_id:
            session_id = uuid.uuid4().hex
            session[SESSION_ID_KEY] = session_id
            logger.debug("Started session %s", session_id)
        return session_id
