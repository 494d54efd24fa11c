"""Block-based HTML response that is built up and sent exactly once."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Protocol

from jinja2 import Environment
from starlette.responses import HTMLResponse

from .exceptions import ResponseAlreadySentError


class ContentBlock(Protocol):
    template: str

    def context(self) -> Dict[str, Any]:
        ...


@dataclass(frozen=True, slots=True)
class HeadBlock:
    title: str
    template: str = "partials/head.html"

    def context(self) -> Dict[str, Any]:
        return {"title": self.title}


@dataclass(frozen=True, slots=True)
class ErrorBlock:
    code: int
    message: str
    template: str = "partials/error.html"

    def context(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message}


class PageResponse:
    """Accumulates content blocks and a status code until ``send()``."""

    def __init__(self, env: Environment, status_code: int = 200) -> None:
        self._env = env
        self._status_code = status_code
        self._blocks: List[ContentBlock] = []
        self._sent = False

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def blocks(self) -> tuple[ContentBlock, ...]:
        return tuple(self._blocks)

    @property
    def sent(self) -> bool:
        return self._sent

    def set_status(self, code: int) -> None:
        self._ensure_open()
        self._status_code = code

    def append_content(self, block: ContentBlock) -> None:
        self._ensure_open()
        self._blocks.append(block)

    def render(self) -> str:
        return "".join(
            self._env.get_template(block.template).render(**block.context()) for block in self._blocks
        )

    def send(self) -> HTMLResponse:
        self._ensure_open()
        body = self.render()
        self._sent = True
        return HTMLResponse(content=body, status_code=self._status_code)

    def _ensure_open(self) -> None:
        if self._sent:
            raise ResponseAlreadySentError("response has already been sent")
