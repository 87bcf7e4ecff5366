"""Middleware that gives untyped responses a UTF-8 plain text content type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

__all__ = ["UTF8", "UTF8_CONTENT_TYPE"]

UTF8_CONTENT_TYPE = "text/plain; charset=utf-8"


class UTF8:
    """Sets Content-Type to UTF-8 plain text when the handler left it empty."""

    content_type = UTF8_CONTENT_TYPE

    @dataclass
    class Context:
        """Per-request state: the content type to fill in."""

        content_type: str = UTF8_CONTENT_TYPE

    def before_handle(self, req: Any, res: Any, ctx: Any) -> None:
        """Record the content type to use for this request."""
        ctx.content_type = self.content_type

    def after_handle(self, req: Any, res: Any, ctx: Any) -> None:
        """Fill in the Content-Type header if it is missing or empty."""
        if not res.headers.get("Content-Type", ""):
            res.headers["Content-Type"] = getattr(ctx, "content_type", "") or self.content_type