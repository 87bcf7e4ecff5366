"""Middleware that sets Cross-Origin Resource Sharing headers on responses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

__all__ = ["CORSRules", "CORSHandler"]


def _method_name(method: Any) -> str:
    if isinstance(method, Enum):
        return str(method.name)
    return str(method)


class CORSRules:
    """A CORS policy; every unset list defaults to ``*``.

    Responses passed to :meth:`apply` need a multidict ``headers`` attribute.
    """

    def __init__(self, handler: CORSHandler) -> None:
        self._handler = handler
        self._ignore = False
        self._origin = "*"
        self._methods = "*"
        self._headers = "*"
        self._max_age = ""
        self._allow_credentials = False

    @staticmethod
    def _add_items(current: str, items: tuple[str, ...]) -> str:
        values = [] if current in ("*", "") else [current]
        return ", ".join(values + list(items))

    def origin(self, origin: str) -> CORSRules:
        """Set Access-Control-Allow-Origin."""
        self._origin = origin
        return self

    def methods(self, *args: Any) -> CORSRules:
        """Add HTTP methods (names or enum members) to Access-Control-Allow-Methods."""
        if not args:
            raise TypeError("methods() needs at least one method")
        self._methods = self._add_items(self._methods, tuple(_method_name(m) for m in args))
        return self

    def headers(self, *args: str) -> CORSRules:
        """Add header names to Access-Control-Allow-Headers."""
        if not args:
            raise TypeError("headers() needs at least one header")
        self._headers = self._add_items(self._headers, tuple(args))
        return self

    def max_age(self, max_age: int) -> CORSRules:
        """Set Access-Control-Max-Age in seconds."""
        self._max_age = str(int(max_age))
        return self

    def allow_credentials(self) -> CORSRules:
        """Send Access-Control-Allow-Credentials: true."""
        self._allow_credentials = True
        return self

    def ignore(self) -> None:
        """Send no CORS headers at all under this policy."""
        self._ignore = True

    def prefix(self, prefix: str) -> CORSRules:
        """A new policy for URLs starting with *prefix*."""
        return self._handler.prefix(prefix)

    def blueprint(self, bp: Any) -> CORSRules:
        """A new policy for the URLs of a blueprint."""
        return self._handler.blueprint(bp)

    def global_(self) -> CORSRules:
        """The handler's default policy."""
        return self._handler.global_()

    @staticmethod
    def _set_no_override(res: Any, key: str, value: str) -> None:
        if not value or res.headers.get(key, ""):
            return
        res.headers.add(key, value)

    def apply(self, res: Any) -> None:
        """Add this policy's headers to *res*, keeping any already set."""
        if self._ignore:
            return
        self._set_no_override(res, "Access-Control-Allow-Origin", self._origin)
        self._set_no_override(res, "Access-Control-Allow-Methods", self._methods)
        self._set_no_override(res, "Access-Control-Allow-Headers", self._headers)
        self._set_no_override(res, "Access-Control-Max-Age", self._max_age)
        if self._allow_credentials:
            self._set_no_override(res, "Access-Control-Allow-Credentials", "true")


class CORSHandler:
    """Global middleware applying the first matching prefix policy, or the default."""

    @dataclass
    class Context:
        """Per-request state: the policy chosen for the request URL."""

        rules: Optional[CORSRules] = None

    def __init__(self) -> None:
        self._rules: list[tuple[str, CORSRules]] = []
        self._default = CORSRules(self)

    def before_handle(self, req: Any, res: Any, ctx: Any) -> None:
        """Choose the policy for ``req.url`` and keep it in the context."""
        ctx.rules = self._find_rule(req.url)

    def after_handle(self, req: Any, res: Any, ctx: Any) -> None:
        """Apply the policy for ``req.url`` to the response."""
        rules = getattr(ctx, "rules", None) or self._find_rule(req.url)
        rules.apply(res)

    def prefix(self, prefix: str) -> CORSRules:
        """Create and return a policy for URLs starting with *prefix*."""
        rules = CORSRules(self)
        self._rules.append((prefix, rules))
        return rules

    def blueprint(self, bp: Any) -> CORSRules:
        """Create and return a policy for the URL prefix of a blueprint."""
        return self.prefix(bp.prefix)

    def global_(self) -> CORSRules:
        """The default policy used when no prefix matches."""
        return self._default

    def _find_rule(self, path: str) -> CORSRules:
        for prefix, rules in self._rules:
            if path.startswith(prefix):
                return rules
        return self._default