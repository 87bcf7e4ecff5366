"""Running middleware ``before_handle``/``after_handle`` hooks around a handler."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from types import SimpleNamespace
from typing import Any, Protocol

__all__ = [
    "LocalMiddleware",
    "CallCriteria",
    "OnlyGlobalCriteria",
    "DynamicCriteria",
    "MiddlewareContext",
    "is_middleware_global",
    "call_before_handlers",
    "call_after_handlers",
]

_CO_VARARGS = 0x04


class LocalMiddleware:
    """Base class for middleware that runs only on routes that ask for it."""

    call_global = False


def is_middleware_global(middleware: Any) -> bool:
    """True unless the middleware (instance or class) sets ``call_global`` false."""
    return bool(getattr(middleware, "call_global", True))


class CallCriteria(Protocol):
    """Decides whether the middleware at a position takes part in a request."""

    def enabled(self, middleware: Any, index: int) -> bool: ...


class OnlyGlobalCriteria:
    """Enables only global middleware."""

    def enabled(self, middleware: Any, index: int) -> bool:
        """True when *middleware* is global."""
        return is_middleware_global(middleware)


class DynamicCriteria:
    """Enables the middleware whose positions are listed in *indices*.

    Positions must be asked for in ascending order, or in descending order
    when *reversed_order* is set; each listed position is consumed once.
    """

    def __init__(self, indices: Iterable[int], reversed_order: bool = False) -> None:
        self._indices = list(indices)
        self._reversed = reversed_order
        self._slider = len(self._indices) - 1 if reversed_order else 0

    def enabled(self, middleware: Any, index: int) -> bool:
        """True when *index* is the next listed position."""
        if self._reversed:
            if self._slider >= 0 and self._indices[self._slider] == index:
                self._slider -= 1
                return True
            return False
        if self._slider < len(self._indices) and self._indices[self._slider] == index:
            self._slider += 1
            return True
        return False


def _new_context(middleware: Any) -> Any:
    context_type = getattr(type(middleware), "Context", None)
    return context_type() if context_type is not None else SimpleNamespace()


class MiddlewareContext:
    """Per-request context objects, one for each middleware of an application."""

    def __init__(self, middlewares: Sequence[Any]) -> None:
        self._contexts = [_new_context(middleware) for middleware in middlewares]
        self._by_type: dict[type, Any] = {}
        for middleware, context in zip(middlewares, self._contexts):
            self._by_type.setdefault(type(middleware), context)

    def get(self, middleware_type: type) -> Any:
        """The context of the first middleware of *middleware_type*."""
        try:
            return self._by_type[middleware_type]
        except KeyError:
            raise KeyError(
                f"application has no middleware of type {middleware_type.__name__}"
            ) from None

    def _at(self, index: int) -> Any:
        return self._contexts[index]


def _wants_all_contexts(hook: Any) -> bool:
    """True when *hook* takes a fourth positional argument for all contexts."""
    func = getattr(hook, "__func__", hook)
    code = getattr(func, "__code__", None)
    if code is None:
        code = getattr(getattr(hook, "__call__", None), "__code__", None)
        if code is None:
            return False
        bound = 1
    else:
        bound = 1 if hasattr(hook, "__self__") else 0
    if code.co_flags & _CO_VARARGS:
        return True
    return code.co_argcount - bound >= 4


def _call_hook(hook: Any, req: Any, res: Any, own_ctx: Any, ctx: MiddlewareContext) -> None:
    """Call a hook with three arguments, or four (adding all contexts) if it takes them."""
    if _wants_all_contexts(hook):
        hook(req, res, own_ctx, ctx)
    else:
        hook(req, res, own_ctx)


def _before(middleware: Any, index: int, req: Any, res: Any, ctx: MiddlewareContext) -> None:
    _call_hook(middleware.before_handle, req, res, ctx._at(index), ctx)


def _after(middleware: Any, index: int, req: Any, res: Any, ctx: MiddlewareContext) -> None:
    _call_hook(middleware.after_handle, req, res, ctx._at(index), ctx)


def call_before_handlers(
    criteria: CallCriteria,
    middlewares: Sequence[Any],
    req: Any,
    res: Any,
    ctx: MiddlewareContext,
) -> bool:
    """Run the enabled ``before_handle`` hooks in order.

    If one of them completes the response, the ``after_handle`` hooks of the
    middleware run so far are called in reverse order and True is returned.
    Otherwise False is returned and no ``after_handle`` hook has run.
    """
    entered: list[int] = []
    for index, middleware in enumerate(middlewares):
        if not criteria.enabled(middleware, index):
            continue
        entered.append(index)
        _before(middleware, index, req, res, ctx)
        if res.is_completed():
            for done in reversed(entered):
                _after(middlewares[done], done, req, res, ctx)
            return True
    return False


def call_after_handlers(
    criteria: CallCriteria,
    middlewares: Sequence[Any],
    ctx: MiddlewareContext,
    req: Any,
    res: Any,
) -> None:
    """Run the enabled ``after_handle`` hooks from the last middleware to the first."""
    for index in range(len(middlewares) - 1, -1, -1):
        middleware = middlewares[index]
        if criteria.enabled(middleware, index):
            _after(middleware, index, req, res, ctx)