"""Uniform result shape returned by server actions."""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel

from core.exceptions import ApplicationError
from core.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ActionResult(Generic[T]):
    """Either ``data`` or ``error`` is set; actions never raise."""

    data: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        return {"data": _jsonable(self.data), "error": self.error}


def success(data: T) -> ActionResult[T]:
    return ActionResult(data=data, error=None)


def failure(message: str) -> ActionResult[Any]:
    return ActionResult(data=None, error=message)


def _jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    return value


def server_action(default_error: str) -> Callable[
    [Callable[..., Awaitable[Any]]], Callable[..., Awaitable[ActionResult[Any]]]
]:
    """Wrap a coroutine so that it returns an :class:`ActionResult`.

    Application errors become ``failure(str(error))``; anything else is logged
    with its traceback and reported as ``default_error``.
    """

    def decorator(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[ActionResult[Any]]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> ActionResult[Any]:
            try:
                result = await func(*args, **kwargs)
            except ApplicationError as exc:
                logger.info(f"{func.__name__} rejected: {exc}")
                return failure(str(exc))
            except Exception:
                logger.exception(f"{func.__name__} failed")
                return failure(default_error)
            if isinstance(result, ActionResult):
                return result
            return success(result)

        return wrapper

    return decorator
