"""
Async error boundary.

Wraps a handler that may return a plain value or an awaitable and
guarantees that any failure it produces, raised synchronously or when
the awaitable settles, is passed to ``on_failure`` exactly once. The
value returned by ``on_failure`` becomes the wrapper's result.

No retries happen here. Retrying is the caller's business.
"""

import functools
import inspect
from typing import Any, Awaitable, Callable, TypeVar, Union

T = TypeVar("T")

FailureCallback = Callable[[Exception], Union[Any, Awaitable[Any]]]


def async_boundary(
    handler: Callable[..., Union[T, Awaitable[T]]],
    on_failure: FailureCallback,
) -> Callable[..., Awaitable[Any]]:
    """Return a coroutine function that runs ``handler`` inside the boundary.

    Args:
        handler: Sync or async callable.
        on_failure: Receives the failure; may itself be sync or async.
            A failure raised by ``on_failure`` propagates unchanged and is
            not forwarded again.

    Returns:
        An async wrapper with the handler's signature.
    """

    @functools.wraps(handler)
    async def guarded(*args: Any, **kwargs: Any) -> Any:
        try:
            result = handler(*args, **kwargs)
            while inspect.isawaitable(result):
                result = await result
        except Exception as exc:
            outcome = on_failure(exc)
            if inspect.isawaitable(outcome):
                outcome = await outcome
            return outcome
        return result

    return guarded
