"""Result types for the request adapters.

Data-access calls raise exceptions; the adapters convert each call into a
Result so success and failure are handled explicitly with ``match``.

Usage:
    result = await attempt(Model.get, entity_id)
    match result:
        case Success(value=entity):
            ...
        case Failure(error=error):
            ...
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeAlias, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful data-access call.

    Attributes:
        value: Value the call resolved to.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed data-access call.

    Attributes:
        error: Exception the call raised.
    """

    error: E


Result: TypeAlias = Success[T] | Failure[E]


async def attempt(
    call: Callable[..., Awaitable[T]], /, *args: Any, **kwargs: Any
) -> Result[T, Exception]:
    """Make a single data-access call and capture its outcome.

    Exactly one attempt is made; no timeout or retry is added. Errors raised
    while building the call (synchronously) are captured too. Exceptions
    that are not ``Exception`` subclasses (cancellation, KeyboardInterrupt)
    propagate unchanged.

    Args:
        call: Data-access function returning an awaitable.
        *args: Positional arguments for ``call``.
        **kwargs: Keyword arguments for ``call``.

    Returns:
        Success with the resolved value, or Failure with the raised exception.
    """
    try:
        value = await call(*args, **kwargs)
    except Exception as error:
        return Failure(error=error)
    return Success(value=value)
