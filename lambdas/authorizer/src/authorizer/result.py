"""Tagged success/error values chaining the authorization stages."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .errors import AuthorizationError, UnexpectedStageError
from .logging_config import LOGGER

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful stage output."""

    value: T

    def then(self, stage: str, func: Callable[[T], U]) -> "Ok[U] | Err":
        return attempt(stage, func, self.value)


@dataclass(frozen=True)
class Err:
    """Failed stage, remembering which stage raised."""

    error: AuthorizationError
    stage: str

    def then(self, stage: str, func: Callable[[Any], Any]) -> "Err":
        return self


Result = Ok[T] | Err


def attempt(stage: str, func: Callable[[T], U], arg: T) -> Ok[U] | Err:
    """Run one stage, converting any raised exception into an ``Err``."""
    try:
        return Ok(func(arg))
    except AuthorizationError as e:
        return Err(e, stage)
    except Exception as e:
        LOGGER.exception("Unexpected failure in stage %s", stage, extra={"stage": stage})
        return Err(UnexpectedStageError(str(e)), stage)
