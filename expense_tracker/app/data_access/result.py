from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union


T = TypeVar('T')


class GatewayError(Exception):
    """Raised when a gateway operation fails"""
    def __init__(self, message="Gateway operation failed"):
        self.message = message
        super().__init__(self.message)


@dataclass(frozen=True)
class Success(Generic[T]):
    data: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.data


@dataclass(frozen=True)
class Failure:
    error: GatewayError

    @property
    def ok(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return self.error.message

    def unwrap(self) -> Any:
        raise self.error


Result = Union[Success[T], Failure]
