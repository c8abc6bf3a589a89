"""Error types and result values for imageref."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorCode(str, Enum):
    """Error codes surfaced by image reference operations."""

    INVALID_IMAGE = "INVALID_IMAGE"


class ImageRefError(Exception):
    """Base exception for imageref errors."""

    pass


class ConfigError(ImageRefError):
    """Configuration error."""

    pass


class InvalidImageError(ImageRefError):
    """Raised when an error result is unwrapped."""

    def __init__(self, error: "ImageError"):
        super().__init__(str(error))
        self.error = error


class ImageReferenceDecodeError(ImageRefError, ValueError):
    """Raised when a serialized image reference cannot be decoded."""

    pass


@dataclass(frozen=True)
class ImageError:
    """A coded error carrying one or more human readable messages."""

    code: ErrorCode
    errors: tuple[str, ...] = ()

    def __str__(self) -> str:
        return f"{self.code.value}: {', '.join(self.errors)}"

    def to_json(self) -> dict:
        """JSON-serializable representation."""
        return {"code": self.code.value, "errors": list(self.errors)}


@dataclass(frozen=True)
class ImageResult(Generic[T]):
    """Either a success value or an ImageError, never both."""

    value: T | None = None
    error: ImageError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "ImageResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, code: ErrorCode, *messages: str) -> "ImageResult[T]":
        return cls(error=ImageError(code, tuple(messages)))

    def unwrap(self) -> T:
        """Return the success value.

        Raises:
            InvalidImageError: If this result holds an error
        """
        if self.error is not None:
            raise InvalidImageError(self.error)
        return self.value
