"""错误基类：响应流适配器的封闭错误体系和结构化错误上下文。

Base error classes for reactive-httpx.

Provides a closed error hierarchy for response adaptation:
- ReactiveHttpxError: Base class for all library errors
- StatusCodeError: Status code outside the accepted range
- ImageMappingError: Payload is not a decodable image
- JsonMappingError: Payload is empty or not valid JSON
- StringMappingError: Payload cannot be decoded as text, or key path miss
- ObjectMappingError: Structured decoder rejected the payload
- TransportError: Any other underlying failure
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from reactive_httpx.response.model import Response


StringMappingReason = Literal["encoding", "key_path"]


@dataclass
class ErrorContext:
    """Structured error context for diagnostics.

    Provides actionable information for debugging and error handling.
    """

    source: str | None = None
    """Error source (e.g., 'status', 'json', 'transport')"""

    key_path: str | None = None
    """Key path that was being resolved, if any"""

    details: dict[str, Any] = field(default_factory=dict)
    """Additional details about the error"""

    hint: str | None = None
    """Actionable hint for resolving the error"""

    def __str__(self) -> str:
        parts = []
        if self.source:
            parts.append(f"[{self.source}]")
        if self.key_path:
            parts.append(f"at '{self.key_path}'")
        if self.hint:
            parts.append(f"(hint: {self.hint})")
        return " ".join(parts)


class ReactiveHttpxError(Exception):
    """Base class for all reactive-httpx errors.

    Every error a response operator can emit inherits from this class, so a
    single ``on_error`` handler can match all of them.

    Attributes:
        message: Human-readable error message
        context: Structured error context
        response: The response being processed when the error occurred
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        response: Response | None = None,
    ) -> None:
        self.message = message
        self.context = context or ErrorContext()
        self.response = response
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message."""
        ctx_str = str(self.context)
        if ctx_str:
            return f"{self.message} {ctx_str}"
        return self.message

    def with_hint(self, hint: str) -> ReactiveHttpxError:
        """Add a hint to this error."""
        self.context.hint = hint
        return self


class StatusCodeError(ReactiveHttpxError):
    """Response status code fell outside the accepted codes.

    Attributes:
        status_code: The status code the response actually carried
        accepted: Human-readable description of the accepted codes
    """

    def __init__(
        self,
        response: Response,
        *,
        accepted: str | None = None,
    ) -> None:
        ctx = ErrorContext(source="status")
        ctx.details["status_code"] = response.status_code
        if accepted:
            ctx.details["accepted"] = accepted
        super().__init__(
            f"Status code {response.status_code} didn't fall within the given range",
            ctx,
            response=response,
        )
        self.status_code = response.status_code
        self.accepted = accepted


class ImageMappingError(ReactiveHttpxError):
    """Payload could not be decoded into an image."""

    def __init__(self, response: Response, *, cause: Exception | None = None) -> None:
        ctx = ErrorContext(source="image")
        ctx.details["data_length"] = len(response.data)
        super().__init__("Failed to map data to an Image", ctx, response=response)
        self.__cause__ = cause


class JsonMappingError(ReactiveHttpxError):
    """Payload could not be parsed as JSON.

    Attributes:
        empty: True when the payload was empty, False when it was malformed
    """

    def __init__(
        self,
        response: Response,
        *,
        empty: bool = False,
        key_path: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = ErrorContext(source="json", key_path=key_path)
        ctx.details["empty"] = empty
        if empty:
            message = "Failed to map empty data to JSON"
            ctx.hint = "pass fails_on_empty_data=False to accept empty bodies"
        elif key_path:
            message = "No JSON value found at key path"
        else:
            message = "Failed to map data to JSON"
        super().__init__(message, ctx, response=response)
        self.empty = empty
        self.key_path = key_path
        self.__cause__ = cause


class StringMappingError(ReactiveHttpxError):
    """Payload could not be converted into a string.

    Attributes:
        reason: ``"encoding"`` when the bytes are not valid text in the
            configured encoding, ``"key_path"`` when the key path does not
            resolve to a string
        key_path: The key path that was requested, if any
    """

    def __init__(
        self,
        response: Response,
        *,
        reason: StringMappingReason,
        key_path: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = ErrorContext(source="string", key_path=key_path)
        ctx.details["reason"] = reason
        if reason == "key_path":
            message = "Failed to map data at key path to a String"
        else:
            message = "Failed to map data to a String"
        super().__init__(message, ctx, response=response)
        self.reason = reason
        self.key_path = key_path
        self.__cause__ = cause


class ObjectMappingError(ReactiveHttpxError):
    """Structured decoder rejected the payload.

    The decoder's own exception is available as ``cause`` and ``__cause__``.
    """

    def __init__(
        self,
        response: Response,
        cause: Exception,
        *,
        target: str | None = None,
    ) -> None:
        ctx = ErrorContext(source="object")
        if target:
            ctx.details["target"] = target
        ctx.details["cause"] = type(cause).__name__
        super().__init__(
            f"Failed to map data to a Decodable object: {cause}",
            ctx,
            response=response,
        )
        self.cause = cause
        self.target = target
        self.__cause__ = cause


class TransportError(ReactiveHttpxError):
    """Underlying failure that is not one of the typed mapping errors.

    Raised when:
    - The HTTP client fails while producing the response
    - A conversion raises an exception outside this hierarchy
    """

    def __init__(
        self,
        cause: Exception,
        context: ErrorContext | None = None,
        *,
        response: Response | None = None,
        url: str | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="transport")
        ctx.details["cause"] = type(cause).__name__
        if url:
            ctx.details["url"] = url
        super().__init__(f"Underlying error: {cause}", ctx, response=response)
        self.cause = cause
        self.url = url
        self.__cause__ = cause
