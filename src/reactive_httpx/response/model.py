"""
The response value and its synchronous conversions.

Every filter and mapper here either returns a value or raises one of the
typed errors from :mod:`reactive_httpx.errors`. The reactive operators in
:mod:`reactive_httpx.operators` lift these methods onto observables.
"""

from __future__ import annotations

import io
import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar

from reactive_httpx._features import require_extra
from reactive_httpx.config import get_settings
from reactive_httpx.errors import (
    ImageMappingError,
    JsonMappingError,
    ObjectMappingError,
    StatusCodeError,
    StringMappingError,
)
from reactive_httpx.response.decoders import StructuredDecoder, default_decoder
from reactive_httpx.response.key_path import MISSING, value_at_key_path

if TYPE_CHECKING:
    import httpx
    from PIL.Image import Image

T = TypeVar("T")

SUCCESS_CODES = (200, 299)
SUCCESS_AND_REDIRECT_CODES = (200, 399)

# Payloads tried, in order, when an empty body may decode to a default value
_EMPTY_FALLBACKS = (b"{}", b"[{}]")


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON
    raise ValueError(f"Invalid JSON constant: {name}")



@dataclass(frozen=True)
class Response:
    """An HTTP response that has been fully read.

    Attributes:
        status_code: HTTP status code
        data: Raw response body
        request: The request that produced this response, if known
        response: The originating ``httpx.Response``, if any
    """

    status_code: int
    data: bytes = b""
    request: httpx.Request | None = None
    response: httpx.Response | None = None

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> Response:
        """Build a Response from an ``httpx.Response`` whose body was read.

        Raises:
            httpx.ResponseNotRead: If the body of a streaming response was not read.
        """
        try:
            request = response.request
        except RuntimeError:
            request = None
        return cls(
            status_code=response.status_code,
            data=response.content,
            request=request,
            response=response,
        )

    @property
    def description(self) -> str:
        return f"Status Code: {self.status_code}, Data Length: {len(self.data)}"

    def __str__(self) -> str:
        return self.description

    def __repr__(self) -> str:
        preview = self.data[:64]
        suffix = "..." if len(self.data) > len(preview) else ""
        return f"<Response [{self.status_code}] {preview!r}{suffix}>"

    # Status code filters

    def filter_status_code_range(self, low: int, high: int) -> Response:
        """Return self if ``low <= status_code <= high``.

        Raises:
            StatusCodeError: If the status code is outside the closed range.
        """
        if not low <= self.status_code <= high:
            raise StatusCodeError(self, accepted=f"{low}...{high}")
        return self

    def filter_status_codes(self, status_codes: range) -> Response:
        """Return self if the status code is in ``status_codes``.

        ``range`` is half-open, so ``range(200, 300)`` accepts 200 to 299.

        Raises:
            StatusCodeError: If the status code is not in the range.
        """
        if self.status_code not in status_codes:
            raise StatusCodeError(
                self, accepted=f"{status_codes.start}..<{status_codes.stop}"
            )
        return self

    def filter_status_code(self, status_code: int) -> Response:
        """Return self if the status code equals ``status_code``."""
        return self.filter_status_code_range(status_code, status_code)

    def filter_successful_status_codes(self) -> Response:
        """Return self if the status code is in 200...299."""
        return self.filter_status_code_range(*SUCCESS_CODES)

    def filter_successful_status_and_redirect_codes(self) -> Response:
        """Return self if the status code is in 200...399."""
        return self.filter_status_code_range(*SUCCESS_AND_REDIRECT_CODES)

    # Payload mappers

    def map_image(self) -> Image:
        """Decode the payload into a Pillow image.

        Requires the ``vision`` extra.

        Raises:
            ImageMappingError: If the payload is not a decodable image.
        """
        require_extra("vision")
        from PIL import Image as PILImage

        try:
            image = PILImage.open(io.BytesIO(self.data))
            image.load()
        except Exception as e:
            raise ImageMappingError(self, cause=e) from e
        return image

    def map_json(self, fails_on_empty_data: bool = True) -> Any:
        """Parse the payload as JSON.

        Top-level scalars are accepted. An empty payload returns ``None``
        when ``fails_on_empty_data`` is False.

        Raises:
            JsonMappingError: If the payload is empty (and not tolerated) or malformed.
        """
        try:
            return json.loads(self.data, parse_constant=_reject_constant)
        except ValueError as e:
            if not self.data and not fails_on_empty_data:
                return None
            raise JsonMappingError(self, empty=not self.data, cause=e) from e

    def map_string(self, key_path: str | None = None) -> str:
        """Decode the payload, or the string at ``key_path``, as text.

        Args:
            key_path: Optional key path into the JSON payload

        Raises:
            StringMappingError: If the bytes are not valid text, or the key
                path does not lead to a string.
            JsonMappingError: If a key path is given and the payload is not JSON.
        """
        settings = get_settings()

        if key_path is not None:
            obj = self.map_json()
            value = value_at_key_path(obj, key_path, settings.key_path_separator)
            if not isinstance(value, str):
                raise StringMappingError(self, reason="key_path", key_path=key_path)
            return value

        try:
            return self.data.decode(settings.string_encoding)
        except UnicodeDecodeError as e:
            raise StringMappingError(self, reason="encoding", cause=e) from e

    def map_object(
        self,
        type_: type[T],
        key_path: str | None = None,
        decoder: StructuredDecoder | None = None,
        fails_on_empty_data: bool = True,
    ) -> T:
        """Decode the payload, or the value at ``key_path``, into ``type_``.

        Args:
            type_: Target type
            key_path: Optional key path into the JSON payload
            decoder: Structured decoder (default: the shared ``PydanticDecoder``)
            fails_on_empty_data: When False, an empty payload (or a missing
                key path) decodes from ``{}`` or ``[{}]`` if the type accepts it

        Raises:
            JsonMappingError: If a key path is given and cannot be resolved.
            ObjectMappingError: If the decoder rejects the data.
        """
        if decoder is None:
            decoder = default_decoder()
        json_data = self.data

        if key_path is not None:
            obj = self.map_json(fails_on_empty_data=fails_on_empty_data)
            value = value_at_key_path(obj, key_path, get_settings().key_path_separator)
            if value is not MISSING:
                json_data = json.dumps(value).encode()
            elif fails_on_empty_data:
                raise JsonMappingError(self, key_path=key_path)

        if not json_data and not fails_on_empty_data:
            for fallback in _EMPTY_FALLBACKS:
                try:
                    return decoder.decode(type_, fallback)
                except Exception:
                    continue

        try:
            return decoder.decode(type_, json_data)
        except Exception as e:
            raise ObjectMappingError(
                self, e, target=getattr(type_, "__name__", repr(type_))
            ) from e
