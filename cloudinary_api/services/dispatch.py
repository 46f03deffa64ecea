from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, NoReturn, Protocol

import httpx
from pydantic import TypeAdapter, ValidationError

from cloudinary_api.core.errors import ApiError, ResponseDecodeError, TransportError
from cloudinary_api.core.urls import sanitize_url, scrub
from cloudinary_api.schemas.error import ErrorEnvelope

logger = logging.getLogger(__name__)


class ByteSink(Protocol):
    def write(self, data: bytes, /) -> Any: ...


@dataclass(frozen=True, slots=True)
class StreamTo:
    """Copy the raw response body into ``sink``."""

    sink: ByteSink


@dataclass(frozen=True, slots=True)
class DecodeInto:
    """JSON-decode the response body as ``target`` (a model class or any type pydantic accepts)."""

    target: Any


Destination = StreamTo | DecodeInto


@lru_cache(maxsize=64)
def _adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


@dataclass
class ApiResponse:
    raw: httpx.Response
    data: Any = None

    @property
    def status_code(self) -> int:
        return self.raw.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self.raw.headers

    @property
    def request(self) -> httpx.Request:
        return self.raw.request

    @property
    def url(self) -> str:
        return sanitize_url(self.raw.request.url)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code <= 299


async def check_response(response: ApiResponse, secrets: tuple[str, ...] = ()) -> None:
    """Raise ApiError when the status is outside 200-299.

    Error bodies are expected to be empty or to match ErrorEnvelope; any
    other body, including one whose content encoding is broken, is ignored
    and the error carries only the status.
    """
    if response.is_success:
        return

    try:
        body = await response.raw.aread()
    except httpx.DecodingError:
        logger.debug("Undecodable error body from %s", response.url)
        body = b""
    envelope = ErrorEnvelope()
    if body.strip():
        try:
            envelope = ErrorEnvelope.model_validate_json(body)
        except ValidationError:
            logger.debug("Unparseable error body from %s", response.url)

    raise ApiError(
        response,
        message=scrub(envelope.error.message, secrets),
        documentation_url=envelope.documentation_url,
    )


class Dispatcher:
    def __init__(self, http_client: httpx.AsyncClient, secrets: tuple[str, ...] = ()) -> None:
        self._client = http_client
        self._secrets = secrets

    async def execute(
        self,
        request: httpx.Request,
        destination: Destination | None = None,
        *,
        timeout: float | None = None,
    ) -> ApiResponse:
        """Send ``request`` and handle the response.

        Task cancellation and ``timeout`` expiry surface as
        ``asyncio.CancelledError`` / ``TimeoutError`` even when the transport
        fails at the same moment.
        """
        if timeout is None:
            return await self._execute(request, destination)
        async with asyncio.timeout(timeout):
            return await self._execute(request, destination)

    async def _execute(
        self, request: httpx.Request, destination: Destination | None
    ) -> ApiResponse:
        logger.debug("%s %s", request.method, sanitize_url(request.url))
        try:
            raw = await self._client.send(request, stream=True)
        except httpx.TransportError as exc:
            self._raise_transport_error(request, exc)

        try:
            response = ApiResponse(raw)
            try:
                await check_response(response, self._secrets)
            except ApiError as exc:
                logger.warning("API request failed: %s", exc)
                raise
            if destination is not None:
                await self._consume(response, destination)
            return response
        except httpx.TransportError as exc:
            # Connection dropped while reading the body.
            self._raise_transport_error(request, exc)
        finally:
            await raw.aclose()

    def _raise_transport_error(self, request: httpx.Request, exc: httpx.TransportError) -> NoReturn:
        task = asyncio.current_task()
        if task is not None and task.cancelling():
            raise asyncio.CancelledError() from exc
        url = sanitize_url(request.url)
        message = scrub(f"{request.method} {url}: {exc}", self._secrets)
        logger.warning("Transport failure: %s", message)
        raise TransportError(message, method=request.method, url=url) from None

    async def _consume(self, response: ApiResponse, destination: Destination) -> None:
        try:
            if isinstance(destination, StreamTo):
                async for chunk in response.raw.aiter_bytes():
                    destination.sink.write(chunk)
                return
            body = await response.raw.aread()
        except httpx.DecodingError as exc:
            raise ResponseDecodeError(
                scrub(f"cannot decode response from {response.url}: {exc}", self._secrets),
                status_code=response.status_code,
                url=response.url,
            ) from None

        if not body.strip():
            # Empty acknowledgements (202/204) are valid.
            return
        try:
            response.data = _adapter(destination.target).validate_json(body)
        except ValidationError as exc:
            raise ResponseDecodeError(
                f"cannot decode response from {response.url}: {exc.error_count()} error(s)",
                status_code=response.status_code,
                url=response.url,
            ) from None
