import json
import mimetypes
from collections.abc import Mapping
from typing import Any
from uuid import uuid4

import httpx
from pydantic import BaseModel

from cloudinary_api.core.errors import ConfigurationError, RequestBuildError
from cloudinary_api.core.security import to_form_value
from cloudinary_api.core.urls import sanitize_url

USER_AGENT = "cloudinary-api-python/0.1"


def _plain(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_unset=True, exclude_none=True)
    return value


def encode_json(body: Any) -> bytes:
    # Non-ASCII text is written as UTF-8 rather than \u escapes.
    try:
        return json.dumps(_plain(body), ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise RequestBuildError(f"request body is not JSON serializable: {exc}") from exc


class MultipartForm:
    """Accumulates form fields and file parts under a fixed boundary."""

    def __init__(self, boundary: str | None = None) -> None:
        self.boundary = boundary or uuid4().hex
        self.fields: dict[str, str] = {}
        self.files: dict[str, tuple[str, bytes, str]] = {}

    @property
    def content_type(self) -> str:
        return f"multipart/form-data; boundary={self.boundary}"

    def add_field(self, name: str, value: Any) -> None:
        self.fields[name] = to_form_value(value)

    def add_fields(self, params: Mapping[str, Any]) -> None:
        for name, value in params.items():
            if value is not None:
                self.add_field(name, value)

    def add_file(
        self, name: str, filename: str, data: bytes, content_type: str | None = None
    ) -> None:
        ct = content_type or mimetypes.guess_type(filename)[0] or "application/octet-stream"
        self.files[name] = (filename, data, ct)


class RequestBuilder:
    def __init__(self, base_url: str | httpx.URL, headers: Mapping[str, str] | None = None) -> None:
        self.base_url = base_url
        self.headers = {"User-Agent": USER_AGENT, **(headers or {})}

    @property
    def base_url(self) -> httpx.URL:
        return self._base_url

    @base_url.setter
    def base_url(self, value: str | httpx.URL) -> None:
        try:
            self._base_url = httpx.URL(value)
        except httpx.InvalidURL as exc:
            raise ConfigurationError(f"invalid base URL: {exc}") from None

    def resolve(self, path: str) -> httpx.URL:
        if not self._base_url.path.endswith("/"):
            raise ConfigurationError(
                f"base URL must have a trailing slash, but {sanitize_url(self._base_url)!r} does not"
            )
        try:
            return self._base_url.join(path)
        except httpx.InvalidURL as exc:
            raise RequestBuildError(f"cannot resolve path {path!r}: {exc}") from exc

    def build(
        self,
        method: str,
        path: str,
        body: Any = None,
        *,
        params: Mapping[str, Any] | BaseModel | None = None,
    ) -> httpx.Request:
        """Build a request for ``path`` relative to the base URL.

        ``body``, when given, is sent as JSON; pydantic models are dumped by
        wire name with unset fields left out. ``params`` become the query
        string with the same filtering.
        """
        url = self.resolve(path)
        if params is not None:
            query = {k: to_form_value(v) for k, v in _plain(params).items() if v is not None}
            url = url.copy_merge_params(query)

        headers = dict(self.headers)
        content = None
        if body is not None:
            content = encode_json(body)
            headers["Content-Type"] = "application/json"

        return httpx.Request(method.upper(), url, headers=headers, content=content)

    def build_multipart(self, path: str, form: MultipartForm) -> httpx.Request:
        url = self.resolve(path)
        # httpx falls back to urlencoding when there is no file part.
        if not form.files:
            raise RequestBuildError("multipart form has no file part")
        headers = {**self.headers, "Content-Type": form.content_type}
        return httpx.Request(
            "POST",
            url,
            headers=headers,
            data=form.fields,
            files=form.files,
        )
