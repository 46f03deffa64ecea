from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable, NamedTuple

import httpx

from cloudinary_api.core.errors import InvalidAssetError, UnsupportedSourceError
from cloudinary_api.schemas import UploadOptions, UploadRequest, UploadResponse
from cloudinary_api.services.dispatch import ApiResponse, DecodeInto
from cloudinary_api.services.requests import MultipartForm
from cloudinary_api.services.sources import SourceKind

if TYPE_CHECKING:
    from cloudinary_api.client import Client

logger = logging.getLogger(__name__)


class UploadResult(NamedTuple):
    asset: UploadResponse
    # None when no request was sent (object-storage stub).
    response: ApiResponse | None


Strategy = Callable[[str, UploadRequest, UploadOptions, float | None], Awaitable[UploadResult]]


class UploadService:
    def __init__(self, client: Client) -> None:
        self.client = client
        self._strategies: dict[SourceKind, Strategy] = {
            SourceKind.LOCAL_PATH: self._upload_from_local_path,
            SourceKind.S3: self._upload_from_object_storage,
            SourceKind.GS: self._upload_from_object_storage,
            SourceKind.REMOTE_URL: self._upload_from_url,
        }

    async def upload(
        self,
        request: UploadRequest,
        options: UploadOptions | None = None,
        *,
        resource_type: str | None = None,
        timeout: float | None = None,
    ) -> UploadResult:
        """Upload ``request.file`` to ``<resource_type>/upload``.

        ``resource_type`` defaults to ``options.resource_type`` and then to
        ``"image"``; the keyword wins when both are given.

        The transport is picked once from the shape of the file reference:
        a leading ``/`` reads a local file and posts it as multipart, ``s3``
        and ``gs`` references go through the object-storage handling, and
        anything else is posted as JSON for the server to fetch.
        """
        options = options or UploadOptions()
        path = f"{resource_type or options.resource_type or 'image'}/upload"
        kind = SourceKind.from_reference(request.file)
        logger.info("Uploading %s source to %s", kind.value, path)
        return await self._strategies[kind](path, request, options, timeout)

    async def upload_image(
        self,
        request: UploadRequest,
        options: UploadOptions | None = None,
        *,
        timeout: float | None = None,
    ) -> UploadResult:
        return await self.upload(request, options, resource_type="image", timeout=timeout)

    def _params(self, request: UploadRequest, options: UploadOptions) -> dict[str, Any]:
        return {**options.wire_params(), **request.wire_params()}

    async def _send(self, http_request: httpx.Request, timeout: float | None) -> UploadResult:
        response = await self.client.execute(
            http_request, DecodeInto(UploadResponse), timeout=timeout
        )
        asset = response.data if response.data is not None else UploadResponse()
        return UploadResult(asset, response)

    async def _upload_from_url(
        self,
        path: str,
        request: UploadRequest,
        options: UploadOptions,
        timeout: float | None,
    ) -> UploadResult:
        payload = self.client.sign(self._params(request, options))
        http_request = self.client.build_request("POST", path, payload)
        return await self._send(http_request, timeout)

    async def _upload_from_local_path(
        self,
        path: str,
        request: UploadRequest,
        options: UploadOptions,
        timeout: float | None,
    ) -> UploadResult:
        asset = await self.client.files.read(request.file)

        params = self._params(request, options)
        params.pop("file")
        form = MultipartForm()
        form.add_fields(self.client.sign(params))
        form.add_file("file", asset.filename, asset.data, asset.content_type)

        http_request = self.client.build_upload_request(path, form)
        return await self._send(http_request, timeout)

    async def _upload_from_object_storage(
        self,
        path: str,
        request: UploadRequest,
        options: UploadOptions,
        timeout: float | None,
    ) -> UploadResult:
        kind = SourceKind.from_reference(request.file)
        mode = self.client.settings.object_storage_mode

        if mode == "reject":
            raise UnsupportedSourceError(
                f"{kind.value} uploads are disabled", reference=request.file
            )
        if mode == "stub":
            logger.warning(
                "%s uploads are not implemented; returning an empty result", kind.value
            )
            return UploadResult(UploadResponse(), None)

        if kind is SourceKind.S3 and self.client.settings.s3_presign:
            try:
                url = self.client.presigner.create_presigned_get(request.file)
            except ValueError as exc:
                raise InvalidAssetError(str(exc), path=request.file) from None
            request = request.model_copy(update={"file": url})
        return await self._upload_from_url(path, request, options, timeout)
