from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class UploadRequest(BaseModel):
    file: str = Field(..., min_length=1)
    upload_preset: str = Field(..., min_length=1)
    # Replaced with a fresh value whenever the request is signed.
    timestamp: int | None = None

    def wire_params(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class UploadOptions(BaseModel):
    """Optional upload parameters.

    A field left as ``None`` is unset and never reaches the wire; the API
    treats "not provided" differently from ``false`` or ``""``.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    # Naming and storage
    public_id: str | None = None
    folder: str | None = None
    use_filename: bool | None = None
    unique_filename: bool | None = None
    resource_type: str | None = None
    type: str | None = None
    access_mode: str | None = None
    discard_original_filename: bool | None = None
    overwrite: bool | None = None

    # Resource data
    tags: str | None = None
    context: str | None = None
    colors: bool | None = None
    faces: bool | None = None
    quality_analysis: bool | None = None
    image_metadata: bool | None = None
    phash: bool | None = None
    auto_tagging: float | None = None
    categorization: str | None = None
    detection: str | None = None
    ocr: str | None = None
    exif: bool | None = None

    # Manipulations
    eager: str | None = None
    eager_async: bool | None = None
    eager_notification_url: str | None = None
    transformation: str | None = None
    format: str | None = None
    custom_coordinates: str | None = None
    face_coordinates: str | None = None
    background_removal: str | None = None
    raw_convert: str | None = None

    # Additional options
    allowed_formats: str | None = None
    async_: bool | None = Field(default=None, alias="async")
    backup: bool | None = None
    callback: str | None = None
    headers: str | None = None
    invalidate: bool | None = None
    moderation: str | None = None
    proxy: str | None = None
    return_delete_token: bool | None = None

    def wire_params(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)


class UploadResponse(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    public_id: str = ""
    version: int = 0
    signature: str = ""
    width: int = 0
    height: int = 0
    format: str = ""
    resource_type: str = ""
    created_at: str = ""
    tags: list[str] = Field(default_factory=list)
    bytes: int = 0
    type: str = ""
    etag: str = ""
    placeholder: bool = False
    url: str = ""
    secure_url: str = ""
    access_mode: str = ""
    original_filename: str = ""
