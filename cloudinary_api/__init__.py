from cloudinary_api.client import Client
from cloudinary_api.core.config import Credentials, Settings, get_settings, parse_cloudinary_url
from cloudinary_api.core.errors import (
    ApiError,
    CloudinaryError,
    ConfigurationError,
    InvalidAssetError,
    RequestBuildError,
    ResponseDecodeError,
    TransportError,
    UnsupportedSourceError,
)
from cloudinary_api.core.urls import sanitize_url
from cloudinary_api.schemas import UploadOptions, UploadRequest, UploadResponse
from cloudinary_api.services.dispatch import ApiResponse, DecodeInto, StreamTo, check_response
from cloudinary_api.services.sources import SourceKind
from cloudinary_api.services.upload import UploadResult

__all__ = [
    "Client",
    "Credentials",
    "Settings",
    "get_settings",
    "parse_cloudinary_url",
    "CloudinaryError",
    "ConfigurationError",
    "RequestBuildError",
    "InvalidAssetError",
    "UnsupportedSourceError",
    "TransportError",
    "ApiError",
    "ResponseDecodeError",
    "sanitize_url",
    "UploadRequest",
    "UploadOptions",
    "UploadResponse",
    "UploadResult",
    "ApiResponse",
    "StreamTo",
    "DecodeInto",
    "check_response",
    "SourceKind",
]
