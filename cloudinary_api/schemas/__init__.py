from cloudinary_api.schemas.error import ErrorDetail, ErrorEnvelope
from cloudinary_api.schemas.upload import UploadOptions, UploadRequest, UploadResponse

__all__ = [
    "ErrorDetail",
    "ErrorEnvelope",
    "UploadRequest",
    "UploadOptions",
    "UploadResponse",
]
