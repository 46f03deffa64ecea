import asyncio
import logging
import mimetypes
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from cloudinary_api.core.errors import InvalidAssetError

logger = logging.getLogger(__name__)


class SourceKind(str, Enum):
    LOCAL_PATH = "local_path"
    S3 = "s3"
    GS = "gs"
    REMOTE_URL = "remote_url"

    @classmethod
    def from_reference(cls, reference: str) -> "SourceKind":
        if reference.startswith("/"):
            return cls.LOCAL_PATH
        if reference.startswith("s3"):
            return cls.S3
        if reference.startswith("gs"):
            return cls.GS
        return cls.REMOTE_URL


@dataclass(frozen=True, slots=True)
class LocalAsset:
    filename: str
    data: bytes
    content_type: str


class LocalFileStore:
    """Reads local assets relative to a root directory (the working directory by default)."""

    def __init__(self, root: str | Path | None = None, max_bytes: int | None = None) -> None:
        self.base_path = Path(root if root is not None else os.getcwd()).resolve()
        self.max_bytes = max_bytes

    def _key_path(self, reference: str) -> Path:
        # "/tmp/cat.png" maps to <root>/tmp/cat.png; never outside the root.
        try:
            candidate = self.base_path.joinpath(*Path(reference.lstrip("/")).parts).resolve()
        except (OSError, ValueError) as exc:
            raise InvalidAssetError(f"invalid asset path: {exc}", path=reference) from None
        if not candidate.is_relative_to(self.base_path):
            raise InvalidAssetError("asset path escapes the upload root", path=reference)
        return candidate

    async def read(self, reference: str) -> LocalAsset:
        path = self._key_path(reference)

        def _read() -> bytes:
            try:
                if path.is_dir():
                    raise InvalidAssetError(
                        "the asset to upload can't be a directory", path=reference
                    )
                size = path.stat().st_size
                if self.max_bytes is not None and size > self.max_bytes:
                    raise InvalidAssetError(
                        f"asset too large: {size} > {self.max_bytes} bytes", path=reference
                    )
                return path.read_bytes()
            except FileNotFoundError:
                raise InvalidAssetError("asset not found", path=reference) from None
            except OSError as exc:
                raise InvalidAssetError(f"cannot read asset: {exc.strerror}", path=reference) from None
            except ValueError as exc:
                raise InvalidAssetError(f"cannot read asset: {exc}", path=reference) from None

        data = await asyncio.to_thread(_read)
        logger.debug("Read %d bytes from %s", len(data), path)
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        return LocalAsset(filename=path.name, data=data, content_type=content_type)
