import pytest

from cloudinary_api.core.config import Settings
from cloudinary_api.services.storage import ObjectStoragePresigner, split_s3_reference


def test_split_s3_reference():
    assert split_s3_reference("s3://bucket/path/to/cat.png") == ("bucket", "path/to/cat.png")


@pytest.mark.parametrize("reference", ["s3://bucket", "s3://bucket/", "s3:/bucket/key", "gs://bucket/key"])
def test_split_s3_reference_rejects_malformed(reference):
    with pytest.raises(ValueError):
        split_s3_reference(reference)


def test_presigner_signs_get_url_offline():
    settings = Settings(
        _env_file=None,
        s3_access_key="test",
        s3_secret_key="test-secret",
        s3_region="us-east-1",
        s3_presigned_ttl=600,
    )
    url = ObjectStoragePresigner(settings).create_presigned_get("s3://bucket/cat.png")

    assert url.startswith("https://")
    assert "cat.png" in url
    assert "X-Amz-Expires=600" in url
    assert "test-secret" not in url
