"""Tests for the artifact store (S3 upload and offline mode)."""
from unittest.mock import MagicMock, patch

import pytest

from app.services import storage_service
from app.services.storage_service import StorageService, StorageUploadError

BASE_URL = "https://files.test/certificates"


class TestS3Backend:
    def test_upload_uses_public_read_acl(self):
        client = MagicMock()
        svc = StorageService(bucket="bucket", public_url_base=BASE_URL, client=client)

        result = svc.upload_bytes(b"%PDF-data", "u1.pdf")

        client.put_object.assert_called_once_with(
            Bucket="bucket",
            Key="u1.pdf",
            Body=b"%PDF-data",
            ContentType="application/pdf",
            ACL="public-read",
        )
        assert result.key == "u1.pdf"
        assert result.url == f"{BASE_URL}/u1.pdf"
        assert result.size_bytes == len(b"%PDF-data")
        assert len(result.content_hash) == 64
        assert result.backend == "s3"

    def test_private_upload_has_no_acl(self):
        client = MagicMock()
        svc = StorageService(bucket="bucket", public_url_base=BASE_URL, client=client)

        svc.upload_bytes(b"x", "u1.pdf", public=False)

        assert "ACL" not in client.put_object.call_args.kwargs

    def test_upload_error_is_raised(self):
        client = MagicMock()
        client.put_object.side_effect = RuntimeError("AccessDenied")
        svc = StorageService(bucket="bucket", public_url_base=BASE_URL, client=client)

        with pytest.raises(StorageUploadError, match="AccessDenied"):
            svc.upload_bytes(b"x", "u1.pdf")

    def test_client_built_from_credentials(self):
        svc = StorageService(
            bucket="bucket",
            public_url_base=BASE_URL,
            region_name="sa-east-1",
            endpoint_url="http://localhost:4569",
            access_key="S3RVER",
            secret_key="S3RVER",
        )
        with patch.object(storage_service.boto3, "client") as boto_client:
            svc.upload_bytes(b"x", "u1.pdf")

        boto_client.assert_called_once_with(
            "s3",
            region_name="sa-east-1",
            endpoint_url="http://localhost:4569",
            aws_access_key_id="S3RVER",
            aws_secret_access_key="S3RVER",
        )

    def test_public_url_strips_trailing_slash(self):
        svc = StorageService(bucket="bucket", public_url_base=BASE_URL + "/")
        assert svc.get_public_url("u1.pdf") == f"{BASE_URL}/u1.pdf"

    def test_health_check_unhealthy_when_bucket_missing(self):
        client = MagicMock()
        client.head_bucket.side_effect = RuntimeError("NoSuchBucket")
        svc = StorageService(bucket="bucket", public_url_base=BASE_URL, client=client)

        status = svc.health_check()

        assert status["status"] == "unhealthy"
        assert status["backend"] == "s3"
        assert "NoSuchBucket" in status["error"]


class TestOfflineBackend:
    def test_offline_writes_to_disk_without_boto3(self, tmp_path):
        svc = StorageService(
            bucket="bucket",
            public_url_base=BASE_URL,
            offline=True,
            local_root=str(tmp_path),
        )

        with patch.object(storage_service.boto3, "client") as boto_client:
            result = svc.upload_bytes(b"%PDF-offline", "u1.pdf")

        boto_client.assert_not_called()
        assert (tmp_path / "u1.pdf").read_bytes() == b"%PDF-offline"
        assert result.backend == "local"
        assert result.url == str(tmp_path.resolve() / "u1.pdf")

    def test_offline_overwrites_previous_artifact(self, tmp_path):
        svc = StorageService(
            bucket="bucket",
            public_url_base=BASE_URL,
            offline=True,
            local_root=str(tmp_path),
        )

        svc.upload_bytes(b"first", "u1.pdf")
        svc.upload_bytes(b"second", "u1.pdf")

        assert (tmp_path / "u1.pdf").read_bytes() == b"second"

    def test_offline_rejects_key_escaping_root(self, tmp_path):
        svc = StorageService(
            bucket="bucket",
            public_url_base=BASE_URL,
            offline=True,
            local_root=str(tmp_path / "storage"),
        )

        with pytest.raises(StorageUploadError, match="outside"):
            svc.upload_bytes(b"%PDF-x", "../escaped.pdf")

        assert not (tmp_path / "escaped.pdf").exists()

    def test_offline_rejects_absolute_key(self, tmp_path):
        svc = StorageService(
            bucket="bucket",
            public_url_base=BASE_URL,
            offline=True,
            local_root=str(tmp_path / "storage"),
        )
        absolute_key = f"{tmp_path / 'abs'}.pdf"

        with pytest.raises(StorageUploadError, match="outside"):
            svc.upload_bytes(b"%PDF-x", absolute_key)

        assert not (tmp_path / "abs.pdf").exists()

    def test_offline_allows_nested_key_inside_root(self, tmp_path):
        svc = StorageService(
            bucket="bucket",
            public_url_base=BASE_URL,
            offline=True,
            local_root=str(tmp_path),
        )

        svc.upload_bytes(b"%PDF-x", "2024/x.pdf")

        assert (tmp_path / "2024" / "x.pdf").read_bytes() == b"%PDF-x"

    def test_offline_health_check(self, tmp_path):
        svc = StorageService(
            bucket="bucket",
            public_url_base=BASE_URL,
            offline=True,
            local_root=str(tmp_path / "out"),
        )

        status = svc.health_check()

        assert status["status"] == "healthy"
        assert status["backend"] == "local"
        assert (tmp_path / "out").is_dir()
