import base64
from datetime import datetime, timezone
from urllib.parse import parse_qs, urlsplit

from unittest.mock import patch

from vision_batch.access.azure_blob import BlobSasIssuer
from vision_batch.access.client import AccessUrlIssuer
from vision_batch.models import AccessIssuanceFailed, BlobLocation

ACCOUNT_KEY = base64.b64encode(b"not-a-real-storage-key").decode()
ISSUED_AT = datetime(2026, 10, 19, 8, 0, 0, tzinfo=timezone.utc)


def make_issuer(**kwargs) -> BlobSasIssuer:
    return BlobSasIssuer("myaccount", ACCOUNT_KEY, clock=lambda: ISSUED_AT, **kwargs)


def test_blob_sas_issuer_implements_abc():
    assert issubclass(BlobSasIssuer, AccessUrlIssuer)


def test_issue_points_at_blob():
    url = make_issuer().issue(BlobLocation("photos", "cat.jpg"))

    parts = urlsplit(url)
    assert parts.scheme == "https"
    assert parts.netloc == "myaccount.blob.core.windows.net"
    assert parts.path == "/photos/cat.jpg"


def test_issue_is_read_only():
    url = make_issuer().issue(BlobLocation("photos", "cat.jpg"))

    query = parse_qs(urlsplit(url).query)
    assert query["sp"] == ["r"]
    assert "sig" in query


def test_issue_valid_for_one_hour_by_default():
    url = make_issuer().issue(BlobLocation("photos", "cat.jpg"))

    query = parse_qs(urlsplit(url).query)
    assert query["st"] == ["2026-10-19T08:00:00Z"]
    assert query["se"] == ["2026-10-19T09:00:00Z"]


def test_issue_honours_custom_ttl():
    url = make_issuer(ttl_seconds=600).issue(BlobLocation("photos", "cat.jpg"))

    assert parse_qs(urlsplit(url).query)["se"] == ["2026-10-19T08:10:00Z"]


def test_issue_bad_key_reports_failure():
    issuer = BlobSasIssuer("myaccount", "abc", clock=lambda: ISSUED_AT)

    result = issuer.issue(BlobLocation("photos", "cat.jpg"))

    assert isinstance(result, AccessIssuanceFailed)
    assert result.reference == "photos/cat.jpg"
    assert isinstance(result.cause, ValueError)


def test_issue_sdk_error_reports_failure():
    with patch(
        "vision_batch.access.azure_blob.generate_blob_sas",
        side_effect=TypeError("bad permission"),
    ):
        result = make_issuer().issue(BlobLocation("photos", "cat.jpg"))

    assert isinstance(result, AccessIssuanceFailed)
    assert isinstance(result.cause, TypeError)
