"""BlobSasIssuer — read-only SAS URLs for Azure Blob Storage."""
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from azure.core.exceptions import AzureError
from azure.storage.blob import BlobClient, BlobSasPermissions, generate_blob_sas

from vision_batch.access.client import AccessUrlIssuer
from vision_batch.constants import BLOB_ACCOUNT_URL, MSG_SAS_ISSUED, SAS_TTL_SECONDS
from vision_batch.models import AccessIssuanceFailed, BlobLocation, ImageReference

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BlobSasIssuer(AccessUrlIssuer):
    """Signs with the storage account key; the URL is valid from issuance for ttl_seconds."""

    def __init__(
        self,
        account_name: str,
        account_key: str,
        ttl_seconds: int = SAS_TTL_SECONDS,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._account_name = account_name
        self._account_key = account_key
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock

    def issue(self, location: BlobLocation) -> ImageReference | AccessIssuanceFailed:
        starts_on = self._clock()
        try:
            blob_client = BlobClient(
                account_url=BLOB_ACCOUNT_URL % self._account_name,
                container_name=location.container,
                blob_name=location.blob,
            )
            sas_token = generate_blob_sas(
                account_name=self._account_name,
                container_name=location.container,
                blob_name=location.blob,
                account_key=self._account_key,
                permission=BlobSasPermissions(read=True),
                start=starts_on,
                expiry=starts_on + self._ttl,
            )
        except (AzureError, ValueError, TypeError) as exc:
            return AccessIssuanceFailed(reference=str(location), cause=exc)
        logger.debug(MSG_SAS_ISSUED, location, int(self._ttl.total_seconds()))
        return f"{blob_client.url}?{sas_token}"
