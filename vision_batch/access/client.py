"""AccessUrlIssuer — abstract base for signed-URL backends."""
from abc import ABC, abstractmethod

from vision_batch.models import AccessIssuanceFailed, BlobLocation, ImageReference


class AccessUrlIssuer(ABC):
    @abstractmethod
    def issue(self, location: BlobLocation) -> ImageReference | AccessIssuanceFailed:
        """Return a time-bounded, read-only URL for a private blob."""
        ...
