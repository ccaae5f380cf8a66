"""AzureVisionClient — Azure Computer Vision "Analyze Image" backend."""
import logging
from typing import Any

import httpx

from vision_batch.constants import (
    NO_DESCRIPTION,
    VISION_ANALYZE_PATH,
    VISION_API_VERSION,
    VISION_FEATURES,
    VISION_FEATURES_PARAM,
    VISION_KEY_HEADER,
    VISION_TIMEOUT_SECONDS,
)
from vision_batch.models import AnalysisFailed, AnalysisResult, ImageReference, log_label
from vision_batch.vision.client import VisionClient

logger = logging.getLogger(__name__)

# Raised while decoding or walking a body that does not match the schema.
_MALFORMED = (ValueError, KeyError, TypeError, AttributeError)


def _require(value: Any, kind: type, field: str) -> Any:
    if not isinstance(value, kind):
        raise TypeError(f"{field} must be {kind.__name__}, got {type(value).__name__}")
    return value


def parse_analysis(payload: dict[str, Any]) -> AnalysisResult:
    """Map a v3.1 analyze response onto an AnalysisResult. Raises on malformed bodies."""
    match _require(payload["description"]["captions"], list, "captions"):
        case []:
            description = NO_DESCRIPTION
        case [first, *_]:
            match first.get("text"):
                case None | "":
                    description = NO_DESCRIPTION
                case text:
                    description = _require(text, str, "caption text")
    return AnalysisResult(
        description=description,
        face_count=len(_require(payload["faces"], list, "faces")),
        tags=tuple(
            _require(tag["name"], str, "tag name")
            for tag in _require(payload["tags"], list, "tags")
        ),
    )


class AzureVisionClient(VisionClient):
    """Single round trip per image requesting description, faces and tags together."""

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        api_version: str = VISION_API_VERSION,
        features: str = VISION_FEATURES,
        timeout: float = VISION_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = endpoint.rstrip("/") + VISION_ANALYZE_PATH % api_version
        self._api_key = api_key
        self._features = features
        self._timeout = timeout
        self._transport = transport

    async def analyze(self, ref: ImageReference) -> AnalysisResult | AnalysisFailed:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self._url,
                    params={VISION_FEATURES_PARAM: self._features},
                    headers={VISION_KEY_HEADER: self._api_key},
                    json={"url": ref},
                )
                response.raise_for_status()
                return parse_analysis(response.json())
        except httpx.HTTPError as exc:
            logger.debug("Vision request failed for %s: %r", log_label(ref), exc)
            return AnalysisFailed(reference=ref, cause=exc)
        except _MALFORMED as exc:
            logger.debug("Malformed vision response for %s: %r", log_label(ref), exc)
            return AnalysisFailed(reference=ref, cause=exc)
