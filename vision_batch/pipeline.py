"""PipelineController — sequential analyze → record → pace loop over one batch."""
import asyncio
import logging
from collections.abc import Sequence
from typing import Awaitable, Callable

from vision_batch.access.client import AccessUrlIssuer
from vision_batch.config import Config
from vision_batch.constants import (
    MSG_ANALYSIS_FAILED,
    MSG_ANALYZING,
    MSG_BATCH_DONE,
    MSG_BATCH_STARTING,
    MSG_ISSUANCE_FAILED,
    MSG_NO_ISSUER,
    MSG_PACING,
    MSG_PERSIST_FAILED,
    MSG_RECORDED,
)
from vision_batch.models import (
    AccessIssuanceFailed,
    AnalysisFailed,
    AnalysisResult,
    BatchReport,
    BlobLocation,
    ImageReference,
    ImageSource,
    PersistenceFailed,
    log_label,
)
from vision_batch.pacing import PacingPolicy
from vision_batch.sink import ResultSink, format_record
from vision_batch.vision.client import VisionClient

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class PipelineController:
    """Drives one batch run. The only holder of cross-item state."""

    def __init__(
        self,
        config: Config,
        vision_client: VisionClient,
        sink: ResultSink,
        pacing: PacingPolicy,
        issuer: AccessUrlIssuer | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._config = config
        self._vision = vision_client
        self._sink = sink
        self._pacing = pacing
        self._issuer = issuer
        self._sleep = sleep

    async def run(self, items: Sequence[ImageSource]) -> BatchReport:
        # Initialization failure is fatal: nothing could be persisted.
        self._sink.initialize()
        logger.info(MSG_BATCH_STARTING, len(items), self._sink.path)

        report = BatchReport()
        total = len(items)
        for index, item in enumerate(items, start=1):
            logger.info(MSG_ANALYZING, index, total, log_label(item))
            await self._process(item, report)
            match (index < total, self._config.pace_after_last):
                case (True, _) | (_, True):
                    await self._pace()
                case _:
                    pass

        logger.info(MSG_BATCH_DONE, len(report.recorded), report.skipped)
        return report

    async def _process(self, item: ImageSource, report: BatchReport) -> None:
        label = log_label(item)
        match self._resolve(item):
            case AccessIssuanceFailed() as failure:
                logger.warning(MSG_ISSUANCE_FAILED, failure.reference, failure.cause)
                report.failures.append(failure)
                return
            case ref:
                pass

        match await self._vision.analyze(ref):
            case AnalysisFailed() as failure:
                logger.warning(MSG_ANALYSIS_FAILED, label, failure.cause)
                report.failures.append(failure)
            case AnalysisResult() as result:
                self._record(ref, label, result, report)

    def _resolve(self, item: ImageSource) -> ImageReference | AccessIssuanceFailed:
        match (item, self._issuer):
            case (BlobLocation(), None):
                return AccessIssuanceFailed(
                    reference=str(item), cause=RuntimeError(MSG_NO_ISSUER)
                )
            case (BlobLocation(), issuer):
                return issuer.issue(item)
            case _:
                return item

    def _record(
        self, ref: ImageReference, label: str, result: AnalysisResult, report: BatchReport
    ) -> None:
        match self._sink.append(ref, format_record(ref, result)):
            case PersistenceFailed() as failure:
                logger.error(MSG_PERSIST_FAILED, label, failure.cause)
                report.failures.append(failure)
            case None:
                logger.info(MSG_RECORDED, label, result.face_count, len(result.tags))
                report.recorded.append(ref)

    async def _pace(self) -> None:
        seconds = self._pacing.delay()
        logger.debug(MSG_PACING, seconds)
        await self._sleep(seconds)
