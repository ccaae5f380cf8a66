import logging
from abc import ABC, abstractmethod
from pathlib import Path

from vision_batch.constants import (
    DEFAULT_OUTPUT_PATH,
    KEYWORD_SEPARATOR,
    MSG_SINK_INIT_FAILED,
    MSG_SINK_NOT_INITIALIZED,
    OUTPUT_ENCODING,
    RECORD_TEMPLATE,
)
from vision_batch.models import AnalysisResult, ImageReference, PersistenceFailed

logger = logging.getLogger(__name__)


def format_record(ref: ImageReference, result: AnalysisResult) -> str:
    """Textual projection of one successful analysis, blank line included."""
    return RECORD_TEMPLATE % (
        ref,
        result.description,
        str(result.has_human_face).lower(),
        result.face_count,
        KEYWORD_SEPARATOR.join(result.tags),
    )


class ResultSink(ABC):
    @property
    @abstractmethod
    def path(self) -> Path: ...

    @abstractmethod
    def initialize(self) -> None:
        """Create or empty the store. Raises on failure."""
        ...

    @abstractmethod
    def append(self, ref: ImageReference, record: str) -> PersistenceFailed | None: ...


class TextFileSink(ResultSink):
    """Append-only UTF-8 text file, emptied once at the start of every run."""

    def __init__(self, path: Path = Path(DEFAULT_OUTPUT_PATH)) -> None:
        self._path = path
        self._initialized = False

    @property
    def path(self) -> Path:
        return self._path

    def initialize(self) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, "w", encoding=OUTPUT_ENCODING):
                pass
        except OSError as e:
            logger.error(MSG_SINK_INIT_FAILED, self._path, e)
            raise
        self._initialized = True

    def append(self, ref: ImageReference, record: str) -> PersistenceFailed | None:
        match self._initialized:
            case False:
                return PersistenceFailed(
                    reference=ref, cause=RuntimeError(MSG_SINK_NOT_INITIALIZED)
                )
            case True:
                pass
        try:
            with open(self._path, "a", encoding=OUTPUT_ENCODING) as f:
                f.write(record)
        except OSError as e:
            return PersistenceFailed(reference=ref, cause=e)
        return None
