from dataclasses import dataclass, field
from typing import Union
from urllib.parse import urlsplit, urlunsplit

# Opaque locator for one image: a public URL or a signed URL.
ImageReference = str


@dataclass(frozen=True)
class BlobLocation:
    """A privately stored image that needs a signed URL before analysis."""
    container: str
    blob: str

    def __str__(self) -> str:
        return f"{self.container}/{self.blob}"


@dataclass(frozen=True)
class AnalysisResult:
    description: str
    face_count: int
    tags: tuple[str, ...]

    @property
    def has_human_face(self) -> bool:
        return self.face_count > 0


@dataclass(frozen=True)
class AnalysisFailed:
    reference: str
    cause: BaseException


@dataclass(frozen=True)
class AccessIssuanceFailed:
    reference: str
    cause: BaseException


@dataclass(frozen=True)
class PersistenceFailed:
    reference: str
    cause: BaseException


Failure = Union[AccessIssuanceFailed, AnalysisFailed, PersistenceFailed]
ImageSource = Union[ImageReference, BlobLocation]


@dataclass
class BatchReport:
    """Outcome of one run: recorded references and failures, in input order."""
    recorded: list[ImageReference] = field(default_factory=list)
    failures: list[Failure] = field(default_factory=list)

    @property
    def skipped(self) -> int:
        return len(self.failures)


def log_label(item: ImageSource) -> str:
    """Loggable name for an item; query strings (SAS signatures) are dropped."""
    match item:
        case BlobLocation():
            return str(item)
        case _:
            scheme, netloc, path, _query, _fragment = urlsplit(item)
            return urlunsplit((scheme, netloc, path, "", ""))
