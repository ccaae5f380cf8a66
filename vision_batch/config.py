from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import os
from dotenv import load_dotenv

from vision_batch.constants import (
    DEFAULT_OUTPUT_PATH,
    PACING_MAX_MS,
    PACING_MIN_MS,
    SAS_TTL_SECONDS,
    VISION_API_VERSION,
    VISION_FEATURES,
    VISION_TIMEOUT_SECONDS,
)


def _split_csv(raw: str) -> tuple[str, ...]:
    return tuple(p.strip() for p in raw.split(",") if p.strip())


def _read_url_file(path: Optional[str]) -> tuple[str, ...]:
    match path:
        case None | "":
            return ()
        case _:
            lines = Path(path).read_text(encoding="utf-8").splitlines()
            return tuple(
                line.strip()
                for line in lines
                if line.strip() and not line.strip().startswith("#")
            )


@dataclass(frozen=True)
class Config:
    vision_endpoint: str
    vision_api_key: str
    vision_api_version: str
    vision_features: str
    vision_timeout: float
    output_path: Path
    pacing_min_ms: int
    pacing_max_ms: int
    pace_after_last: bool
    image_urls: tuple[str, ...]
    blob_names: tuple[str, ...]
    storage_account_name: Optional[str]
    storage_account_key: Optional[str]
    storage_container: Optional[str]
    sas_ttl_seconds: int
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        endpoint = os.getenv("VISION_ENDPOINT")
        api_key = os.getenv("VISION_API_KEY")
        api_version = os.getenv("VISION_API_VERSION", VISION_API_VERSION)
        features = os.getenv("VISION_FEATURES", VISION_FEATURES)
        timeout = os.getenv("VISION_TIMEOUT", str(VISION_TIMEOUT_SECONDS))
        output_path = os.getenv("OUTPUT_PATH", DEFAULT_OUTPUT_PATH)
        min_ms = os.getenv("PACING_MIN_MS", str(PACING_MIN_MS))
        max_ms = os.getenv("PACING_MAX_MS", str(PACING_MAX_MS))
        pace_after_last = os.getenv("PACE_AFTER_LAST", "true")
        raw_urls = os.getenv("IMAGE_URLS", "")
        urls_file = os.getenv("IMAGE_URLS_FILE") or None
        raw_blobs = os.getenv("BLOB_NAMES", "")
        ttl = os.getenv("SAS_TTL_SECONDS", str(SAS_TTL_SECONDS))

        return cls._validate(
            vision_endpoint=endpoint,
            vision_api_key=api_key,
            vision_api_version=api_version,
            vision_features=features,
            vision_timeout=float(timeout),
            output_path=Path(output_path),
            pacing_min_ms=int(min_ms),
            pacing_max_ms=int(max_ms),
            pace_after_last=pace_after_last.strip().lower() in ("1", "true", "yes"),
            image_urls=_split_csv(raw_urls) + _read_url_file(urls_file),
            blob_names=_split_csv(raw_blobs),
            storage_account_name=os.getenv("STORAGE_ACCOUNT_NAME") or None,
            storage_account_key=os.getenv("STORAGE_ACCOUNT_KEY") or None,
            storage_container=os.getenv("STORAGE_CONTAINER") or None,
            sas_ttl_seconds=int(ttl),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    @staticmethod
    def _validate(
        vision_endpoint: Optional[str],
        vision_api_key: Optional[str],
        vision_api_version: str,
        vision_features: str,
        vision_timeout: float,
        output_path: Path,
        pacing_min_ms: int,
        pacing_max_ms: int,
        pace_after_last: bool,
        image_urls: tuple[str, ...],
        blob_names: tuple[str, ...],
        storage_account_name: Optional[str],
        storage_account_key: Optional[str],
        storage_container: Optional[str],
        sas_ttl_seconds: int,
        log_level: str,
    ) -> "Config":
        match vision_endpoint:
            case None | "":
                raise ValueError("VISION_ENDPOINT must be set in .env")
            case _:
                pass

        match vision_api_key:
            case None | "":
                raise ValueError("VISION_API_KEY must be set in .env")
            case _:
                pass

        match (pacing_min_ms, pacing_max_ms):
            case (lo, hi) if 0 <= lo <= hi:
                pass
            case _:
                raise ValueError(
                    "PACING_MIN_MS and PACING_MAX_MS must satisfy 0 <= min <= max"
                )

        if vision_timeout <= 0:
            raise ValueError("VISION_TIMEOUT must be positive")
        if sas_ttl_seconds <= 0:
            raise ValueError("SAS_TTL_SECONDS must be positive")

        match (blob_names, storage_account_name, storage_account_key, storage_container):
            case ((), _, _, _):
                pass
            case (_, str() as a, str() as k, str() as c) if a and k and c:
                pass
            case _:
                raise ValueError(
                    "BLOB_NAMES requires STORAGE_ACCOUNT_NAME, STORAGE_ACCOUNT_KEY "
                    "and STORAGE_CONTAINER"
                )

        return Config(
            vision_endpoint=vision_endpoint,
            vision_api_key=vision_api_key,
            vision_api_version=vision_api_version,
            vision_features=vision_features,
            vision_timeout=vision_timeout,
            output_path=output_path,
            pacing_min_ms=pacing_min_ms,
            pacing_max_ms=pacing_max_ms,
            pace_after_last=pace_after_last,
            image_urls=image_urls,
            blob_names=blob_names,
            storage_account_name=storage_account_name,
            storage_account_key=storage_account_key,
            storage_container=storage_container,
            sas_ttl_seconds=sas_ttl_seconds,
            log_level=log_level,
        )
