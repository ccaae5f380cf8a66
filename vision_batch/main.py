"""Entry point — wires Config → AzureVisionClient → PipelineController → TextFileSink."""
import asyncio
import logging
import sys

from rich.logging import RichHandler

from vision_batch.access.azure_blob import BlobSasIssuer
from vision_batch.config import Config
from vision_batch.constants import MSG_BATCH_EMPTY, MSG_CONFIG_ERROR
from vision_batch.models import BlobLocation, ImageSource
from vision_batch.pacing import UniformPacing
from vision_batch.pipeline import PipelineController
from vision_batch.sink import TextFileSink
from vision_batch.vision.azure import AzureVisionClient

logger = logging.getLogger(__name__)


def _setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    root.addHandler(RichHandler(rich_tracebacks=True))


def build_items(config: Config) -> list[ImageSource]:
    """Public URLs first, then one BlobLocation per configured blob name."""
    blobs = [BlobLocation(config.storage_container, name) for name in config.blob_names]
    return [*config.image_urls, *blobs]


def build_controller(config: Config) -> PipelineController:
    match (config.storage_account_name, config.storage_account_key):
        case (str() as name, str() as key) if name and key:
            issuer = BlobSasIssuer(name, key, ttl_seconds=config.sas_ttl_seconds)
        case _:
            issuer = None
    return PipelineController(
        config,
        vision_client=AzureVisionClient(
            config.vision_endpoint,
            config.vision_api_key,
            api_version=config.vision_api_version,
            features=config.vision_features,
            timeout=config.vision_timeout,
        ),
        sink=TextFileSink(config.output_path),
        pacing=UniformPacing(config.pacing_min_ms, config.pacing_max_ms),
        issuer=issuer,
    )


def main() -> None:
    try:
        config = Config.from_env()
    except (ValueError, OSError) as exc:
        _setup_logging("INFO")
        logger.error(MSG_CONFIG_ERROR, exc)
        sys.exit(1)
    _setup_logging(config.log_level)

    items = build_items(config)
    if not items:
        logger.warning(MSG_BATCH_EMPTY)

    controller = build_controller(config)
    try:
        asyncio.run(controller.run(items))
    except OSError:
        sys.exit(1)


if __name__ == "__main__":
    main()
