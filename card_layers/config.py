import logging
import os
from dataclasses import dataclass

LOGGER_NAME = "card-layers"

WHITE = 255
BLACK = 0

# Width of the intensity band, above the darkest tone, treated as ink.
INK_BANDWIDTH = 120


@dataclass(frozen=True)
class LayerSettings:
    source_url: str
    cache_dir: str
    output_dir: str
    port: int
    timeout: float
    retries: int
    max_content_length: int
    log_level: str

    @classmethod
    def from_env(cls) -> "LayerSettings":
        return cls(
            source_url=os.getenv(
                "SOURCE_URL",
                "https://pkmncards.com/wp-content/uploads/clc_en_003-charizard.png",
            ),
            cache_dir=os.getenv("CACHE_DIR", ".cache"),
            output_dir=os.getenv("OUTPUT_DIR", "images"),
            port=int(os.getenv("PORT", "5500")),
            timeout=float(os.getenv("SOURCE_TIMEOUT", "10.0")),
            retries=int(os.getenv("SOURCE_RETRIES", "2")),
            max_content_length=int(os.getenv("MAX_CONTENT_LENGTH", "1000000000")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


def configure_logging(settings: LayerSettings) -> logging.Logger:
    logging.basicConfig(level=settings.log_level)
    return logging.getLogger(LOGGER_NAME)
