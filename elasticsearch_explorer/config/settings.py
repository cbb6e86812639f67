"""
Connection Settings

Elasticsearch connection settings from environment variables (and a .env
file when present), plus logging setup.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from elasticsearch_explorer.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ElasticsearchSettings:
    """
    Elasticsearch connection configuration.

    Attributes:
        host: Elasticsearch host
        port: Elasticsearch port
        scheme: 'http' or 'https'
        request_timeout: Request timeout in seconds
        max_retries: Retries performed by the Elasticsearch client
        index_config_path: XML file with index declarations (None: bundled file)
        log_level: Logging level name
    """
    host: str = "localhost"
    port: int = 9200
    scheme: str = "http"
    request_timeout: int = 30
    max_retries: int = 3
    index_config_path: Optional[str] = None
    log_level: str = "INFO"

    @property
    def url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}"

    @classmethod
    def from_env(cls) -> "ElasticsearchSettings":
        """
        Create settings from environment variables.

        Reads ES_HOST, ES_PORT, ES_SCHEME, ES_REQUEST_TIMEOUT, ES_MAX_RETRIES,
        EXPLORER_INDEX_CONFIG and LOG_LEVEL after loading a .env file.

        Raises:
            ConfigurationError: If a numeric variable is not a number
        """
        load_dotenv()

        return cls(
            host=os.getenv("ES_HOST", "localhost"),
            port=_int_env("ES_PORT", 9200),
            scheme=os.getenv("ES_SCHEME", "http"),
            request_timeout=_int_env("ES_REQUEST_TIMEOUT", 30),
            max_retries=_int_env("ES_MAX_RETRIES", 3),
            index_config_path=os.getenv("EXPLORER_INDEX_CONFIG") or None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got '{raw}'")


def setup_logging(level: str = "INFO") -> None:
    """
    Configure application logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
