"""Utility functions for loading serialized symbol tables.

This module provides functions for loading a package symbol table from a
JSON file or URL with proper error handling and validation.
"""

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests

from .codegen.core.errors import ResolutionError
from .codegen.core.symbols import SymbolTable, symbol_table_from_dict
from .logging_config import get_logger

logger = get_logger(__name__)


class SymbolTableLoaderError(ResolutionError):
    """Raised when a serialized symbol table cannot be loaded."""

    pass


def load_json_from_file(file_path: str | Path) -> Any:
    """Load JSON data from a local file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Parsed JSON data.

    Raises:
        SymbolTableLoaderError: If the file is missing, unreadable or invalid JSON.
    """
    file_path = Path(file_path)
    logger.debug("Attempting to load symbol table from file: %s", file_path)

    if not file_path.exists():
        logger.error("File not found: %s", file_path)
        raise SymbolTableLoaderError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        logger.warning("File does not have .json extension: %s", file_path)

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        logger.info("Successfully loaded symbol table from %s", file_path)
        return data
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in file %s: %s", file_path, e)
        raise SymbolTableLoaderError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error("Error reading file %s: %s", file_path, e)
        raise SymbolTableLoaderError(f"Error reading file {file_path}: {e}") from e


def load_json_from_url(url: str, timeout: int = 30) -> Any:
    """Load JSON data from a URL.

    Args:
        url: URL to fetch JSON from.
        timeout: Request timeout in seconds.

    Returns:
        Parsed JSON data.

    Raises:
        SymbolTableLoaderError: If URL is invalid, request fails, or response isn't valid JSON.
    """
    logger.debug("Attempting to load symbol table from URL: %s", url)

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error("Invalid URL format: %s", url)
        raise SymbolTableLoaderError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        data = response.json()
        logger.info("Successfully loaded symbol table from %s", url)
        return data

    except requests.exceptions.Timeout as e:
        logger.error("Request timeout for URL: %s", url)
        raise SymbolTableLoaderError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error("Connection error for URL %s: %s", url, e)
        raise SymbolTableLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error("HTTP error %s for URL: %s", e.response.status_code, url)
        raise SymbolTableLoaderError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except requests.exceptions.RequestException as e:
        logger.error("Request error for URL %s: %s", url, e)
        raise SymbolTableLoaderError(f"Request error for URL {url}: {e}") from e
    except ValueError as e:
        logger.error("Invalid JSON response from URL %s: %s", url, e)
        raise SymbolTableLoaderError(f"Invalid JSON response from URL {url}: {e}") from e


def is_url(location: str) -> bool:
    return urlparse(str(location)).scheme in ("http", "https")


def load_symbol_table(location: str | Path, timeout: int = 30) -> SymbolTable:
    """Load a serialized symbol table from a file path or http(s) URL.

    Args:
        location: Local path or URL of the JSON document.
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        The deserialized SymbolTable.
    """
    if is_url(str(location)):
        data = load_json_from_url(str(location), timeout)
    else:
        data = load_json_from_file(location)
    return symbol_table_from_dict(data)
