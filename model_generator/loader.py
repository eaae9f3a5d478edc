"""Loading of component documents from local files and URLs.

A component document is a JSON object with a top-level ``components``
object. The loader reads it, checks that shape and builds the component
definitions, so callers only ever see a ready ``name -> definition`` map.
"""

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests

from .core.definition import ComponentDefinition, DefinitionError, load_components
from .logging_config import get_logger

logger = get_logger(__name__)

COMPONENTS_KEY = "components"


class JSONLoaderError(Exception):
    """A component document could not be read, fetched or parsed."""

    pass


def read_component_file(file_path: str | Path) -> tuple[str, str]:
    """Read the raw text of a component document from disk.

    Returns:
        Tuple of (source description, document text).

    Raises:
        FileNotFoundError: If there is no such file.
        JSONLoaderError: If the file cannot be read.
    """
    path = Path(file_path)
    logger.debug("Reading component document %s", path)

    if not path.is_file():
        raise FileNotFoundError(f"Component document not found: {path}")

    if path.suffix.lower() != ".json":
        logger.warning("Component document %s does not have a .json extension", path)

    try:
        return str(path), path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Error reading component document %s: %s", path, e)
        raise JSONLoaderError(f"Cannot read component document {path}: {e}") from e


def fetch_component_document(url: str, timeout: int = 30) -> tuple[str, str]:
    """Download the raw text of a component document over HTTP(S).

    Args:
        url: Document URL, http or https only.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, document text).

    Raises:
        JSONLoaderError: If the URL is invalid or the request fails.
    """
    parsed_url = urlparse(url)
    if parsed_url.scheme not in ("http", "https") or not parsed_url.netloc:
        raise JSONLoaderError(f"Component document URL must be http(s): {url}")

    logger.debug("Fetching component document %s", url)
    try:
        response = requests.get(
            url, timeout=timeout, headers={"Accept": "application/json"}
        )
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        logger.error("Timed out after %ss fetching %s", timeout, url)
        raise JSONLoaderError(f"Timed out fetching component document {url}") from e
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "?"
        logger.error("HTTP error %s fetching %s", status, url)
        raise JSONLoaderError(
            f"HTTP error {status} fetching component document {url}"
        ) from e
    except requests.exceptions.RequestException as e:
        logger.error("Request error fetching %s: %s", url, e)
        raise JSONLoaderError(f"Cannot fetch component document {url}: {e}") from e

    return url, response.text


def parse_component_document(text: str, source: str) -> dict[str, Any]:
    """Parse document text and check its top-level shape.

    Raises:
        JSONLoaderError: If the text is not valid JSON.
        DefinitionError: If the JSON is not an object with a ``components`` object.
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise JSONLoaderError(
            f"Invalid JSON in {source} at line {e.lineno}, column {e.colno}: {e.msg}"
        ) from e

    if not isinstance(document, dict):
        raise DefinitionError(
            f"{source}: component document must be a JSON object, "
            f"got {type(document).__name__}"
        )
    components = document.get(COMPONENTS_KEY)
    if not isinstance(components, dict):
        raise DefinitionError(f"{source}: missing top-level '{COMPONENTS_KEY}' object")
    if not components:
        logger.warning("Component document %s declares no components", source)
    return document


def load_component_document(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> tuple[str, dict[str, ComponentDefinition]]:
    """Load the component definitions of a document from a file or a URL.

    Exactly one of ``file_path`` and ``url`` must be given.

    Returns:
        Tuple of (source description, component name to definition).

    Raises:
        JSONLoaderError: On a bad source choice, a read or fetch failure or invalid JSON.
        FileNotFoundError: If the file does not exist.
        DefinitionError: If the document is not a valid component document.
    """
    if not file_path and not url:
        raise JSONLoaderError("Either file_path or url must be provided")
    if file_path and url:
        raise JSONLoaderError("Cannot specify both file_path and url")

    if file_path:
        source, text = read_component_file(file_path)
    else:
        source, text = fetch_component_document(url, timeout)

    components = load_components(parse_component_document(text, source))
    logger.info("Loaded %d components from %s", len(components), source)
    return source, components
