# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Schema document loader for JSON and YAML files."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..config import validator_config
from ..exceptions import SchemaLoadError
from ..models.schema import Schema
from ..parsers.schema_parser import SchemaParser
from ..resolvers.reference_expander import expand_references

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")

# Document cache to avoid re-reading files
_DOCUMENT_CACHE: Dict[Path, Any] = {}


def load_schema_document(path: Union[str, Path], cache_enabled: Optional[bool] = None) -> Any:
    """Read and decode a schema document.

    ``.yaml``/``.yml`` files are decoded with ``yaml.safe_load``, everything
    else as JSON.

    Args:
        path: Path to the schema file
        cache_enabled: Whether to use the document cache. If None, uses global config.

    Returns:
        Decoded document

    Raises:
        SchemaLoadError: If the file doesn't exist or cannot be decoded
    """
    if cache_enabled is None:
        cache_enabled = validator_config.cache_enabled

    schema_path = Path(path).resolve()
    if cache_enabled and schema_path in _DOCUMENT_CACHE:
        logger.debug("Using cached schema document %s", schema_path)
        return _DOCUMENT_CACHE[schema_path]

    if not schema_path.exists():
        raise SchemaLoadError(f"Schema file not found: {schema_path}")

    try:
        with open(schema_path, "r", encoding="utf-8") as f:
            if schema_path.suffix.lower() in YAML_SUFFIXES:
                document = yaml.safe_load(f)
            else:
                document = json.load(f)
    except json.JSONDecodeError as e:
        raise SchemaLoadError(f"Invalid JSON in schema file {schema_path}: {e.msg} (line {e.lineno})") from e
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML in schema file {schema_path}: {e}") from e
    except OSError as e:
        raise SchemaLoadError(f"Failed to read schema file {schema_path}: {e}") from e

    logger.debug("Loaded schema document %s", schema_path)
    if cache_enabled:
        _DOCUMENT_CACHE[schema_path] = document
    return document


def load_schema(
    path: Union[str, Path],
    cache_enabled: Optional[bool] = None,
    check_meta_schema: Optional[bool] = None,
) -> Schema:
    """Load, parse and expand a schema file into a tree ready for validation."""
    document = load_schema_document(path, cache_enabled=cache_enabled)
    uri = Path(path).resolve().as_uri()
    root = SchemaParser(check_meta_schema=check_meta_schema).parse(document, uri=uri)
    return expand_references(root)


def clear_cache() -> None:
    """Clear the document cache. Useful for testing."""
    _DOCUMENT_CACHE.clear()
