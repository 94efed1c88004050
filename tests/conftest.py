from __future__ import annotations

from typing import Any

import pytest

from json_schema_core import expand_references, parse_schema
from json_schema_core.models.schema import Schema


def build(raw: Any) -> Schema:
    """Parse and expand a schema document, checking any declared meta-schema."""
    return expand_references(parse_schema(raw, check_meta_schema=True))


@pytest.fixture
def schema_of():
    return build
