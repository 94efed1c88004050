"""Recursive JSON Schema validation over pre-parsed schema and data trees.

This package intentionally keeps the validation engine free of any file or
network I/O; loading and reference expansion are separate, optional steps.
"""

__version__ = "0.1.0"

from .exceptions import (
    InvalidDataError,
    JsonSchemaCoreError,
    SchemaError,
    SchemaLoadError,
    SchemaParseError,
    UnresolvedReferenceError,
)
from .models.schema import Schema
from .parsers.schema_parser import SchemaParser, parse_schema
from .resolvers.reference_expander import ReferenceExpander, expand_references
from .validation.diagnostic import ValidationError
from .validation.validator import Validator, validate, validate_or_fail
