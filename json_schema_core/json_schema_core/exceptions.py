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

"""Custom exceptions for the json_schema_core package."""

from typing import List, Optional, Sequence


class JsonSchemaCoreError(Exception):
    """Base exception for json_schema_core related errors."""
    pass


class SchemaError(JsonSchemaCoreError):
    """Aggregate failure raised when data does not validate against a schema.

    The message is every diagnostic message joined by a single space.
    """

    def __init__(self, errors: Sequence = ()):
        self.errors = list(errors)
        super().__init__(" ".join(self.aggregate(self.errors)))

    @staticmethod
    def aggregate(errors: Sequence) -> List[str]:
        """Return the message of every diagnostic, in order."""
        return [error.message for error in errors]


class SchemaParseError(JsonSchemaCoreError):
    """Exception raised when a raw schema document cannot be turned into a tree."""

    def __init__(self, message: str, schema_path: Optional[str] = None):
        self.schema_path = schema_path
        if schema_path:
            message = f"{message} (schema_path={schema_path})"
        super().__init__(message)


class UnresolvedReferenceError(JsonSchemaCoreError):
    """Exception raised for a $ref that cannot be (or was not) expanded."""
    pass


class InvalidDataError(JsonSchemaCoreError, TypeError):
    """Exception raised when a data node is not a JSON value."""
    pass


class SchemaLoadError(JsonSchemaCoreError):
    """Exception raised when a schema file cannot be read or decoded."""
    pass
