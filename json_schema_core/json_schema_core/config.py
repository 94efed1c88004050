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

"""Configuration management for schema loading and logging."""

import os
import logging
from dataclasses import dataclass

from .utils.logging_utils import configure_split_stream_logging


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() == 'true'


@dataclass
class ValidatorConfig:
    """Configuration class for json_schema_core.

    The validation engine itself is not configurable; these settings only
    affect logging, document caching and meta-schema checking while parsing.
    """
    log_level: str = "INFO"
    print_level: str = "ERROR"
    cache_enabled: bool = True
    check_meta_schema: bool = True

    @classmethod
    def from_env(cls) -> 'ValidatorConfig':
        """Create configuration from environment variables."""
        return cls(
            log_level=os.getenv('JSON_SCHEMA_CORE_LOG_LEVEL', 'INFO'),
            print_level=os.getenv('JSON_SCHEMA_CORE_PRINT_LEVEL', 'ERROR'),
            cache_enabled=_env_flag('JSON_SCHEMA_CORE_CACHE_ENABLED', 'true'),
            check_meta_schema=_env_flag('JSON_SCHEMA_CORE_CHECK_META_SCHEMA', 'true'),
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        stderr_level = getattr(logging, self.print_level.upper(), logging.ERROR)

        formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
        configure_split_stream_logging(level=level, stderr_level=stderr_level, formatter=formatter)

        return logging.getLogger('json_schema_core')


# Global configuration instance
validator_config = ValidatorConfig.from_env()
