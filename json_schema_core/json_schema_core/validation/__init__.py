"""Validation engine.

Depends only on the schema model so that it can run against trees built by
any parser or expander.
"""

from .diagnostic import Diagnostic, ValidationError
from .formats import FORMAT_CHECKERS, check_format
from .validator import Validator, validate, validate_or_fail
