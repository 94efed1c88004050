from .data_kind import TYPE_TAGS, DataKind, classify, json_equal
from .schema import COPYABLE_FIELDS, Schema
