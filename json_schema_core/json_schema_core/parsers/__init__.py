from .schema_parser import SchemaParser, parse_schema
