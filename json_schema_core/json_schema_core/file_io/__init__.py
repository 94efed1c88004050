from .schema_loader import clear_cache, load_schema, load_schema_document
