from .reference_expander import ReferenceExpander, expand_references
