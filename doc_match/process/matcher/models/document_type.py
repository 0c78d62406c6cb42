# Path: doc_match/process/matcher/models/document_type.py
"""
Document Type Definition Model

Pydantic models representing document-type categories loaded from
YAML. Each category is an ordered list of regular expressions; the
order of categories in the file is the classification priority.
"""

from pydantic import BaseModel, Field


class DocumentTypeDefinition(BaseModel):
    """
    A single document-type category.

    Example YAML:
        - type_id: witness
          display_name: Witness Statement
          patterns:
            - '\\bwitness\\b'
            - '^[CR]W-\\d+'
    """
    type_id: str = Field(min_length=1, description="Unique category identifier")
    display_name: str = Field(default='', description="Human readable name")
    patterns: list[str] = Field(
        default_factory=list,
        description="Case-insensitive regular expressions, any may match"
    )


class DocumentTypeDictionary(BaseModel):
    """Top-level structure of document_types.yaml."""
    document_types: list[DocumentTypeDefinition] = Field(default_factory=list)


__all__ = [
    'DocumentTypeDefinition',
    'DocumentTypeDictionary',
]
