"""JSON schema validation for editor document payloads."""
from __future__ import annotations

from typing import Any, Mapping

import jsonschema

from . import DocumentNode

__all__ = ["DOCUMENT_SCHEMA", "DocumentSchemaError", "load_document", "validate_document"]


class DocumentSchemaError(ValueError):
    """Raised when a payload does not describe an editor document tree."""


DOCUMENT_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "$ref": "#/definitions/node",
    "definitions": {
        "node": {
            "type": "object",
            "required": ["type"],
            "properties": {
                "type": {"type": "string", "minLength": 1},
                "attrs": {"type": ["object", "null"]},
                "text": {"type": "string"},
                "content": {
                    "type": "array",
                    "items": {"$ref": "#/definitions/node"},
                },
                "marks": {"type": "array"},
            },
        }
    },
}


def validate_document(payload: Any) -> None:
    """Validate ``payload`` against :data:`DOCUMENT_SCHEMA`."""

    try:
        jsonschema.validate(instance=payload, schema=DOCUMENT_SCHEMA)
    except jsonschema.ValidationError as exc:
        location = " -> ".join(str(part) for part in exc.absolute_path)
        message = f"Document validation failed: {exc.message}"
        if location:
            message = f"{message} (at {location})"
        raise DocumentSchemaError(message) from exc


def load_document(payload: Mapping[str, Any]) -> DocumentNode:
    """Validate editor JSON and convert it into a :class:`DocumentNode` tree."""

    validate_document(payload)
    return DocumentNode.from_mapping(payload)
