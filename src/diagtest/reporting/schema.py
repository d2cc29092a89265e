"""JSON schema definition for reporter output."""
from __future__ import annotations

SCHEMA_VERSION = "1.0.0"

JSON_SCHEMA_V1 = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "diagtest report",
    "type": "object",
    "required": ["schema_version", "generated_at", "summary", "cases"],
    "properties": {
        "schema_version": {"type": "string"},
        "generated_at": {"type": "string", "format": "date-time"},
        "summary": {
            "type": "object",
            "required": ["total", "passed", "failed", "errors", "failures", "jobs", "sysroot", "duration_s"],
            "properties": {
                "total": {"type": "integer", "minimum": 0},
                "passed": {"type": "integer", "minimum": 0},
                "failed": {"type": "integer", "minimum": 0},
                "errors": {"type": "integer", "minimum": 0},
                "failures": {"type": "integer", "minimum": 0},
                "jobs": {"type": "integer", "minimum": 1},
                "sysroot": {"type": "string"},
                "directory": {"type": "string"},
                "duration_s": {"type": "number"},
            },
        },
        "cases": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["fragment", "output_dir", "status", "duration_ms", "diagnostics"],
                "properties": {
                    "fragment": {"type": "string"},
                    "output_dir": {"type": "string"},
                    "status": {"enum": ["passed", "failed", "error"]},
                    "duration_ms": {"type": "number"},
                    "error": {"type": "string"},
                    "diagnostics": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "required": ["message", "children"],
                            "properties": {
                                "message": {"type": "string"},
                                "level": {"type": ["string", "null"]},
                                "children": {"type": "array", "items": {"type": "string"}},
                            },
                        },
                    },
                },
            },
        },
    },
}
