"""
Tool Definitions

JSON-schema definitions of the edit tools exposed to LLM clients. These must
stay in sync with TOOL_REGISTRY in tools/base.py.
"""

from __future__ import annotations

from typing import Dict, List, Any, Final


# ---------------------------------------------------------------------
# Tool Name Constants (Single Source of Truth)
# ---------------------------------------------------------------------

TOOL_CREATE_PAGE: Final[str] = "create-page"
TOOL_UPDATE_PAGE: Final[str] = "update-page"


# ---------------------------------------------------------------------
# Tool Definitions
# ---------------------------------------------------------------------

TOOL_DEFINITIONS: List[Dict[str, Any]] = [
    {
        "type": "function",
        "function": {
            "name": TOOL_CREATE_PAGE,
            "description": "Creates a wiki page with the provided content.",
            "annotations": {
                "title": "Create page",
                "readOnlyHint": False,
                "destructiveHint": True,
            },
            "parameters": {
                "type": "object",
                "properties": {
                    "source": {
                        "type": "string",
                        "description": "Page content in the format specified by the contentModel parameter.",
                    },
                    "title": {
                        "type": "string",
                        "description": "Wiki page title.",
                        "minLength": 1,
                    },
                    "comment": {
                        "type": "string",
                        "description": "Reason for creating the page.",
                    },
                    "contentModel": {
                        "type": "string",
                        "description": "Type of content on the page.",
                        "default": "wikitext",
                    },
                },
                "required": ["source", "title"],
                "additionalProperties": False,
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": TOOL_UPDATE_PAGE,
            "description": (
                "Updates a wiki page. Replaces the existing content of a page "
                "with the provided content."
            ),
            "annotations": {
                "title": "Update page",
                "readOnlyHint": False,
                "destructiveHint": True,
            },
            "parameters": {
                "type": "object",
                "properties": {
                    "title": {
                        "type": "string",
                        "description": "Wiki page title.",
                        "minLength": 1,
                    },
                    "source": {
                        "type": "string",
                        "description": "Page content in the same content model of the existing page.",
                    },
                    "latestId": {
                        "type": "integer",
                        "minimum": 1,
                        "description": "Revision ID used as the base for the new source.",
                    },
                    "comment": {
                        "type": "string",
                        "description": "Summary of the edit.",
                    },
                },
                "required": ["title", "source", "latestId"],
                "additionalProperties": False,
            },
        },
    },
]
