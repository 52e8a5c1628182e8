from enum import Enum
from typing import List, Dict, Any, Optional


class ToolName(str, Enum):
    AKUMA_QUERY = "akuma.query"
    AKUMA_EXPLAIN = "akuma.explain"
    AKUMA_SCHEMA = "akuma.schema"
    ENZAN_SUMMARY = "enzan.summary"
    ENZAN_BURN = "enzan.burn"
    SOZO_GENERATE = "sozo.generate"
    SOZO_SCHEMAS = "sozo.schemas"

    @classmethod
    def lookup(cls, name: str) -> Optional["ToolName"]:
        try:
            return cls(name)
        except ValueError:
            return None


SQL_DIALECTS = ["postgres", "mysql", "snowflake", "bigquery"]
AKUMA_QUERY_MODES = ["sql-only", "sql-and-results", "explain"]
ENZAN_WINDOWS = ["1h", "24h", "7d", "30d"]

_EMPTY_INPUT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {},
    "additionalProperties": False,
}

TOOLS_SCHEMAS: List[Dict[str, Any]] = [
    {
        "name": ToolName.AKUMA_QUERY.value,
        "description": "Translate natural language into SQL (optionally returning rows or explanation).",
        "inputSchema": {
            "type": "object",
            "properties": {
                "dialect": {"type": "string", "enum": SQL_DIALECTS},
                "prompt": {"type": "string"},
                "mode": {"type": "string", "enum": AKUMA_QUERY_MODES},
                "maxRows": {"type": "number"},
                "guardrails": {"type": "object"},
            },
            "required": ["dialect", "prompt"],
            "additionalProperties": False,
        },
    },
    {
        "name": ToolName.AKUMA_EXPLAIN.value,
        "description": "Explain a SQL query in plain English.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "sql": {"type": "string"},
            },
            "required": ["sql"],
            "additionalProperties": False,
        },
    },
    {
        "name": ToolName.AKUMA_SCHEMA.value,
        "description": "Set Akuma schema context used for query generation.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "version": {"type": "string"},
                "tables": {"type": "array", "items": {"type": "object"}},
            },
            "required": ["tables"],
            "additionalProperties": False,
        },
    },
    {
        "name": ToolName.ENZAN_SUMMARY.value,
        "description": "Summarize GPU spend and usage for a time window.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "window": {"type": "string", "enum": ENZAN_WINDOWS},
                "groupBy": {"type": "array", "items": {"type": "string"}},
            },
            "additionalProperties": False,
        },
    },
    {
        "name": ToolName.ENZAN_BURN.value,
        "description": "Get current burn rate in USD/hour.",
        "inputSchema": _EMPTY_INPUT_SCHEMA,
    },
    {
        "name": ToolName.SOZO_GENERATE.value,
        "description": "Generate synthetic tabular data from a schema or named preset.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "records": {"type": "number"},
                "schemaName": {"type": "string"},
                "schema": {"type": "object"},
                "correlations": {"type": "object"},
                "seed": {"type": "number"},
            },
            "required": ["records"],
            "additionalProperties": False,
        },
    },
    {
        "name": ToolName.SOZO_SCHEMAS.value,
        "description": "List built-in Sozo schema presets.",
        "inputSchema": _EMPTY_INPUT_SCHEMA,
    },
]


def tool_definitions() -> List[Dict[str, Any]]:
    """Tool catalog as returned by tools/list."""
    return [dict(definition) for definition in TOOLS_SCHEMAS]


_missing = {tool.value for tool in ToolName} ^ {schema["name"] for schema in TOOLS_SCHEMAS}
if _missing:
    raise RuntimeError(f"Tool catalog out of sync with ToolName: {sorted(_missing)}")
del _missing
