"""
Typed argument contracts for each Kaizen tool.

Each contract is decoded on demand from the raw ``arguments`` mapping of a
tools/call request. Required arguments are checked here; anything else is
forwarded to the Kaizen API unchanged, and only when the caller supplied it.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Dict, Mapping, Optional

from .errors import ToolArgumentError


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


def get_str(args: Mapping[str, Any], key: str) -> Optional[str]:
    """Return ``args[key]`` if it is a string, otherwise None."""
    value = args.get(key)
    return value if isinstance(value, str) else None


def require_text(args: Mapping[str, Any], key: str) -> str:
    value = get_str(args, key)
    if value is None or not value.strip():
        raise ToolArgumentError(f"{key} is required")
    return value


def require_present(args: Mapping[str, Any], key: str) -> Any:
    if key not in args:
        raise ToolArgumentError(f"{key} is required")
    return args[key]


def optional(args: Mapping[str, Any], key: str) -> Any:
    return args[key] if key in args else UNSET


@dataclass(frozen=True)
class ToolArguments:
    """Base contract. Subclasses declare the API verb and path."""
    verb: ClassVar[str] = "POST"
    path: ClassVar[str] = ""

    @classmethod
    def from_arguments(cls, args: Mapping[str, Any]) -> "ToolArguments":
        return cls()

    def to_payload(self) -> Optional[Dict[str, Any]]:
        """Request body for the API call, skipping arguments never supplied."""
        payload = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if value is UNSET:
                continue
            payload[item.metadata.get("wire", item.name)] = value
        return payload


def _wire(name: str, default: Any = UNSET) -> Any:
    return field(default=default, metadata={"wire": name})


@dataclass(frozen=True)
class AkumaQueryArguments(ToolArguments):
    path: ClassVar[str] = "/v1/akuma/query"

    dialect: str = ""
    prompt: str = ""
    mode: Any = UNSET
    max_rows: Any = _wire("maxRows")
    guardrails: Any = UNSET

    @classmethod
    def from_arguments(cls, args: Mapping[str, Any]) -> "AkumaQueryArguments":
        return cls(
            dialect=require_text(args, "dialect"),
            prompt=require_text(args, "prompt"),
            mode=optional(args, "mode"),
            max_rows=optional(args, "maxRows"),
            guardrails=optional(args, "guardrails"),
        )


@dataclass(frozen=True)
class AkumaExplainArguments(ToolArguments):
    path: ClassVar[str] = "/v1/akuma/explain"

    sql: str = ""

    @classmethod
    def from_arguments(cls, args: Mapping[str, Any]) -> "AkumaExplainArguments":
        return cls(sql=require_text(args, "sql"))


@dataclass(frozen=True)
class AkumaSchemaArguments(ToolArguments):
    path: ClassVar[str] = "/v1/akuma/schema"

    tables: Any = UNSET
    version: Any = UNSET

    @classmethod
    def from_arguments(cls, args: Mapping[str, Any]) -> "AkumaSchemaArguments":
        return cls(
            tables=require_present(args, "tables"),
            version=optional(args, "version"),
        )


@dataclass(frozen=True)
class EnzanSummaryArguments(ToolArguments):
    path: ClassVar[str] = "/v1/enzan/summary"

    window: Any = "24h"
    group_by: Any = _wire("groupBy")

    @classmethod
    def from_arguments(cls, args: Mapping[str, Any]) -> "EnzanSummaryArguments":
        return cls(
            window=args["window"] if "window" in args else "24h",
            group_by=optional(args, "groupBy"),
        )


@dataclass(frozen=True)
class EnzanBurnArguments(ToolArguments):
    verb: ClassVar[str] = "GET"
    path: ClassVar[str] = "/v1/enzan/burn"

    def to_payload(self) -> Optional[Dict[str, Any]]:
        return None


@dataclass(frozen=True)
class SozoGenerateArguments(ToolArguments):
    path: ClassVar[str] = "/v1/sozo/generate"

    records: Any = UNSET
    schema: Any = UNSET
    schema_name: Any = _wire("schemaName")
    correlations: Any = UNSET
    seed: Any = UNSET

    @classmethod
    def from_arguments(cls, args: Mapping[str, Any]) -> "SozoGenerateArguments":
        records = require_present(args, "records")
        if "schema" not in args and "schemaName" not in args:
            raise ToolArgumentError("schema or schemaName is required")
        return cls(
            records=records,
            schema=optional(args, "schema"),
            schema_name=optional(args, "schemaName"),
            correlations=optional(args, "correlations"),
            seed=optional(args, "seed"),
        )


@dataclass(frozen=True)
class SozoSchemasArguments(ToolArguments):
    verb: ClassVar[str] = "GET"
    path: ClassVar[str] = "/v1/sozo/schemas"

    def to_payload(self) -> Optional[Dict[str, Any]]:
        return None
