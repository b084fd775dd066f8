"""Configuration models for parsing and rendering.

Defaults reproduce the classic output (``digraph`` / ``subgraph cluster<k>``
/ ``n<id>`` vertices, tab indentation). Environment variables fill in
values the caller leaves unset; explicit arguments always win.

Environment:
    SEED_MAX_DEPTH    deepest permitted expression nesting
    SEED_GRAPH_NAME   name written after the graph keyword
    SEED_LOG_LEVEL    logging level for the CLI (e.g. DEBUG)
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from typing import Literal, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator

from seed.parser.parser import DEFAULT_MAX_DEPTH, MAX_SUPPORTED_DEPTH

_DOT_ID_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class ParseOptions(BaseModel):
    """Parser limits."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1, le=MAX_SUPPORTED_DEPTH)


class RenderOptions(BaseModel):
    """How the DOT document is laid out and named."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    graph_keyword: Literal["digraph", "graph"] = "digraph"
    graph_name: str = ""
    cluster_prefix: str = "cluster"
    vertex_prefix: str = "n"
    indent: str = "\t"

    @field_validator("graph_name")
    @classmethod
    def _check_graph_name(cls, value: str) -> str:
        if value and not _DOT_ID_RE.fullmatch(value):
            raise ValueError(f"graph name must be a DOT identifier, got {value!r}")
        return value

    @field_validator("cluster_prefix", "vertex_prefix")
    @classmethod
    def _check_prefix(cls, value: str) -> str:
        if not _DOT_ID_RE.fullmatch(value):
            raise ValueError(f"prefix must be a DOT identifier, got {value!r}")
        return value

    @field_validator("indent")
    @classmethod
    def _check_indent(cls, value: str) -> str:
        if value.strip(" \t"):
            raise ValueError("indent may only contain spaces and tabs")
        return value

    @property
    def edge_op(self) -> str:
        return "->" if self.graph_keyword == "digraph" else "--"


class SeedConfig(BaseModel):
    """Top-level configuration bundle used by the CLI and the server."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    parse: ParseOptions = Field(default_factory=ParseOptions)
    render: RenderOptions = Field(default_factory=RenderOptions)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"unknown log level: {value!r}")
        return level

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Self:
        """Build a config from ``SEED_*`` environment variables."""
        env = os.environ if environ is None else environ

        parse: dict[str, object] = {}
        render: dict[str, object] = {}
        data: dict[str, object] = {}

        if env.get("SEED_MAX_DEPTH"):
            parse["max_depth"] = env["SEED_MAX_DEPTH"]
        if env.get("SEED_GRAPH_NAME"):
            render["graph_name"] = env["SEED_GRAPH_NAME"]
        if env.get("SEED_LOG_LEVEL"):
            data["log_level"] = env["SEED_LOG_LEVEL"]

        return cls.model_validate(
            {**data, "parse": parse, "render": render},
        )
