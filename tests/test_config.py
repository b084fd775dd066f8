"""Tests for configuration models and environment loading."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from seed import ParseOptions, RenderOptions, SeedConfig
from seed.parser import DEFAULT_MAX_DEPTH, MAX_SUPPORTED_DEPTH


class TestRenderOptions:
    def test_defaults(self):
        options = RenderOptions()
        assert options.graph_keyword == "digraph"
        assert options.graph_name == ""
        assert options.cluster_prefix == "cluster"
        assert options.vertex_prefix == "n"
        assert options.indent == "\t"
        assert options.edge_op == "->"

    @pytest.mark.parametrize("prefix", ["", "1n", "my-prefix", "a b"])
    def test_rejects_non_identifier_prefix(self, prefix: str):
        with pytest.raises(ValidationError):
            RenderOptions(vertex_prefix=prefix)

    def test_rejects_bad_graph_name(self):
        with pytest.raises(ValidationError):
            RenderOptions(graph_name="two words")

    def test_rejects_non_blank_indent(self):
        with pytest.raises(ValidationError):
            RenderOptions(indent="--")

    def test_rejects_unknown_keyword(self):
        with pytest.raises(ValidationError):
            RenderOptions(graph_keyword="strict")

    def test_rejects_unknown_fields(self):
        with pytest.raises(ValidationError):
            RenderOptions(colour="red")

    def test_frozen(self):
        options = RenderOptions()
        with pytest.raises(ValidationError):
            options.indent = "  "


class TestParseOptions:
    def test_default_depth(self):
        assert ParseOptions().max_depth == DEFAULT_MAX_DEPTH

    @pytest.mark.parametrize("depth", [0, -1, MAX_SUPPORTED_DEPTH + 1])
    def test_depth_bounds(self, depth: int):
        with pytest.raises(ValidationError):
            ParseOptions(max_depth=depth)


class TestSeedConfig:
    def test_from_empty_env(self):
        config = SeedConfig.from_env({})
        assert config == SeedConfig()
        assert config.log_level == "WARNING"

    def test_from_env(self):
        config = SeedConfig.from_env(
            {
                "SEED_MAX_DEPTH": "64",
                "SEED_GRAPH_NAME": "Exprs",
                "SEED_LOG_LEVEL": "debug",
            }
        )
        assert config.parse.max_depth == 64
        assert config.render.graph_name == "Exprs"
        assert config.log_level == "DEBUG"

    def test_invalid_env_value(self):
        with pytest.raises(ValidationError):
            SeedConfig.from_env({"SEED_MAX_DEPTH": "lots"})

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError):
            SeedConfig(log_level="LOUD")
