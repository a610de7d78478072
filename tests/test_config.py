"""Tests for run configuration merging and validation."""

import pytest

from fert_metadata.config import RunConfig, load_config
from fert_metadata.errors import ConfigError
from fert_metadata.models import IdEncoding

NETWORK = {
    "rpc_url": "http://localhost:8545",
    "subgraph_url": "http://localhost:8000/subgraphs/name/beanstalk",
    "chain_id": 1337,
}


class TestFromSources:
    def test_site_profile_defaults(self) -> None:
        cfg = RunConfig.from_sources(NETWORK)
        assert cfg.id_encoding is IdEncoding.DECIMAL
        assert cfg.emit_pages
        assert not cfg.emit_bare_metadata
        assert cfg.page_size == 1000
        assert cfg.max_requests == 100

    def test_metadata_profile(self) -> None:
        cfg = RunConfig.from_sources({**NETWORK, "profile": "metadata"})
        assert cfg.id_encoding is IdEncoding.HEX
        assert not cfg.emit_pages
        assert cfg.emit_bare_metadata

    def test_options_override_file_and_profile(self) -> None:
        file_cfg = {"profile": "metadata", "page_size": 500, "chain_id": 1}
        cfg = RunConfig.from_sources(
            {**NETWORK, "emit_pages": True, "page_size": None}, file_cfg,
        )
        assert cfg.chain_id == 1337
        assert cfg.page_size == 500
        assert cfg.emit_pages
        assert cfg.id_encoding is IdEncoding.HEX

    def test_integral_float_accepted(self) -> None:
        cfg = RunConfig.from_sources(NETWORK, {"page_size": 500.0})
        assert cfg.page_size == 500

    def test_string_values_from_file(self) -> None:
        cfg = RunConfig.from_sources(NETWORK, {
            "page_size": "250", "include_updated_at": "no", "id_encoding": "hex",
        })
        assert cfg.page_size == 250
        assert cfg.include_updated_at is False
        assert cfg.id_encoding is IdEncoding.HEX

    @pytest.mark.parametrize("missing", ["rpc_url", "subgraph_url", "chain_id"])
    def test_missing_network_is_fatal(self, missing) -> None:
        options = {k: v for k, v in NETWORK.items() if k != missing}
        with pytest.raises(ConfigError, match=missing):
            RunConfig.from_sources(options)

    def test_offline_does_not_need_network(self) -> None:
        cfg = RunConfig.from_sources({}, require_network=False)
        assert cfg.rpc_url == ""
        assert cfg.chain_id == 1

    @pytest.mark.parametrize("bad", [
        {"profile": "gallery"},
        {"id_encoding": "base58"},
        {"page_size": 0},
        {"max_requests": "many"},
        {"emit_pages": "maybe"},
        {"colour": "green"},
        {"humidity_scale": 0.5},
        {"page_size": 999.9},
    ])
    def test_invalid_values(self, bad) -> None:
        with pytest.raises(ConfigError):
            RunConfig.from_sources({**NETWORK, **bad})

    def test_marketplace_link(self) -> None:
        cfg = RunConfig.from_sources(NETWORK)
        assert cfg.marketplace_link("42") == (
            "https://opensea.io/assets/ethereum/0x402c84de2ce49af88f5e2ef3710ff89bfed36cb6/42"
        )


class TestLoadConfig:
    def test_none(self) -> None:
        assert load_config(None) == {}

    def test_yaml_file(self, tmp_path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("rpc_url: http://node:8545\nchain_id: 1\nprofile: metadata\n")
        assert load_config(str(path)) == {
            "rpc_url": "http://node:8545", "chain_id": 1, "profile": "metadata",
        }

    def test_empty_file(self, tmp_path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(str(path)) == {}

    def test_non_mapping_rejected(self, tmp_path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_invalid_yaml(self, tmp_path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("rpc_url: [unclosed\n")
        with pytest.raises(ConfigError, match="invalid YAML"):
            load_config(str(path))
