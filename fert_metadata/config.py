"""Run configuration: CLI options > environment > YAML file > profile defaults."""

from dataclasses import dataclass
from typing import Any

import yaml

from . import abi
from .errors import ConfigError
from .models import IdEncoding

DEFAULT_BASE_URL = "https://fert.bean.money"
DEFAULT_MARKETPLACE_URL = "https://opensea.io/assets/ethereum/{contract}/{token}"

# site: decimal ids with a page per token; metadata: ERC-1155 hex ids, JSON only
PROFILES = {
    "site": {
        "id_encoding": IdEncoding.DECIMAL,
        "emit_pages": True,
        "emit_bare_metadata": False,
    },
    "metadata": {
        "id_encoding": IdEncoding.HEX,
        "emit_pages": False,
        "emit_bare_metadata": True,
    },
}


def load_config(path: str | None) -> dict:
    if path is None:
        return {}
    with open(path) as f:
        try:
            cfg = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"{path}: invalid YAML: {e}") from e
    if not isinstance(cfg, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")
    return cfg


def _parse_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"true", "1", "yes"}:
            return True
        if normalized in {"false", "0", "no"}:
            return False
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ConfigError(f"Invalid boolean for {key}: {value!r}")


def _parse_int(value: Any, key: str, minimum: int | None = None) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"Invalid integer for {key}: {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ConfigError(f"Invalid integer for {key}: {value!r}")
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid integer for {key}: {value!r}") from None
    if minimum is not None and parsed < minimum:
        raise ConfigError(f"{key} must be >= {minimum}, got {parsed}")
    return parsed


@dataclass(frozen=True)
class RunConfig:
    rpc_url: str
    subgraph_url: str
    chain_id: int
    beanstalk_address: str = abi.BEANSTALK_ADDRESS
    fertilizer_address: str = abi.FERTILIZER_ADDRESS
    page_size: int = 1000
    max_requests: int = 100
    id_encoding: IdEncoding = IdEncoding.DECIMAL
    emit_pages: bool = True
    emit_bare_metadata: bool = False
    include_updated_at: bool = True
    output_dir: str = "dist"
    base_url: str = DEFAULT_BASE_URL
    marketplace_url: str = DEFAULT_MARKETPLACE_URL
    humidity_scale: int = 100
    remaining_divisor: int = 1_000_000
    remaining_decimals: int = 2

    def __post_init__(self):
        if self.page_size < 1:
            raise ConfigError(f"page_size must be >= 1, got {self.page_size}")
        if self.max_requests < 1:
            raise ConfigError(f"max_requests must be >= 1, got {self.max_requests}")
        if self.remaining_divisor < 1:
            raise ConfigError(f"remaining_divisor must be >= 1, got {self.remaining_divisor}")
        if self.remaining_decimals < 0:
            raise ConfigError(f"remaining_decimals must be >= 0, got {self.remaining_decimals}")

    @property
    def site_url(self) -> str:
        return self.base_url.rstrip("/")

    def marketplace_link(self, output_id: str) -> str:
        return self.marketplace_url.format(
            contract=self.fertilizer_address.lower(), token=output_id,
        )

    @classmethod
    def from_sources(cls, options: dict | None = None, file_cfg: dict | None = None,
                     *, require_network: bool = True) -> "RunConfig":
        """
        Merge explicit options (CLI/env, None means unset) over the YAML file,
        then fill the rest from the selected profile.
        """
        options = {k: v for k, v in (options or {}).items() if v is not None}
        merged = {**(file_cfg or {}), **options}

        profile_name = merged.pop("profile", "site")
        if profile_name not in PROFILES:
            raise ConfigError(
                f"Unknown profile {profile_name!r} (expected one of: {', '.join(PROFILES)})"
            )
        values: dict[str, Any] = {**PROFILES[profile_name], **merged}

        unknown = set(values) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")

        if require_network:
            for key in ("rpc_url", "subgraph_url", "chain_id"):
                if values.get(key) in (None, ""):
                    raise ConfigError(f"{key} is required")
        else:
            values.setdefault("rpc_url", "")
            values.setdefault("subgraph_url", "")
            values.setdefault("chain_id", abi.MAINNET_CHAIN_ID)

        try:
            values["id_encoding"] = IdEncoding(values["id_encoding"])
        except ValueError:
            raise ConfigError(f"Invalid id_encoding: {values['id_encoding']!r}") from None

        for key in ("chain_id", "page_size", "max_requests", "humidity_scale",
                    "remaining_divisor", "remaining_decimals"):
            if key in values:
                values[key] = _parse_int(values[key], key, minimum=0)
        for key in ("emit_pages", "emit_bare_metadata", "include_updated_at"):
            if key in values:
                values[key] = _parse_bool(values[key], key)
        return cls(**values)
