"""Shared fixtures: token factory, fake subgraph transport, fixed BPF and clock.

No network. File output goes to tmp_path only.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from fert_metadata.config import RunConfig
from fert_metadata.models import TokenRecord

FIXED_NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


def make_token(id=6_000_000, start_bpf=0, season=6074, humidity="5", supply=1) -> TokenRecord:
    return TokenRecord(
        id=id, supply=supply, humidity=Decimal(humidity),
        start_bpf=start_bpf, end_bpf=id, season=season,
    )


def make_tokens(n: int, first_season: int = 1) -> list[TokenRecord]:
    """n tokens with distinct seasons and ids."""
    return [make_token(id=1_000_000 + i, season=first_season + i) for i in range(n)]


class FakeTransport:
    """Serves tokens the way the subgraph does: season >= cursor, minus excluded ids."""

    def __init__(self, tokens):
        self.tokens = sorted(tokens, key=lambda t: t.season)
        self.calls = []

    def fetch_page(self, cursor, first):
        self.calls.append((cursor, first))
        rows = [
            t for t in self.tokens
            if t.season >= cursor.season and t.id not in cursor.exclude_ids
        ]
        return rows[:first]


class StuckTransport:
    """Ignores the cursor and always returns the same full page."""

    def __init__(self, page):
        self.page = page
        self.calls = 0

    def fetch_page(self, cursor, first):
        self.calls += 1
        return list(self.page[:first])


class FixedProgress:
    def __init__(self, bpf: int):
        self.bpf = bpf

    def current_bpf(self) -> int:
        return self.bpf


@pytest.fixture
def token() -> TokenRecord:
    return make_token()


@pytest.fixture
def config(tmp_path) -> RunConfig:
    return RunConfig(
        rpc_url="http://localhost:8545",
        subgraph_url="http://localhost:8000/subgraphs/name/beanstalk",
        chain_id=1337,
        output_dir=str(tmp_path / "dist"),
    )


@pytest.fixture
def clock():
    return lambda: FIXED_NOW
