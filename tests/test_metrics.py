"""Tests for BPF remaining / completion metrics."""

import pytest

from fert_metadata.errors import DegenerateTokenError
from fert_metadata.metrics import compute_metrics

from .conftest import FIXED_NOW, make_token


class TestComputeMetrics:
    def test_mainnet_example(self, token) -> None:
        metrics = compute_metrics(token, 3_013_244)
        assert metrics.bpf_remaining == 2_986_756
        assert metrics.pct == pytest.approx(0.502207, abs=1e-6)

    def test_remaining_zero_at_end(self, token) -> None:
        assert compute_metrics(token, token.end_bpf).bpf_remaining == 0

    def test_remaining_clamped_past_end(self, token) -> None:
        metrics = compute_metrics(token, token.end_bpf + 5_000_000)
        assert metrics.bpf_remaining == 0
        assert metrics.pct > 1

    def test_remaining_non_increasing(self) -> None:
        token = make_token(id=6_000_000, start_bpf=1_000_000)
        values = [
            compute_metrics(token, g).bpf_remaining
            for g in range(1_000_000, 8_000_001, 250_000)
        ]
        assert all(v >= 0 for v in values)
        assert values == sorted(values, reverse=True)

    def test_pct_bounds_at_start_and_end(self) -> None:
        token = make_token(id=6_000_000, start_bpf=2_000_000)
        assert compute_metrics(token, 2_000_000).pct == 0
        assert compute_metrics(token, 6_000_000).pct == 1

    def test_pct_negative_before_start(self) -> None:
        """Not clamped: presentation decides what to do with it."""
        token = make_token(id=6_000_000, start_bpf=2_000_000)
        assert compute_metrics(token, 1_000_000).pct == pytest.approx(-0.25)

    def test_degenerate_token_rejected(self) -> None:
        token = make_token(id=6_000_000, start_bpf=6_000_000)
        with pytest.raises(DegenerateTokenError):
            compute_metrics(token, 3_000_000)

    def test_timestamp_carried(self, token) -> None:
        assert compute_metrics(token, 0, FIXED_NOW).now == FIXED_NOW
        assert compute_metrics(token, 0).now is None
