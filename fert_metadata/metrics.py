"""Per-token BPF metrics."""

from dataclasses import dataclass
from datetime import datetime

from .errors import DegenerateTokenError
from .models import TokenRecord


@dataclass(frozen=True)
class DerivedMetrics:
    bpf_remaining: int
    pct: float
    now: datetime | None = None


def compute_metrics(token: TokenRecord, bpf: int,
                    now: datetime | None = None) -> DerivedMetrics:
    """
    bpf_remaining = max(endBpf - bpf, 0)
    pct = (bpf - startBpf) / (endBpf - startBpf), not clamped: below 0 before
    the token starts paying, above 1 once it is fully repaid.
    """
    span = token.end_bpf - token.start_bpf
    if span == 0:
        raise DegenerateTokenError(
            f"Token {token.id}: startBpf == endBpf ({token.end_bpf}), completion undefined"
        )
    return DerivedMetrics(
        bpf_remaining=max(token.end_bpf - bpf, 0),
        pct=(bpf - token.start_bpf) / span,
        now=now,
    )
