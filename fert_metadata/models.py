"""Fertilizer token records and output identifier encoding."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum

from .errors import InvalidTokenError


class IdEncoding(str, Enum):
    DECIMAL = "decimal"
    HEX = "hex"


def encode_output_id(token_id: int, encoding: IdEncoding) -> str:
    """File stem for a token id.

    DECIMAL gives "6000000"; HEX gives the 64-digit zero-padded lowercase
    form used by ERC-1155 `{id}` URI substitution.
    """
    if token_id < 0:
        raise InvalidTokenError(f"Token id must be non-negative, got {token_id}")
    if encoding is IdEncoding.DECIMAL:
        return str(token_id)
    if encoding is IdEncoding.HEX:
        if token_id >= 1 << 256:
            raise InvalidTokenError(f"Token id {token_id} does not fit in uint256")
        return format(token_id, "064x")
    raise ValueError(f"Unknown id encoding: {encoding!r}")


@dataclass(frozen=True)
class TokenRecord:
    id: int
    supply: int
    humidity: Decimal
    start_bpf: int
    end_bpf: int
    season: int

    def __post_init__(self):
        if self.id <= 0:
            raise InvalidTokenError(f"Token id must be positive, got {self.id}")
        if self.supply < 0:
            raise InvalidTokenError(f"Token {self.id}: negative supply {self.supply}")
        if not self.humidity.is_finite():
            raise InvalidTokenError(f"Token {self.id}: humidity must be finite, got {self.humidity}")
        if self.humidity < 0:
            raise InvalidTokenError(f"Token {self.id}: negative humidity {self.humidity}")
        if self.season < 0:
            raise InvalidTokenError(f"Token {self.id}: negative season {self.season}")
        if self.start_bpf < 0:
            raise InvalidTokenError(f"Token {self.id}: negative startBpf {self.start_bpf}")
        if self.end_bpf != self.id:
            raise InvalidTokenError(f"Token {self.id}: endBpf {self.end_bpf} != id")
        if self.start_bpf > self.end_bpf:
            raise InvalidTokenError(
                f"Token {self.id}: startBpf {self.start_bpf} > endBpf {self.end_bpf}"
            )

    @classmethod
    def from_subgraph(cls, raw: dict) -> "TokenRecord":
        """Parse a `fertilizerTokens` entity; BigInt/BigDecimal arrive as strings."""
        try:
            fields = dict(
                id=int(raw["id"]),
                supply=int(raw["supply"]),
                humidity=Decimal(str(raw["humidity"])),
                start_bpf=int(raw["startBpf"]),
                end_bpf=int(raw["endBpf"]),
                season=int(raw["season"]),
            )
        except (KeyError, TypeError, ValueError, InvalidOperation) as e:
            raise InvalidTokenError(f"Malformed fertilizer token {raw!r}: {e}") from e
        return cls(**fields)
