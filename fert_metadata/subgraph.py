"""Paginated Fertilizer token queries against the Beanstalk subgraph."""

from dataclasses import dataclass, field
from typing import Protocol

import requests

from .console import click_echo, click_warn
from .errors import TransportError
from .models import TokenRecord

FERTILIZER_TOKENS_QUERY = """
query FertilizerTokens($first: Int!, $season: Int!, $exclude: [ID!]!) {
  fertilizerTokens(
    first: $first
    where: { season_gte: $season, id_not_in: $exclude }
    orderBy: season
    orderDirection: asc
  ) {
    id
    supply
    humidity
    season
    startBpf
    endBpf
  }
}
"""


@dataclass(frozen=True)
class SeasonCursor:
    """
    Position after the last token seen: its season, plus the ids already
    returned at that season. Querying season >= cursor.season while excluding
    those ids walks (season, id) pairs, so a season holding more tokens than
    fit in one page still makes progress.
    """
    season: int = 0
    exclude_ids: tuple[int, ...] = ()

    def advance(self, page: list[TokenRecord]) -> "SeasonCursor":
        last_season = page[-1].season
        tied = [t.id for t in page if t.season == last_season]
        if last_season == self.season:
            tied = list(self.exclude_ids) + tied
        return SeasonCursor(last_season, tuple(dict.fromkeys(tied)))


class TokenPageTransport(Protocol):
    def fetch_page(self, cursor: SeasonCursor, first: int) -> list[TokenRecord]:
        ...


class SubgraphTransport:
    """POSTs the fertilizerTokens query to a Graph endpoint."""

    def __init__(self, url: str, session: requests.Session | None = None,
                 timeout: float = 30.0):
        self.url = url
        self.session = session or requests.Session()
        self.timeout = timeout

    def query(self, query: str, variables: dict) -> dict:
        try:
            resp = self.session.post(
                self.url,
                json={"query": query, "variables": variables},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            payload = resp.json()
        except requests.RequestException as e:
            raise TransportError(f"Subgraph request to {self.url} failed: {e}") from e
        except ValueError as e:
            raise TransportError(f"Subgraph returned invalid JSON: {e}") from e
        if payload.get("errors"):
            raise TransportError(f"Subgraph query failed: {payload['errors']}")
        data = payload.get("data")
        if not isinstance(data, dict):
            raise TransportError(f"Subgraph response missing data: {payload!r}")
        return data

    def fetch_page(self, cursor: SeasonCursor, first: int) -> list[TokenRecord]:
        data = self.query(FERTILIZER_TOKENS_QUERY, {
            "first": first,
            "season": cursor.season,
            "exclude": [str(i) for i in cursor.exclude_ids],
        })
        rows = data.get("fertilizerTokens")
        if rows is None:
            raise TransportError("Subgraph response missing fertilizerTokens")
        return [TokenRecord.from_subgraph(row) for row in rows]


@dataclass
class FetchResult:
    tokens: list[TokenRecord] = field(default_factory=list)
    page_requests: int = 0
    truncated: bool = False


class TokenSource:
    def __init__(self, transport: TokenPageTransport, page_size: int = 1000,
                 max_requests: int = 100):
        self.transport = transport
        self.page_size = page_size
        self.max_requests = max_requests

    def fetch_all_tokens(self) -> FetchResult:
        """
        Page through every token in ascending season order.
        Stops on an empty or short page. Hitting max_requests stops early and
        returns what was accumulated with truncated=True.
        """
        click_echo("Querying subgraph for Fertilizer data.")
        result = FetchResult()
        seen: set[int] = set()
        cursor = SeasonCursor()

        while True:
            if result.page_requests >= self.max_requests:
                result.truncated = True
                click_warn(
                    f"pagination exceeded maximum requests ({self.max_requests}); "
                    f"continuing with {len(result.tokens)} tokens"
                )
                break

            click_echo(f"paginate: season >= {cursor.season}")
            page = self.transport.fetch_page(cursor, self.page_size)
            result.page_requests += 1

            for token in page:
                if token.id not in seen:
                    seen.add(token.id)
                    result.tokens.append(token)

            if len(page) < self.page_size:
                break
            cursor = cursor.advance(page)

        click_echo(f"Queried Fertilizer data: {len(result.tokens)} tokens.")
        return result
