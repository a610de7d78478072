"""Single-run driver: fetch BPF and tokens, render every token, write the index last."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Protocol

from .config import RunConfig
from .console import click_echo, click_warn
from .errors import DegenerateTokenError
from .metrics import compute_metrics
from .models import TokenRecord, encode_output_id
from .render import ArtifactRenderer
from .subgraph import TokenSource
from .writer import ArtifactWriter


class RunState(str, Enum):
    FETCHING = "fetching"
    COMPUTING = "computing"
    RENDERING = "rendering"
    DONE = "done"
    FAILED = "failed"


class BpfReader(Protocol):
    def current_bpf(self) -> int:
        ...


@dataclass
class RunSummary:
    bpf: int = 0
    fetched: int = 0
    rendered: list[str] = field(default_factory=list)
    rejected: list[int] = field(default_factory=list)
    truncated: bool = False
    state: RunState = RunState.FETCHING


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


class MetadataPipeline:
    def __init__(self, config: RunConfig, progress: BpfReader, tokens: TokenSource,
                 writer: ArtifactWriter | None = None,
                 renderer: ArtifactRenderer | None = None,
                 clock: Callable[[], datetime] = utc_now):
        self.config = config
        self.progress = progress
        self.tokens = tokens
        self.writer = writer or ArtifactWriter(config.output_dir, config.emit_bare_metadata)
        self.renderer = renderer or ArtifactRenderer(config)
        self.clock = clock
        self.state = RunState.FETCHING

    def run(self) -> RunSummary:
        summary = RunSummary()
        try:
            self._run(summary)
        except Exception:
            self._set_state(summary, RunState.FAILED)
            raise
        self._set_state(summary, RunState.DONE)
        return summary

    def _set_state(self, summary: RunSummary, state: RunState):
        self.state = summary.state = state

    def _run(self, summary: RunSummary):
        self._set_state(summary, RunState.FETCHING)
        bpf = self.progress.current_bpf()
        click_echo(f"Current BPF: {bpf}")
        fetched = self.tokens.fetch_all_tokens()
        summary.bpf = bpf
        summary.fetched = len(fetched.tokens)
        summary.truncated = fetched.truncated

        now = self.clock()
        self.writer.prepare()
        rendered: list[TokenRecord] = []
        for token in fetched.tokens:
            self._set_state(summary, RunState.COMPUTING)
            try:
                metrics = compute_metrics(token, bpf, now)
            except DegenerateTokenError as e:
                click_warn(f"rejected token {token.id}: {e}")
                summary.rejected.append(token.id)
                continue

            self._set_state(summary, RunState.RENDERING)
            output_id = encode_output_id(token.id, self.config.id_encoding)
            click_echo(
                f"id = {token.id} season = {token.season} output = {output_id} "
                f"bpfRemaining = {metrics.bpf_remaining / self.config.remaining_divisor:.2f} "
                f"pct = {metrics.pct * 100:.2f}"
            )
            self.writer.write_token(self.renderer.render(token, metrics, output_id))
            summary.rendered.append(output_id)
            rendered.append(token)

        index_path = self.writer.write_index(self.renderer.render_index(rendered))
        click_echo(f"Wrote index: {index_path}")
        click_echo(
            f"Rendered {len(summary.rendered)}/{summary.fetched} tokens"
            + (f", rejected {len(summary.rejected)}" if summary.rejected else "")
            + (" (token list truncated)" if summary.truncated else "")
        )
