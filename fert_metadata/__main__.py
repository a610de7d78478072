"""CLI entry point for fertilizer-metadata."""

from decimal import Decimal, InvalidOperation

import click

from .config import PROFILES, RunConfig, load_config
from .errors import FertilizerError, InvalidTokenError
from .metrics import compute_metrics
from .models import IdEncoding, TokenRecord, encode_output_id
from .pipeline import MetadataPipeline, utc_now
from .progress import ProgressSource, connect
from .render import ArtifactRenderer
from .subgraph import SubgraphTransport, TokenSource
from .writer import ArtifactWriter

RUN_ERRORS = (FertilizerError, InvalidTokenError, OSError)


def build_config(ctx, require_network: bool = True, **options) -> RunConfig:
    obj = ctx.obj
    try:
        return RunConfig.from_sources(
            {**obj["options"], **options}, obj["config"],
            require_network=require_network,
        )
    except FertilizerError as e:
        raise click.ClickException(str(e)) from e


def make_pipeline(config: RunConfig) -> MetadataPipeline:
    w3 = connect(config)
    tokens = TokenSource(
        SubgraphTransport(config.subgraph_url),
        page_size=config.page_size,
        max_requests=config.max_requests,
    )
    return MetadataPipeline(config, ProgressSource(w3, config), tokens)


@click.group()
@click.option("--rpc", envvar="RPC_URL", default=None, help="Ethereum RPC URL")
@click.option("--subgraph", envvar="SUBGRAPH_URL", default=None, help="Beanstalk subgraph GraphQL URL")
@click.option("--chain-id", envvar="CHAIN_ID", default=None, type=int, help="Expected chain id of the RPC")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True), help="Path to config.yaml")
@click.pass_context
def cli(ctx, rpc, subgraph, chain_id, config_path):
    """Fertilizer metadata generator: images, metadata and pages per token."""
    ctx.ensure_object(dict)
    try:
        ctx.obj["config"] = load_config(config_path)
    except FertilizerError as e:
        raise click.ClickException(str(e)) from e
    ctx.obj["options"] = {
        "rpc_url": rpc,
        "subgraph_url": subgraph,
        "chain_id": chain_id,
    }


@cli.command()
@click.option("--out", "output_dir", envvar="OUTPUT_DIR", default=None, help="Output directory (default: dist)")
@click.option("--profile", type=click.Choice(list(PROFILES)), default=None,
              help="Layout profile: site (decimal ids + pages) or metadata (hex ids, JSON only)")
@click.option("--encoding", "id_encoding", type=click.Choice([e.value for e in IdEncoding]),
              default=None, help="Output identifier encoding")
@click.option("--pages/--no-pages", "emit_pages", default=None, help="Write an HTML page per token")
@click.option("--page-size", type=int, default=None, help="Tokens per subgraph request (default: 1000)")
@click.option("--max-requests", type=int, default=None, help="Pagination failsafe (default: 100)")
@click.pass_context
def generate(ctx, output_dir, profile, id_encoding, emit_pages, page_size, max_requests):
    """Regenerate every token artifact and the index."""
    config = build_config(
        ctx, output_dir=output_dir, profile=profile, id_encoding=id_encoding,
        emit_pages=emit_pages, page_size=page_size, max_requests=max_requests,
    )
    try:
        summary = make_pipeline(config).run()
    except RUN_ERRORS as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"\nDone. {len(summary.rendered)} tokens written to {config.output_dir}")


@cli.command()
@click.pass_context
def status(ctx):
    """Show chain id and Beanstalk Fertilizer counters."""
    config = build_config(ctx)
    try:
        w3 = connect(config)
        progress = ProgressSource(w3, config)
        bpf = progress.current_bpf()
        end_bpf = progress.end_bpf()
        active = progress.active_fertilizer()
    except RUN_ERRORS as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Chain id:            {config.chain_id}")
    click.echo(f"Beanstalk:           {progress.beanstalk.address}")
    click.echo(f"Current BPF:         {bpf} ({bpf / config.remaining_divisor:.2f})")
    click.echo(f"End BPF:             {end_bpf} ({end_bpf / config.remaining_divisor:.2f})")
    click.echo(f"Active Fertilizer:   {active}")


@cli.command()
@click.option("--id", "token_id", required=True, type=int, help="Token id (= endBpf)")
@click.option("--start", "start_bpf", default=0, type=int, help="BPF at mint time (default: 0)")
@click.option("--season", required=True, type=int, help="Season minted")
@click.option("--humidity", required=True, help="Humidity at mint (e.g. 5 or 2.5)")
@click.option("--supply", default=1, type=int, help="Amount minted (default: 1)")
@click.option("--bpf", required=True, type=int, help="Current beans per fertilizer")
@click.option("--out", "output_dir", default=None, help="Output directory (default: dist)")
@click.option("--profile", type=click.Choice(list(PROFILES)), default=None, help="Layout profile")
@click.pass_context
def preview(ctx, token_id, start_bpf, season, humidity, supply, bpf, output_dir, profile):
    """Render one token from explicit values, without RPC or subgraph."""
    config = build_config(ctx, require_network=False, output_dir=output_dir, profile=profile)
    try:
        humidity_value = Decimal(humidity)
    except InvalidOperation:
        raise click.BadParameter(f"not a number: {humidity!r}", param_hint="--humidity")

    try:
        token = TokenRecord(
            id=token_id, supply=supply, humidity=humidity_value,
            start_bpf=start_bpf, end_bpf=token_id, season=season,
        )
        metrics = compute_metrics(token, bpf, utc_now())
        output_id = encode_output_id(token.id, config.id_encoding)
        renderer = ArtifactRenderer(config)
        writer = ArtifactWriter(config.output_dir, config.emit_bare_metadata)
        writer.prepare()
        paths = writer.write_token(renderer.render(token, metrics, output_id))
        paths.append(writer.write_index(renderer.render_index([token])))
    except RUN_ERRORS as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"bpfRemaining = {renderer.remaining_display(metrics.bpf_remaining)} "
               f"pct = {metrics.pct * 100:.2f}")
    for path in paths:
        click.echo(f"Wrote {path}")


if __name__ == "__main__":
    cli()
