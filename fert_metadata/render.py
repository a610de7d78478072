"""Image, metadata, page and index rendering for Fertilizer tokens."""

from dataclasses import dataclass
from decimal import Decimal

from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape

from .canvas import SvgCanvas
from .config import RunConfig
from .graphics import BAG_HEIGHT, BAG_WIDTH, FERTILIZER_BAG
from .metrics import DerivedMetrics
from .models import TokenRecord, encode_output_id

WIDTH = 600
HEIGHT = 600
CONTENT_PADDING = 20
SEASON_SIZE = 50
PCT_COMPLETE_SIZE = 30
PROGRESS_COLOR = "#46B955"

DESCRIPTION = (
    "A trusty constituent of any Farmer's toolbox, ERC-1155 FERT has been known to "
    "spur new growth on seemingly dead farms. Once purchased and deployed into fertile "
    "ground by Farmers, Fertilizer generates new Sprouts: future Beans yet to be repaid "
    "by Beanstalk in exchange for doing the work of Replanting the protocol."
)
FOOTER = (
    "Fertilizer is an ERC-1155 token. Its metadata will be updated to reflect the "
    "number of Beans remaining to be minted per Fertilizer (BPF)."
)
SOURCE_URL = "https://github.com/BeanstalkFarms/Fertilizer-Metadata"


@dataclass(frozen=True)
class ArtifactSet:
    output_id: str
    image: str
    metadata: dict
    page: str | None = None


def _json_number(value: Decimal) -> int | float:
    if value == value.to_integral_value():
        return int(value)
    return float(value)


class ArtifactRenderer:
    def __init__(self, config: RunConfig):
        self.config = config
        self.env = Environment(
            loader=PackageLoader("fert_metadata", "templates"),
            autoescape=select_autoescape(["html", "j2"]),
            undefined=StrictUndefined,
        )

    def remaining_display(self, bpf_remaining: int) -> float:
        cfg = self.config
        return round(bpf_remaining / cfg.remaining_divisor, cfg.remaining_decimals)

    def _amount_text(self, amount: int) -> str:
        cfg = self.config
        return f"{amount / cfg.remaining_divisor:.{cfg.remaining_decimals}f}"

    def render_image(self, token: TokenRecord, metrics: DerivedMetrics) -> str:
        canvas = SvgCanvas(WIDTH, HEIGHT)

        # Background
        canvas.rect(WIDTH, HEIGHT, fill="white")

        # Progress: past the top edge above 100%, empty below 0%
        progress_height = max(metrics.pct * HEIGHT, 0.0)
        canvas.rect(WIDTH, progress_height, x=0, y=HEIGHT - progress_height,
                    fill=PROGRESS_COLOR, opacity=0.2)

        # Bag
        bag = canvas.group(translate=(WIDTH / 2 - BAG_WIDTH / 2, HEIGHT / 2 - BAG_HEIGHT / 2))
        bag.embed(FERTILIZER_BAG)

        # Text (y is the baseline)
        labels = canvas.group()
        labels.text(f"Season {token.season}", x=CONTENT_PADDING,
                    y=CONTENT_PADDING + SEASON_SIZE, size=SEASON_SIZE)
        labels.text(
            f"{metrics.pct * 100:.1f}% · {self._amount_text(metrics.bpf_remaining)} BPF remaining",
            x=CONTENT_PADDING, y=HEIGHT - CONTENT_PADDING, size=PCT_COMPLETE_SIZE,
        )
        return canvas.to_string()

    def render_metadata(self, token: TokenRecord, metrics: DerivedMetrics,
                        output_id: str) -> dict:
        cfg = self.config
        attributes = [
            {
                "trait_type": "Season",
                "value": token.season,
            },
            {
                "trait_type": "Humidity",
                "display_type": "boost_percentage",
                "value": _json_number(token.humidity * cfg.humidity_scale),
            },
            {
                "trait_type": "BPF Remaining",
                "display_type": "boost_number",
                "value": self.remaining_display(metrics.bpf_remaining),
            },
        ]
        if cfg.include_updated_at and metrics.now is not None:
            attributes.append({
                "trait_type": "Updated At",
                "display_type": "date",
                "value": int(metrics.now.timestamp()),
            })
        doc = {"name": f"Fertilizer - {token.id}"}
        # only link a page that this run writes
        if cfg.emit_pages:
            doc["external_url"] = f"{cfg.site_url}/{output_id}.html"
        doc["description"] = DESCRIPTION
        doc["image"] = f"{cfg.site_url}/{output_id}.svg"
        doc["attributes"] = attributes
        return doc

    def render_page(self, token: TokenRecord, metrics: DerivedMetrics,
                    output_id: str) -> str:
        cfg = self.config
        updated_at = None
        if metrics.now is not None:
            updated_at = metrics.now.strftime("%Y-%m-%d %H:%M:%S %Z").strip()
        return self.env.get_template("token.html.j2").render(
            token=token,
            output_id=output_id,
            uri=f"{cfg.site_url}/{output_id}",
            humidity_pct=f"{token.humidity * cfg.humidity_scale:.2f}",
            remaining=self._amount_text(metrics.bpf_remaining),
            total=self._amount_text(token.end_bpf - token.start_bpf),
            pct=f"{metrics.pct * 100:.2f}",
            updated_at=updated_at,
            marketplace_url=cfg.marketplace_link(output_id),
            footer=FOOTER,
            source_url=SOURCE_URL,
        )

    def render(self, token: TokenRecord, metrics: DerivedMetrics,
               output_id: str) -> ArtifactSet:
        return ArtifactSet(
            output_id=output_id,
            image=self.render_image(token, metrics),
            metadata=self.render_metadata(token, metrics, output_id),
            page=self.render_page(token, metrics, output_id) if self.config.emit_pages else None,
        )

    def render_index(self, tokens: list[TokenRecord]) -> str:
        """One link per token, in the order given."""
        ext = "html" if self.config.emit_pages else "json"
        entries = []
        for token in tokens:
            output_id = encode_output_id(token.id, self.config.id_encoding)
            entries.append({"output_id": output_id, "href": f"{output_id}.{ext}"})
        return self.env.get_template("index.html.j2").render(
            entries=entries,
            footer=FOOTER,
            source_url=SOURCE_URL,
        )
