"""Writes rendered artifacts under the output directory."""

import json
from pathlib import Path

from .render import ArtifactSet


class ArtifactWriter:
    def __init__(self, output_dir: str | Path, emit_bare_metadata: bool = False):
        self.root = Path(output_dir)
        self.emit_bare_metadata = emit_bare_metadata

    def prepare(self):
        self.root.mkdir(parents=True, exist_ok=True)

    def write(self, name: str, data: str | bytes) -> Path:
        """Full overwrite of root/name."""
        path = self.root / name
        if isinstance(data, str):
            data = data.encode("utf-8")
        path.write_bytes(data)
        return path

    def write_token(self, artifacts: ArtifactSet) -> list[Path]:
        output_id = artifacts.output_id
        metadata = json.dumps(artifacts.metadata, ensure_ascii=False)
        paths = [
            self.write(f"{output_id}.json", metadata),
            self.write(f"{output_id}.svg", artifacts.image),
        ]
        if self.emit_bare_metadata:
            paths.append(self.write(output_id, metadata))
        if artifacts.page is not None:
            paths.append(self.write(f"{output_id}.html", artifacts.page))
        return paths

    def write_index(self, document: str) -> Path:
        return self.write("index.html", document)
