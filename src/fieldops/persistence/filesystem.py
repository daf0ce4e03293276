"""Run artifacts on the local filesystem."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

from ..config import settings


class FileStorage:
    """One timestamped directory per run under ``<data_root>/outputs``."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = Path(root or settings.data_root).resolve()
        self.output_root = self.root / "outputs"
        self.output_root.mkdir(parents=True, exist_ok=True)

    def make_run_directory(self, prefix: str = "assignment") -> Path:
        # Microseconds keep back-to-back runs for the same technician apart.
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        run_dir = self.output_root / f"{prefix}_{stamp}"
        run_dir.mkdir(parents=True, exist_ok=False)
        return run_dir

    def write_json(self, path: Path, data: Any, *, indent: int = 2) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, ensure_ascii=False, indent=indent), encoding="utf-8")

    def write_csv(self, path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)

    def save_run(self, prefix: str, artifacts: Mapping[str, Any]) -> Path:
        """Write each artifact into a fresh run directory.

        String content is written as-is; anything else is serialized as JSON.
        """
        run_dir = self.make_run_directory(prefix)
        for name, content in artifacts.items():
            if isinstance(content, str):
                self.write_csv(run_dir / name, content)
            else:
                self.write_json(run_dir / name, content)
        return run_dir
