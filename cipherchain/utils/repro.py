from __future__ import annotations

import json
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np


def set_global_seed(seed: int) -> None:
    random.seed(seed)
    np.random.seed(seed)


@dataclass(frozen=True)
class ReportPaths:
    report_dir: Path
    csv: Path
    html: Path
    json: Path


def make_report_paths(reports_root: str | Path, stem: str = "encryption-test-report") -> ReportPaths:
    report_dir = Path(reports_root)
    report_dir.mkdir(parents=True, exist_ok=True)
    return ReportPaths(
        report_dir=report_dir,
        csv=report_dir / f"{stem}.csv",
        html=report_dir / f"{stem}.html",
        json=report_dir / f"{stem}.json",
    )


def write_json(path: str | Path, obj: Any) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2, sort_keys=True), encoding="utf-8")


def read_json(path: str | Path) -> Any:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def write_text(path: str | Path, text: str) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
