from __future__ import annotations

import json
from pathlib import Path

from evalapi.core.config import Settings
from scripts.export_openapi import build_schema, write_schema


def test_export_writes_schema_with_all_routes(settings: Settings, tmp_path: Path) -> None:
    destination = tmp_path / "nested" / "openapi.json"

    path_count = write_schema(build_schema(settings), destination)

    written = json.loads(destination.read_text())
    assert written["info"]["title"] == settings.app_name
    assert "/api/evaluations/{evaluation_id}" in written["paths"]
    assert path_count == len(written["paths"])
