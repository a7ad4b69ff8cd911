#!/usr/bin/env python3
"""Write the API's OpenAPI document to disk.

Usage: export_openapi.py [DESTINATION]   (default: docs/api/openapi.json)
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

from evalapi.api.main import create_app
from evalapi.core.config import Settings

DEFAULT_DESTINATION = Path("docs/api/openapi.json")


def build_schema(settings: Settings) -> dict:
    # A never-connected engine is enough to render the routes
    app = create_app(settings)
    return app.openapi()


def write_schema(schema: dict, destination: Path) -> int:
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(json.dumps(schema, indent=2, sort_keys=True) + "\n")
    return len(schema.get("paths", {}))


def main() -> None:
    if len(sys.argv) > 2:
        sys.exit("usage: export_openapi.py [destination]")

    destination = Path(sys.argv[1]) if len(sys.argv) == 2 else DEFAULT_DESTINATION
    settings = Settings()
    path_count = write_schema(build_schema(settings), destination)
    print(f"{settings.app_name} {settings.version}: {path_count} paths -> {destination}")


if __name__ == "__main__":
    main()
