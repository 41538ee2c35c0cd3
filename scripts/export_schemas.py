#!/usr/bin/env python3
"""Export JSON schemas for the wire models."""

import json
from pathlib import Path

from backend.app.models import ItineraryState, Trip


def export_schemas() -> None:
    """Export camelCase JSON schemas for Trip and ItineraryState."""
    schemas_dir = Path("docs/schemas")
    schemas_dir.mkdir(parents=True, exist_ok=True)

    paths = []
    for model in (Trip, ItineraryState):
        path = schemas_dir / f"{model.__name__}.schema.json"
        with open(path, "w", encoding="utf-8") as f:
            json.dump(model.model_json_schema(by_alias=True), f, indent=2, ensure_ascii=False)
        paths.append(path)

    print(f"Exported schemas to {schemas_dir}")
    for path in paths:
        print(f"- {path}")


if __name__ == "__main__":
    export_schemas()
