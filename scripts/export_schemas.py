"""Export JSON schemas for Tour and CostBreakdown."""

import json
from pathlib import Path

from backend.app.models import CostBreakdown, Tour


def main() -> None:
    """Export schemas to docs/schemas/."""
    schemas_dir = Path("docs/schemas")
    schemas_dir.mkdir(parents=True, exist_ok=True)

    for name, model in (("Tour", Tour), ("CostBreakdown", CostBreakdown)):
        schema = model.model_json_schema()
        path = schemas_dir / f"{name}.schema.json"
        with open(path, "w") as f:
            json.dump(schema, f, indent=2)
        print(f"Exported {name} schema to {path}")


if __name__ == "__main__":
    main()
