"""Generate JSON schemas from Pydantic models and save to schemas/ directory."""

import json
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from stormdefs.kernel.definition import SCHEMAS


def generate_schemas():
    """Generate JSON schemas for all record schemas."""
    schemas_dir = Path(__file__).parent.parent / "schemas"
    schemas_dir.mkdir(exist_ok=True)

    for name, schema in SCHEMAS.items():
        record_schema = schema.model.model_json_schema(by_alias=True)
        schema_path = schemas_dir / f"definition_{name}.schema.json"
        with open(schema_path, 'w', encoding='utf-8') as f:
            json.dump(record_schema, f, indent=2, ensure_ascii=False)
        print(f"Generated: {schema_path}")

    print("\nSchema generation complete!")


if __name__ == "__main__":
    generate_schemas()
