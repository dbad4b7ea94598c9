import argparse
import json
from pathlib import Path

from book_catalog_api.main import app


def main() -> None:
    parser = argparse.ArgumentParser(description="Write the API's OpenAPI schema to disk.")
    parser.add_argument("--output", type=Path, default=Path("docs") / "openapi.json")
    args = parser.parse_args()

    schema = app.openapi()
    args.output.parent.mkdir(parents=True, exist_ok=True)

    with args.output.open("w", encoding="utf-8") as f:
        json.dump(schema, f, indent=2)

    print(f"OpenAPI spec successfully written to {args.output}")


if __name__ == "__main__":
    main()
