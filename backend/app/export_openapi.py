"""Write the synthesized OpenAPI document to a file or stdout.

Usage: python -m app.export_openapi [--output openapi.json]
"""

import argparse
import sys
from pathlib import Path

from app.config import get_settings
from app.core.openapi_document import build_openapi_document, render_openapi_json
from app.services.component_registry import build_components


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--output", "-o", help="Output path (default: stdout)")
    args = parser.parse_args(argv)

    document = build_openapi_document(
        build_components(), get_settings().openapi_info(),
    )
    text = render_openapi_json(document)
    if args.output:
        output = Path(args.output)
        output.write_text(text, encoding="utf-8")
        print(f"Generated {output} ({len(document['paths'])} paths)")
    else:
        sys.stdout.write(text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
