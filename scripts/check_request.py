#!/usr/bin/env python3
"""
Check a single request against a route schema from the command line.

The schema file is JSON shaped like RouteSchema:
    {"params": [{"key": "id", "type": "int"}],
     "queries": [{"key": "page", "type": "int", "nullable": true}],
     "payload": [{"key": "name", "type": "string"}]}

Usage:
    python scripts/check_request.py --schema route.json --url "/items/3?page=2" --param id=3
    python scripts/check_request.py --schema route.json --method POST \
        --header "Content-Type: application/json" --body body.json
    echo '{"name": "x"}' | python scripts/check_request.py --schema route.json --method POST \
        --header "Content-Type: application/json" --body -

Exit code is 0 when the request passes, 1 when it doesn't, 2 on usage errors.
"""

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

# Load environment variables
load_dotenv()

from reqcheck.core.checker import CheckRequest, check
from reqcheck.schemas.annotation import RouteSchema


def _pairs(values: list[str], sep: str) -> dict[str, str]:
    out: dict[str, str] = {}
    for item in values:
        k, found, v = item.partition(sep)
        if not found:
            raise argparse.ArgumentTypeError(f"expected KEY{sep}VALUE, got {item!r}")
        out[k.strip()] = v.strip()
    return out


def _body_reader(source: str | None):
    if source is None:
        return None
    if source == "-":
        return lambda: sys.stdin.buffer.read()
    path = Path(source)
    return lambda: path.read_bytes()


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(description="Validate a request against a route schema")
    parser.add_argument("--schema", type=Path, required=True, help="Route schema JSON file")
    parser.add_argument("--method", default="GET")
    parser.add_argument("--url", default="/", help="Request URL including the query string")
    parser.add_argument("--param", action="append", default=[], help="Path param KEY=VALUE (repeatable)")
    parser.add_argument("--header", action="append", default=[], help="Header NAME:VALUE (repeatable)")
    parser.add_argument("--body", help="Body file, or - for stdin")
    args = parser.parse_args(argv)

    try:
        schema = RouteSchema.model_validate_json(args.schema.read_text())
        params = _pairs(args.param, "=")
        headers = _pairs(args.header, ":")
    except (OSError, ValidationError, argparse.ArgumentTypeError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2

    req = CheckRequest(
        method=args.method.upper(),
        url=args.url,
        headers=headers,
        read_body=_body_reader(args.body),
    )
    res = check(req, schema, params)

    out = {
        "status": res.status,
        "params": res.params,
        "queries": res.queries,
        "payload": res.payload,
        "error": res.error_detail(),
    }
    print(json.dumps(out, indent=2, default=str))
    return 0 if res.ok else 1


if __name__ == "__main__":
    sys.exit(main())
