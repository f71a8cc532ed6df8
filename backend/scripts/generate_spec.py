#!/usr/bin/env python
"""Export the processed OpenAPI documents and optionally update snapshot hashes.

Usage:
  python -m scripts.generate_spec --doc Main --out build/openapi-main.json
  python -m scripts.generate_spec --doc Demo --update-hash
  python -m scripts.generate_spec --check

Options:
  --doc NAME        Document to export: Main or Demo (default: both)
  --out PATH        Write spec JSON to PATH (only with a single --doc)
  --update-hash     Recompute and overwrite tests/openapi_<doc>_hash.txt
  --check           Exit non-zero if a current spec hash != snapshot (CI check)

Safe Defaults:
  Without flags, prints `<doc> <hash>` lines to stdout.

Exit Codes:
  0 success / in-check mode hashes match
  2 mismatch in --check mode
  3 other error
"""
from __future__ import annotations
import argparse, json, hashlib, pathlib, sys

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
TESTS_DIR = ROOT / 'tests'

from template_api import create_app  # noqa: E402
from template_api.openapi import build_openapi_spec  # noqa: E402
from template_api.openapi_parts.constants import DOC_NAMES  # noqa: E402


def snapshot_path(doc_name: str) -> pathlib.Path:
    return TESTS_DIR / f'openapi_{doc_name.lower()}_hash.txt'


def spec_hash(spec: dict) -> str:
    # key order is part of the output (path order comes from the pipeline)
    blob = json.dumps(spec, separators=(',', ':')).encode()
    return hashlib.sha256(blob).hexdigest()


def compute_spec_and_hash(app, doc_name: str):
    spec = build_openapi_spec(app, doc_name)
    return spec, spec_hash(spec)


def main(argv: list[str]) -> int:
    p = argparse.ArgumentParser(description="Export deterministic OpenAPI documents")
    p.add_argument('--doc', choices=DOC_NAMES, help='Document to export (default: all)')
    p.add_argument('--out', dest='out', help='Path to write JSON spec')
    p.add_argument('--update-hash', action='store_true', help='Overwrite snapshot hash files')
    p.add_argument('--check', action='store_true', help='Check current hashes vs snapshots and exit 2 on mismatch')
    args = p.parse_args(argv)

    docs = [args.doc] if args.doc else list(DOC_NAMES)
    if args.out and len(docs) != 1:
        print('--out requires --doc', file=sys.stderr)
        return 3

    try:
        app = create_app({'DATABASE_URL': 'sqlite+pysqlite:///:memory:', 'SWAGGER_UI_ENABLE': True})
    except ValueError as e:
        print(f'Invalid configuration: {e}', file=sys.stderr)
        return 3

    status = 0
    for doc_name in docs:
        spec, h = compute_spec_and_hash(app, doc_name)

        if args.out:
            out_path = pathlib.Path(args.out)
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(json.dumps(spec, indent=2) + '\n')
            print(f"Wrote {doc_name} spec JSON to {out_path} ({len(json.dumps(spec))} bytes)")

        if args.check:
            snap = snapshot_path(doc_name)
            if not snap.exists():
                print(f"Missing snapshot for {doc_name}: {snap}", file=sys.stderr)
                return 3
            expected = snap.read_text().strip()
            if h != expected:
                print(f"{doc_name} spec hash mismatch: expected={expected} current={h}", file=sys.stderr)
                status = 2
            else:
                print(f"{doc_name} spec hash OK: {h}")

        if args.update_hash:
            snapshot_path(doc_name).write_text(h + '\n')
            print(f"Updated {doc_name} snapshot hash -> {h}")

        if not args.out and not args.update_hash and not args.check:
            print(f"{doc_name} {h}")

    return status


if __name__ == '__main__':  # pragma: no cover
    sys.exit(main(sys.argv[1:]))
