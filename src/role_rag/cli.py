"""
Command line entry point.

    role-rag serve [--host H] [--port P]
    role-rag ingest manifest.json

The manifest is a JSON list of {"path", "department", "allowed_roles"}
objects. Relative paths resolve against the manifest's directory.
"""

import argparse
import json
import logging
import os
import sys
from typing import Optional

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from role_rag.config import ServiceConfig
from role_rag.indexing.ingestion import IngestEntry
from role_rag.services import build_services
from role_rag.utils.logger import configure_logging

logger = logging.getLogger(__name__)

_manifest_adapter = TypeAdapter(list[IngestEntry])


def load_manifest(path: str) -> list[IngestEntry]:
    with open(path, encoding="utf-8") as f:
        entries = _manifest_adapter.validate_python(json.load(f))

    base = os.path.dirname(os.path.abspath(path))
    return [
        entry.model_copy(update={"path": os.path.join(base, entry.path)})
        if not os.path.isabs(entry.path) else entry
        for entry in entries
    ]


def _serve(args: argparse.Namespace, config: ServiceConfig) -> int:
    import uvicorn

    from role_rag.api.app import create_app

    uvicorn.run(
        create_app(config=config),
        host=args.host or config.server.host,
        port=args.port or config.server.port,
        log_level=config.server.log_level.lower(),
    )
    return 0


def _ingest(args: argparse.Namespace, config: ServiceConfig) -> int:
    try:
        entries = load_manifest(args.manifest)
    except (OSError, json.JSONDecodeError, PydanticValidationError) as e:
        logger.error("Cannot read manifest %s: %s", args.manifest, e)
        return 2

    services = build_services(config)
    results = services.ingestor.ingest_many(entries)

    for result in results:
        status = "ok" if result.success else "FAILED"
        print(f"[{status}] {result.source}: {result.message} ({result.chunk_count} chunks)")

    failed = [r for r in results if not r.success]
    print(f"{len(results) - len(failed)}/{len(results)} files ingested")
    return 1 if failed else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="role-rag", description="Role-aware RAG service")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.set_defaults(handler=_serve)

    ingest = subparsers.add_parser("ingest", help="Ingest files listed in a JSON manifest")
    ingest.add_argument("manifest", help="Path to a JSON list of {path, department, allowed_roles}")
    ingest.set_defaults(handler=_ingest)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = ServiceConfig.from_env()
    configure_logging(config.server.log_level)
    return args.handler(args, config)


if __name__ == "__main__":
    sys.exit(main())
