"""Command-line interface for docweave."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import uvicorn

from .config import settings


def main(argv: Optional[list[str]] = None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="docweave - compose documents from reusable {{key}} fragments"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Server command
    server_parser = subparsers.add_parser("serve", help="Start the web server")
    server_parser.add_argument(
        "--host", default=settings.host, help=f"Host to bind to (default: {settings.host})"
    )
    server_parser.add_argument(
        "--port", type=int, default=settings.port, help=f"Port to bind to (default: {settings.port})"
    )
    server_parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload for development"
    )

    # Walk command
    walk_parser = subparsers.add_parser(
        "walk", help="List every placeholder reachable from a document as JSON"
    )
    walk_parser.add_argument("snapshot", type=Path, help="JSON file with the documents")
    walk_parser.add_argument("root", help="Id of the document to start from")
    walk_parser.add_argument("--overrides", type=Path, help="JSON file with an override map")

    # Expand command
    expand_parser = subparsers.add_parser("expand", help="Print the composed text of a document")
    expand_parser.add_argument("snapshot", type=Path, help="JSON file with the documents")
    expand_parser.add_argument("root", help="Id of the document to render")
    expand_parser.add_argument("--overrides", type=Path, help="JSON file with an override map")

    # Key allocation command
    key_parser = subparsers.add_parser(
        "allocate-key", help="Derive a placeholder key from a title"
    )
    key_parser.add_argument("title", help="Title of the referenced document")
    key_parser.add_argument(
        "--existing", nargs="*", default=[], help="Keys already in use"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        run_server(args.host, args.port, args.reload)
    elif args.command == "walk":
        run_walk(args.snapshot, args.root, args.overrides)
    elif args.command == "expand":
        run_expand(args.snapshot, args.root, args.overrides)
    elif args.command == "allocate-key":
        from .placeholders import allocate_key

        print(allocate_key(args.title, args.existing))
    else:
        parser.print_help()
        sys.exit(1)


def run_server(host: str, port: int, reload: bool):
    """Run the web server."""
    uvicorn.run(
        "docweave.api:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


def _load_inputs(snapshot_path: Path, overrides_path: Optional[Path]):
    """Read a snapshot file and an optional override map file."""
    from .composition import DocumentSnapshot

    try:
        snapshot = DocumentSnapshot.from_json(json.loads(snapshot_path.read_text()))
        overrides = json.loads(overrides_path.read_text()) if overrides_path else {}
    except (OSError, ValueError) as e:
        print(f"Error: could not load input: {e}", file=sys.stderr)
        sys.exit(1)

    if not isinstance(overrides, dict):
        print("Error: overrides file must contain a JSON object", file=sys.stderr)
        sys.exit(1)

    bad_entries = [key for key, value in overrides.items() if not isinstance(value, str)]
    if bad_entries:
        print(
            f"Error: override values must be document id strings: {', '.join(bad_entries)}",
            file=sys.stderr,
        )
        sys.exit(1)

    return snapshot, overrides


def run_walk(snapshot_path: Path, root: str, overrides_path: Optional[Path] = None):
    """Print resolution records for a composition."""
    from .composition import CompositionWalker

    snapshot, overrides = _load_inputs(snapshot_path, overrides_path)
    if root not in snapshot:
        print(f"Error: document '{root}' not found", file=sys.stderr)
        sys.exit(1)

    records = CompositionWalker(snapshot).walk(root, overrides)
    print(json.dumps([r.model_dump() for r in records], indent=2))


def run_expand(snapshot_path: Path, root: str, overrides_path: Optional[Path] = None):
    """Print the composed text of a document."""
    from .composition import ContentExpander

    snapshot, overrides = _load_inputs(snapshot_path, overrides_path)
    if root not in snapshot:
        print(f"Error: document '{root}' not found", file=sys.stderr)
        sys.exit(1)

    print(ContentExpander(snapshot).expand(root, overrides))


if __name__ == "__main__":
    main()
