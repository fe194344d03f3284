"""Command-line interface for CatalogSmith."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import uvicorn

from .exceptions import CatalogSmithError


def main(argv: Optional[list[str]] = None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="CatalogSmith - Marketplace catalog builder and assistant"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Server command
    server_parser = subparsers.add_parser("serve", help="Start the web server")
    server_parser.add_argument(
        "--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)"
    )
    server_parser.add_argument(
        "--port", type=int, default=8000, help="Port to bind to (default: 8000)"
    )
    server_parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload for development"
    )

    # Build command
    build_parser = subparsers.add_parser(
        "build", help="Fill a marketplace template from a raw inventory sheet"
    )
    build_parser.add_argument("template", type=Path, help="Marketplace template (.csv/.xlsx)")
    build_parser.add_argument("raw", type=Path, help="Raw inventory export (.csv/.xlsx)")
    build_parser.add_argument("--output", "-o", type=Path, help="Output .xlsx path")
    build_parser.add_argument("--marketplace", "-m", help="Target marketplace (default: Amazon)")
    build_parser.add_argument(
        "--override",
        action="append",
        default=[],
        metavar="TEMPLATE=RAW",
        help="Force a column mapping; leave RAW empty to smart-fill instead",
    )

    # Enrich command
    enrich_parser = subparsers.add_parser(
        "enrich", help="Get copy and SEO insights for a filled catalog"
    )
    enrich_parser.add_argument("template", type=Path, help="Marketplace template (.csv/.xlsx)")
    enrich_parser.add_argument("raw", type=Path, help="Raw inventory export (.csv/.xlsx)")
    enrich_parser.add_argument("--marketplace", "-m", help="Target marketplace (default: Amazon)")

    # Chat command
    subparsers.add_parser("chat", help="Start an interactive assistant session")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "serve":
            run_server(args.host, args.port, args.reload)
        elif args.command == "build":
            run_build(args.template, args.raw, args.output, args.marketplace, args.override)
        elif args.command == "enrich":
            asyncio.run(run_enrich(args.template, args.raw, args.marketplace))
        elif args.command == "chat":
            asyncio.run(run_chat())
        else:
            parser.print_help()
            sys.exit(1)
    except CatalogSmithError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def run_server(host: str, port: int, reload: bool):
    """Run the web server."""
    uvicorn.run(
        "catalogsmith.api:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


def parse_override(value: str) -> tuple[str, str]:
    """Split a TEMPLATE=RAW override argument."""
    if "=" not in value:
        raise CatalogSmithError(f"Override '{value}' must look like TEMPLATE=RAW")
    template_header, raw_header = value.split("=", 1)
    return template_header, raw_header


def _load_session(template_path: Path, raw_path: Path, marketplace: Optional[str]):
    from .mapping.session import CatalogSession
    from .sheets import decode_path

    session = CatalogSession(marketplace=marketplace)
    session.load_template(decode_path(template_path))
    session.load_raw(decode_path(raw_path))
    return session


def run_build(
    template_path: Path,
    raw_path: Path,
    output: Optional[Path],
    marketplace: Optional[str],
    overrides: list[str],
):
    """Map, fill and export a catalog workbook."""
    session = _load_session(template_path, raw_path, marketplace)
    for value in overrides:
        session.override(*parse_override(value))

    for match in session.matches():
        source = match.raw_header or "(smart fill)"
        print(f"  {match.template_header:<30} <- {source} [{match.tier.value}]")

    tags = session.marketplace_tags()
    if tags:
        print(f"Marketplace columns detected: {', '.join(tags)}")

    output = output or Path(session.export_filename())
    output.write_bytes(session.export_workbook())
    print(f"Wrote {len(session.raw.rows)} rows to {output}")


async def run_enrich(template_path: Path, raw_path: Path, marketplace: Optional[str]):
    """Print enrichment insights for the filled catalog."""
    from .agent import EnrichmentOrchestrator
    from .llm import create_gateway

    session = _load_session(template_path, raw_path, marketplace)
    orchestrator = EnrichmentOrchestrator(create_gateway())
    insights = await orchestrator.enrich(session.marketplace, session.enrichment_sample())

    print(f"Enrichment playbook for {session.marketplace}:")
    for insight in insights:
        print(f"  - {insight}")


async def run_chat():
    """Run an interactive assistant session."""
    from .agent import AssistantDialogueRouter
    from .llm import LLMMessage, create_gateway

    print("CatalogSmith Assistant")
    print("=" * 40)
    print("Type 'quit' or 'exit' to exit.")
    print("Type 'reset' to clear conversation.")
    print()

    dialogue = AssistantDialogueRouter(create_gateway())
    history: list[LLMMessage] = []

    while True:
        try:
            user_input = input("You: ").strip()
        except EOFError:
            break

        if not user_input:
            continue

        if user_input.lower() in ("quit", "exit"):
            print("Goodbye!")
            break

        if user_input.lower() == "reset":
            history = []
            print("Conversation reset.")
            continue

        reply = await dialogue.reply(user_input, history)
        print(f"\nCatalogSmith: {reply}\n")
        history.append(LLMMessage(role="user", content=user_input))
        history.append(LLMMessage(role="assistant", content=reply))


if __name__ == "__main__":
    main()
