"""
ActionResolver — Command Line Entry Point

Resolve and run free-text commands against a YAML action catalog, inspect
candidates and suggestions, or serve the catalog over stdio JSON-RPC.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from actionresolver import __version__
from actionresolver.config.settings import ResolverSettings, load_settings
from actionresolver.core.catalog import ActionCatalog, CatalogError
from actionresolver.core.execution.executor import ActionExecutor
from actionresolver.core.orchestrator import Candidate, CommandOrchestrator
from actionresolver.core.rpc_server import ActionRPCServer
from actionresolver.core.scope import ScopeContext, StaticScopeProvider
from actionresolver.services.catalog_loader import load_catalog_file
from actionresolver.ui.colors import AMBER, BOLD, ELECTRIC_CYAN, GREEN, MID_GRAY, RED, colorize

logger = logging.getLogger("ActionResolver.CLI")

VERSION = __version__


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def console_navigate(route: str) -> None:
    """Navigation handler for the terminal: report the route change."""
    print(colorize(f"→ Navigating to {route}", ELECTRIC_CYAN))


def _log_navigate(route: str) -> None:
    logger.info(f"Navigating to {route}")


def _prompt_approval(candidate: Candidate) -> bool:
    action = candidate.action
    level = action.danger_level.value if action.danger_level else "unknown"
    prompt = colorize(f"⚠ '{action.name}' is {level}. Run it? [y/N] ", AMBER)
    try:
        answer = input(prompt)
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def _build_scope(args) -> ScopeContext:
    return ScopeContext.create(
        current_page=args.page,
        container=args.container,
        current_path=args.path,
        visible_elements=args.visible or [],
    )


def _load_catalog(args) -> ActionCatalog:
    if not args.catalog:
        logger.warning("No catalog file given; starting with an empty catalog")
        return ActionCatalog()
    return load_catalog_file(args.catalog)


def _build_orchestrator(args, catalog: ActionCatalog, settings: ResolverSettings) -> CommandOrchestrator:
    approval = None if args.yes else _prompt_approval
    return CommandOrchestrator(
        catalog,
        scope_provider=StaticScopeProvider(_build_scope(args)),
        settings=settings,
        approval_handler=approval,
        navigate=console_navigate,
        builtin_help=True,
    )


# =====================================================================
#  SUBCOMMANDS
# =====================================================================

def cmd_run(args, orchestrator: CommandOrchestrator) -> int:
    """Resolve and execute a command."""
    query = " ".join(args.query)
    response = asyncio.run(orchestrator.process_query(query))
    color = GREEN if response.success else RED
    print(colorize(response.message, color))
    if response.success and response.outcome and response.outcome.data is not None:
        print(colorize(f"  result: {response.outcome.data}", MID_GRAY))
    return 0 if response.success else 1


def cmd_candidates(args, orchestrator: CommandOrchestrator) -> int:
    """Show ranked candidates without executing anything."""
    query = " ".join(args.query)
    candidates = asyncio.run(orchestrator.find_candidates(query, top_n=args.limit))
    if not candidates:
        print(colorize(f"No candidates for '{query}'", MID_GRAY))
        return 1

    for rank, candidate in enumerate(candidates, start=1):
        flag = colorize(" [approval]", AMBER) if candidate.requires_approval else ""
        print(f"{rank}. {colorize(candidate.action.name, ELECTRIC_CYAN, BOLD)} "
              f"({candidate.confidence}%){flag}")
        if candidate.reasoning:
            print(colorize(f"   {candidate.reasoning}", MID_GRAY))
        if candidate.arguments:
            print(colorize(f"   arguments: {candidate.arguments}", MID_GRAY))
    return 0


def cmd_suggest(args, orchestrator: CommandOrchestrator) -> int:
    """Show "did you mean?" suggestions for a query."""
    query = " ".join(args.query)
    engine = orchestrator.suggestion_engine
    suggestions = engine.get_suggestions(query, orchestrator.visible_actions())
    print(engine.format_suggestions(suggestions))
    return 0 if suggestions else 1


def cmd_list(args, orchestrator: CommandOrchestrator) -> int:
    """List the actions available in the given scope (or all of them)."""
    catalog = orchestrator.catalog
    actions = catalog.all() if args.all else orchestrator.visible_actions()
    if not actions:
        print(colorize("No actions available", MID_GRAY))
        return 0

    for scope, members in catalog.grouped_by_scope(actions).items():
        if not members:
            continue
        print(colorize(f"{scope}:", ELECTRIC_CYAN, BOLD))
        for action in members:
            danger = action.danger_level.value if action.danger_level else "?"
            print(f"  {action.name} {colorize(f'[{action.category}, {danger}]', MID_GRAY)}")
            for example in action.examples[:2]:
                print(colorize(f'    "{example}"', MID_GRAY))
    return 0


def cmd_serve(args, orchestrator: CommandOrchestrator) -> int:
    """Serve the catalog as newline-delimited JSON-RPC on stdin/stdout."""
    catalog = orchestrator.catalog
    # stdout carries responses only, so navigation is reported through logging
    executor = ActionExecutor(navigate=_log_navigate, route_resolver=catalog.route_for)
    server = ActionRPCServer(
        catalog,
        executor=executor,
        scope_provider=orchestrator.scope_provider,
        version=VERSION,
    )
    try:
        asyncio.run(server.serve_stdio())
    except KeyboardInterrupt:
        logger.info("Interrupted")
    return 0


COMMANDS = {
    "run": cmd_run,
    "candidates": cmd_candidates,
    "suggest": cmd_suggest,
    "list": cmd_list,
    "serve": cmd_serve,
}


def _create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="actionresolver",
        description="Resolve free-text commands to catalog actions and run them",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  actionresolver --catalog actions.yaml list
  actionresolver --catalog actions.yaml --path /blog run open blog contracts
  actionresolver --catalog actions.yaml candidates saerch users
  actionresolver --catalog actions.yaml serve
        """
    )

    # Global options
    parser.add_argument("--version", action="version", version=f"actionresolver {VERSION}")
    parser.add_argument("--catalog", type=str, help="YAML catalog file")
    parser.add_argument("--config", type=str, help="JSON settings file")
    parser.add_argument("--path", type=str, help="Current exact path (e.g. /blog/my-post)")
    parser.add_argument("--page", type=str, help="Current page or route")
    parser.add_argument("--container", type=str, help="Current container")
    parser.add_argument(
        "--visible",
        action="append",
        metavar="ELEMENT_ID",
        help="Visible UI element id (repeatable)",
    )
    parser.add_argument("--yes", action="store_true", help="Approve risky actions without asking")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parser_run = subparsers.add_parser("run", help="Resolve and execute a command")
    parser_run.add_argument("query", nargs="+", help="Free-text command")

    parser_candidates = subparsers.add_parser("candidates", help="Show ranked candidates")
    parser_candidates.add_argument("query", nargs="+", help="Free-text command")
    parser_candidates.add_argument("--limit", type=int, default=None, help="Maximum candidates")

    parser_suggest = subparsers.add_parser("suggest", help="Show did-you-mean suggestions")
    parser_suggest.add_argument("query", nargs="+", help="Free-text command")

    parser_list = subparsers.add_parser("list", help="List available actions")
    parser_list.add_argument("--all", action="store_true", help="Ignore the scope")

    subparsers.add_parser("serve", help="Serve JSON-RPC on stdin/stdout")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point with subcommand routing."""
    parser = _create_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        settings = load_settings(args.config)
        catalog = _load_catalog(args)
    except (FileNotFoundError, CatalogError, ValueError) as e:
        print(colorize(f"❌ {e}", RED), file=sys.stderr)
        return 1

    return handler(args, _build_orchestrator(args, catalog, settings))


if __name__ == "__main__":
    sys.exit(main() or 0)
