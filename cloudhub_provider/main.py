"""Entry point and wiring for the CloudHub VPC provider.

Nothing outside this module constructs adapters: core code only ever
sees ports. The flow is:

- read Settings from the environment (config.load_settings)
- build the httpx adapters and the JSON state store
- configure the Provider, which authenticates once
- run a single command from argv, or drop into the interactive prompt
"""

import asyncio
import json
import logging
import sys
from typing import Any

from cloudhub_provider.adapters.cli.commands import CLICommandHandler, run_command
from cloudhub_provider.adapters.cloudhub.auth import CloudHubAuthAdapter
from cloudhub_provider.adapters.cloudhub.vpc import CloudHubVpcAdapter
from cloudhub_provider.adapters.state.json_file import JsonFileStateStore
from cloudhub_provider.config import load_settings
from cloudhub_provider.core.models import Diagnostic
from cloudhub_provider.core.provider import Provider

logger = logging.getLogger(__name__)

PROMPT = "cloudhub> "

# (command, description, required args, example args)
COMMANDS: list[tuple[str, str, str, str]] = [
    (
        "apply",
        "Create, update or replace a managed VPC from declared attributes.",
        "name (local resource name), vpc (cloudhub_vpc attributes)",
        '{"name": "main", "vpc": {"name": "net1", "region": "us-east-1", "cidr_block": "10.0.0.0/16"}}',
    ),
    ("refresh", "Re-read a managed VPC from CloudHub.", "name", '{"name": "main"}'),
    ("destroy", "Delete a managed VPC and forget its record.", "name", '{"name": "main"}'),
    (
        "show",
        "Show one managed record, or list managed names when no name is given.",
        "",
        '{"name": "main"}',
    ),
    ("vpcs", "List every VPC of the organization (cloudhub_vpcs).", "", "{}"),
    ("vpc", "Read one VPC by id (cloudhub_vpc).", "vpc_id", '{"vpc_id": "vpc-123"}'),
]


def _parse_args(args_str: str) -> dict[str, Any]:
    """Parse a command's JSON object argument.

    Raises:
        ValueError: If args_str is not a JSON object.
    """
    if not args_str:
        return {}
    args = json.loads(args_str)
    if not isinstance(args, dict):
        raise ValueError("arguments must be a JSON object")
    return args


def _print_cli_help() -> None:
    lines = ["", "Commands take one JSON object after the command name:", ""]
    for name, description, required, example in COMMANDS:
        lines.append(f"  {name}")
        lines.append(f"    {description}")
        if required:
            lines.append(f"    Required: {required}")
        lines.append(f"    Example: {name} {example}")
        lines.append("")
    lines.append("  help    Print this text.")
    lines.append("  exit    Leave the prompt.")
    print("\n".join(lines))


async def _dispatch_line(cli_handler: CLICommandHandler, line: str) -> None:
    """Run one prompt line and print its JSON result."""
    command, _, args_str = line.partition(" ")
    try:
        args = _parse_args(args_str.strip())
    except ValueError as e:
        logger.error(f"Could not parse arguments for {command}: {e}")
        return

    try:
        result = await run_command(cli_handler, command.lower(), args)
    except ValueError as e:
        logger.error(f"{command} failed: {e}")
        result = {"status": "error", "message": str(e)}
    print(json.dumps(result, indent=2, default=str))


async def _run_cli_interactive(cli_handler: CLICommandHandler) -> None:
    """Read commands from stdin until exit or end of input.

    Args:
        cli_handler: Handler bound to the configured provider session.
    """
    logger.info("Interactive mode; 'help' lists commands, 'exit' quits")
    loop = asyncio.get_running_loop()

    while True:
        try:
            # input() blocks, keep it off the event loop
            line = (await loop.run_in_executor(None, input, PROMPT)).strip()
        except EOFError:
            logger.info("End of input")
            return
        except KeyboardInterrupt:
            logger.info("Interrupted; type 'exit' to quit")
            continue

        if not line:
            continue
        keyword = line.lower()
        if keyword == "exit":
            return
        if keyword == "help":
            _print_cli_help()
            continue

        await _dispatch_line(cli_handler, line)


def configure_logging(log_level: str, log_format: str) -> None:
    """Send log records to stderr in text or JSON-line form.

    Args:
        log_level: Name of a logging level, e.g. "INFO".
        log_format: "json" or "text".
    """
    level = getattr(logging, log_level, logging.INFO)
    if log_format == "json":
        fmt = (
            '{"time": "%(asctime)s", "level": "%(levelname)s", '
            '"logger": "%(name)s", "message": "%(message)s"}'
        )
    else:
        fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    # stdout carries command results
    logging.basicConfig(level=level, format=fmt, handlers=[logging.StreamHandler(sys.stderr)])
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))


def _report_diagnostics(diagnostics: list[Diagnostic]) -> None:
    for diagnostic in diagnostics:
        logger.error(f"{diagnostic.summary}: {diagnostic.detail}")


async def bootstrap(argv: list[str] | None = None) -> int:
    """Wire the provider together and run it.

    Args:
        argv: Optional [command, json_args]. Without it the interactive
            prompt is started.

    Returns:
        Process exit code: 0 on success, 1 when configuration or the
        command reported errors, 2 for an unusable command line.
    """
    settings = load_settings()
    configure_logging(settings.log_level, settings.log_format)
    logger.info(f"CloudHub provider targeting {settings.api_base_url}")

    auth = CloudHubAuthAdapter(
        base_url=settings.api_base_url,
        timeout=settings.http_timeout_seconds,
    )
    vpc_api = CloudHubVpcAdapter(
        base_url=settings.api_base_url,
        timeout=settings.http_timeout_seconds,
    )
    provider = Provider(auth=auth, vpc_api=vpc_api)

    try:
        session, diagnostics = await provider.configure(settings.provider_config())
        if session is None:
            _report_diagnostics(diagnostics)
            return 1

        cli_handler = CLICommandHandler(
            provider, session, JsonFileStateStore(settings.state_path)
        )

        if not argv:
            await _run_cli_interactive(cli_handler)
            return 0

        try:
            args = _parse_args(argv[1] if len(argv) > 1 else "")
            result = await run_command(cli_handler, argv[0].lower(), args)
        except ValueError as e:
            logger.error(f"Invalid command line: {e}")
            return 2

        print(json.dumps(result, indent=2, default=str))
        return 0 if result["status"] == "success" else 1

    finally:
        await auth.close()
        await vpc_api.close()


def main() -> None:
    """Console script entry point; exits 130 on Ctrl+C."""
    try:
        sys.exit(asyncio.run(bootstrap(sys.argv[1:])))
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        sys.exit(130)


if __name__ == "__main__":
    main()
