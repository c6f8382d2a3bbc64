"""CLI command implementations for the CloudHub provider host.

This adapter plays the orchestrator: it keeps managed resource records in
a StateStorePort, decides between create, update and replacement, and
invokes the provider's lifecycle callbacks with the configured session.
Results are returned as dictionaries suitable for JSON output.
"""

import functools
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from cloudhub_provider.core.models import (
    IMMUTABLE_ATTRIBUTES,
    Diagnostic,
    ProviderSession,
    VpcAttributes,
    VpcResourceData,
    has_errors,
)
from cloudhub_provider.core.ports import StateError, StateStorePort
from cloudhub_provider.core.provider import Provider
from cloudhub_provider.core.vpc_data_source import VpcDataSource, VpcsDataSource
from cloudhub_provider.core.vpc_resource import VpcResource

logger = logging.getLogger(__name__)


def _result(
    operation: str,
    diagnostics: list[Diagnostic],
    **fields: Any,
) -> dict[str, Any]:
    return {
        "status": "error" if has_errors(diagnostics) else "success",
        "operation": operation,
        **fields,
        "diagnostics": [d.to_dict() for d in diagnostics],
    }


_Command = Callable[..., Awaitable[dict[str, Any]]]


def _reports_state_errors(operation: str) -> Callable[[_Command], _Command]:
    """Turn an unreadable state store into an error result for operation."""

    def decorator(method: _Command) -> _Command:
        @functools.wraps(method)
        async def wrapper(self: "CLICommandHandler", *args: Any, **kwargs: Any) -> dict[str, Any]:
            try:
                return await method(self, *args, **kwargs)
            except StateError as e:
                logger.error(f"{operation} failed: {e}")
                return {
                    "status": "error",
                    "operation": operation,
                    "message": f"Unreadable state: {e}",
                }

        return wrapper

    return decorator


class CLICommandHandler:
    """Handles CLI commands by driving the provider's resources and data sources.

    Provides apply, refresh, destroy and show for managed cloudhub_vpc
    resources, and read access to the VPC data sources.
    """

    def __init__(
        self,
        provider: Provider,
        session: ProviderSession,
        store: StateStorePort,
    ):
        """Initialize the CLI command handler.

        Args:
            provider: Configured Provider exposing resources and data sources.
            session: Session returned by Provider.configure.
            store: StateStorePort holding managed resource records.
        """
        self.provider = provider
        self.session = session
        self.store = store

    @property
    def _vpc(self) -> VpcResource:
        return self.provider.resource(VpcResource.type_name)  # type: ignore[return-value]

    @_reports_state_errors("apply")
    async def apply(self, name: str, attributes: dict[str, Any]) -> dict[str, Any]:
        """Bring the named VPC in line with the declared attributes.

        Creates the VPC when no record exists, replaces it (delete, then
        create) when an immutable attribute changed, and updates it in
        place otherwise.

        Args:
            name: Local resource name.
            attributes: Declared cloudhub_vpc attributes.

        Returns:
            Dictionary with status, diagnostics and the resulting record.
        """
        try:
            config = VpcAttributes.from_dict(attributes)
        except (TypeError, ValueError) as e:
            logger.error(f"Invalid attributes for {name}: {e}")
            return {
                "status": "error",
                "operation": "apply",
                "name": name,
                "message": f"Invalid attributes: {e}",
            }

        record = await self.store.load(name)

        if record is None or not record.id:
            record = VpcResourceData(config=config)
            diagnostics = await self._vpc.create(self.session, record)
            action = "create"
        else:
            record.config = config
            if record.state is not None and record.has_changes(*IMMUTABLE_ATTRIBUTES):
                logger.info(
                    f"{name}: immutable attribute changed, replacing VPC {record.id}"
                )
                diagnostics = await self._vpc.delete(self.session, record)
                if has_errors(diagnostics):
                    return _result("apply", diagnostics, name=name, action="replace")
                await self.store.remove(name)
                record = VpcResourceData(config=config)
                diagnostics = await self._vpc.create(self.session, record)
                action = "replace"
            else:
                diagnostics = await self._vpc.update(self.session, record)
                action = "update"

        # a created id is recorded even when the follow-up read failed
        if record.id:
            await self.store.save(name, record)

        return _result(
            "apply", diagnostics, name=name, action=action, resource=record.to_dict()
        )

    @_reports_state_errors("refresh")
    async def refresh(self, name: str) -> dict[str, Any]:
        """Re-read the named VPC from the remote API and store the result."""
        record = await self.store.load(name)
        if record is None:
            return {
                "status": "error",
                "operation": "refresh",
                "name": name,
                "message": f"No resource named {name}",
            }

        diagnostics = await self._vpc.read(self.session, record)
        if not has_errors(diagnostics):
            await self.store.save(name, record)

        return _result("refresh", diagnostics, name=name, resource=record.to_dict())

    @_reports_state_errors("destroy")
    async def destroy(self, name: str) -> dict[str, Any]:
        """Delete the named VPC and forget its record."""
        record = await self.store.load(name)
        if record is None:
            return {
                "status": "error",
                "operation": "destroy",
                "name": name,
                "message": f"No resource named {name}",
            }

        diagnostics = await self._vpc.delete(self.session, record)
        if not has_errors(diagnostics):
            await self.store.remove(name)

        return _result("destroy", diagnostics, name=name)

    @_reports_state_errors("show")
    async def show(self, name: str | None = None) -> dict[str, Any]:
        """Show one stored record, or list the names of all records."""
        if name is None:
            return {
                "status": "success",
                "operation": "show",
                "names": await self.store.list_names(),
            }

        record = await self.store.load(name)
        if record is None:
            return {
                "status": "error",
                "operation": "show",
                "name": name,
                "message": f"No resource named {name}",
            }
        return {
            "status": "success",
            "operation": "show",
            "name": name,
            "resource": record.to_dict(),
        }

    async def list_vpcs(self) -> dict[str, Any]:
        """Read the cloudhub_vpcs data source."""
        source = self.provider.data_source(VpcsDataSource.type_name)
        result = await source.read(self.session)  # type: ignore[call-arg]
        return _result("vpcs", result.diagnostics, vpcs=result.items)

    async def get_vpc(self, vpc_id: str) -> dict[str, Any]:
        """Read the cloudhub_vpc data source."""
        source = self.provider.data_source(VpcDataSource.type_name)
        result = await source.read(self.session, vpc_id)  # type: ignore[call-arg]
        return _result(
            "vpc",
            result.diagnostics,
            vpc=result.items[0] if result.items else None,
        )


async def run_command(
    handler: CLICommandHandler,
    command: str,
    args: dict[str, Any],
) -> dict[str, Any]:
    """Run a CLI command.

    Entry point for executing CLI commands. Maps command names to handler methods.

    Args:
        handler: CLICommandHandler instance.
        command: Command name ('apply', 'refresh', 'destroy', 'show', 'vpcs', 'vpc').
        args: Dictionary of command arguments.

    Returns:
        Dictionary with command result.

    Raises:
        ValueError: If command is not recognized or a required argument is missing.
    """
    if command == "apply":
        for required in ("name", "vpc"):
            if required not in args:
                raise ValueError(f"Missing required parameter: {required}")
        if not isinstance(args["vpc"], dict):
            raise ValueError("Parameter vpc must be an object of cloudhub_vpc attributes")
        return await handler.apply(args["name"], args["vpc"])

    elif command == "refresh":
        if "name" not in args:
            raise ValueError("Missing required parameter: name")
        return await handler.refresh(args["name"])

    elif command == "destroy":
        if "name" not in args:
            raise ValueError("Missing required parameter: name")
        return await handler.destroy(args["name"])

    elif command == "show":
        return await handler.show(args.get("name"))

    elif command == "vpcs":
        return await handler.list_vpcs()

    elif command == "vpc":
        if "vpc_id" not in args:
            raise ValueError("Missing required parameter: vpc_id")
        return await handler.get_vpc(args["vpc_id"])

    else:
        raise ValueError(f"Unknown command: {command}. Use 'help' for available commands.")
