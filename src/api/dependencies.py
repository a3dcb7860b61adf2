"""Dependency providers for the API layer."""

from typing import Callable

from fastapi import HTTPException

from analytics.config import source_config_from_env

from ..application.ports.records_source import TeamRecordsPort
from ..infrastructure.adapters.convex_records_adapter import ConvexRecordsAdapter
from ..infrastructure.adapters.snapshot_records_adapter import SnapshotRecordsAdapter


class SourceNotConfiguredError(ValueError):
    """Neither a snapshot file nor a Convex deployment is configured."""


def build_records_source() -> TeamRecordsPort:
    """Build the record store adapter from the environment.

    A snapshot file takes precedence over a Convex deployment.

    Raises:
        ValueError: If no source is configured or the settings are invalid
        UpstreamFetchError: If the snapshot file cannot be read
    """
    source = source_config_from_env()
    if source.data_file:
        return SnapshotRecordsAdapter.from_file(source.data_file)
    if source.convex_url:
        return ConvexRecordsAdapter(source.convex_url, source.auth_token, source.function_paths)
    raise SourceNotConfiguredError("Set CONVEX_URL or ANALYTICS_DATA_FILE to enable analytics.")


def get_records_source() -> TeamRecordsPort:
    """Record store for REST routes; configuration problems answer 503."""
    try:
        return build_records_source()
    except ValueError as e:
        raise HTTPException(
            status_code=503,
            detail={
                "error": {
                    "code": "SOURCE_NOT_CONFIGURED",
                    "message": str(e),
                    "details": {},
                }
            },
        )


def get_records_source_factory() -> Callable[[], TeamRecordsPort]:
    """Record store factory for WebSocket handlers.

    An HTTP error raised while resolving a WebSocket dependency never reaches
    the client, so the handler builds the source itself and reports failures
    as an ``error`` status message.
    """
    return build_records_source
