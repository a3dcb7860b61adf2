"""WebSocket handlers for real-time analytics report progress."""

import asyncio
import json
import logging
from typing import Callable

from fastapi import WebSocket, WebSocketDisconnect

from analytics.errors import UpstreamFetchError

from ..transformers.analytics_transformer import transform_report_to_frontend
from ...application.ports.progress import ProgressCallbackPort
from ...application.ports.records_source import TeamRecordsPort
from ...application.use_cases.generate_report import (
    GenerateReportRequest,
    GenerateReportUseCase,
)
from ...domain.value_objects.types import ProgressStatus, TeamId

logger = logging.getLogger(__name__)


class WebSocketProgressCallback(ProgressCallbackPort):
    """Progress callback that sends updates via WebSocket."""

    def __init__(self, websocket: WebSocket):
        self._websocket = websocket

    async def report_progress(
        self, progress: int, message: str, status: str = "processing"
    ) -> None:
        """Send progress update via WebSocket."""
        await self._websocket.send_json({
            "status": status,
            "progress": progress,
            "message": message,
        })


async def _send_error(websocket: WebSocket, message: str) -> None:
    await websocket.send_json({
        "status": ProgressStatus.ERROR.value,
        "progress": 0,
        "message": message,
    })


async def handle_analytics_websocket(
    websocket: WebSocket, source_factory: Callable[[], TeamRecordsPort]
) -> None:
    """Handle WebSocket connection for analytics report generation.

    Expected client message format:
    {
        "action": "analyze",
        "teamId": "team_123"
    }

    Server sends progress updates:
    {
        "status": "connecting" | "processing" | "completed" | "error",
        "progress": 0-100,
        "message": "Human-readable status"
    }

    Args:
        websocket: FastAPI WebSocket connection
        source_factory: Builds the record store adapter for the team data
    """
    await websocket.accept()

    try:
        data = await websocket.receive_json()

        action = data.get("action")
        if action != "analyze":
            await _send_error(websocket, f"Unknown action: {action}")
            return

        team_id = data.get("teamId")
        if not team_id:
            await _send_error(websocket, "teamId is required")
            return

        try:
            records_source = source_factory()
        except (ValueError, UpstreamFetchError) as e:
            logger.error("Records source unavailable: %s", e)
            await _send_error(websocket, f"Data source unavailable: {e}")
            return

        await websocket.send_json({
            "status": ProgressStatus.CONNECTING.value,
            "progress": 0,
            "message": "Initializing...",
        })

        use_case = GenerateReportUseCase(records_source)
        try:
            result = await use_case.execute(
                GenerateReportRequest(team_id=TeamId(team_id)),
                WebSocketProgressCallback(websocket),
            )
        except Exception as e:
            # the use case already sent the error status
            logger.error("Report generation failed for team %s: %s", team_id, e)
            return

        frontend_report = transform_report_to_frontend(result.report, result.metadata)

        await websocket.send_json({
            "status": ProgressStatus.COMPLETED.value,
            "progress": 100,
            "message": "Report ready!",
            "report": frontend_report,
        })

        # Keep connection alive briefly for client to receive
        await asyncio.sleep(0.5)

    except WebSocketDisconnect:
        logger.debug("Client disconnected")
    except json.JSONDecodeError:
        await _send_error(websocket, "Invalid JSON message")
    except Exception as e:
        logger.exception("WebSocket handler error")
        try:
            await _send_error(websocket, f"Error: {str(e)}")
        except RuntimeError:
            logger.debug("Could not deliver error, socket already closed")
    finally:
        try:
            await websocket.close()
        except RuntimeError:
            logger.debug("Socket already closed")
