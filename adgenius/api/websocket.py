"""WebSocket handler for real-time snapshot streaming"""

import json
import asyncio
import logging
from typing import Dict, Any, Optional

from fastapi import WebSocket
from starlette.websockets import WebSocketDisconnect

from ..agents.system.job_orchestrator import CampaignOrchestrator
from ..core.state import RunSnapshot
from .api_types import snapshot_to_response

logger = logging.getLogger(__name__)


class WebSocketHandler:
    """Pushes orchestrator snapshots to one WebSocket client

    Snapshots arrive from synchronous orchestrator callbacks, so they are
    queued and sent by a single sender task, which also keeps replies and
    snapshot events in order.
    """

    def __init__(self, websocket: WebSocket, session_id: str, orchestrator: CampaignOrchestrator):
        self.websocket = websocket
        self.session_id = session_id
        self.orchestrator = orchestrator
        self.event_queue: Optional[asyncio.Queue] = None
        self.sender_task: Optional[asyncio.Task] = None
        self.is_closing = False

    def _snapshot_event(self, snapshot: RunSnapshot) -> Dict[str, Any]:
        response = snapshot_to_response(self.session_id, snapshot, is_running=self.orchestrator.is_running)
        return {"type": "snapshot", "data": response.model_dump(mode="json")}

    def _on_snapshot(self, snapshot: RunSnapshot):
        if self.is_closing or self.event_queue is None:
            return
        self.event_queue.put_nowait(self._snapshot_event(snapshot))

    async def _event_sender_loop(self):
        """Send queued events in order until the connection closes"""
        while True:
            event = await self.event_queue.get()
            if self.is_closing:
                return
            try:
                await self.websocket.send_text(json.dumps(event, default=str))
            except Exception as e:
                logger.warning(f"[WebSocket] Error sending event for session {self.session_id}: {e}")
                self.is_closing = True
                return

    async def send_event(self, event: Dict[str, Any]):
        """Queue an event for the client"""
        if self.is_closing or self.event_queue is None:
            return
        await self.event_queue.put(event)

    async def send_current_state(self):
        await self.send_event(self._snapshot_event(self.orchestrator.snapshot()))

    async def handle(self):
        """Main WebSocket message handler"""
        self.event_queue = asyncio.Queue()
        self.sender_task = asyncio.create_task(self._event_sender_loop())
        unsubscribe = self.orchestrator.subscribe(self._on_snapshot)
        logger.info(f"[WebSocket] Client connected to session {self.session_id}")

        try:
            await self.send_current_state()

            while True:
                raw_data = await self.websocket.receive_text()
                try:
                    data = json.loads(raw_data)
                except json.JSONDecodeError:
                    await self.send_event({"type": "error", "message": "Invalid JSON message"})
                    continue

                message_type = data.get("type") if isinstance(data, dict) else None

                if message_type == "ping":
                    await self.send_event({"type": "pong"})
                elif message_type == "get_state":
                    await self.send_current_state()
                else:
                    await self.send_event({"type": "error", "message": f"Unknown message type: {message_type}"})

        except WebSocketDisconnect:
            logger.info(f"[WebSocket] Client disconnected from session {self.session_id}")
        finally:
            self.is_closing = True
            unsubscribe()
            self.sender_task.cancel()
            try:
                await self.sender_task
            except asyncio.CancelledError:
                pass
