from __future__ import annotations

import logging

from fastapi import APIRouter, Request, WebSocket, WebSocketDisconnect

logger = logging.getLogger(__name__)

router = APIRouter()


# ── WebSocket connection manager ──────────────────────


class ConnectionManager:
    """Tracks connected panel clients and pushes readings to them."""

    def __init__(self) -> None:
        self.active_connections: list[WebSocket] = []

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.active_connections.append(websocket)

    def disconnect(self, websocket: WebSocket) -> None:
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)

    async def broadcast(self, data: dict) -> None:
        dead: list[WebSocket] = []
        for ws in self.active_connections:
            try:
                await ws.send_json(data)
            except Exception:
                dead.append(ws)
        for ws in dead:
            self.disconnect(ws)


ws_manager = ConnectionManager()


# ── REST routes ───────────────────────────────────────


@router.get("/api/readings")
async def get_readings(request: Request) -> list[dict]:
    display = request.app.state.display
    return [r.model_dump(mode="json") for r in display.readings]


@router.get("/api/snapshot")
async def get_snapshot(request: Request) -> dict | None:
    snapshot = request.app.state.display.snapshot
    return snapshot.model_dump(mode="json") if snapshot else None


@router.get("/api/stats")
async def get_stats(request: Request) -> dict:
    # Uses its own sampler so the panel's deltas are not disturbed
    stats = request.app.state.stats_sampler.detailed_stats()
    return stats.model_dump(mode="json")


@router.get("/api/config")
async def get_config(request: Request) -> dict:
    return request.app.state.config_provider().model_dump(mode="json")


@router.get("/api/status")
async def get_status(request: Request) -> dict:
    state = request.app.state
    event_bus = state.event_bus
    collector = getattr(state, "collector", None)
    return {
        "status": "running",
        "event_bus_running": event_bus.running,
        "subscribers": event_bus.subscriber_count,
        "pending_events": event_bus.pending,
        "dropped_events": event_bus.dropped,
        "collector_running": bool(collector and collector.running),
        "ticks": collector.ticks if collector else 0,
        "failed_ticks": collector.failed_ticks if collector else 0,
        "warmed_up": bool(collector and collector.sampler.warmed_up),
    }


# ── WebSocket endpoint ────────────────────────────────


@router.websocket("/ws/readings")
async def websocket_readings(websocket: WebSocket) -> None:
    await ws_manager.connect(websocket)
    try:
        while True:
            # Keep connection alive; client can send pings or messages
            await websocket.receive_text()
    except WebSocketDisconnect:
        ws_manager.disconnect(websocket)
