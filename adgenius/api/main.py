"""Main FastAPI application with WebSocket support"""

import os
import uuid
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, Any, Optional

from fastapi import FastAPI, WebSocket, File, Form, HTTPException, UploadFile, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError
from redis.exceptions import RedisError
from werkzeug.utils import secure_filename

from .websocket import WebSocketHandler
from .redis_state import RedisStateManager, SessionSnapshotMirror
from .api_types import (
    SessionRequest,
    SessionResponse,
    RunSnapshotResponse,
    RunConfigSummary,
    snapshot_to_response,
    config_to_summary
)
from ..agents.gateway import GeminiGateway
from ..agents.system.job_orchestrator import CampaignOrchestrator
from ..agents.creative.util_image import validate_image
from ..core.config import (
    LOG_LEVEL,
    REDIS_URL,
    SESSION_TTL_SECONDS,
    DEFAULT_ASPECT_RATIO,
    DEFAULT_IMAGE_MODEL,
    DEFAULT_VIDEO_MODEL,
    GEMINI_ASPECT_RATIOS,
    IMAGE_MODELS,
    VIDEO_MODELS,
    MODE_JOB_COUNTS
)
from ..core.errors import CodecError, RunInProgress
from ..core.models import ReferenceImage, RunConfiguration
from ..core.state import RunSnapshot
from ..prompts.styles import AD_STYLE_LIBRARY

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 20 * 1024 * 1024  # 20 MB per image


@dataclass
class Session:
    """One browser session: an orchestrator plus bookkeeping"""
    session_id: str
    orchestrator: CampaignOrchestrator
    created_at: datetime = field(default_factory=datetime.now)
    last_active: datetime = field(default_factory=datetime.now)
    metadata: Dict[str, Any] = field(default_factory=dict)
    mirror: Optional[SessionSnapshotMirror] = None

    def is_expired(self, now: datetime) -> bool:
        """Idle past the session TTL and not generating"""
        idle = now - self.last_active
        return idle > timedelta(seconds=SESSION_TTL_SECONDS) and not self.orchestrator.is_running


def create_orchestrator() -> CampaignOrchestrator:
    """Default orchestrator factory: Gemini/Veo providers, env credential gate"""
    return CampaignOrchestrator(GeminiGateway())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan"""
    # Startup
    app.state.redis_state = RedisStateManager(REDIS_URL) if REDIS_URL else None
    if app.state.redis_state:
        logger.info("[API] Mirroring snapshots to Redis")

    yield

    # Shutdown
    for session in app.state.sessions.values():
        if session.mirror:
            await session.mirror.close(drain=True)

    if app.state.redis_state:
        await app.state.redis_state.close()
        app.state.redis_state = None


# Initialize FastAPI app
app = FastAPI(
    title="AdGenius Campaign Generator",
    description="Product photo to ad campaign images and videos with live progress",
    version="0.1.0",
    lifespan=lifespan
)

# CORS configuration for client applications
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure with actual client domains in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.state.sessions = {}
app.state.redis_state = None
app.state.orchestrator_factory = create_orchestrator


def get_session(session_id: str) -> Session:
    session = app.state.sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Session not found: {session_id}")
    session.last_active = datetime.now()
    return session


def _session_response(session: Session, snapshot: Optional[RunSnapshot] = None) -> RunSnapshotResponse:
    orchestrator = session.orchestrator
    return snapshot_to_response(
        session.session_id,
        snapshot or orchestrator.snapshot(),
        is_running=orchestrator.is_running
    )


def _mirror_to_redis(session_id: str, orchestrator: CampaignOrchestrator, mirror: SessionSnapshotMirror):
    """Snapshot listener that queues each snapshot on the session's Redis mirror"""
    def listener(snapshot: RunSnapshot):
        payload = snapshot_to_response(session_id, snapshot, is_running=orchestrator.is_running)
        mirror.push(payload.model_dump(mode="json"))

    return listener


async def _close_session(session: Session):
    if session.mirror:
        await session.mirror.close()
    session.orchestrator.reset()
    app.state.sessions.pop(session.session_id, None)


async def _prune_expired_sessions():
    """Drop sessions idle past the TTL; their Redis keys expire on their own"""
    now = datetime.now()
    expired = [session for session in app.state.sessions.values() if session.is_expired(now)]
    for session in expired:
        await _close_session(session)
        logger.info(f"[API] Expired idle session {session.session_id}")


async def _read_upload(upload: Optional[UploadFile], field_name: str) -> Optional[ReferenceImage]:
    """Read and validate an uploaded image; empty optional fields are None"""
    if upload is None or not upload.filename:
        return None

    data = await upload.read()
    if len(data) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail=f"{field_name} exceeds {MAX_UPLOAD_BYTES // (1024 * 1024)} MB")

    try:
        mime_type = validate_image(data)
    except CodecError as e:
        raise HTTPException(status_code=400, detail=f"{field_name}: {e}")

    return ReferenceImage(data=data, mime_type=mime_type, filename=secure_filename(upload.filename))


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "name": "AdGenius Campaign Generator",
        "version": "0.1.0",
        "status": "running"
    }


@app.get("/health")
async def health():
    """Health check endpoint"""
    redis_status = "disabled"
    if app.state.redis_state:
        try:
            await app.state.redis_state.ping()
            redis_status = "connected"
        except Exception as e:
            redis_status = f"error: {str(e)}"

    return {
        "status": "healthy",
        "redis": redis_status,
        "sessions": len(app.state.sessions),
        "timestamp": datetime.now().isoformat()
    }


@app.get("/styles")
async def list_styles():
    """Form options: ad styles, modes with job count bounds, aspect ratios and models"""
    return {
        "styles": [
            {"key": key, "label": entry["label"], "descriptor": entry["descriptor"]}
            for key, entry in AD_STYLE_LIBRARY.items()
        ],
        "modes": {
            mode: {"min": minimum, "max": maximum, "default": default}
            for mode, (minimum, maximum, default) in MODE_JOB_COUNTS.items()
        },
        "aspect_ratios": sorted({ratio for ratio in GEMINI_ASPECT_RATIOS.values()}),
        "image_models": IMAGE_MODELS,
        "video_models": VIDEO_MODELS
    }


@app.post("/sessions", response_model=SessionResponse)
async def create_session(request: Optional[SessionRequest] = None):
    """Create a new campaign session"""
    await _prune_expired_sessions()

    if request and request.session_id:
        session_id = request.session_id
        if session_id in app.state.sessions:
            raise HTTPException(status_code=409, detail=f"Session already exists: {session_id}")
    else:
        session_id = str(uuid.uuid4())

    orchestrator = app.state.orchestrator_factory()
    mirror = None
    if app.state.redis_state:
        mirror = SessionSnapshotMirror(app.state.redis_state, session_id)
        orchestrator.subscribe(_mirror_to_redis(session_id, orchestrator, mirror))

    app.state.sessions[session_id] = Session(
        session_id=session_id,
        orchestrator=orchestrator,
        metadata=(request.metadata if request and request.metadata else {}),
        mirror=mirror
    )
    logger.info(f"[API] Created session {session_id}")
    return SessionResponse(session_id=session_id, status="created")


@app.post("/sessions/{session_id}/runs", status_code=202, response_model=RunSnapshotResponse)
async def submit_run(
    session_id: str,
    product_image: UploadFile = File(...),
    secondary_image: Optional[UploadFile] = File(None),
    pattern_image: Optional[UploadFile] = File(None),
    product_name: str = Form(""),
    brand: str = Form(""),
    custom_prompt: str = Form(""),
    ad_style: str = Form("luxury_premium"),
    image_model: str = Form(DEFAULT_IMAGE_MODEL),
    video_model: str = Form(DEFAULT_VIDEO_MODEL),
    mode: str = Form("campaign"),
    include_video: bool = Form(False),
    aspect_ratio: str = Form(DEFAULT_ASPECT_RATIO),
    job_count: Optional[int] = Form(None),
    color_variations: str = Form(""),
    render_text: bool = Form(False),
    overlay_text: str = Form(""),
    model_gender: Optional[str] = Form(None)
):
    """Start a campaign run; progress is read from the snapshot or the WebSocket"""
    session = get_session(session_id)

    try:
        config = RunConfiguration(
            product_image=await _read_upload(product_image, "product_image"),
            secondary_image=await _read_upload(secondary_image, "secondary_image"),
            pattern_image=await _read_upload(pattern_image, "pattern_image"),
            product_name=product_name,
            brand=brand,
            custom_prompt=custom_prompt,
            ad_style=ad_style,
            image_model=image_model,
            video_model=video_model,
            mode=mode,
            include_video=include_video,
            aspect_ratio=aspect_ratio,
            job_count=job_count,
            color_variations=color_variations,
            render_text=render_text,
            overlay_text=overlay_text,
            model_gender=model_gender or None
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_input=False, include_context=False))

    try:
        session.orchestrator.submit(config)
    except RunInProgress as e:
        raise HTTPException(status_code=409, detail=str(e))

    logger.info(f"[API] Session {session_id}: submitted {config.mode} run")
    return _session_response(session)


@app.get("/sessions/{session_id}/snapshot", response_model=RunSnapshotResponse)
async def get_snapshot(session_id: str):
    """Current run snapshot (assets as URLs)

    Sessions held by another worker, or dropped on restart, are served from
    the Redis mirror when it is configured.
    """
    if session_id not in app.state.sessions and app.state.redis_state:
        try:
            mirrored = await app.state.redis_state.get_snapshot(session_id)
        except RedisError as e:
            logger.warning(f"[API] Redis snapshot lookup failed for session {session_id}: {e}")
            mirrored = None
        if mirrored:
            return RunSnapshotResponse.model_validate(mirrored)

    return _session_response(get_session(session_id))


@app.get("/sessions/{session_id}/config", response_model=RunConfigSummary)
async def get_last_config(session_id: str):
    """Last submitted form values, kept across reset for re-population"""
    session = get_session(session_id)
    if session.orchestrator.last_config is None:
        raise HTTPException(status_code=404, detail="No run submitted yet")
    return config_to_summary(session.orchestrator.last_config)


@app.get("/sessions/{session_id}/jobs/{job_id}/image")
async def download_image(session_id: str, job_id: int):
    """Raw generated image for a job"""
    job = _find_job(get_session(session_id), job_id)
    if job.image is None:
        raise HTTPException(status_code=404, detail=f"Job {job_id} has no image")
    return Response(content=job.image.data, media_type=job.image.mime_type)


@app.get("/sessions/{session_id}/jobs/{job_id}/video")
async def download_video(session_id: str, job_id: int):
    """Raw generated video for a job"""
    job = _find_job(get_session(session_id), job_id)
    if job.video is None:
        raise HTTPException(status_code=404, detail=f"Job {job_id} has no video")
    return Response(content=job.video.data, media_type=job.video.mime_type)


def _find_job(session: Session, job_id: int):
    for job in session.orchestrator.snapshot().jobs:
        if job.job_id == job_id:
            return job
    raise HTTPException(status_code=404, detail=f"Job not found: {job_id}")


@app.post("/sessions/{session_id}/reset", response_model=RunSnapshotResponse)
async def reset_session(session_id: str):
    """Discard run state and return to upload; the session stays"""
    session = get_session(session_id)
    session.orchestrator.reset()
    return _session_response(session)


@app.delete("/sessions/{session_id}")
async def delete_session(session_id: str):
    """Delete a session and its mirrored state"""
    session = get_session(session_id)
    await _close_session(session)

    if app.state.redis_state:
        await app.state.redis_state.delete_session(session_id)

    logger.info(f"[API] Deleted session {session_id}")
    return {"session_id": session_id, "status": "deleted"}


@app.websocket("/ws/{session_id}")
async def websocket_endpoint(websocket: WebSocket, session_id: str):
    """WebSocket endpoint for live run snapshots"""
    session = app.state.sessions.get(session_id)
    await websocket.accept()

    if session is None:
        await websocket.send_json({"type": "error", "message": f"Session not found: {session_id}"})
        await websocket.close(code=1008)
        return

    handler = WebSocketHandler(websocket, session_id, session.orchestrator)
    await handler.handle()


def run():
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))


if __name__ == "__main__":
    run()
