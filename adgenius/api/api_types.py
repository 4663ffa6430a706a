"""Type definitions for API request/response validation"""

from pydantic import BaseModel, Field
from typing import Dict, Any, Optional, List

from ..core.models import RunConfiguration
from ..core.state import JobState, RunSnapshot


class SessionRequest(BaseModel):
    """Request type for creating a session"""
    session_id: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = Field(default_factory=dict)


class SessionResponse(BaseModel):
    """Response type for session creation"""
    session_id: str
    status: str


class JobStateResponse(BaseModel):
    """One job as seen by the client; binary results become asset URLs"""
    job_id: int
    label: str
    instruction: str
    status: str
    progress: int
    error_message: Optional[str] = None
    video_degraded: bool = False
    image_url: Optional[str] = None
    video_url: Optional[str] = None


class RunSnapshotResponse(BaseModel):
    """Response type for the session snapshot"""
    session_id: str
    run_id: Optional[str] = None
    run_step: str
    analysis: Optional[Dict[str, Any]] = None
    jobs: List[JobStateResponse] = Field(default_factory=list)
    error: Optional[str] = None
    completed_count: int = 0
    failed_count: int = 0
    is_running: bool = False


class RunConfigSummary(BaseModel):
    """Last submitted form values, without image bytes"""
    product_name: str
    brand: str
    custom_prompt: str
    ad_style: str
    image_model: str
    video_model: str
    mode: str
    include_video: bool
    aspect_ratio: str
    job_count: Optional[int] = None
    color_variations: str
    render_text: bool
    overlay_text: str
    model_gender: Optional[str] = None
    has_secondary_image: bool = False
    has_pattern_image: bool = False


def job_to_response(session_id: str, job: JobState) -> JobStateResponse:
    asset_base = f"/sessions/{session_id}/jobs/{job.job_id}"
    return JobStateResponse(
        job_id=job.job_id,
        label=job.label,
        instruction=job.instruction,
        status=job.status.value,
        progress=job.progress,
        error_message=job.error_message,
        video_degraded=job.video_degraded,
        image_url=f"{asset_base}/image" if job.image is not None else None,
        video_url=f"{asset_base}/video" if job.video is not None else None
    )


def snapshot_to_response(session_id: str, snapshot: RunSnapshot, is_running: bool = False) -> RunSnapshotResponse:
    return RunSnapshotResponse(
        session_id=session_id,
        run_id=snapshot.run_id,
        run_step=snapshot.run_step.value,
        analysis=snapshot.analysis.model_dump() if snapshot.analysis is not None else None,
        jobs=[job_to_response(session_id, job) for job in snapshot.jobs],
        error=snapshot.error,
        completed_count=snapshot.completed_count,
        failed_count=snapshot.failed_count,
        is_running=is_running
    )


def config_to_summary(config: RunConfiguration) -> RunConfigSummary:
    return RunConfigSummary(
        **config.model_dump(exclude={"product_image", "secondary_image", "pattern_image"}),
        has_secondary_image=config.secondary_image is not None,
        has_pattern_image=config.pattern_image is not None
    )
