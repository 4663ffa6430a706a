"""Run and job state for campaign generation

JobState records are immutable. Every change goes through a reducer that
takes the current keyed collection, a job id and a partial update, and
returns a new collection. JobStateStore owns one run's collection and
publishes a RunSnapshot to its listeners after each change.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import GeneratedImage, GeneratedVideo, GenerationJob, ProductAnalysis

logger = logging.getLogger(__name__)


class JobStatus(str, Enum):
    PENDING = "pending"
    GENERATING_IMAGE = "generating_image"
    GENERATING_VIDEO = "generating_video"
    COMPLETED = "completed"
    FAILED = "failed"


class RunStep(str, Enum):
    UPLOAD = "upload"
    ANALYZING = "analyzing"
    GENERATING = "generating"
    RESULTS = "results"


TERMINAL_STATUSES = frozenset({JobStatus.COMPLETED, JobStatus.FAILED})


class JobState(BaseModel):
    """Tracked state of one generation job"""
    model_config = ConfigDict(frozen=True)

    job_id: int
    label: str
    instruction: str
    status: JobStatus = JobStatus.PENDING
    progress: int = Field(default=0, ge=0, le=100)
    image: Optional[GeneratedImage] = None
    video: Optional[GeneratedVideo] = None
    error_message: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def video_degraded(self) -> bool:
        """Completed with an image but the optional video failed"""
        return self.status == JobStatus.COMPLETED and self.error_message is not None


class RunSnapshot(BaseModel):
    """Read-only view of a run handed to observers"""
    model_config = ConfigDict(frozen=True)

    run_id: Optional[str] = None
    run_step: RunStep = RunStep.UPLOAD
    analysis: Optional[ProductAnalysis] = None
    jobs: List[JobState] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def all_terminal(self) -> bool:
        return all(job.is_terminal for job in self.jobs)

    @property
    def completed_count(self) -> int:
        return sum(1 for job in self.jobs if job.status == JobStatus.COMPLETED)

    @property
    def failed_count(self) -> int:
        return sum(1 for job in self.jobs if job.status == JobStatus.FAILED)


def initial_job_states(jobs: List[GenerationJob]) -> Dict[int, JobState]:
    """Create pending states keyed by job id"""
    return {
        job.id: JobState(job_id=job.id, label=job.label, instruction=job.instruction)
        for job in jobs
    }


def apply_job_update(
    states: Dict[int, JobState],
    job_id: int,
    changes: Dict[str, Any]
) -> Dict[int, JobState]:
    """Merge a partial update into one job and return the new collection

    Terminal jobs are frozen: updates to them are dropped. Progress never
    decreases while the job stays non-terminal.

    Raises:
        KeyError: Unknown job id
        ValueError: Update would attach a video to a job without an image
    """
    current = states.get(job_id)
    if current is None:
        raise KeyError(f"Unknown job id: {job_id}")

    if current.is_terminal:
        logger.debug(f"[State] Ignoring update for terminal job {job_id}: {sorted(changes)}")
        return states

    changes = dict(changes)
    if "status" in changes:
        changes["status"] = JobStatus(changes["status"])
    if "progress" in changes:
        changes["progress"] = max(0, min(100, int(changes["progress"])))

    updated = current.model_copy(update=changes)

    if not updated.is_terminal and updated.progress < current.progress:
        updated = updated.model_copy(update={"progress": current.progress})

    if updated.video is not None and updated.image is None:
        raise ValueError(f"Job {job_id}: video result requires an image result")

    new_states = dict(states)
    new_states[job_id] = updated
    return new_states


def apply_progress_tick(
    states: Dict[int, JobState],
    job_id: int,
    step: int,
    cap: int
) -> Dict[int, JobState]:
    """Advance the synthetic image progress ramp

    Only applies while the job is generating its image; anywhere else the
    tick is a no-op so it can never overwrite real progress.
    """
    current = states.get(job_id)
    if current is None or current.status != JobStatus.GENERATING_IMAGE:
        return states

    next_progress = min(current.progress + step, cap)
    if next_progress <= current.progress:
        return states
    return apply_job_update(states, job_id, {"progress": next_progress})


SnapshotListener = Callable[[RunSnapshot], None]


class JobStateStore:
    """Keyed job state for a single run, publishing snapshots on change"""

    def __init__(self, run_id: Optional[str] = None):
        self.run_id = run_id
        self._run_step = RunStep.UPLOAD
        self._analysis: Optional[ProductAnalysis] = None
        self._error: Optional[str] = None
        self._jobs: Dict[int, JobState] = {}
        self._listeners: List[SnapshotListener] = []

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it"""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def snapshot(self) -> RunSnapshot:
        return RunSnapshot(
            run_id=self.run_id,
            run_step=self._run_step,
            analysis=self._analysis,
            jobs=[self._jobs[job_id] for job_id in sorted(self._jobs)],
            error=self._error
        )

    def set_run_step(self, step: RunStep, error: Optional[str] = None):
        self._run_step = RunStep(step)
        self._error = error
        self._publish()

    def set_analysis(self, analysis: ProductAnalysis):
        self._analysis = analysis
        self._publish()

    def initialize_jobs(self, jobs: List[GenerationJob]):
        self._jobs = initial_job_states(jobs)
        self._publish()

    def clear_jobs(self):
        self._jobs = {}
        self._analysis = None

    def update_job(self, job_id: int, **changes) -> JobState:
        new_jobs = apply_job_update(self._jobs, job_id, changes)
        if new_jobs is not self._jobs:
            self._jobs = new_jobs
            self._publish()
        return self._jobs[job_id]

    def tick_progress(self, job_id: int, step: int, cap: int) -> bool:
        """Apply one synthetic progress tick; returns True if it changed anything"""
        new_jobs = apply_progress_tick(self._jobs, job_id, step, cap)
        if new_jobs is self._jobs:
            return False
        self._jobs = new_jobs
        self._publish()
        return True

    def _publish(self):
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.error(f"[State] Snapshot listener failed for run {self.run_id}: {e}", exc_info=True)
