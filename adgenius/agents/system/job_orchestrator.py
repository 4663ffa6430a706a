"""
Campaign job orchestrator

Drives one run: input checks, credential gate, product analysis, prompt
synthesis, then a concurrent fan-out of image (and optional video) jobs.
All state lives in a JobStateStore; observers only ever see snapshots.

Job lifecycle:
    pending -> generating_image -> completed | failed
    pending -> generating_image -> generating_video -> completed
A video failure leaves the job completed with its image and an error message.
"""

import asyncio
import logging
import uuid
from contextlib import asynccontextmanager, suppress
from datetime import datetime
from typing import Awaitable, Callable, Dict, Iterable, List, Optional

from ..base import format_time, log_context
from ..creative import prompt_synthesizer
from ..creative.util_image import encode_image
from ..gateway import CredentialGate, EnvCredentialGate, ProviderGateway
from ...core.config import PROGRESS_CONFIG
from ...core.errors import (
    ContentRefused,
    CredentialMissing,
    MissingProductImage,
    RunInProgress
)
from ...core.models import GeneratedImage, GenerationJob, RunConfiguration
from ...core.state import JobStateStore, JobStatus, RunSnapshot, RunStep, SnapshotListener
from ...core.workflow import CampaignState, build_campaign_workflow
from ...prompts.safety import build_safe_human_fallback

logger = logging.getLogger(__name__)

FallbackBuilder = Callable[[str], str]


async def settle_all(aws: Iterable[Awaitable]) -> List:
    """Wait for every awaitable; failures are returned in place, never raised"""
    return await asyncio.gather(*aws, return_exceptions=True)


class CampaignOrchestrator:
    """Runs campaigns against a ProviderGateway and publishes run snapshots"""

    def __init__(
        self,
        gateway: ProviderGateway,
        credential_gate: Optional[CredentialGate] = None,
        fallback_builder: FallbackBuilder = build_safe_human_fallback,
        progress_config: Optional[Dict[str, float]] = None
    ):
        self.gateway = gateway
        self.credential_gate = credential_gate or EnvCredentialGate()
        self.fallback_builder = fallback_builder
        self.progress = {**PROGRESS_CONFIG, **(progress_config or {})}
        self.last_config: Optional[RunConfiguration] = None

        self._listeners: List[SnapshotListener] = []
        self._running = False
        self._task: Optional[asyncio.Task] = None
        self._store = self._attach_store(JobStateStore())
        self.workflow = build_campaign_workflow(self)

    # ------------------------------------------------------------------
    # Presentation interface
    # ------------------------------------------------------------------

    @property
    def is_running(self) -> bool:
        return self._running

    def snapshot(self) -> RunSnapshot:
        return self._store.snapshot()

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a snapshot listener; returns a callable that unregisters it"""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def submit(self, config: RunConfiguration) -> None:
        """
        Start a run in the background

        Progress is observed through snapshots. Must be called from a
        running event loop.

        Raises:
            RunInProgress: A previous run has not finished yet
        """
        loop = asyncio.get_running_loop()
        if self._running:
            raise RunInProgress("A campaign is already being generated")
        # Marked running before the task starts so a second submit is rejected
        self._running = True
        self._task = loop.create_task(self._execute(config))

    def reset(self) -> None:
        """
        Discard all run state and return to upload

        The last configuration is kept so the form can be re-populated. An
        in-flight run keeps writing to its own detached store, which nobody
        observes any more.
        """
        self._attach_store(JobStateStore())
        self._emit(self._store.snapshot())
        logger.info("[Orchestrator] Run state reset")

    async def run(self, config: RunConfiguration) -> RunSnapshot:
        """
        Execute one run to completion

        Run-level failures (missing image, credential, codec, analysis) are
        caught here: the run returns to upload with the error on the snapshot
        and no jobs.

        Returns:
            Final snapshot of this run

        Raises:
            RunInProgress: Another run is executing
        """
        if self._running:
            raise RunInProgress("A campaign is already being generated")
        self._running = True
        return await self._execute(config)

    async def _execute(self, config: RunConfiguration) -> RunSnapshot:
        """Run body; the caller has already marked the orchestrator running"""
        start_time = datetime.now()
        try:
            self.last_config = config
            store = self._attach_store(JobStateStore(run_id=uuid.uuid4().hex[:8]))
            self._emit(store.snapshot())
            logger.info(f"[Orchestrator] {log_context(store.run_id)} Starting {config.mode} run")

            try:
                await self.workflow.ainvoke({"config": config, "store": store})
            except Exception as e:
                logger.error(f"[Orchestrator] {log_context(store.run_id)} Run aborted: {type(e).__name__}: {e}")
                store.clear_jobs()
                store.set_run_step(RunStep.UPLOAD, error=str(e))
        finally:
            self._running = False

        final = store.snapshot()
        # Publish once more so observers see the run as no longer running
        if store is self._store:
            self._emit(final)

        elapsed = (datetime.now() - start_time).total_seconds()
        logger.info(
            f"[Orchestrator] {log_context(store.run_id)} Finished in {format_time(elapsed)}: "
            f"{final.completed_count} completed, {final.failed_count} failed"
        )
        return final

    # ------------------------------------------------------------------
    # Workflow nodes
    # ------------------------------------------------------------------

    async def validate_input(self, state: CampaignState) -> dict:
        config = state["config"]
        if config.product_image is None:
            raise MissingProductImage("Please upload a product image")
        # Primary image must be transport-encodable; CodecError aborts the run
        encode_image(config.product_image.data)
        return {"config": config}

    async def check_credentials(self, state: CampaignState) -> dict:
        if not self.credential_gate.has_credential():
            self.credential_gate.request_credential()
            if not self.credential_gate.has_credential():
                raise CredentialMissing("An API key must be selected before starting a campaign")
        return {"config": state["config"]}

    async def analyze(self, state: CampaignState) -> dict:
        config, store = state["config"], state["store"]
        store.set_run_step(RunStep.ANALYZING)

        image = config.product_image
        analysis = await self.gateway.analyze(image.data, image.mime_type)
        store.set_analysis(analysis)
        return {"analysis": analysis}

    async def synthesize(self, state: CampaignState) -> dict:
        jobs = prompt_synthesizer.synthesize(state["analysis"], state["config"])
        return {"jobs": jobs}

    async def generate(self, state: CampaignState) -> dict:
        config, store, jobs = state["config"], state["store"], state["jobs"]

        store.initialize_jobs(jobs)
        store.set_run_step(RunStep.GENERATING)

        results = await settle_all(self._run_job(store, config, job) for job in jobs)

        # _run_job records its own errors; anything here escaped that boundary
        for job, result in zip(jobs, results):
            if isinstance(result, BaseException):
                logger.error(f"[Orchestrator] {log_context(store.run_id, job.id)} Unhandled error: {result!r}")
                store.update_job(
                    job.id,
                    status=JobStatus.FAILED,
                    progress=self.progress["failed"],
                    error_message=str(result) or type(result).__name__
                )

        store.set_run_step(RunStep.RESULTS)
        return {"snapshot": store.snapshot()}

    # ------------------------------------------------------------------
    # Job pipeline
    # ------------------------------------------------------------------

    async def _run_job(self, store: JobStateStore, config: RunConfiguration, job: GenerationJob):
        context = log_context(store.run_id, job.id)
        store.update_job(job.id, status=JobStatus.GENERATING_IMAGE, progress=self.progress["image_start"])

        try:
            async with self._progress_ticker(store, job.id):
                image = await self._generate_image(config, job, context)
        except Exception as e:
            logger.error(f"[Orchestrator] {context} Image failed: {type(e).__name__}: {e}")
            store.update_job(
                job.id,
                status=JobStatus.FAILED,
                progress=self.progress["failed"],
                error_message=str(e) or type(e).__name__
            )
            return

        if not config.include_video:
            store.update_job(job.id, status=JobStatus.COMPLETED, progress=self.progress["completed"], image=image)
            return

        store.update_job(
            job.id,
            status=JobStatus.GENERATING_VIDEO,
            progress=self.progress["video_start"],
            image=image
        )
        await self._generate_video(store, config, job, image, context)

    async def _generate_image(self, config: RunConfiguration, job: GenerationJob, context: str) -> GeneratedImage:
        """Two attempts: the instruction verbatim, then the safety fallback on refusal only"""
        request = {
            "primary": config.product_image,
            "secondary": config.secondary_image,
            "pattern": config.pattern_image,
            "aspect_ratio": config.aspect_ratio,
            "model": config.image_model
        }

        try:
            return await self.gateway.generate_image(job.instruction, **request)
        except ContentRefused as e:
            logger.warning(f"[Orchestrator] {context} Safety block detected ({e.finish_reason}), retrying with fallback")

        return await self.gateway.generate_image(self.fallback_builder(job.instruction), **request)

    async def _generate_video(
        self,
        store: JobStateStore,
        config: RunConfiguration,
        job: GenerationJob,
        image: GeneratedImage,
        context: str
    ):
        def on_progress(percent: int):
            store.update_job(job.id, progress=min(percent, self.progress["video_cap"]))

        try:
            video = await self.gateway.generate_video(
                image,
                job.label,
                model=config.video_model,
                aspect_ratio=config.aspect_ratio,
                on_progress=on_progress
            )
        except Exception as e:
            # Degraded success: the image stays, the job still completes
            logger.warning(f"[Orchestrator] {context} Video failed, keeping image: {type(e).__name__}: {e}")
            store.update_job(
                job.id,
                status=JobStatus.COMPLETED,
                progress=self.progress["completed"],
                error_message=f"Video unavailable: {e}"
            )
            return

        store.update_job(job.id, status=JobStatus.COMPLETED, progress=self.progress["completed"], video=video)

    @asynccontextmanager
    async def _progress_ticker(self, store: JobStateStore, job_id: int):
        """Synthetic image progress ramp, cancelled on every exit path"""
        interval = self.progress["tick_interval"]
        step = self.progress["image_step"]
        cap = self.progress["image_cap"]

        async def tick():
            while True:
                await asyncio.sleep(interval)
                store.tick_progress(job_id, step, cap)

        task = asyncio.create_task(tick())
        try:
            yield
        finally:
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task

    # ------------------------------------------------------------------
    # Snapshot forwarding
    # ------------------------------------------------------------------

    def _attach_store(self, store: JobStateStore) -> JobStateStore:
        """Make store current; snapshots from any older store are dropped"""
        def forward(snapshot: RunSnapshot):
            if store is self._store:
                self._emit(snapshot)

        store.subscribe(forward)
        self._store = store
        return store

    def _emit(self, snapshot: RunSnapshot):
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.error(f"[Orchestrator] Snapshot listener failed: {e}", exc_info=True)
