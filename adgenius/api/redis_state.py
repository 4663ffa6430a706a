"""Redis snapshot mirror for session observers

Optional: only used when REDIS_URL is configured. The in-memory orchestrator
stays the source of truth; Redis holds the latest snapshot per session and
relays each snapshot on the session's event channel in order.
"""

import json
import asyncio
import logging
import redis.asyncio as redis
from typing import Dict, Any, Optional

from ..core.config import SNAPSHOT_TTL_SECONDS

logger = logging.getLogger(__name__)


class RedisStateManager:
    """
    Mirrors session snapshots in Redis with automatic TTL.
    Stored as a hash so clients can read single fields (run_step, jobs).
    """

    def __init__(self, redis_url: Optional[str] = None, client: Optional[redis.Redis] = None):
        if client is None:
            # Create connection pool with optimized settings
            pool = redis.ConnectionPool.from_url(
                redis_url,
                max_connections=30,
                decode_responses=True,
                socket_keepalive=True
            )
            client = redis.Redis(connection_pool=pool)
        self.redis = client
        self.default_ttl = SNAPSHOT_TTL_SECONDS

    async def save_snapshot(self, session_id: str, snapshot: Dict[str, Any]):
        """Replace the stored snapshot hash for a session

        Args:
            session_id: Session identifier
            snapshot: Serialized snapshot (RunSnapshotResponse.model_dump)
        """
        key = f"state_hash:{session_id}"

        # Convert complex values to JSON strings
        encoded_state = {}
        for field, value in snapshot.items():
            if value is not None:  # Skip None values to save space
                encoded_state[field] = json.dumps(value, default=str)

        # Use pipeline for atomic operation
        pipe = self.redis.pipeline()
        pipe.delete(key)
        if encoded_state:
            pipe.hset(key, mapping=encoded_state)
            pipe.expire(key, self.default_ttl)
        await pipe.execute()

    async def get_snapshot(self, session_id: str) -> Optional[Dict[str, Any]]:
        """Retrieve the stored snapshot hash"""
        raw_state = await self.redis.hgetall(f"state_hash:{session_id}")
        if not raw_state:
            return None

        state = {}
        for field, value in raw_state.items():
            try:
                state[field] = json.loads(value)
            except json.JSONDecodeError:
                state[field] = value  # Keep as string if not JSON
        return state

    async def publish_event(self, session_id: str, event: Dict[str, Any]):
        """Publish event to session channel"""
        await self.redis.publish(f"events:{session_id}", json.dumps(event, default=str))

    async def mirror_snapshot(self, session_id: str, snapshot: Dict[str, Any]):
        """Store and publish a snapshot; Redis errors are logged, never raised"""
        try:
            await self.save_snapshot(session_id, snapshot)
            await self.publish_event(session_id, {"type": "snapshot", "data": snapshot})
        except redis.RedisError as e:
            logger.warning(f"[Redis] Failed to mirror snapshot for session {session_id}: {e}")

    async def delete_session(self, session_id: str):
        await self.redis.delete(f"state_hash:{session_id}")

    async def ping(self) -> bool:
        return await self.redis.ping()

    async def close(self):
        await self.redis.aclose()


class SessionSnapshotMirror:
    """Ordered Redis mirror for one session

    Snapshots arrive from synchronous orchestrator callbacks. They are queued
    and written by a single writer task, so the stored hash always ends on the
    latest snapshot.
    """

    def __init__(self, state_manager: RedisStateManager, session_id: str):
        self.state_manager = state_manager
        self.session_id = session_id
        self.queue: asyncio.Queue = asyncio.Queue()
        self.writer_task: Optional[asyncio.Task] = None
        self.closed = False

    def push(self, snapshot: Dict[str, Any]):
        """Queue a serialized snapshot; starts the writer on first use"""
        if self.closed:
            return
        self.queue.put_nowait(snapshot)
        if self.writer_task is None:
            self.writer_task = asyncio.get_running_loop().create_task(self._writer_loop())

    async def _writer_loop(self):
        while True:
            snapshot = await self.queue.get()
            try:
                await self.state_manager.mirror_snapshot(self.session_id, snapshot)
            except Exception as e:
                logger.error(f"[Redis] Mirror writer error for session {self.session_id}: {e}", exc_info=True)
            finally:
                self.queue.task_done()

    async def close(self, drain: bool = False):
        """Stop the writer; with drain, queued snapshots are written first"""
        self.closed = True
        if self.writer_task is None:
            return
        if drain:
            await self.queue.join()
        self.writer_task.cancel()
        try:
            await self.writer_task
        except asyncio.CancelledError:
            pass
        self.writer_task = None
