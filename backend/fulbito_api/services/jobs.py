"""Background execution of team generation requests.

Balancing a big roster can visit tens of thousands of combinations, so routes
hand the work to a small thread pool and answer with a job id straight away.
Clients poll the job until it leaves the ``pending`` state. Abandoned jobs are
signalled through their stop event; the balancer checks it between
combinations and returns early.
"""

import logging
import threading
import uuid
from collections import OrderedDict
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from fulbito_model import BalancingError, BalancingResult, Config as TeamgenConfig, Player, balance_roster
from fulbito_model.teamgen import validate_request

logger = logging.getLogger("fulbito.jobs")


@dataclass
class TeamGenerationJob:
    id: str
    team_size: int
    player_ids: List[int]
    future: Future
    stop: threading.Event = field(default_factory=threading.Event)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def status(self) -> str:
        if not self.future.done():
            return "pending"
        if self.future.cancelled():
            return "cancelled"
        if self.future.exception() is not None:
            return "failed"
        if self.future.result().cancelled:
            return "cancelled"
        return "done"

    @property
    def result(self) -> Optional[BalancingResult]:
        if self.status != "done":
            return None
        return self.future.result()

    def to_dict(self) -> dict:
        status = self.status
        data = {
            "job_id": self.id,
            "status": status,
            "team_size": self.team_size,
            "player_ids": list(self.player_ids),
            "created_at": self.created_at.isoformat(),
        }
        if status == "done":
            data["result"] = self.future.result().to_dict()
        elif status == "failed":
            exc = self.future.exception()
            if isinstance(exc, BalancingError):
                data.update(exc.to_dict())
            else:
                data["error"] = "teamgen_failed"
        return data


class TeamGenerationJobs:
    def __init__(self, config: TeamgenConfig, workers: int = 2, max_jobs: int = 100):
        self.config = config
        self.max_jobs = max_jobs
        self._executor = ThreadPoolExecutor(max_workers=max(1, workers), thread_name_prefix="teamgen")
        self._jobs: "OrderedDict[str, TeamGenerationJob]" = OrderedDict()
        self._lock = threading.Lock()

    def submit(self, roster: Sequence[Player], team_size: int, top_n: Optional[int] = None) -> TeamGenerationJob:
        if top_n is None:
            top_n = self.config.default_top_n
        roster = list(roster)
        # bad requests fail on the caller's thread, before any job exists
        validate_request(roster, team_size, top_n, self.config)

        job_id = uuid.uuid4().hex
        stop = threading.Event()
        future = self._executor.submit(self._run, job_id, roster, team_size, top_n, stop)
        job = TeamGenerationJob(
            id=job_id,
            team_size=team_size,
            player_ids=[p.id for p in roster],
            future=future,
            stop=stop,
        )
        with self._lock:
            self._jobs[job_id] = job
            self._evict_finished()
        logger.info("Queued team generation job %s for %dv%d", job_id, team_size, team_size)
        return job

    def _run(self, job_id: str, roster: List[Player], team_size: int, top_n: int, stop: threading.Event):
        try:
            return balance_roster(roster, team_size, top_n=top_n, config=self.config, should_stop=stop.is_set)
        except Exception:
            logger.exception("Team generation job %s failed", job_id)
            raise

    def get(self, job_id: str) -> Optional[TeamGenerationJob]:
        with self._lock:
            return self._jobs.get(job_id)

    def discard(self, job_id: str) -> bool:
        with self._lock:
            job = self._jobs.pop(job_id, None)
        if job is None:
            return False
        job.stop.set()
        job.future.cancel()
        logger.info("Discarded team generation job %s (%s)", job_id, job.status)
        return True

    def _evict_finished(self) -> None:
        overflow = len(self._jobs) - self.max_jobs
        if overflow <= 0:
            return
        finished = [job_id for job_id, job in self._jobs.items() if job.future.done()]
        for job_id in finished[:overflow]:
            del self._jobs[job_id]

    def shutdown(self, wait: bool = True) -> None:
        with self._lock:
            jobs = list(self._jobs.values())
        for job in jobs:
            job.stop.set()
        self._executor.shutdown(wait=wait)
