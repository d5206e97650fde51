"""
Job status polling.

A submitted job moves through an explicit set of states:

    Submitted -> Working -> Succeeded | Failed | TimedOut

next_state() is the whole transition table; JobPoller only drives it,
sleeping between status queries with an injectable sleep coroutine.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from pydantic import ValidationError

from pdfco.config.settings import ClientConfig
from pdfco.schemas.job import STATUS_SUCCESS, STATUS_WORKING, JobStatusRecord
from .errors import JobFailedError, JobTimeoutError, TransportError

logger = logging.getLogger(__name__)

StatusQuery = Callable[[str], Awaitable[Dict[str, Any]]]
Sleep = Callable[[float], Awaitable[Any]]


@dataclass(frozen=True)
class Submitted:
    job_id: str
    attempts: int = 0


@dataclass(frozen=True)
class Working:
    job_id: str
    attempts: int
    progress: Optional[float] = None


@dataclass(frozen=True)
class Succeeded:
    job_id: str
    attempts: int
    record: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Failed:
    job_id: str
    attempts: int
    message: str
    record: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TimedOut:
    job_id: str
    attempts: int


JobState = Union[Submitted, Working, Succeeded, Failed, TimedOut]
TERMINAL_STATES = (Succeeded, Failed, TimedOut)


def is_terminal(state: JobState) -> bool:
    return isinstance(state, TERMINAL_STATES)


def next_state(state: JobState, raw: Dict[str, Any], max_attempts: int) -> JobState:
    """
    Apply one status record to the current state.

    Args:
        state: Current non-terminal state
        raw: Status record as returned by the API
        max_attempts: Status query budget

    Returns:
        The next state

    Raises:
        ValueError: If state is already terminal
        TransportError: If the record does not look like a job status
    """
    if is_terminal(state):
        raise ValueError(f"No transitions from terminal state {type(state).__name__}")

    attempts = state.attempts + 1
    try:
        record = JobStatusRecord.model_validate(raw)
    except ValidationError as e:
        raise TransportError(f"Malformed status record for job {state.job_id}: {e}") from e

    if record.status == STATUS_SUCCESS:
        return Succeeded(state.job_id, attempts, raw)

    if record.status == STATUS_WORKING:
        if attempts >= max_attempts:
            return TimedOut(state.job_id, attempts)
        return Working(state.job_id, attempts, record.progress)

    # "failed", plus anything else the service reports (aborted, unknown)
    message = record.message or f"Job ended with status '{record.status}'"
    return Failed(state.job_id, attempts, message, raw)


class JobPoller:
    """
    Drives a job from Submitted to a terminal state.

    Each wait() owns exactly one job handle; nothing is shared between calls.
    """

    def __init__(
        self,
        check_status: StatusQuery,
        interval: float = 3.0,
        max_attempts: int = 200,
        sleep: Sleep = asyncio.sleep,
    ):
        """
        Initialize poller.

        Args:
            check_status: Coroutine function returning the status record for a job id
            interval: Seconds to wait before each status query
            max_attempts: Number of status queries before giving up
            sleep: Coroutine used for waiting (asyncio.sleep; fake in tests)
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
        self.check_status = check_status
        self.interval = interval
        self.max_attempts = max_attempts
        self.sleep = sleep

    @classmethod
    def from_config(
        cls,
        check_status: StatusQuery,
        config: ClientConfig,
        sleep: Sleep = asyncio.sleep,
    ) -> "JobPoller":
        return cls(
            check_status,
            interval=config.poll_interval,
            max_attempts=config.poll_max_attempts,
            sleep=sleep,
        )

    async def run(self, job_id: str) -> JobState:
        """
        Poll until the job reaches a terminal state.

        Returns the terminal state; does not raise for Failed or TimedOut.
        Cancellation of the calling task propagates out of the sleep.
        """
        state: JobState = Submitted(job_id)

        while not is_terminal(state):
            await self.sleep(self.interval)
            raw = await self.check_status(job_id)
            state = next_state(state, raw, self.max_attempts)

            if isinstance(state, Working):
                progress = f" ({state.progress:.0f}%)" if state.progress is not None else ""
                logger.debug(
                    f"Job {job_id} working{progress}, "
                    f"check {state.attempts}/{self.max_attempts}"
                )

        logger.info(
            f"Job {job_id} finished as {type(state).__name__} "
            f"after {state.attempts} checks"
        )
        return state

    async def wait(self, job_id: str) -> Dict[str, Any]:
        """
        Poll until done and return the terminal success record.

        Raises:
            JobFailedError: The remote job failed
            JobTimeoutError: The polling budget ran out
        """
        state = await self.run(job_id)

        if isinstance(state, Succeeded):
            return state.record
        if isinstance(state, Failed):
            raise JobFailedError(job_id, state.message)
        if isinstance(state, TimedOut):
            raise JobTimeoutError(job_id, state.attempts)

        raise AssertionError(f"Unhandled terminal state: {state!r}")
