"""Bounded polling of a Vidu task until it reaches a terminal state.

States:
  success            terminal, ok
  failed             terminal, RemoteJobFailure
  anything else      in flight (created / queueing / pending / processing)

One status query at a time, a fixed sleep before each, at most
``max_attempts`` queries. Running out of attempts is a PollingTimeout, which
is reported separately from a failed job.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from vidu_tools.config import get_settings
from vidu_tools.schemas.vidu import TERMINAL_STATES, TaskStatus
from vidu_tools.services.errors import PollingTimeout, RemoteJobFailure
from vidu_tools.services.vidu_client import ViduClient

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None]]


@dataclass
class PollOutcome:
    """Terminal success of a polled task."""
    task_id: str
    status: TaskStatus
    attempts: int


def interpret_status(task_id: str, status: TaskStatus) -> TaskStatus | None:
    """Shared terminal-state logic.

    Returns the status on success, ``None`` while in flight, and raises
    RemoteJobFailure when the task failed.
    """
    if status.state == "success":
        return status
    if status.state == "failed":
        raise RemoteJobFailure(task_id, status.err_code)
    return None


async def wait_for_completion(
    client: ViduClient,
    task_id: str,
    initial_state: str,
    *,
    interval: float | None = None,
    max_attempts: int | None = None,
    sleep: SleepFn = asyncio.sleep,
) -> PollOutcome:
    """Poll ``task_id`` until success, failure or ``max_attempts`` queries.

    If ``initial_state`` is already terminal, the status is read once without
    any delay to collect the creations (or the error code). Errors from the
    status query propagate immediately and are not counted as attempts.
    """
    settings = get_settings()
    if interval is None:
        interval = settings.POLL_INTERVAL_SECONDS
    if max_attempts is None:
        max_attempts = settings.MAX_POLL_ATTEMPTS

    if initial_state in TERMINAL_STATES:
        status = await client.get_task_status(task_id)
        if interpret_status(task_id, status) is not None:
            return PollOutcome(task_id=task_id, status=status, attempts=0)
        initial_state = status.state

    state = initial_state
    attempts = 0
    while attempts < max_attempts:
        await sleep(interval)
        status = await client.get_task_status(task_id)
        attempts += 1
        state = status.state
        logger.info("Vidu task %s poll %d/%d: %s", task_id, attempts, max_attempts, state)

        if interpret_status(task_id, status) is not None:
            return PollOutcome(task_id=task_id, status=status, attempts=attempts)

    logger.warning("Vidu task %s timed out after %d polls, last state=%s", task_id, attempts, state)
    raise PollingTimeout(task_id, state, attempts)
