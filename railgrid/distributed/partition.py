"""Day-based ownership of waitlisted requests.

``owner(day) = day mod worker_count``. The mapping is total and
deterministic, so every waitlisted request belongs to exactly one worker and
no runtime coordination is needed to split the work.
"""

from __future__ import annotations

from collections.abc import Sequence

from railgrid.domain.request import Request


def validate_topology(worker_id: int, worker_count: int) -> None:
    """Reject worker ids and counts for which ownership is undefined."""
    if worker_count < 1:
        raise ValueError("worker_count must be >= 1")
    if not 0 <= worker_id < worker_count:
        raise ValueError(f"worker_id must be in [0, {worker_count}), got {worker_id}")


def owner(day: int, worker_count: int) -> int:
    """Return the id of the worker responsible for ``day``."""
    if worker_count < 1:
        raise ValueError("worker_count must be >= 1")
    if day < 0:
        raise ValueError("day must be >= 0")
    return day % worker_count


def owned_indices(
    waitlist: Sequence[Request], worker_id: int, worker_count: int
) -> tuple[int, ...]:
    """Positions in ``waitlist`` owned by ``worker_id``, in waitlist order."""
    validate_topology(worker_id, worker_count)
    return tuple(
        i for i, request in enumerate(waitlist) if owner(request.day, worker_count) == worker_id
    )


def owned_requests(
    waitlist: Sequence[Request], worker_id: int, worker_count: int
) -> tuple[Request, ...]:
    """Subsequence of ``waitlist`` owned by ``worker_id``, in waitlist order."""
    return tuple(waitlist[i] for i in owned_indices(waitlist, worker_id, worker_count))
