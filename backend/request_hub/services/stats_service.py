"""Request statistics for the organizer dashboard."""
from decimal import Decimal
from typing import Any, Iterable

from request_hub.models.song_request import RequestStatus


def compute_stats(requests: Iterable[Any]) -> dict[str, Any]:
    """Count requests by status and total their tips.

    Tips are summed as ``Decimal`` over every request regardless of
    status, so the total does not depend on input order.
    """
    stats: dict[str, Any] = {
        "total": 0,
        "pending": 0,
        "completed": 0,
        "total_tips": Decimal("0"),
    }
    for request in requests:
        stats["total"] += 1
        status = RequestStatus(request.status)
        if status == RequestStatus.pending:
            stats["pending"] += 1
        elif status == RequestStatus.completed:
            stats["completed"] += 1
        stats["total_tips"] += Decimal(str(request.tip_amount or 0))
    return stats
