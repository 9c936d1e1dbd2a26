"""
Write-time deduplication of observations.

An observation is dropped when the latest stored observation for the same
(device, sensor, quantity kind) inside the trailing window carries exactly the
same values. Only the immediate predecessor is compared, so a reading that
oscillates A, B, A within the window keeps all three rows.
"""
from datetime import datetime, timedelta
from typing import Optional

from core.models.observation import Observation

DEDUP_WINDOW = timedelta(seconds=60)


def window_start(candidate: Observation, window: timedelta = DEDUP_WINDOW) -> datetime:
    """Stored observations strictly after this instant are inside the window."""
    return candidate.observation_time - window


def should_persist(candidate: Observation, last_in_window: Optional[Observation]) -> bool:
    if last_in_window is None:
        return True
    # None == None holds, so absent fields compare equal to absent fields
    return candidate.values() != last_in_window.values()
