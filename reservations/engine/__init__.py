"""Pure decision logic: conflicts, quotas, validation and transitions."""

from .conflicts import find_conflict, has_conflict
from .participants import ParticipantSplit, member_id, normalize_participant, split_participants
from .quota import QuotaEnforcer, future_active_count, waiting_count

__all__ = [
    "find_conflict",
    "has_conflict",
    "ParticipantSplit",
    "member_id",
    "normalize_participant",
    "split_participants",
    "QuotaEnforcer",
    "future_active_count",
    "waiting_count",
]
