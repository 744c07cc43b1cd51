"""Participant helpers shared by creation and quota checks."""

from __future__ import annotations
from tracking import t

import re
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

from reservations.models import Participant

_MEMBER_PATTERN = re.compile(r"^\s*\d+\s*$")


def member_id(value: Any) -> Optional[int]:
    """Return the user id when ``value`` identifies a member, else ``None``."""

    t('reservations.engine.participants.member_id')
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str) and _MEMBER_PATTERN.match(value):
        return int(value)
    return None


def normalize_participant(value: Any) -> Participant:
    """Numeric identifiers become ints, everything else trimmed text."""

    t('reservations.engine.participants.normalize_participant')
    if value is None:
        return ""
    identifier = member_id(value)
    if identifier is not None:
        return identifier
    return str(value).strip()


@dataclass
class ParticipantSplit:
    """Participants partitioned into quota-bound members and exempt guests."""

    members: List[int] = field(default_factory=list)
    guests: List[str] = field(default_factory=list)
    normalized: List[Participant] = field(default_factory=list)

    @property
    def headcount(self) -> int:
        return len(self.normalized)


def split_participants(raw: Optional[Iterable[Any]]) -> ParticipantSplit:
    """
    Normalise raw participant values in original order.

    Every supplied value counts toward the headcount, blanks included.
    Anything other than a list or tuple yields no participants.
    """

    t('reservations.engine.participants.split_participants')
    split = ParticipantSplit()
    if not isinstance(raw, (list, tuple)):
        return split
    for value in raw:
        normalized = normalize_participant(value)
        if isinstance(normalized, int):
            split.members.append(normalized)
        else:
            split.guests.append(normalized)
        split.normalized.append(normalized)
    return split


def involves_member(participants: Iterable[Any], user_id: Any) -> bool:
    """True when ``user_id`` appears in ``participants`` as a member id."""

    t('reservations.engine.participants.involves_member')
    return any(member_id(value) == user_id for value in participants or ())
