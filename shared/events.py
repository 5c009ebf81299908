from enum import Enum
from dataclasses import dataclass
from datetime import datetime
import json


class EventType(str, Enum):
    # Roster
    TEAM_CREATED = "team.created"
    MEMBER_JOINED = "team.member_joined"
    MEMBER_ADDED = "team.member_added"
    MEMBER_REMOVED = "team.member_removed"

    # Admission
    TEAM_CHECKED_IN = "team.checked_in"
    TEAM_CHECKED_OUT = "team.checked_out"

    # Seeding
    SEEDS_UPDATED = "tournament.seeds_updated"


@dataclass
class Event:
    type: EventType
    tournament_id: int
    timestamp: str = None
    data: dict = None

    def __post_init__(self):
        if self.timestamp is None:
            self.timestamp = datetime.utcnow().isoformat() + "Z"
        if self.data is None:
            self.data = {}

    def to_dict(self) -> dict:
        return {
            "type": self.type.value if isinstance(self.type, EventType) else self.type,
            "tournament_id": self.tournament_id,
            "timestamp": self.timestamp,
            "data": self.data
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: dict) -> "Event":
        return cls(
            type=EventType(data["type"]) if data["type"] in [e.value for e in EventType] else data["type"],
            tournament_id=data["tournament_id"],
            timestamp=data.get("timestamp"),
            data=data.get("data", {})
        )

    @classmethod
    def from_json(cls, json_str: str) -> "Event":
        return cls.from_dict(json.loads(json_str))


def team_created_event(tournament_id: int, team_id: int, captain_id: int) -> Event:
    return Event(
        type=EventType.TEAM_CREATED,
        tournament_id=tournament_id,
        data={
            "team_id": team_id,
            "captain_id": captain_id
        }
    )


def member_joined_event(tournament_id: int, team_id: int, user_id: int, trusted_user_id: int = None) -> Event:
    return Event(
        type=EventType.MEMBER_JOINED,
        tournament_id=tournament_id,
        data={
            "team_id": team_id,
            "user_id": user_id,
            "trusted_user_id": trusted_user_id
        }
    )


def member_added_event(tournament_id: int, team_id: int, user_id: int, added_by: int) -> Event:
    return Event(
        type=EventType.MEMBER_ADDED,
        tournament_id=tournament_id,
        data={
            "team_id": team_id,
            "user_id": user_id,
            "added_by": added_by
        }
    )


def member_removed_event(tournament_id: int, team_id: int, user_id: int, removed_by: int) -> Event:
    return Event(
        type=EventType.MEMBER_REMOVED,
        tournament_id=tournament_id,
        data={
            "team_id": team_id,
            "user_id": user_id,
            "removed_by": removed_by
        }
    )


def check_in_changed_event(tournament_id: int, team_id: int, checked_in: bool, by_user: int) -> Event:
    return Event(
        type=EventType.TEAM_CHECKED_IN if checked_in else EventType.TEAM_CHECKED_OUT,
        tournament_id=tournament_id,
        data={
            "team_id": team_id,
            "by_user": by_user
        }
    )


def seeds_updated_event(tournament_id: int, seeds: list) -> Event:
    return Event(
        type=EventType.SEEDS_UPDATED,
        tournament_id=tournament_id,
        data={
            "seeds": list(seeds)
        }
    )
