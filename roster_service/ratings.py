import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional


@dataclass
class RatingSnapshot:
    """
    Most recent rating of one user, as produced by the skill subsystem.
    ``percentile`` is the share of players rated below this one (0-100).
    """
    user_id: int
    rating: float
    percentile: Optional[float] = None


def top_x_from_percentile(percentile: float) -> int:
    """Percentile rank (share below) to "Top X%" (share at or above), at least 1."""
    return max(1, math.ceil(100 - percentile))


def resolve_own_rating(ratings: Iterable[RatingSnapshot], user_id: Optional[int]) -> Optional[Dict]:
    """
    Rating shown to ``user_id`` about themself.

    Returns None for anonymous users and users without a rating. ``top_x``
    is the share of players rated at or above the user; tied players share
    the best position of their rating.
    """
    if user_id is None:
        return None

    ratings = list(ratings)
    own = next((r for r in ratings if r.user_id == user_id), None)
    if own is None:
        return None

    if own.percentile is not None:
        top_x = top_x_from_percentile(own.percentile)
    else:
        position = 1 + sum(1 for r in ratings if r.rating > own.rating)
        top_x = math.ceil(position / len(ratings) * 100)

    return {
        'value': own.rating,
        'top_x': top_x,
    }


class RedisRatingSource:
    """Reads the latest ratings the skill subsystem publishes to a Redis hash (user id -> rating)."""

    KEY = 'ratings:latest'

    def __init__(self, redis_client):
        self.redis = redis_client

    def __call__(self) -> List[RatingSnapshot]:
        raw = self.redis.hgetall(self.KEY)
        return [RatingSnapshot(user_id=int(uid), rating=float(rating)) for uid, rating in raw.items()]


def no_ratings() -> List[RatingSnapshot]:
    return []
