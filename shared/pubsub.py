import os
import logging
import redis
from typing import List
from .events import Event

logger = logging.getLogger(__name__)

EVENT_LOG_SIZE = 1000


class PubSubClient:
    """Fans roster events out over Redis pub/sub and keeps a capped per-tournament log."""

    def __init__(self, redis_url: str = None, redis_client: redis.Redis = None):
        self.redis_url = redis_url or os.getenv('REDIS_URL', 'redis://localhost:6379')
        self.redis = redis_client or redis.from_url(
            self.redis_url,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5
        )

    def publish(self, channel: str, event: Event):
        self.redis.publish(channel, event.to_json())

    def publish_tournament_event(self, tournament_id: int, event: Event):
        channel = f"tournament:{tournament_id}:events"
        self.publish(channel, event)
        self.log_event(tournament_id, event)

    def publish_user_notification(self, user_id: int, event: Event):
        channel = f"user:{user_id}:notifications"
        self.publish(channel, event)

    def log_event(self, tournament_id: int, event: Event):
        key = f"tournament:{tournament_id}:event_log"
        self.redis.lpush(key, event.to_json())
        self.redis.ltrim(key, 0, EVENT_LOG_SIZE - 1)

    def get_recent_events(self, tournament_id: int, count: int = 50) -> List[Event]:
        key = f"tournament:{tournament_id}:event_log"
        events_json = self.redis.lrange(key, 0, count - 1)
        return [Event.from_json(e) for e in events_json]

    def ping(self) -> bool:
        return self.redis.ping()


def publish_safely(publisher: PubSubClient, event: Event, notify_user_id: int = None):
    """
    Publish after a committed mutation. Failures are logged only: the
    roster change already happened and must not be reported as failed.
    """
    if publisher is None:
        return
    try:
        publisher.publish_tournament_event(event.tournament_id, event)
        if notify_user_id is not None:
            publisher.publish_user_notification(notify_user_id, event)
    except redis.RedisError as e:
        logger.error(f"Failed to publish {event.type} for tournament {event.tournament_id}: {e}")
