from datetime import datetime


class Clock:
    """Source of the current time for admission-window decisions.
    
    Engines take a clock instead of calling datetime directly so callers
    can pin time. Times are naive UTC, matching the stored columns.
    """
    
    def now(self) -> datetime:
        return datetime.utcnow()


class FixedClock(Clock):
    """Clock frozen at a given instant until moved."""
    
    def __init__(self, instant: datetime):
        self.instant = instant
    
    def now(self) -> datetime:
        return self.instant
    
    def set(self, instant: datetime):
        self.instant = instant
