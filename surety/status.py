import random
from enum import IntEnum


class FlightStatus(IntEnum):
    """Flight status codes as the FlightSuretyApp contract encodes them (uint8)."""
    UNKNOWN = 0
    ON_TIME = 10
    LATE_AIRLINE = 20
    LATE_WEATHER = 30
    LATE_TECHNICAL = 40
    LATE_OTHER = 50


STATUS_CODES = tuple(FlightStatus)


def random_status(rng=None) -> FlightStatus:
    rng = rng or random
    return rng.choice(STATUS_CODES)


def describe(code) -> str:
    try:
        return FlightStatus(int(code)).name
    except ValueError:
        return f"UNKNOWN({code})"


class RandomStatusDraw:
    """
    Draws a status code uniformly at random on every call.

    Every oracle gets its own draw, so the contract sees organic
    agreement / disagreement between responders. Pass a seed for
    reproducible runs.
    """
    def __init__(self, seed=None):
        self.rng = random.Random(seed)

    def __call__(self) -> FlightStatus:
        return random_status(self.rng)


class FixedStatusDraw:
    """Always returns the same code (demos where quorum should be reached quickly)."""
    def __init__(self, status):
        self.status = FlightStatus(int(status))

    def __call__(self) -> FlightStatus:
        return self.status
