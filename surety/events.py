from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from web3 import Web3

from surety.status import FlightStatus


def tx_hash_of(log) -> str:
    h = log.get("transactionHash")
    if h is None:
        return ""
    if isinstance(h, (bytes, bytearray)):
        return Web3.to_hex(h)
    return str(h)


@dataclass(frozen=True)
class OracleIdentity:
    address: str
    indices: Tuple[int, ...]


@dataclass(frozen=True)
class StatusRequestEvent:
    index: int
    airline: str
    flight: str
    timestamp: int
    block_number: int = 0
    tx_hash: str = ""
    log_index: int = 0

    @property
    def key(self):
        # what the contract correlates responses on
        return (self.airline, self.flight, self.timestamp, self.index)

    @classmethod
    def from_log(cls, log) -> "StatusRequestEvent":
        args = log["args"]
        return cls(
            index=int(args["index"]),
            airline=str(args["airline"]),
            flight=str(args["flight"]),
            timestamp=int(args["timestamp"]),
            block_number=int(log.get("blockNumber") or 0),
            tx_hash=tx_hash_of(log),
            log_index=int(log.get("logIndex") or 0),
        )


@dataclass(frozen=True)
class FlightStatusInfoEvent:
    airline: str
    flight: str
    timestamp: int
    status: int
    block_number: int = 0
    tx_hash: str = ""
    log_index: int = 0

    @classmethod
    def from_log(cls, log) -> "FlightStatusInfoEvent":
        args = log["args"]
        return cls(
            airline=str(args.get("airline", "")),
            flight=str(args["flight"]),
            timestamp=int(args["timestamp"]),
            status=int(args["status"]),
            block_number=int(log.get("blockNumber") or 0),
            tx_hash=tx_hash_of(log),
            log_index=int(log.get("logIndex") or 0),
        )


@dataclass(frozen=True)
class StatusResponseSubmission:
    oracle_address: str
    index: int
    airline: str
    flight: str
    timestamp: int
    status: FlightStatus

    def args(self) -> list:
        """Argument list for submitOracleResponse(index, airline, flight, timestamp, statusCode)."""
        return [self.index, self.airline, self.flight, self.timestamp, int(self.status)]


@dataclass
class SubmissionResult:
    submission: StatusResponseSubmission
    receipt: Optional[Any] = None
    error: Optional[Exception] = field(default=None)

    @property
    def ok(self) -> bool:
        return self.error is None
