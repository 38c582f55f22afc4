import logging
import queue
import threading
from collections import OrderedDict

from surety.config import RECONNECT_DELAY_S
from surety.errors import SubscriptionError
from surety.events import FlightStatusInfoEvent, StatusRequestEvent, tx_hash_of
from surety.status import describe

log = logging.getLogger(__name__)

STATUS_REQUEST_EVENT = "OracleRequest"
STATUS_INFO_EVENT = "FlightStatusInfo"

_STOP = object()


def log_status_info(event: FlightStatusInfoEvent):
    log.info(f"[Status] {event.airline} {event.flight} @ {event.timestamp}: {describe(event.status)} (tx {event.tx_hash})")


def log_identity(raw):
    """Dedup key of a log: tx hash + log index, or its position and payload when the node sends no hash."""
    tx_hash = tx_hash_of(raw)
    if tx_hash:
        return (tx_hash, raw.get("logIndex"))
    args = raw.get("args") or {}
    return (raw.get("blockNumber"), raw.get("logIndex"), repr(sorted(dict(args).items())))


class _SeenLogs:
    """Bounded memory of log identities, oldest forgotten first."""

    def __init__(self, size: int):
        self.size = size
        self._seen = OrderedDict()

    def add(self, ident) -> bool:
        if ident in self._seen:
            return False
        self._seen[ident] = None
        if len(self._seen) > self.size:
            self._seen.popitem(last=False)
        return True


class EventSubscriber:
    """
    Follows the OracleRequest / FlightStatusInfo streams.

    Every stream runs a producer thread (ledger.subscribe -> typed events ->
    queue) and a consumer thread (queue -> handler). A handler that raises is
    logged and the stream carries on. A broken transport is reconnected after
    `reconnect_delay`, resuming from the last block seen; logs delivered twice
    across a reconnect are dropped.
    """

    def __init__(self, ledger, from_block: int = 0, reconnect_delay: float = RECONNECT_DELAY_S,
                 dedup_size: int = 10000):
        self.ledger = ledger
        self.from_block = from_block
        self.reconnect_delay = reconnect_delay
        self.dedup_size = dedup_size
        self._streams = {}
        self._queues = []
        self._threads = []
        self._stop = threading.Event()

    def on_status_request(self, handler):
        self._streams[STATUS_REQUEST_EVENT] = (StatusRequestEvent.from_log, handler)

    def on_status_info(self, handler=None):
        self._streams[STATUS_INFO_EVENT] = (FlightStatusInfoEvent.from_log, handler or log_status_info)

    def start(self):
        if self._threads:
            raise RuntimeError("subscriber already started")
        for name, (decode, handler) in self._streams.items():
            q = queue.Queue()
            self._queues.append(q)
            producer = threading.Thread(target=self._produce, args=(name, decode, q), name=f"{name}-producer", daemon=True)
            consumer = threading.Thread(target=self._consume, args=(name, handler, q), name=f"{name}-consumer", daemon=True)
            self._threads += [producer, consumer]
            producer.start()
            consumer.start()
            log.info(f"[Subscribe] Following {name} from block {self.from_block}")

    def stop(self):
        self._stop.set()
        for q in self._queues:
            q.put(_STOP)

    def join(self, timeout: float = None):
        for t in self._threads:
            t.join(timeout)

    @property
    def running(self) -> bool:
        return any(t.is_alive() for t in self._threads)

    def _produce(self, name, decode, q):
        next_block = self.from_block
        seen = _SeenLogs(self.dedup_size)

        while not self._stop.is_set():
            try:
                for raw in self.ledger.subscribe(name, from_block=next_block, stop=self._stop):
                    next_block = max(next_block, int(raw.get("blockNumber") or 0))
                    if not seen.add(log_identity(raw)):
                        continue
                    try:
                        event = decode(raw)
                    except (KeyError, TypeError, ValueError) as e:
                        log.warning(f"[Subscribe] Undecodable {name} log skipped: {e!r}")
                        continue
                    q.put(event)
            except SubscriptionError as e:
                next_block = max(next_block, e.from_block)
                log.warning(f"[Subscribe] {name} stream lost ({e}). Reconnecting from block {next_block} in {self.reconnect_delay}s...")
            except Exception:
                log.exception(f"[Subscribe] {name} stream crashed. Reconnecting from block {next_block} in {self.reconnect_delay}s...")
            self._stop.wait(self.reconnect_delay)

    def _consume(self, name, handler, q):
        while True:
            event = q.get()
            if event is _STOP:
                return
            try:
                handler(event)
            except Exception:
                log.exception(f"[Subscribe] {name} handler failed; continuing")
