import logging
from concurrent.futures import ThreadPoolExecutor

from surety.config import DISPATCH_WORKERS, RESPONSE_GAS_LIMIT
from surety.errors import LedgerWriteError
from surety.events import StatusRequestEvent, StatusResponseSubmission, SubmissionResult
from surety.registry import OracleRegistry
from surety.status import RandomStatusDraw, describe

log = logging.getLogger(__name__)


class ResponseDispatcher:
    """
    Answers OracleRequest events on behalf of every registered oracle that
    holds the requested index.

    Each oracle's response is its own task on the thread pool. The returned
    futures are only for observing outcomes: one submission failing never
    cancels or delays the others.
    """

    def __init__(self, ledger, registry: OracleRegistry, draw_status=None,
                 executor: ThreadPoolExecutor = None, max_workers: int = DISPATCH_WORKERS,
                 gas_limit: int = RESPONSE_GAS_LIMIT):
        self.ledger = ledger
        self.registry = registry
        self.draw_status = draw_status or RandomStatusDraw()
        self.gas_limit = gas_limit
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="oracle-response")

    def dispatch(self, event: StatusRequestEvent) -> list:
        oracles = self.registry.matching_oracles(event.index)
        if not oracles:
            log.debug(f"[Dispatch] No oracle holds index {event.index} ({event.airline} {event.flight} {event.timestamp})")
            return []

        log.info(f"[Dispatch] Request index={event.index} flight={event.flight} ts={event.timestamp} -> {len(oracles)} oracle(s)")

        futures = []
        for address in oracles:
            submission = StatusResponseSubmission(
                oracle_address=address,
                index=event.index,
                airline=event.airline,
                flight=event.flight,
                timestamp=event.timestamp,
                status=self.draw_status(),
            )
            future = self._executor.submit(self._submit, submission)
            future.add_done_callback(self._log_crash)
            futures.append(future)
        return futures

    def _submit(self, submission: StatusResponseSubmission) -> SubmissionResult:
        try:
            receipt = self.ledger.send(
                "submitOracleResponse",
                submission.args(),
                from_identity=submission.oracle_address,
                gas_limit=self.gas_limit,
            )
        except LedgerWriteError as e:
            log.warning(
                f"[Dispatch] Response from {submission.oracle_address} failed for "
                f"{submission.airline} {submission.flight} {submission.timestamp} index={submission.index}: {e}"
            )
            return SubmissionResult(submission, error=e)

        log.info(
            f"[Dispatch] Oracle {submission.oracle_address} answered {describe(submission.status)} "
            f"for {submission.flight} index={submission.index}"
        )
        return SubmissionResult(submission, receipt=receipt)

    @staticmethod
    def _log_crash(future):
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            log.error(f"[Dispatch] Response task crashed: {exc!r}")

    def shutdown(self, wait: bool = True):
        if self._owns_executor:
            self._executor.shutdown(wait=wait)
