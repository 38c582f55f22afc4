import logging
import threading
from typing import Iterator

from web3 import Web3
from web3.exceptions import Web3Exception

from surety.abi import APP_ABI, DATA_ABI, load_abi
from surety.config import (
    APP_ARTIFACT,
    DATA_ARTIFACT,
    LOG_CHUNK_BLOCKS,
    POLL_INTERVAL_S,
    RECEIPT_TIMEOUT_S,
    NetworkConfig,
)
from surety.errors import LedgerReadError, LedgerWriteError, SubscriptionError

log = logging.getLogger(__name__)

# web3 raises Web3Exception subclasses for RPC / revert errors, requests raises
# OSError subclasses for transport errors, and some providers still raise ValueError.
LEDGER_ERRORS = (Web3Exception, OSError, ValueError)


def make_web3(url: str, timeout: float = 10) -> Web3:
    return Web3(Web3.HTTPProvider(url, request_kwargs={"timeout": timeout}))


class LedgerClient:
    """
    Read / write / subscribe access to the FlightSurety contracts.

    Reads and writes are synchronous; callers that need concurrency run them
    on their own threads. Nothing here retries.
    """

    def __init__(self, w3: Web3, app_address: str, data_address: str,
                 app_abi=APP_ABI, data_abi=DATA_ABI,
                 poll_interval: float = POLL_INTERVAL_S,
                 receipt_timeout: float = RECEIPT_TIMEOUT_S,
                 log_chunk: int = LOG_CHUNK_BLOCKS):
        self.w3 = w3
        self.app_address = app_address
        self.data_address = data_address
        self.poll_interval = poll_interval
        self.receipt_timeout = receipt_timeout
        self.log_chunk = max(1, int(log_chunk))
        self.contracts = {
            "app": w3.eth.contract(address=app_address, abi=app_abi),
            "data": w3.eth.contract(address=data_address, abi=data_abi),
        }

    @classmethod
    def from_config(cls, cfg: NetworkConfig, **kwargs) -> "LedgerClient":
        w3 = make_web3(cfg.url)
        return cls(
            w3,
            cfg.app_address,
            cfg.data_address,
            app_abi=load_abi(APP_ARTIFACT, APP_ABI),
            data_abi=load_abi(DATA_ARTIFACT, DATA_ABI),
            **kwargs,
        )

    def _function(self, contract: str, method: str, args):
        return getattr(self.contracts[contract].functions, method)(*args)

    # ------------------------------------------------------------------
    # reads
    # ------------------------------------------------------------------

    def accounts(self) -> list:
        try:
            return list(self.w3.eth.accounts)
        except LEDGER_ERRORS as e:
            raise LedgerReadError("eth_accounts", e) from e

    def balance(self, address: str) -> int:
        try:
            return self.w3.eth.get_balance(address)
        except LEDGER_ERRORS as e:
            raise LedgerReadError("eth_getBalance", e) from e

    def block_number(self) -> int:
        try:
            return self.w3.eth.block_number
        except LEDGER_ERRORS as e:
            raise LedgerReadError("eth_blockNumber", e) from e

    def call(self, method: str, args=(), from_identity: str = None, contract: str = "app"):
        params = {"from": from_identity} if from_identity else {}
        try:
            return self._function(contract, method, args).call(params)
        except LEDGER_ERRORS as e:
            raise LedgerReadError(method, e) from e

    # ------------------------------------------------------------------
    # writes
    # ------------------------------------------------------------------

    def send(self, method: str, args=(), from_identity: str = None, value: int = 0,
             gas_limit: int = None, contract: str = "app"):
        """
        Submit a transaction from a node-managed account and wait for its receipt.
        A reverted receipt (status 0) is reported as LedgerWriteError too.
        """
        tx_params = {"from": from_identity, "value": int(value)}
        if gas_limit:
            tx_params["gas"] = int(gas_limit)

        try:
            tx_hash = self._function(contract, method, args).transact(tx_params)
            receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.receipt_timeout)
        except LEDGER_ERRORS as e:
            raise LedgerWriteError(method, e) from e

        if receipt.get("status", 1) == 0:
            raise LedgerWriteError(method, f"reverted in tx {Web3.to_hex(receipt['transactionHash'])}")
        return receipt

    # ------------------------------------------------------------------
    # events
    # ------------------------------------------------------------------

    def subscribe(self, event_name: str, from_block: int = 0, stop: threading.Event = None) -> Iterator:
        """
        Yield every `event_name` log from `from_block` on: history first, then
        the live tail, polled in ranges of at most `log_chunk` blocks. Runs
        until `stop` is set. On transport failure raises SubscriptionError carrying the
        block to resume from.
        """
        stop = stop or threading.Event()
        event = getattr(self.contracts["app"].events, event_name)
        next_block = from_block

        while not stop.is_set():
            try:
                head = self.block_number()
                to_block = min(head, next_block + self.log_chunk - 1)
                logs = []
                if to_block >= next_block:
                    logs = event.get_logs(from_block=next_block, to_block=to_block)
            except LedgerReadError as e:
                raise SubscriptionError(event_name, e.cause, from_block=next_block) from e
            except LEDGER_ERRORS as e:
                raise SubscriptionError(event_name, e, from_block=next_block) from e

            for entry in logs:
                yield entry
            if to_block >= next_block:
                next_block = to_block + 1

            # history is fetched chunk after chunk; sleep only once at the head
            if next_block > head:
                stop.wait(self.poll_interval)
