"""
Shared fixtures: an in-memory stand-in for LedgerClient.
"""
import threading

import pytest

from surety.errors import LedgerWriteError

FEE = 10 ** 18

ORACLE_ADDRESSES = [f"0x{n:040x}" for n in range(1, 6)]
OWNER = "0x" + "00" * 19 + "aa"
APP_ADDRESS = "0x" + "ab" * 20


class FakeLedger:
    """Records every send; `fail_sends` maps (method, sender) -> error text."""

    app_address = APP_ADDRESS

    def __init__(self, accounts=None, indices=None, balances=None, fee=FEE, logs=None):
        self._accounts = list(accounts) if accounts is not None else [OWNER] + ORACLE_ADDRESSES
        self.indices = dict(indices or {})
        self.balances = dict(balances or {})
        self.fee = fee
        self.logs = dict(logs or {})
        self.fail_sends = {}
        self.sent = []
        self._lock = threading.Lock()

    def accounts(self):
        return list(self._accounts)

    def balance(self, address):
        return self.balances.get(address, 100 * FEE)

    def call(self, method, args=(), from_identity=None, contract="app"):
        if method == "isOperational":
            return True
        if method == "REGISTRATION_FEE":
            return self.fee
        if method == "getMyIndexes":
            return list(self.indices[from_identity])
        raise AssertionError(f"unexpected call {method}")

    def send(self, method, args=(), from_identity=None, value=0, gas_limit=None, contract="app"):
        with self._lock:
            self.sent.append({
                "method": method,
                "args": list(args),
                "from": from_identity,
                "value": value,
                "gas": gas_limit,
                "contract": contract,
            })
        reason = self.fail_sends.get((method, from_identity))
        if reason:
            raise LedgerWriteError(method, reason)
        return {"status": 1, "blockNumber": len(self.sent), "transactionHash": b"\x00" * 32}

    def sends(self, method):
        with self._lock:
            return [s for s in self.sent if s["method"] == method]

    def subscribe(self, event_name, from_block=0, stop=None):
        for entry in self.logs.get(event_name, []):
            if entry["blockNumber"] >= from_block:
                yield entry
        if stop is not None:
            stop.wait()


def make_request_log(index, airline="0x" + "cd" * 20, flight="ND1309", timestamp=1700000000, block=1, log_index=0):
    return {
        "args": {"index": index, "airline": airline, "flight": flight, "timestamp": timestamp},
        "blockNumber": block,
        "transactionHash": bytes([block]) * 32,
        "logIndex": log_index,
    }


@pytest.fixture
def oracle_indices():
    return dict(zip(ORACLE_ADDRESSES, [[1, 2, 3], [2, 3, 4], [5, 6, 7], [1, 5, 9], [3, 8, 9]]))


@pytest.fixture
def ledger(oracle_indices):
    return FakeLedger(indices=oracle_indices)
