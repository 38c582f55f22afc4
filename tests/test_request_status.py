from request_status import request_status

from conftest import OWNER, FakeLedger


def test_sends_fetch_flight_status_from_owner():
    ledger = FakeLedger()
    request_status(ledger, "0x" + "cd" * 20, "ND1309", 1700000000)

    sends = ledger.sends("fetchFlightStatus")
    assert len(sends) == 1
    assert sends[0]["from"] == OWNER
    assert sends[0]["args"] == ["0x" + "cd" * 20, "ND1309", 1700000000]
