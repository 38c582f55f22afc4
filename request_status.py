#!/usr/bin/env python3
"""
request_status.py
Asks FlightSuretyApp for a flight status (fetchFlightStatus), which makes the
contract emit an OracleRequest for a random index.

    python request_status.py 0xAirline... ND1309 --timestamp 1700000000
"""

import argparse
import logging
import time

from surety.config import DEFAULT_NETWORK, load_network_config
from surety.errors import LedgerError
from surety.ledger import LedgerClient

log = logging.getLogger("request-status")


def request_status(ledger: LedgerClient, airline: str, flight: str, timestamp: int, sender: str = None):
    sender = sender or ledger.accounts()[0]
    receipt = ledger.send("fetchFlightStatus", [airline, flight, int(timestamp)], from_identity=sender)
    log.info(f"Requested status for {airline} {flight} @ {timestamp} (block {receipt['blockNumber']})")
    return receipt


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Trigger an OracleRequest")
    parser.add_argument("airline", type=str)
    parser.add_argument("flight", type=str)
    parser.add_argument("--timestamp", type=int, default=None, help="Unix seconds (default: now)")
    parser.add_argument("--sender", type=str, default=None, help="Account to send from (default: accounts[0])")
    parser.add_argument("--network", type=str, default=DEFAULT_NETWORK)
    parser.add_argument("--config", type=str, default=None)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")

    cfg = load_network_config(args.network, args.config)
    ledger = LedgerClient.from_config(cfg)
    try:
        request_status(ledger, args.airline, args.flight, args.timestamp or int(time.time()), args.sender)
    except LedgerError as e:
        log.error(f"Request failed: {e}")
        raise SystemExit(1)
