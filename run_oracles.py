#!/usr/bin/env python3
"""
run_oracles.py
Registers the oracle fleet with FlightSuretyApp and answers OracleRequest
events until stopped (Ctrl+C).

    python run_oracles.py --network localhost --oracles 30 --port 3000
"""

import argparse
import logging
import time

from surety.bootstrap import Bootstrap
from surety.config import (
    DEFAULT_NETWORK,
    DISPATCH_WORKERS,
    ORACLES_COUNT,
    POLL_INTERVAL_S,
    load_network_config,
)
from surety.dispatcher import ResponseDispatcher
from surety.ledger import LedgerClient
from surety.registry import OracleRegistry
from surety.server import create_app, serve_in_background
from surety.status import RandomStatusDraw
from surety.subscriber import EventSubscriber

log = logging.getLogger("oracles")


def run(args):
    cfg = load_network_config(args.network, args.config)
    log.info(f"Network: {cfg.name} ({cfg.url})")
    log.info(f"App contract : {cfg.app_address}")
    log.info(f"Data contract: {cfg.data_address}")

    ledger = LedgerClient.from_config(cfg, poll_interval=args.poll_interval)
    registry = OracleRegistry()

    if args.port:
        serve_in_background(create_app(registry), host=args.host, port=args.port)
        log.info(f"HTTP endpoint on http://{args.host}:{args.port}/api")

    Bootstrap(ledger, registry, oracle_count=args.oracles).run()

    dispatcher = ResponseDispatcher(ledger, registry, draw_status=RandomStatusDraw(args.seed), max_workers=args.workers)
    subscriber = EventSubscriber(ledger, from_block=args.from_block)
    subscriber.on_status_request(dispatcher.dispatch)
    subscriber.on_status_info()
    subscriber.start()

    try:
        while subscriber.running:
            time.sleep(1)
    except KeyboardInterrupt:
        log.info("Stopped manually.")
    finally:
        subscriber.stop()
        subscriber.join(timeout=5)
        dispatcher.shutdown(wait=True)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="FlightSurety oracle fleet")
    parser.add_argument("--network", type=str, default=DEFAULT_NETWORK)
    parser.add_argument("--config", type=str, default=None, help="Path to the per-network config JSON")
    parser.add_argument("--oracles", type=int, default=ORACLES_COUNT, help=f"Number of oracle accounts to register (default: {ORACLES_COUNT})")
    parser.add_argument("--from-block", type=int, default=0, help="First block to read events from (default: 0 = full history)")
    parser.add_argument("--poll-interval", type=float, default=POLL_INTERVAL_S)
    parser.add_argument("--workers", type=int, default=DISPATCH_WORKERS, help="Threads submitting oracle responses")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the status draw")
    parser.add_argument("--host", type=str, default="127.0.0.1")
    parser.add_argument("--port", type=int, default=0, help="Serve the /api endpoint on this port (0 = off)")
    parser.add_argument("--log-level", type=str, default="INFO")

    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(threadName)s %(message)s",
    )
    run(args)
