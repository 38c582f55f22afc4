import json
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv
from web3 import Web3

from surety.errors import ConfigError

# project root = parent of the package directory
BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / ".env")

DEFAULT_NETWORK = os.getenv("SURETY_NETWORK", "localhost")
CONFIG_PATH = Path(os.getenv("SURETY_CONFIG", BASE_DIR / "config.json"))

# Oracle fleet
ORACLES_COUNT = int(os.getenv("SURETY_ORACLES_COUNT", "30"))
REGISTRATION_GAS_LIMIT = int(os.getenv("SURETY_REGISTRATION_GAS", "4000000"))
RESPONSE_GAS_LIMIT = int(os.getenv("SURETY_RESPONSE_GAS", "1000000"))

# Event polling / transactions
POLL_INTERVAL_S = float(os.getenv("SURETY_POLL_INTERVAL", "2.0"))
# Largest block range asked of eth_getLogs in one request
LOG_CHUNK_BLOCKS = int(os.getenv("SURETY_LOG_CHUNK", "5000"))
RECONNECT_DELAY_S = float(os.getenv("SURETY_RECONNECT_DELAY", "5.0"))
RECEIPT_TIMEOUT_S = float(os.getenv("SURETY_RECEIPT_TIMEOUT", "120"))
DISPATCH_WORKERS = int(os.getenv("SURETY_DISPATCH_WORKERS", "16"))

# Optional truffle artifacts (build/contracts/*.json) overriding the embedded ABI
APP_ARTIFACT = os.getenv("SURETY_APP_ARTIFACT", "")
DATA_ARTIFACT = os.getenv("SURETY_DATA_ARTIFACT", "")


@dataclass(frozen=True)
class NetworkConfig:
    name: str
    url: str
    app_address: str
    data_address: str


def _checksum(label: str, addr: str) -> str:
    if not addr:
        raise ConfigError(f"{label} is empty. Check the config file / env.")
    try:
        return Web3.to_checksum_address(addr)
    except ValueError as e:
        raise ConfigError(f"{label} is not a valid address: {addr}") from e


def load_network_config(network: str = None, path=None) -> NetworkConfig:
    """
    Read per-network settings from a JSON file shaped like

        {"localhost": {"url": "http://localhost:8545",
                       "appAddress": "0x...", "dataAddress": "0x..."}}

    SURETY_RPC_URL / SURETY_APP_ADDRESS / SURETY_DATA_ADDRESS override the
    file, and the file may be absent when all three are set.
    """
    network = network or DEFAULT_NETWORK
    path = Path(path) if path else CONFIG_PATH

    entry = {}
    if path.exists():
        try:
            with open(path, "r", encoding="utf-8") as f:
                entry = json.load(f).get(network) or {}
        except json.JSONDecodeError as e:
            raise ConfigError(f"{path} is not valid JSON: {e}") from e

    url = os.getenv("SURETY_RPC_URL") or entry.get("url", "")
    app_address = os.getenv("SURETY_APP_ADDRESS") or entry.get("appAddress", "")
    data_address = os.getenv("SURETY_DATA_ADDRESS") or entry.get("dataAddress", "")

    if not url:
        raise ConfigError(f"No RPC url for network '{network}' (looked in {path})")

    return NetworkConfig(
        name=network,
        url=url.strip(),
        app_address=_checksum("appAddress", app_address.strip()),
        data_address=_checksum("dataAddress", data_address.strip()),
    )
