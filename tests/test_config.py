import json

import pytest
from web3 import Web3

from surety.config import NetworkConfig, load_network_config
from surety.errors import ConfigError

APP = "0x" + "12" * 20
DATA = "0x" + "34" * 20


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("SURETY_RPC_URL", "SURETY_APP_ADDRESS", "SURETY_DATA_ADDRESS"):
        monkeypatch.delenv(key, raising=False)


def write_config(tmp_path, body):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(body), encoding="utf-8")
    return path


def test_reads_network_entry(tmp_path):
    path = write_config(tmp_path, {"localhost": {"url": "http://localhost:8545", "appAddress": APP, "dataAddress": DATA}})
    cfg = load_network_config("localhost", path)

    assert cfg == NetworkConfig("localhost", "http://localhost:8545", Web3.to_checksum_address(APP), Web3.to_checksum_address(DATA))


def test_env_overrides_file(tmp_path, monkeypatch):
    path = write_config(tmp_path, {"localhost": {"url": "http://localhost:8545", "appAddress": APP, "dataAddress": DATA}})
    monkeypatch.setenv("SURETY_RPC_URL", "http://10.0.0.2:7545")
    assert load_network_config("localhost", path).url == "http://10.0.0.2:7545"


def test_env_only(tmp_path, monkeypatch):
    monkeypatch.setenv("SURETY_RPC_URL", "http://localhost:7545")
    monkeypatch.setenv("SURETY_APP_ADDRESS", APP)
    monkeypatch.setenv("SURETY_DATA_ADDRESS", DATA)
    cfg = load_network_config("rinkeby", tmp_path / "missing.json")
    assert cfg.name == "rinkeby"
    assert cfg.app_address == Web3.to_checksum_address(APP)


def test_unknown_network(tmp_path):
    path = write_config(tmp_path, {"localhost": {"url": "http://localhost:8545", "appAddress": APP, "dataAddress": DATA}})
    with pytest.raises(ConfigError):
        load_network_config("mainnet", path)


def test_bad_address(tmp_path):
    path = write_config(tmp_path, {"localhost": {"url": "http://localhost:8545", "appAddress": "0x1234", "dataAddress": DATA}})
    with pytest.raises(ConfigError):
        load_network_config("localhost", path)


def test_bad_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_network_config("localhost", path)


def test_config_is_frozen(tmp_path):
    path = write_config(tmp_path, {"localhost": {"url": "http://localhost:8545", "appAddress": APP, "dataAddress": DATA}})
    cfg = load_network_config("localhost", path)
    with pytest.raises(AttributeError):
        cfg.url = "http://elsewhere"
