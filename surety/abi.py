import json
from pathlib import Path

# Minimal ABIs for the parts of FlightSuretyApp / FlightSuretyData the oracle fleet touches.

APP_ABI = [
    {"name": "isOperational", "type": "function", "stateMutability": "view", "inputs": [], "outputs": [{"name": "", "type": "bool"}]},
    {"name": "REGISTRATION_FEE", "type": "function", "stateMutability": "view", "inputs": [], "outputs": [{"name": "", "type": "uint256"}]},
    {"name": "registerOracle", "type": "function", "stateMutability": "payable", "inputs": [], "outputs": []},
    {"name": "getMyIndexes", "type": "function", "stateMutability": "view", "inputs": [], "outputs": [{"name": "", "type": "uint8[3]"}]},
    {"name": "fetchFlightStatus", "type": "function", "stateMutability": "nonpayable", "inputs": [
        {"name": "airline", "type": "address"},
        {"name": "flight", "type": "string"},
        {"name": "timestamp", "type": "uint256"},
    ], "outputs": []},
    {"name": "submitOracleResponse", "type": "function", "stateMutability": "nonpayable", "inputs": [
        {"name": "index", "type": "uint8"},
        {"name": "airline", "type": "address"},
        {"name": "flight", "type": "string"},
        {"name": "timestamp", "type": "uint256"},
        {"name": "statusCode", "type": "uint8"},
    ], "outputs": []},
    {"anonymous": False, "name": "OracleRequest", "type": "event", "inputs": [
        {"indexed": False, "name": "index", "type": "uint8"},
        {"indexed": False, "name": "airline", "type": "address"},
        {"indexed": False, "name": "flight", "type": "string"},
        {"indexed": False, "name": "timestamp", "type": "uint256"},
    ]},
    {"anonymous": False, "name": "FlightStatusInfo", "type": "event", "inputs": [
        {"indexed": False, "name": "airline", "type": "address"},
        {"indexed": False, "name": "flight", "type": "string"},
        {"indexed": False, "name": "timestamp", "type": "uint256"},
        {"indexed": False, "name": "status", "type": "uint8"},
    ]},
]

DATA_ABI = [
    {"name": "authorizeCaller", "type": "function", "stateMutability": "nonpayable", "inputs": [{"name": "contractAddress", "type": "address"}], "outputs": []},
]


def load_abi(artifact_path, fallback):
    """ABI from a truffle build artifact, or `fallback` when no path is given."""
    if not artifact_path:
        return fallback
    with Path(artifact_path).open("r", encoding="utf-8") as f:
        return json.load(f)["abi"]
