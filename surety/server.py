"""
Informational HTTP endpoint for the oracle process (liveness checks).
"""
import threading

import uvicorn
from fastapi import FastAPI

from surety.registry import OracleRegistry


def create_app(registry: OracleRegistry = None) -> FastAPI:
    app = FastAPI(title="FlightSurety Oracles")

    @app.get("/api")
    def api():
        return {
            "message": "An API for use with your Dapp!",
            "oracles": len(registry) if registry is not None else 0,
        }

    return app


def serve_in_background(app: FastAPI, host: str = "127.0.0.1", port: int = 3000) -> threading.Thread:
    server = uvicorn.Server(uvicorn.Config(app, host=host, port=port, log_level="warning"))
    t = threading.Thread(target=server.run, name="http", daemon=True)
    t.start()
    return t
