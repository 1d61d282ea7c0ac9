"""HTTP API (FastAPI app and dependency wiring)."""
