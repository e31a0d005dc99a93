"""HTTP API: FastAPI application factory, dependency wiring and routers."""
