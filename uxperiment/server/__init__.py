"""
UXperiment API server.

FastAPI application, configuration, security and the HTTP routers. Run it
with ``uvicorn uxperiment.server.main:app``.
"""
