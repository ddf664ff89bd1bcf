"""
Shared data models for UXperiment.

- io: Pydantic request/response schemas used by the HTTP API
"""
