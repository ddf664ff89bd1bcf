"""UXperiment.

This package contains the backend of the UXperiment component marketplace: a
REST API where users browse, preview and favorite reusable UI/CSS components,
subscribe to paid plans for premium access, and administrators manage the
catalogue and read usage analytics.

High-level architecture
-----------------------

The codebase is organized in two layers:

- ``uxperiment.core``: framework-free infrastructure.

  - Logging and optional Logfire monitoring.
  - SQLModel entities (one module per table) and async repositories.
  - Pydantic I/O schemas shared by the API.

- ``uxperiment.server``: the FastAPI application.

  - Settings, security (password hashing, JWT sessions).
  - Services holding the marketplace rules (component access gating,
    favorites and the favorite-state cache, statistics aggregation,
    subscriptions and payments).
  - Versioned routers under ``/api/v1``.

Typical workflow
----------------

1. A user registers or logs in and receives an ``auth_token`` cookie.
2. The user browses components; premium ones are locked unless the user holds
   an active subscription (or is an admin or the author).
3. Views are recorded and favorites toggled; both feed the daily statistics
   buckets that administrators read from the dashboard.
"""
