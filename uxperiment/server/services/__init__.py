"""
Business logic for the marketplace API.

Services receive a RepositoryBundle bound to the request session and raise
domain errors from ``errors``; routers stay thin.
"""
