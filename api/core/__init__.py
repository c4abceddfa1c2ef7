"""
Shared, cross-cutting code for the API.

`core/` holds small building blocks that both features use (settings, DB
pool, blob client, errors, the response envelope, logging). Feature-specific
SQL and parsing live in the feature package (`users/`, `storage/`).
"""
