"""Business logic layer for accounts app.

Read-only user lookups used by request handlers. Users are created and
edited elsewhere (admin, identity provider sync).
"""
