"""Business logic layer for files app.

This package contains the data-access functions for files and usage:
- File listing with type filters, search and pagination
- File record insertion, deletion and access checks
- Storage and bandwidth usage counters

All queries are scoped to the owning user. File bytes live in blob
storage and are out of scope here; only keys and metadata are stored.
"""
