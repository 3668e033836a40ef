"""
stationery_connect.auth

Authentication/authorization package.

Responsibilities:
- Principal and role types.
- Row-level-security (RLS) authorization model.
- JWT helpers and FastAPI auth dependencies.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# `auth.rls` is a leaf: it imports only `auth.models` and never touches I/O.
