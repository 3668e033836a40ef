"""
stationery_connect.services

Service layer package.

Responsibilities:
- Own transactions and consult the RLS model before every read or mutation.
- Keep HTTP concerns out of business rules (routers translate errors).
"""

# Package marker.
