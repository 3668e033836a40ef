"""
stationery_connect.api

API package for the StationeryConnect service.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring and error translation.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer should remain thin: request validation + auth + delegation to services.
