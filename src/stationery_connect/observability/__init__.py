"""
stationery_connect.observability

Observability package.

Responsibilities:
- Structured logging configuration (structlog).
- Request-scoped logging context middleware.
"""

# Package marker.
