"""Multi-tenant project and task tracker service."""

from __future__ import annotations

__version__ = "0.1.0"
