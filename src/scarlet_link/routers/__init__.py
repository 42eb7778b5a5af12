"""
HTTP and WebSocket routers.
"""

from .translation import router as translation_router
from .websocket import router as websocket_router

__all__ = ["translation_router", "websocket_router"]
