"""
API Routes
==========

Route modules for the ioc-tracker service.
"""

from ioc_tracker.api.routes.entries import router as entries_router
from ioc_tracker.api.routes.upload import router as upload_router

__all__ = ["entries_router", "upload_router"]
