"""API routers."""

from recoverkit.presentation.routers.recover import recover_router

__all__ = ["recover_router"]
