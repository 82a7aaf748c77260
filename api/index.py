"""
Serverless function entry point for the CrossPay FastAPI application.

The ASGI app is exposed directly for the Python serverless runtime.
"""

from crosspay.main import app

handler = app

__all__ = ["app", "handler"]
