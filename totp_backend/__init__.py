"""
Backend package for serving TOTP codes over HTTP using Flask.
Integrates with the totp_core functions.
"""

from .app import app

__all__ = ['app']
