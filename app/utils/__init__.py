"""Utility modules for the application."""

from app.utils.auth import admin_required, check_admin_secret

__all__ = ['admin_required', 'check_admin_secret']
