"""Flask navigation shell."""

from .app import ProfileChatWebApp, create_app

__all__ = ['ProfileChatWebApp', 'create_app']
