"""URL Content Saver services."""

from urlsaver.services.saver import AsyncUrlSaverService, UrlSaverService

__all__ = ["AsyncUrlSaverService", "UrlSaverService"]
