from .youtube import YoutubeService

__all__ = ["YoutubeService"]
