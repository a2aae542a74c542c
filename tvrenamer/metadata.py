"""Capability interface for episode metadata lookups.

The resolver and executor only depend on this protocol, so any object with
these two methods can stand in for the TMDB client.
"""
from typing import Protocol


class MetadataLookup(Protocol):

    def search_series(self, name: str, language: str) -> int:
        """Return the id of the series best matching *name*.

        Raises:
            SeriesNotFound: If the search has no usable result
            MetadataError: If the service cannot be reached
        """
        ...

    def episode_title(self, series_id: int, season_no: int, episode_no: int) -> str:
        """Return the title of one episode.

        Raises:
            EpisodeNotFound: If the season has no such episode
            MetadataError: If the service cannot be reached
        """
        ...
