from .place_search import PlaceSearchClient

__all__ = ["PlaceSearchClient"]
