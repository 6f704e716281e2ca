from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from .base import ApiModel


class Location(ApiModel):
    name: str = ""
    lat: float
    lon: float


class PathSummary(ApiModel):
    distance: float
    duration: float


class Path(ApiModel):
    id: int
    summary: PathSummary
    # [longitude, latitude] pairs
    coordinates: List[Tuple[float, float]] = Field(default_factory=list)
    score: float
    alerts: Optional[List[str]] = None


class Recommendation(ApiModel):
    start: Location
    end: Location
    best_path: Path
    all_paths: List[Path] = Field(default_factory=list)


class SearchedPlace(BaseModel):
    """A Kakao Local keyword search document (snake_case on the wire)."""

    id: str
    place_name: str
    category_name: str = ""
    address_name: str = ""
    road_address_name: str = ""
    x: str
    y: str

    @property
    def longitude(self) -> float:
        return float(self.x)

    @property
    def latitude(self) -> float:
        return float(self.y)
