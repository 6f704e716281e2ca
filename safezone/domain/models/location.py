from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import Field

from .base import ApiModel

DEFAULT_RADIUS_METERS = 1000
DEFAULT_SAFETY_RADIUS_METERS = 500


class CCTVData(ApiModel):
    id: Optional[Union[int, str]] = None
    district: str = ""
    address: str = ""
    latitude: float
    longitude: float
    cctv_count: int = 0
    updated_at: Optional[str] = None


class CrimeData(ApiModel):
    id: Optional[Union[int, str]] = None
    district: str = ""
    address: str = ""
    latitude: float
    longitude: float
    crime_type: str = ""
    updated_at: Optional[str] = None


class LightData(ApiModel):
    id: Optional[Union[int, str]] = None
    management_number: str = ""
    latitude: float
    longitude: float


class LocationBounds(ApiModel):
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float


class NearbyParams(ApiModel):
    latitude: float
    longitude: float
    radius: Optional[int] = Field(default=None, gt=0)


class Coordinate(ApiModel):
    lat: float
    lng: float


class SafetyScore(ApiModel):
    score: float
    cctv_count: int = 0
    light_count: int = 0
    crime_count: int = 0
    level: Literal["safe", "moderate", "danger"]


class NearbyFacilities(ApiModel):
    cctv: List[CCTVData] = Field(default_factory=list)
    lights: List[LightData] = Field(default_factory=list)
    crime_data: List[CrimeData] = Field(default_factory=list)
