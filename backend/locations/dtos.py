"""
Data Transfer Objects returned by the destination data access layer.
"""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class POIRecord:
    """
    Immutable snapshot of a POI row.
    city_id is None for country-only POIs.
    """
    poi_id: int
    name: str
    category: str
    city_id: Optional[int] = None
    address: str = ""


@dataclass(frozen=True)
class CityInfo:
    """City identity joined with its country"""
    city_id: int
    city_name: str
    country_id: int
    country_name: str


@dataclass(frozen=True)
class CityPoiCount(CityInfo):
    """City identity plus the number of city-bound POIs left after exclusions"""
    poi_count: int = 0


@dataclass
class ReachableDestination:
    """
    City (or country, with the city fields unset) reachable by air from some of
    the requested origin cities.
    """
    country_id: int
    country_name: str
    city_id: Optional[int] = None
    city_name: Optional[str] = None
    reachable_from: List[int] = field(default_factory=list)
    reachable_from_all: bool = False

    @property
    def name(self) -> str:
        return self.city_name if self.city_id is not None else self.country_name
