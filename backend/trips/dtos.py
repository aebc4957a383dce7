"""
Data Transfer Objects for itinerary requests and results.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Set

from locations.dtos import POIRecord


class Level:
    """Itinerary granularity"""
    CITY = 'city'
    COUNTRY = 'country'

    CHOICES = (CITY, COUNTRY)


@dataclass
class ItineraryRequest:
    """
    Input for ItineraryBuilder.build().
    city_id is required for the city level, country_id for the country level.
    """
    level: str
    num_days: int
    city_id: Optional[int] = None
    country_id: Optional[int] = None
    max_cities: Optional[int] = None
    pois_per_day: Optional[int] = None
    preferred_categories_by_day: Optional[List[List[str]]] = None
    avoid_categories: List[str] = field(default_factory=list)

    def preferred_categories_for(self, day_number: int) -> List[str]:
        """Preferences of a 1-based day; a missing or malformed entry means no preference."""
        schedule = self.preferred_categories_by_day
        if not schedule or day_number < 1 or day_number > len(schedule):
            return []
        entry = schedule[day_number - 1]
        return list(entry) if isinstance(entry, list) else []


@dataclass(frozen=True)
class DayPlan:
    """One day of an itinerary. City fields are None when no city applies."""
    day_number: int
    city_id: Optional[int]
    city_name: Optional[str]
    country_id: Optional[int]
    country_name: Optional[str]
    category_focus: List[str]
    pois: List[POIRecord]


@dataclass(frozen=True)
class ItinerarySummary:
    total_days: int
    total_cities: int
    total_pois: int
    categories_used: Set[str] = field(default_factory=set)

    @classmethod
    def empty(cls) -> 'ItinerarySummary':
        return cls(total_days=0, total_cities=0, total_pois=0)

    @classmethod
    def from_days(cls, days: List[DayPlan], total_days: int) -> 'ItinerarySummary':
        """
        Only cities that received at least one day are counted, so a country-only
        itinerary (city_id None on every day) reports zero cities.
        """
        cities = {day.city_id for day in days if day.city_id is not None}
        categories = {poi.category for day in days for poi in day.pois}
        return cls(
            total_days=total_days,
            total_cities=len(cities),
            total_pois=sum(len(day.pois) for day in days),
            categories_used=categories,
        )


@dataclass(frozen=True)
class Itinerary:
    days: List[DayPlan]
    summary: ItinerarySummary
