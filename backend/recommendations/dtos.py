"""
Data Transfer Objects for destination feature rows, filters and scoring results.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from locations.dtos import POIRecord


class Scope:
    """Granularity at which destinations are requested or scored"""
    CITY = 'city'
    COUNTRY = 'country'

    CHOICES = (CITY, COUNTRY)


@dataclass
class FeatureFilters:
    """
    Filters for destination feature queries.

    candidate_city_ids, temperature bounds and max_avg_food_price are applied by the
    data layer; the min_* thresholds are applied after the fetch by `admits()`.
    """
    candidate_city_ids: List[int] = field(default_factory=list)
    min_temp: Optional[float] = None
    max_temp: Optional[float] = None
    max_avg_food_price: Optional[float] = None
    min_hotel_rating: Optional[float] = None
    min_hotel_count: Optional[int] = None
    min_poi_count: Optional[int] = None
    preferred_categories: List[str] = field(default_factory=list)

    def admits(self, row: 'DestinationFeatureRow') -> bool:
        """Post-fetch thresholds. An unknown hotel rating never fails the rating check."""
        if (self.min_hotel_rating is not None and row.avg_hotel_rating is not None
                and row.avg_hotel_rating < self.min_hotel_rating):
            return False
        if self.min_hotel_count is not None and row.hotel_count < self.min_hotel_count:
            return False
        if self.min_poi_count is not None and row.poi_count < self.min_poi_count:
            return False
        return True


@dataclass
class ScoringWeights:
    """Relative importance of each sub-score in the composite score"""
    food: float
    attractions: float
    hotels: float

    @property
    def total(self) -> float:
        return self.food + self.attractions + self.hotels


@dataclass
class DestinationFeatureRow:
    """
    Metrics of one destination, either a city (id = city id) or a country
    (id = country id, metrics aggregated over its cities).
    """
    id: int
    scope: str
    name: str
    country_id: int
    country_name: str
    avg_temperature: Optional[float] = None
    avg_food_price: Optional[float] = None
    avg_hotel_rating: Optional[float] = None
    hotel_count: int = 0
    poi_count: int = 0
    matching_poi_count: int = 0


@dataclass
class ScoredDestination(DestinationFeatureRow):
    """
    Feature row with its normalized sub-scores and weighted composite score.
    Sub-scores are only meaningful relative to the result set they were computed in.
    """
    food_score: float = 0.0
    attractions_score: float = 0.0
    hotel_score: float = 0.0
    composite_score: float = 0.0
    sample_attractions: List[POIRecord] = field(default_factory=list)


@dataclass
class BalancedCity:
    """
    City scored on food price, attraction count and hotel rating, each min-max
    normalized over all cities. A score is None when every city shares the same value.
    """
    city_id: int
    city_name: str
    country_name: str
    avg_food_price: float
    attraction_count: int
    avg_hotel_rating: float
    food_score: Optional[float] = None
    attractions_score: Optional[float] = None
    hotel_score: Optional[float] = None
    composite_score: Optional[float] = None
