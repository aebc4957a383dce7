"""
Domain services for trips app - POI pools, day allocation and itinerary building.
"""
import logging
import math
from typing import Iterable, List, Optional, Sequence

from django.conf import settings

from core.exceptions import InvalidArgument, NotFound
from locations.dtos import CityPoiCount, POIRecord
from locations.services import DestinationDataAccess
from .dtos import DayPlan, Itinerary, ItineraryRequest, ItinerarySummary, Level

logger = logging.getLogger(__name__)


class POIPool:
    """
    Request-scoped, ordered collection of candidate POIs for one city (or for the
    country-only POIs of a country).

    The pool owns its POIs: extraction removes them, so a POI handed out for one
    day can never be handed out again, and two pools never share a POI. The initial
    order is the fetch order; the pool never reshuffles.
    """

    def __init__(self, pois: Iterable[POIRecord] = ()):
        self._pois: List[POIRecord] = list(pois)

    def __len__(self) -> int:
        return len(self._pois)

    def __bool__(self) -> bool:
        return bool(self._pois)

    def __contains__(self, poi: POIRecord) -> bool:
        return poi in self._pois

    def snapshot(self) -> List[POIRecord]:
        """Copy of the remaining POIs in pool order."""
        return list(self._pois)

    def extract_preferred(self, preferred_categories: Sequence[str], count: int) -> List[POIRecord]:
        """
        Removes and returns up to `count` POIs whose category is preferred.

        The remaining pool is the unpicked matching POIs followed by the
        non-matching ones, each group keeping its relative order.

        Args:
            preferred_categories: Categories to pick from
            count: Maximum number of POIs to remove

        Returns:
            List of extracted POIs, possibly empty
        """
        if count <= 0 or not self._pois:
            return []

        preferred = set(preferred_categories)
        matching = [poi for poi in self._pois if poi.category in preferred]
        non_matching = [poi for poi in self._pois if poi.category not in preferred]

        picked = matching[:count]
        self._pois = matching[count:] + non_matching
        return picked

    def extract_any(self, count: int) -> List[POIRecord]:
        """Removes and returns up to `count` POIs from the front of the pool."""
        if count <= 0:
            return []
        picked = self._pois[:count]
        self._pois = self._pois[count:]
        return picked


class DayAllocator:
    """
    Selects the POIs of a single day from a primary pool and an optional fallback pool.
    Pure and deterministic: all variety comes from the order the pools were filled in.
    """

    def allocate(self, primary_pool: POIPool, fallback_pool: Optional[POIPool],
                 preferred_categories: Sequence[str], pois_per_day: int) -> List[POIRecord]:
        """
        Order of consumption:
        1. preferred POIs from the primary pool
        2. any POIs from the primary pool
        3. preferred, then any POIs from the fallback pool, for the shortfall only

        Returns fewer than `pois_per_day` POIs (possibly none) once the pools run dry.
        """
        picked = self._draw(primary_pool, preferred_categories, pois_per_day)

        if len(picked) < pois_per_day and fallback_pool:
            picked += self._draw(fallback_pool, preferred_categories, pois_per_day - len(picked))

        return picked

    @staticmethod
    def _draw(pool: POIPool, preferred_categories: Sequence[str], needed: int) -> List[POIRecord]:
        picked: List[POIRecord] = []
        if preferred_categories and pool:
            picked += pool.extract_preferred(preferred_categories, needed)
        if len(picked) < needed and pool:
            picked += pool.extract_any(needed - len(picked))
        return picked


class ItineraryBuilder:
    """
    Domain service that builds day-by-day itineraries for a single city or for a
    whole country spread across several of its cities.
    """

    def __init__(self, data_access: DestinationDataAccess, allocator: Optional[DayAllocator] = None,
                 default_pois_per_day: Optional[int] = None):
        """
        Args:
            data_access: Source of cities and POIs
            allocator: Day allocation strategy (default DayAllocator)
            default_pois_per_day: Used when the request does not set pois_per_day
        """
        self.data_access = data_access
        self.allocator = allocator or DayAllocator()
        self.default_pois_per_day = default_pois_per_day or getattr(settings, 'ITINERARY_DEFAULT_POIS_PER_DAY', 3)

    def build(self, request: ItineraryRequest) -> Itinerary:
        """
        Orchestrator method: validates the request and dispatches on the level.

        Raises:
            InvalidArgument: level, id or num_days are structurally invalid
            NotFound: the city does not exist, or the country has no POIs at all
            DataAccessFailure: propagated from the data layer
        """
        self.validate(request)
        pois_per_day = request.pois_per_day or self.default_pois_per_day

        if request.level == Level.CITY:
            days = self._build_city_days(request, pois_per_day)
        else:
            days = self._build_country_days(request, pois_per_day)

        summary = ItinerarySummary.from_days(days, total_days=request.num_days)
        logger.info(
            f"Built {request.level} itinerary: {summary.total_days} days, "
            f"{summary.total_cities} cities, {summary.total_pois} POIs"
        )
        return Itinerary(days=days, summary=summary)

    @staticmethod
    def validate(request: ItineraryRequest) -> None:
        if request.level not in Level.CHOICES:
            raise InvalidArgument("level must be either 'city' or 'country'.")

        if request.level == Level.CITY and not _is_positive_int(request.city_id):
            raise InvalidArgument("cityId is required and must be an integer when level = 'city'.")

        if request.level == Level.COUNTRY and not _is_positive_int(request.country_id):
            raise InvalidArgument("countryId is required and must be an integer when level = 'country'.")

        if not _is_positive_int(request.num_days):
            raise InvalidArgument("numDays must be a positive integer.")

    @staticmethod
    def distribute_days(num_days: int, num_cities: int) -> List[int]:
        """
        Splits num_days over num_cities: every city gets floor(num_days / num_cities)
        days and the first num_days % num_cities cities get one more.
        """
        if num_cities <= 0:
            return []
        base, extra = divmod(num_days, num_cities)
        return [base + (1 if index < extra else 0) for index in range(num_cities)]

    # City level

    def _build_city_days(self, request: ItineraryRequest, pois_per_day: int) -> List[DayPlan]:
        city = self.data_access.fetch_city_info(request.city_id)
        if city is None:
            raise NotFound("City not found.")

        # country-only POIs are merged into the city pool at fetch time, not used as a fallback
        pool = POIPool(self.data_access.fetch_city_pois(
            city.city_id, request.avoid_categories, include_country_only=True
        ))
        logger.debug(f"City {city.city_id} pool holds {len(pool)} POIs")

        days = []
        for day_number in range(1, request.num_days + 1):
            preferred = request.preferred_categories_for(day_number)
            pois = self.allocator.allocate(pool, None, preferred, pois_per_day)
            days.append(DayPlan(
                day_number=day_number,
                city_id=city.city_id,
                city_name=city.city_name,
                country_id=city.country_id,
                country_name=city.country_name,
                category_focus=preferred,
                pois=pois,
            ))
        return days

    # Country level

    def _build_country_days(self, request: ItineraryRequest, pois_per_day: int) -> List[DayPlan]:
        country_pool = POIPool(self.data_access.fetch_country_only_pois(
            request.country_id, request.avoid_categories
        ))
        cities = self.data_access.fetch_cities_with_poi_counts(request.country_id, request.avoid_categories)

        if not cities:
            if not country_pool:
                raise NotFound("No POIs found in this country (neither city-level nor country-level).")
            logger.info(f"Country {request.country_id} has no city POIs, using country-only POIs")
            return self._build_country_only_days(request, country_pool, pois_per_day)

        selected = cities[:self._max_cities(request, len(cities))]
        days_per_city = self.distribute_days(request.num_days, len(selected))

        days: List[DayPlan] = []
        day_number = 1
        for city, city_days in zip(selected, days_per_city):
            if day_number > request.num_days:
                break
            if city_days == 0:
                continue

            city_pool = POIPool(self.data_access.fetch_city_pois(city.city_id, request.avoid_categories))
            for _ in range(city_days):
                if day_number > request.num_days:
                    break
                days.append(self._plan_city_day(request, city, city_pool, country_pool, day_number, pois_per_day))
                day_number += 1

        return days

    def _plan_city_day(self, request: ItineraryRequest, city: CityPoiCount, city_pool: POIPool,
                       country_pool: POIPool, day_number: int, pois_per_day: int) -> DayPlan:
        preferred = request.preferred_categories_for(day_number)
        pois = self.allocator.allocate(city_pool, country_pool, preferred, pois_per_day)
        return DayPlan(
            day_number=day_number,
            city_id=city.city_id,
            city_name=city.city_name,
            country_id=city.country_id,
            country_name=city.country_name,
            category_focus=preferred,
            pois=pois,
        )

    def _build_country_only_days(self, request: ItineraryRequest, country_pool: POIPool,
                                 pois_per_day: int) -> List[DayPlan]:
        days = []
        for day_number in range(1, request.num_days + 1):
            preferred = request.preferred_categories_for(day_number)
            pois = self.allocator.allocate(country_pool, None, preferred, pois_per_day)
            days.append(DayPlan(
                day_number=day_number,
                city_id=None,
                city_name=None,
                country_id=request.country_id,
                country_name=None,
                category_focus=preferred,
                pois=pois,
            ))
        return days

    @staticmethod
    def _max_cities(request: ItineraryRequest, available: int) -> int:
        """Requested city count, or ceil(num_days / 2) when unset, capped at what is available."""
        if request.max_cities and request.max_cities > 0:
            return min(request.max_cities, available)
        return min(math.ceil(request.num_days / 2), available)


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0
