"""
Data access services for the locations app.

The planning and scoring services never touch the ORM directly; they consume the
DestinationDataAccess interface so they can run against any store (or an in-memory
fake in tests).
"""
import functools
import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Sequence

from django.conf import settings
from django.db import DatabaseError
from django.db.models import Avg, Count, F, FloatField, Min, Q, Value, Window
from django.db.models.functions import Coalesce, RowNumber

from core.exceptions import DataAccessFailure
from recommendations.dtos import DestinationFeatureRow, FeatureFilters, Scope
from .dtos import CityInfo, CityPoiCount, POIRecord, ReachableDestination
from .models import City, Country, POI, Route

logger = logging.getLogger(__name__)


def wraps_database_errors(method):
    """Re-raise any DatabaseError from a fetch as DataAccessFailure, keeping the cause."""

    @functools.wraps(method)
    def wrapper(*args, **kwargs):
        try:
            return method(*args, **kwargs)
        except DatabaseError as exc:
            logger.error(f"{method.__name__} failed: {exc}")
            raise DataAccessFailure() from exc

    return wrapper


class DestinationDataAccess(ABC):
    """Abstract base class for the relational data collaborator"""

    @abstractmethod
    def fetch_city_info(self, city_id: int) -> Optional[CityInfo]:
        """Returns the city joined with its country, or None when it does not exist."""

    @abstractmethod
    def fetch_city_pois(self, city_id: int, avoid_categories: Sequence[str],
                        include_country_only: bool = False) -> List[POIRecord]:
        """
        POIs of a city, excluding avoided categories.
        With include_country_only, the country-only POIs of the city's country are merged in.
        """

    @abstractmethod
    def fetch_country_only_pois(self, country_id: int, avoid_categories: Sequence[str]) -> List[POIRecord]:
        """POIs of a country that are not tied to any city."""

    @abstractmethod
    def fetch_cities_with_poi_counts(self, country_id: int, avoid_categories: Sequence[str]) -> List[CityPoiCount]:
        """Cities of a country with at least one city-bound POI, by POI count descending."""

    @abstractmethod
    def fetch_destination_feature_rows(self, filters: FeatureFilters) -> List[DestinationFeatureRow]:
        """City-scoped feature rows pre-joined with hotel and POI aggregates."""

    @abstractmethod
    def fetch_sample_attractions(self, ids: Sequence[int], scope: str,
                                 per_destination: int = 5) -> Dict[int, List[POIRecord]]:
        """
        Up to `per_destination` POIs per id, ordered by POI id, fetched in one batch.
        ids are city ids for the city scope and country ids for the country scope.
        """


class OrmDestinationDataAccess(DestinationDataAccess):
    """
    DestinationDataAccess backed by the Django ORM.
    POI result sets are shuffled once when `randomize` is set, otherwise ordered by id.
    """

    def __init__(self, randomize: Optional[bool] = None):
        if randomize is None:
            randomize = getattr(settings, 'ITINERARY_RANDOMIZE_POIS', True)
        self.randomize = randomize

    @wraps_database_errors
    def fetch_city_info(self, city_id: int) -> Optional[CityInfo]:
        city = City.objects.select_related('country').filter(id=city_id).first()
        if city is None:
            return None
        return CityInfo(
            city_id=city.id,
            city_name=city.name,
            country_id=city.country_id,
            country_name=city.country.name,
        )

    @wraps_database_errors
    def fetch_city_pois(self, city_id: int, avoid_categories: Sequence[str],
                        include_country_only: bool = False) -> List[POIRecord]:
        scope = Q(city_id=city_id)
        if include_country_only:
            country_id = City.objects.filter(id=city_id).values_list('country_id', flat=True).first()
            if country_id is not None:
                scope |= Q(city__isnull=True, country_id=country_id)

        queryset = self._exclude_categories(POI.objects.filter(scope), avoid_categories)
        return [self._to_record(poi) for poi in self._pool_order(queryset)]

    @wraps_database_errors
    def fetch_country_only_pois(self, country_id: int, avoid_categories: Sequence[str]) -> List[POIRecord]:
        queryset = self._exclude_categories(
            POI.objects.filter(country_id=country_id, city__isnull=True),
            avoid_categories
        )
        return [self._to_record(poi) for poi in self._pool_order(queryset)]

    @wraps_database_errors
    def fetch_cities_with_poi_counts(self, country_id: int, avoid_categories: Sequence[str]) -> List[CityPoiCount]:
        poi_filter = ~Q(pois__primary_category__in=list(avoid_categories)) if avoid_categories else None

        cities = City.objects.filter(
            country_id=country_id
        ).select_related('country').annotate(
            poi_count=Count('pois', filter=poi_filter)
        ).filter(
            poi_count__gt=0
        ).order_by('-poi_count', 'id')

        return [
            CityPoiCount(
                city_id=city.id,
                city_name=city.name,
                country_id=city.country_id,
                country_name=city.country.name,
                poi_count=city.poi_count,
            )
            for city in cities
        ]

    @wraps_database_errors
    def fetch_destination_feature_rows(self, filters: FeatureFilters) -> List[DestinationFeatureRow]:
        cities = City.objects.select_related('country')

        if filters.candidate_city_ids:
            cities = cities.filter(id__in=filters.candidate_city_ids)
        if filters.min_temp is not None:
            cities = cities.filter(avg_temperature__gte=filters.min_temp)
        if filters.max_temp is not None:
            cities = cities.filter(avg_temperature__lte=filters.max_temp)
        if filters.max_avg_food_price is not None:
            cities = cities.filter(avg_food_price__lte=filters.max_avg_food_price)

        if filters.preferred_categories:
            matching = Count(
                'pois',
                filter=Q(pois__primary_category__in=filters.preferred_categories),
                distinct=True
            )
        else:
            matching = Value(0)

        # hotels and pois are joined together, so counts must be distinct;
        # every hotel row is repeated equally often, which leaves the average unchanged
        cities = cities.annotate(
            hotel_rating=Coalesce(Avg('hotels__rating'), Value(0.0), output_field=FloatField()),
            hotel_count=Count('hotels', distinct=True),
            poi_count=Count('pois', distinct=True),
            matching_poi_count=matching,
        ).order_by('id')

        return [
            DestinationFeatureRow(
                id=city.id,
                scope=Scope.CITY,
                name=city.name,
                country_id=city.country_id,
                country_name=city.country.name,
                avg_temperature=city.avg_temperature,
                avg_food_price=city.avg_food_price,
                avg_hotel_rating=city.hotel_rating,
                hotel_count=city.hotel_count,
                poi_count=city.poi_count,
                matching_poi_count=city.matching_poi_count,
            )
            for city in cities
        ]

    @wraps_database_errors
    def fetch_sample_attractions(self, ids: Sequence[int], scope: str,
                                 per_destination: int = 5) -> Dict[int, List[POIRecord]]:
        if not ids:
            return {}

        if scope == Scope.COUNTRY:
            # country samples follow the country of the POI's city
            queryset = POI.objects.filter(city__country_id__in=ids).annotate(destination_id=F('city__country_id'))
        else:
            queryset = POI.objects.filter(city_id__in=ids).annotate(destination_id=F('city_id'))

        rows = queryset.annotate(
            rank=Window(
                expression=RowNumber(),
                partition_by=[F('destination_id')],
                order_by=F('id').asc(),
            )
        ).filter(
            rank__lte=per_destination
        ).order_by('destination_id', 'id')

        samples: Dict[int, List[POIRecord]] = {}
        for poi in rows:
            samples.setdefault(poi.destination_id, []).append(self._to_record(poi))
        return samples

    # Helpers

    def _pool_order(self, queryset):
        return queryset.order_by('?') if self.randomize else queryset.order_by('id')

    @staticmethod
    def _exclude_categories(queryset, avoid_categories: Sequence[str]):
        if avoid_categories:
            return queryset.exclude(primary_category__in=list(avoid_categories))
        return queryset

    @staticmethod
    def _to_record(poi: POI) -> POIRecord:
        return POIRecord(
            poi_id=poi.id,
            name=poi.name,
            category=poi.primary_category,
            city_id=poi.city_id,
            address=poi.address,
        )


class DestinationLookupService:
    """
    Simple parameterized lookups over cities and countries that back the
    browse pages and the city recommendation lists.
    """

    @staticmethod
    @wraps_database_errors
    def random_destination(scope: str = Scope.CITY, country_id: Optional[int] = None) -> Optional[Dict]:
        """
        Picks one random city (optionally inside a country) or one random country.

        Returns:
            Dict with scope, countryId, countryName, cityId, cityName or None when the table is empty
        """
        if scope == Scope.COUNTRY:
            country = Country.objects.order_by('?').first()
            if country is None:
                return None
            return {
                'scope': Scope.COUNTRY,
                'countryId': country.id,
                'countryName': country.name,
                'cityId': None,
                'cityName': None,
            }

        cities = City.objects.select_related('country')
        if country_id is not None:
            cities = cities.filter(country_id=country_id)
        city = cities.order_by('?').first()

        if city is None:
            return None
        return {
            'scope': Scope.CITY,
            'countryId': city.country_id,
            'countryName': city.country.name,
            'cityId': city.id,
            'cityName': city.name,
        }

    @staticmethod
    def cities_with_poi_counts():
        """Every city annotated with its total POI count (no exclusions)."""
        return City.objects.select_related('country').annotate(poi_count=Count('pois'))

    @classmethod
    @wraps_database_errors
    def top_attraction_cities(cls, limit: int) -> List[City]:
        """Cities with the most POIs, ties broken by name."""
        return list(cls.cities_with_poi_counts().order_by('-poi_count', 'name')[:limit])

    @classmethod
    @wraps_database_errors
    def warm_budget_cities(cls, limit: int, min_temp: float, poi_threshold: int) -> List[City]:
        """
        Warm cities that are cheap to eat in and have enough to see.
        Cities with an unknown temperature or food price are never returned.
        """
        return list(
            cls.cities_with_poi_counts().filter(
                avg_temperature__isnull=False,
                avg_temperature__gte=min_temp,
                avg_food_price__isnull=False,
                poi_count__gte=poi_threshold,
            ).order_by('avg_food_price', '-poi_count', 'name')[:limit]
        )

    @staticmethod
    def city_quality_stats():
        """
        Every city annotated with poi_count, hotel_count, avg_hotel_rating and
        min_hotel_rating. Hotel ratings are None for cities without rated hotels.
        """
        return City.objects.select_related('country').annotate(
            poi_count=Count('pois', distinct=True),
            hotel_count=Count('hotels', distinct=True),
            avg_hotel_rating=Avg('hotels__rating'),
            min_hotel_rating=Min('hotels__rating'),
        )

    @classmethod
    @wraps_database_errors
    def balanced_city_candidates(cls) -> List[City]:
        """City quality stats for the balanced ranking, materialized in one query."""
        return list(cls.city_quality_stats().order_by('id'))

    @classmethod
    @wraps_database_errors
    def best_cities(cls, min_poi: int, min_hotels: int, per_country: bool = True, top_k: int = 1,
                    limit: int = 10, min_hotel_rating: Optional[float] = None) -> List[City]:
        """
        Best rated cities among those with enough POIs and hotels and no hotel
        rated below `min_hotel_rating`.

        Args:
            min_poi: Minimum number of POIs
            min_hotels: Minimum number of hotels
            per_country: Rank inside each country (top_k per country) instead of globally (limit)
            top_k: Cities returned per country when per_country is set
            limit: Cities returned overall when per_country is not set
            min_hotel_rating: Lowest acceptable hotel rating (default from settings)

        Returns:
            Cities ordered by country name and rank_in_country, or by quality when global
        """
        if min_hotel_rating is None:
            min_hotel_rating = getattr(settings, 'BEST_CITIES_MIN_HOTEL_RATING', 2.5)

        quality_order = [
            F('avg_hotel_rating').desc(nulls_last=True),
            F('hotel_count').desc(),
            F('poi_count').desc(),
        ]

        eligible = cls.city_quality_stats().filter(
            poi_count__gte=min_poi,
            hotel_count__gte=min_hotels,
        ).filter(
            Q(min_hotel_rating__isnull=True) | Q(min_hotel_rating__gte=min_hotel_rating)
        )

        if not per_country:
            return list(eligible.order_by(*quality_order, 'name')[:limit])

        ranked = eligible.annotate(
            rank_in_country=Window(
                expression=RowNumber(),
                partition_by=[F('country_id')],
                order_by=[*quality_order, F('id').asc()],
            )
        ).order_by('country__name', 'rank_in_country')

        return [city for city in ranked if city.rank_in_country <= top_k]

    @classmethod
    @wraps_database_errors
    def reachable_destinations(cls, origin_city_ids: Iterable[int], scope: str = Scope.CITY,
                               max_stops: int = 1, require_all: bool = False,
                               limit: int = 20) -> List[ReachableDestination]:
        """
        Cities (or countries) served by a route with at most `max_stops` stops from
        an airport of any origin city.

        Destinations reachable from every origin come first, then by name.
        With require_all, only those are returned.
        """
        origins = set(origin_city_ids)
        pairs = Route.objects.filter(
            source__city_id__in=origins,
            stops__lte=max_stops,
        ).values_list(
            'source__city_id',
            'destination__city_id',
            'destination__city__name',
            'destination__city__country_id',
            'destination__city__country__name',
        ).distinct()

        reach: Dict[int, tuple] = {}
        for origin_id, city_id, city_name, country_id, country_name in pairs:
            if scope == Scope.COUNTRY:
                key = country_id
                candidate = ReachableDestination(country_id=country_id, country_name=country_name)
            else:
                key = city_id
                candidate = ReachableDestination(
                    country_id=country_id,
                    country_name=country_name,
                    city_id=city_id,
                    city_name=city_name,
                )
            destination, reached_from = reach.setdefault(key, (candidate, set()))
            reached_from.add(origin_id)

        destinations = []
        for destination, reached_from in reach.values():
            destination.reachable_from = sorted(reached_from)
            destination.reachable_from_all = len(reached_from) == len(origins)
            if require_all and not destination.reachable_from_all:
                continue
            destinations.append(destination)

        destinations.sort(key=lambda destination: (not destination.reachable_from_all, destination.name))
        logger.debug(f"{len(destinations)} {scope} destinations reachable from {len(origins)} origins")
        return destinations[:limit]
