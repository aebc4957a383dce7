"""
ScoringService: feature based destination ranking.
Normalizes food price, attraction count and hotel count within the current result
set and ranks destinations by a weighted composite of the three.
"""
import logging
from dataclasses import asdict
from typing import Dict, List, Optional, Sequence, Tuple

from django.conf import settings

from core.exceptions import InvalidArgument
from locations.services import DestinationDataAccess
from recommendations.aggregation import reduce_to_country
from recommendations.dtos import (
    BalancedCity, DestinationFeatureRow, FeatureFilters, Scope, ScoredDestination, ScoringWeights
)

logger = logging.getLogger(__name__)

DEFAULT_WEIGHTS = {'food': 0.33, 'attractions': 0.33, 'hotels': 0.34}


def normalize_weights(raw: Optional[Dict[str, Optional[float]]] = None,
                      defaults: Optional[Dict[str, float]] = None) -> ScoringWeights:
    """
    Fills unset weights from the defaults and rescales all three to sum to 1.
    When every weight is zero the result is all zeros rather than an error.
    """
    defaults = defaults or getattr(settings, 'DESTINATION_DEFAULT_WEIGHTS', DEFAULT_WEIGHTS)
    raw = raw or {}

    merged = ScoringWeights(
        food=_weight(raw.get('food'), defaults['food']),
        attractions=_weight(raw.get('attractions'), defaults['attractions']),
        hotels=_weight(raw.get('hotels'), defaults['hotels']),
    )
    total = merged.total or 1
    return ScoringWeights(
        food=merged.food / total,
        attractions=merged.attractions / total,
        hotels=merged.hotels / total,
    )


def _weight(value: Optional[float], default: float) -> float:
    return float(default) if value is None else float(value)


class FeatureScorer:
    """
    Algorithm Service: min-max style scoring of destination feature rows.

    Sub-scores (all in [0, 1]):
    - food: 1 - price / max_price, cheaper is better, 0 when the price is unknown
    - attractions: poi_count / max_poi_count
    - hotels: hotel_count / max_hotel_count
    Maxima are taken over the rows being scored and floored at 1.
    """

    def __init__(self, weights: Optional[ScoringWeights] = None):
        self.weights = weights or normalize_weights()

    def score(self, rows: Sequence[DestinationFeatureRow]) -> List[ScoredDestination]:
        """
        Scores every row and returns them by composite score, highest first.
        Ties keep their input order.
        """
        if not rows:
            return []

        max_food = max([row.avg_food_price or 0 for row in rows] + [1])
        max_poi = max([row.poi_count or 0 for row in rows] + [1])
        max_hotels = max([row.hotel_count or 0 for row in rows] + [1])

        scored = [self._score_row(row, max_food, max_poi, max_hotels) for row in rows]
        return sorted(scored, key=lambda destination: destination.composite_score, reverse=True)

    def _score_row(self, row: DestinationFeatureRow, max_food: float, max_poi: int,
                   max_hotels: int) -> ScoredDestination:
        food_score = 1 - min(row.avg_food_price / max_food, 1) if row.avg_food_price is not None else 0.0
        attractions_score = min(row.poi_count / max_poi, 1) if row.poi_count > 0 else 0.0
        hotel_score = min(row.hotel_count / max_hotels, 1) if row.hotel_count > 0 else 0.0

        composite_score = (
            self.weights.food * food_score +
            self.weights.attractions * attractions_score +
            self.weights.hotels * hotel_score
        )

        return ScoredDestination(
            **asdict(row),
            food_score=food_score,
            attractions_score=attractions_score,
            hotel_score=hotel_score,
            composite_score=composite_score,
        )


class ScoringService:
    """
    Orchestrates destination scoring:
    fetch -> post-fetch filters -> country aggregation (scope=country) -> score
    -> truncate -> sample attraction enrichment for the survivors only.
    """

    def __init__(self, data_access: DestinationDataAccess, default_limit: Optional[int] = None,
                 sample_size: Optional[int] = None):
        """
        Args:
            data_access: Source of feature rows and sample attractions
            default_limit: Result count when the caller does not set one
            sample_size: Sample attractions attached to each returned destination
        """
        self.data_access = data_access
        self.default_limit = default_limit or getattr(settings, 'DESTINATION_FEATURES_DEFAULT_LIMIT', 20)
        self.sample_size = sample_size or getattr(settings, 'DESTINATION_SAMPLE_ATTRACTIONS', 5)

    def score_destinations(self, scope: str, filters: Optional[FeatureFilters] = None,
                           weights: Optional[Dict[str, Optional[float]]] = None,
                           limit: Optional[int] = None) -> List[ScoredDestination]:
        """
        Ranks cities or countries matching the filters.

        Args:
            scope: 'city' or 'country'
            filters: FeatureFilters (default: no filtering)
            weights: Raw {'food', 'attractions', 'hotels'} weights, any of them may be unset
            limit: Maximum number of destinations returned

        Returns:
            List[ScoredDestination]: highest composite score first, empty when nothing matches

        Raises:
            InvalidArgument: scope is not 'city' or 'country'
        """
        if scope not in Scope.CHOICES:
            raise InvalidArgument('scope must be "city" or "country"')

        filters = filters or FeatureFilters()
        limit = limit if limit and limit > 0 else self.default_limit
        normalized = normalize_weights(weights)

        rows = [row for row in self.data_access.fetch_destination_feature_rows(filters) if filters.admits(row)]
        if not rows:
            logger.debug("No destinations left after filtering")
            return []

        if scope == Scope.COUNTRY:
            rows = reduce_to_country(rows)

        top = FeatureScorer(normalized).score(rows)[:limit]
        self._attach_sample_attractions(top, scope)

        logger.info(f"Scored {len(rows)} {scope} destinations, returning {len(top)}")
        return top

    def _attach_sample_attractions(self, destinations: List[ScoredDestination], scope: str) -> None:
        """One batched fetch for the truncated result set."""
        if not destinations:
            return
        ids = [destination.id for destination in destinations]
        samples = self.data_access.fetch_sample_attractions(ids, scope, self.sample_size)
        for destination in destinations:
            destination.sample_attractions = samples.get(destination.id, [])


def _bounds(values) -> Optional[Tuple[float, float]]:
    known = [value for value in values if value is not None]
    return (min(known), max(known)) if known else None


def _min_max(value: float, bounds: Optional[Tuple[float, float]], invert: bool = False) -> Optional[float]:
    if bounds is None or bounds[1] == bounds[0]:
        return None
    low, high = bounds
    return (high - value) / (high - low) if invert else (value - low) / (high - low)


def rank_balanced_cities(cities, limit: int) -> List[BalancedCity]:
    """
    Ranks cities by the mean of three min-max normalized scores: cheap food,
    many attractions, well rated hotels.

    Bounds are taken over every city passed in; cities with an unknown food price
    or hotel rating are not ranked. Cities whose composite cannot be computed
    sort last, ties by name.

    Args:
        cities: City rows annotated with poi_count and avg_hotel_rating
        limit: Maximum number of cities returned
    """
    cities = list(cities)
    food_bounds = _bounds(city.avg_food_price for city in cities)
    attraction_bounds = _bounds(city.poi_count for city in cities)
    rating_bounds = _bounds(city.avg_hotel_rating for city in cities)

    ranked = []
    for city in cities:
        if city.avg_food_price is None or city.avg_hotel_rating is None:
            continue

        scores = (
            _min_max(city.avg_food_price, food_bounds, invert=True),
            _min_max(city.poi_count, attraction_bounds),
            _min_max(city.avg_hotel_rating, rating_bounds),
        )
        composite = sum(scores) / 3.0 if None not in scores else None

        ranked.append(BalancedCity(
            city_id=city.id,
            city_name=city.name,
            country_name=city.country.name,
            avg_food_price=city.avg_food_price,
            attraction_count=city.poi_count,
            avg_hotel_rating=city.avg_hotel_rating,
            food_score=scores[0],
            attractions_score=scores[1],
            hotel_score=scores[2],
            composite_score=composite,
        ))

    ranked.sort(key=lambda city: (city.composite_score is None, -(city.composite_score or 0.0), city.city_name))
    return ranked[:limit]
