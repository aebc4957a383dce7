"""
Aggregation of city feature rows into country feature rows.
"""
from typing import Dict, Iterable, List, Optional

from recommendations.dtos import DestinationFeatureRow, Scope


class _MetricMean:
    """Running mean that ignores missing values."""

    def __init__(self):
        self.total = 0.0
        self.count = 0

    def add(self, value: Optional[float]) -> None:
        if value is not None:
            self.total += float(value)
            self.count += 1

    @property
    def value(self) -> Optional[float]:
        return self.total / self.count if self.count else None


class _CountryAccumulator:
    def __init__(self, row: DestinationFeatureRow):
        self.country_id = row.country_id
        self.country_name = row.country_name
        self.temperature = _MetricMean()
        self.food_price = _MetricMean()
        self.hotel_rating = _MetricMean()
        self.hotel_count = 0
        self.poi_count = 0
        self.matching_poi_count = 0

    def add(self, row: DestinationFeatureRow) -> None:
        self.temperature.add(row.avg_temperature)
        self.food_price.add(row.avg_food_price)
        self.hotel_rating.add(row.avg_hotel_rating)
        self.hotel_count += row.hotel_count
        self.poi_count += row.poi_count
        self.matching_poi_count += row.matching_poi_count

    def to_row(self) -> DestinationFeatureRow:
        return DestinationFeatureRow(
            id=self.country_id,
            scope=Scope.COUNTRY,
            name=self.country_name,
            country_id=self.country_id,
            country_name=self.country_name,
            avg_temperature=self.temperature.value,
            avg_food_price=self.food_price.value,
            avg_hotel_rating=self.hotel_rating.value,
            hotel_count=self.hotel_count,
            poi_count=self.poi_count,
            matching_poi_count=self.matching_poi_count,
        )


def reduce_to_country(city_rows: Iterable[DestinationFeatureRow]) -> List[DestinationFeatureRow]:
    """
    Collapses city rows into one row per country.

    Counts are summed. Temperature, food price and hotel rating are averaged over
    the cities where that metric is known; a country with no known value for a
    metric gets None for it. Countries keep the order of their first city.
    """
    groups: Dict[int, _CountryAccumulator] = {}
    for row in city_rows:
        accumulator = groups.get(row.country_id)
        if accumulator is None:
            accumulator = groups[row.country_id] = _CountryAccumulator(row)
        accumulator.add(row)
    return [accumulator.to_row() for accumulator in groups.values()]
