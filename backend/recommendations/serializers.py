"""
Serializers for the recommendations module.
"""
from django.conf import settings
from rest_framework import serializers

from core.fields import (
    CategoryListField, FloatOrDefaultField, NonNegativeIntegerOrDefaultField, PositiveIntegerOrDefaultField
)
from recommendations.dtos import FeatureFilters


class WeightsSerializer(serializers.Serializer):
    """Raw scoring weights; unset weights fall back to the defaults"""
    food = serializers.FloatField(required=False, allow_null=True, min_value=0)
    attractions = serializers.FloatField(required=False, allow_null=True, min_value=0)
    hotels = serializers.FloatField(required=False, allow_null=True, min_value=0)


class DestinationFeaturesRequestSerializer(serializers.Serializer):
    """Serializer for POST /destinations/features/ bodies"""
    # scope is checked by ScoringService so the message is the same for every caller
    scope = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    candidateCityIds = serializers.ListField(child=serializers.IntegerField(), required=False, allow_null=True)
    minTemp = serializers.FloatField(required=False, allow_null=True)
    maxTemp = serializers.FloatField(required=False, allow_null=True)
    maxAvgFoodPrice = serializers.FloatField(required=False, allow_null=True)
    minHotelRating = serializers.FloatField(required=False, allow_null=True)
    minHotelCount = serializers.IntegerField(required=False, allow_null=True)
    minPoiCount = serializers.IntegerField(required=False, allow_null=True)
    preferredCategories = CategoryListField()
    weights = WeightsSerializer(required=False, allow_null=True)
    limit = PositiveIntegerOrDefaultField(fallback=None)

    def to_filters(self) -> FeatureFilters:
        data = self.validated_data
        return FeatureFilters(
            candidate_city_ids=data.get('candidateCityIds') or [],
            min_temp=data.get('minTemp'),
            max_temp=data.get('maxTemp'),
            max_avg_food_price=data.get('maxAvgFoodPrice'),
            min_hotel_rating=data.get('minHotelRating'),
            min_hotel_count=data.get('minHotelCount'),
            min_poi_count=data.get('minPoiCount'),
            preferred_categories=data.get('preferredCategories') or [],
        )


class SampleAttractionSerializer(serializers.Serializer):
    poiId = serializers.IntegerField(source='poi_id')
    name = serializers.CharField()
    category = serializers.CharField()
    cityId = serializers.IntegerField(source='city_id', allow_null=True)


class ScoredDestinationSerializer(serializers.Serializer):
    """Serializer for ScoredDestination DTO"""
    id = serializers.IntegerField()
    scope = serializers.CharField()
    name = serializers.CharField()
    countryId = serializers.IntegerField(source='country_id')
    countryName = serializers.CharField(source='country_name')
    avgTemperature = serializers.FloatField(source='avg_temperature', allow_null=True)
    avgFoodPrice = serializers.FloatField(source='avg_food_price', allow_null=True)
    avgHotelRating = serializers.FloatField(source='avg_hotel_rating', allow_null=True)
    hotelCount = serializers.IntegerField(source='hotel_count')
    poiCount = serializers.IntegerField(source='poi_count')
    matchingPoiCount = serializers.IntegerField(source='matching_poi_count')
    foodScore = serializers.FloatField(source='food_score')
    attractionsScore = serializers.FloatField(source='attractions_score')
    hotelScore = serializers.FloatField(source='hotel_score')
    compositeScore = serializers.FloatField(source='composite_score')
    sampleAttractions = SampleAttractionSerializer(source='sample_attractions', many=True)


class CityListQuerySerializer(serializers.Serializer):
    """Query parameters shared by the city recommendation lists"""
    limit = PositiveIntegerOrDefaultField(fallback=getattr(settings, 'RECOMMENDATIONS_DEFAULT_LIMIT', 10))


class WarmBudgetQuerySerializer(CityListQuerySerializer):
    minTemp = FloatOrDefaultField(fallback=getattr(settings, 'WARM_BUDGET_DEFAULT_MIN_TEMP', 18.0))


class BalancedQuerySerializer(serializers.Serializer):
    limit = PositiveIntegerOrDefaultField(fallback=getattr(settings, 'BALANCED_DEFAULT_LIMIT', 20))


class BestCitiesQuerySerializer(serializers.Serializer):
    """Query parameters of the best-per-country list; invalid values fall back to the defaults"""
    MODE_PER_COUNTRY = 'perCountry'
    MODE_GLOBAL = 'global'

    minPoi = PositiveIntegerOrDefaultField(fallback=1)
    minHotels = PositiveIntegerOrDefaultField(fallback=1)
    mode = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    topKPerCountry = PositiveIntegerOrDefaultField(fallback=1)
    limit = PositiveIntegerOrDefaultField(fallback=getattr(settings, 'RECOMMENDATIONS_DEFAULT_LIMIT', 10))

    def validate_mode(self, value):
        return self.MODE_GLOBAL if (value or '').lower() == 'global' else self.MODE_PER_COUNTRY

    def validate(self, attrs):
        attrs.setdefault('mode', self.MODE_PER_COUNTRY)
        return attrs


class AvailabilityRequestSerializer(serializers.Serializer):
    """Body of the availability endpoints"""
    originCityIds = serializers.ListField(
        child=serializers.IntegerField(),
        allow_empty=False,
    )
    requireAllReach = serializers.BooleanField(required=False, default=False)
    maxStop = NonNegativeIntegerOrDefaultField(fallback=getattr(settings, 'AVAILABILITY_DEFAULT_MAX_STOPS', 1))
    limit = PositiveIntegerOrDefaultField(fallback=getattr(settings, 'AVAILABILITY_DEFAULT_LIMIT', 20))


class ReachableCitySerializer(serializers.Serializer):
    cityId = serializers.IntegerField(source='city_id')
    cityName = serializers.CharField(source='city_name')
    countryId = serializers.IntegerField(source='country_id')
    countryName = serializers.CharField(source='country_name')
    reachableFromAll = serializers.BooleanField(source='reachable_from_all')
    reachableFrom = serializers.ListField(source='reachable_from', child=serializers.IntegerField())


class ReachableCountrySerializer(serializers.Serializer):
    countryId = serializers.IntegerField(source='country_id')
    countryName = serializers.CharField(source='country_name')
    reachableFromAll = serializers.BooleanField(source='reachable_from_all')
    reachableFrom = serializers.ListField(source='reachable_from', child=serializers.IntegerField())


class CityPoiCountSerializer(serializers.Serializer):
    """City annotated with poi_count, used by the top-attractions list"""
    cityId = serializers.IntegerField(source='id')
    name = serializers.CharField()
    countryId = serializers.IntegerField(source='country_id')
    countryName = serializers.CharField(source='country.name')
    poiCount = serializers.IntegerField(source='poi_count')


class WarmBudgetCitySerializer(CityPoiCountSerializer):
    avgTemperature = serializers.FloatField(source='avg_temperature')
    avgFoodPrice = serializers.FloatField(source='avg_food_price')


class BalancedCitySerializer(serializers.Serializer):
    cityId = serializers.IntegerField(source='city_id')
    cityName = serializers.CharField(source='city_name')
    countryName = serializers.CharField(source='country_name')
    avgFoodPrice = serializers.FloatField(source='avg_food_price')
    attractionCount = serializers.IntegerField(source='attraction_count')
    avgHotelRating = serializers.FloatField(source='avg_hotel_rating')
    foodScore = serializers.FloatField(source='food_score', allow_null=True)
    attractionsScore = serializers.FloatField(source='attractions_score', allow_null=True)
    hotelScore = serializers.FloatField(source='hotel_score', allow_null=True)
    compositeScore = serializers.FloatField(source='composite_score', allow_null=True)


class BestCitySerializer(serializers.Serializer):
    """City annotated by DestinationLookupService.best_cities()"""
    countryId = serializers.IntegerField(source='country_id')
    countryName = serializers.CharField(source='country.name')
    cityId = serializers.IntegerField(source='id')
    cityName = serializers.CharField(source='name')
    poiCount = serializers.IntegerField(source='poi_count')
    hotelCount = serializers.IntegerField(source='hotel_count')
    avgHotelRating = serializers.FloatField(source='avg_hotel_rating', allow_null=True)


class RankedBestCitySerializer(BestCitySerializer):
    rankInCountry = serializers.IntegerField(source='rank_in_country')
