"""
Serializers for itinerary planning requests and responses.
Response field names are camelCase for the web frontend.
"""
from rest_framework import serializers

from core.fields import CategoryListField, CategoryScheduleField, LenientIntegerField, PositiveIntegerOrDefaultField
from .dtos import ItineraryRequest


class ItineraryRequestSerializer(serializers.Serializer):
    """
    Parses the planning request body. Parsing never rejects a body: structural
    checks (level, ids, numDays) belong to ItineraryBuilder.validate().
    """
    level = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    cityId = LenientIntegerField()
    countryId = LenientIntegerField()
    numDays = LenientIntegerField()
    maxCities = PositiveIntegerOrDefaultField(fallback=None)
    # None falls back to ITINERARY_DEFAULT_POIS_PER_DAY inside the builder
    poisPerDay = PositiveIntegerOrDefaultField(fallback=None)
    preferredCategoriesByDay = CategoryScheduleField()
    avoidCategories = CategoryListField()

    def to_request(self) -> ItineraryRequest:
        data = self.validated_data
        return ItineraryRequest(
            level=data.get('level'),
            num_days=data.get('numDays'),
            city_id=data.get('cityId'),
            country_id=data.get('countryId'),
            max_cities=data.get('maxCities'),
            pois_per_day=data.get('poisPerDay'),
            preferred_categories_by_day=data.get('preferredCategoriesByDay'),
            avoid_categories=data.get('avoidCategories') or [],
        )


class ItineraryPOISerializer(serializers.Serializer):
    poiId = serializers.IntegerField(source='poi_id')
    name = serializers.CharField()
    cityId = serializers.IntegerField(source='city_id', allow_null=True)
    category = serializers.CharField()
    address = serializers.CharField()


class DayPlanSerializer(serializers.Serializer):
    dayNumber = serializers.IntegerField(source='day_number')
    cityId = serializers.IntegerField(source='city_id', allow_null=True)
    cityName = serializers.CharField(source='city_name', allow_null=True)
    countryId = serializers.IntegerField(source='country_id', allow_null=True)
    countryName = serializers.CharField(source='country_name', allow_null=True)
    categoryFocus = serializers.ListField(source='category_focus', child=serializers.CharField())
    pois = ItineraryPOISerializer(many=True)


class ItinerarySummarySerializer(serializers.Serializer):
    totalDays = serializers.IntegerField(source='total_days')
    totalCities = serializers.IntegerField(source='total_cities')
    totalPois = serializers.IntegerField(source='total_pois')
    categoriesUsed = serializers.SerializerMethodField()

    def get_categoriesUsed(self, obj):
        # set semantics, sorted only to keep responses stable
        return sorted(obj.categories_used)


class ItinerarySerializer(serializers.Serializer):
    itinerary = DayPlanSerializer(source='days', many=True)
    summary = ItinerarySummarySerializer()
