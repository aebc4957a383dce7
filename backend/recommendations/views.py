"""
Views for the recommendations module.
"""
import logging

from django.conf import settings
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import DataAccessFailure, InvalidArgument
from locations.services import DestinationLookupService, OrmDestinationDataAccess
from recommendations.dtos import Scope
from recommendations.scoring_service import ScoringService, rank_balanced_cities
from recommendations.serializers import (
    AvailabilityRequestSerializer, BalancedCitySerializer, BalancedQuerySerializer, BestCitiesQuerySerializer,
    BestCitySerializer, CityListQuerySerializer, CityPoiCountSerializer, DestinationFeaturesRequestSerializer,
    RankedBestCitySerializer, ReachableCitySerializer, ReachableCountrySerializer, ScoredDestinationSerializer,
    WarmBudgetCitySerializer, WarmBudgetQuerySerializer
)

logger = logging.getLogger(__name__)


class DestinationFeaturesView(APIView):
    """
    API endpoint for ranking destinations by food price, attractions and hotels.

    POST /api/recommendations/destinations/features/
    Body:
    {
        "scope": "city" | "country",
        "candidateCityIds": [1, 2],
        "minTemp": 15, "maxTemp": 30,
        "maxAvgFoodPrice": 20,
        "minHotelRating": 3.5, "minHotelCount": 5, "minPoiCount": 10,
        "preferredCategories": ["museum"],
        "weights": {"food": 0.5, "attractions": 0.3, "hotels": 0.2},
        "limit": 20
    }
    """
    permission_classes = [AllowAny]

    def post(self, request):
        """Score destinations"""
        serializer = DestinationFeaturesRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {'error': serializer.errors, 'destinations': []},
                status=status.HTTP_400_BAD_REQUEST
            )

        data = serializer.validated_data
        scoring_service = ScoringService(OrmDestinationDataAccess())
        try:
            destinations = scoring_service.score_destinations(
                scope=data.get('scope'),
                filters=serializer.to_filters(),
                weights=data.get('weights'),
                limit=data.get('limit'),
            )
        except InvalidArgument as e:
            return Response(
                {'error': e.message, 'destinations': []},
                status=status.HTTP_400_BAD_REQUEST
            )
        except DataAccessFailure as e:
            logger.exception(f"Destination scoring failed: {e.__cause__}")
            return Response(
                {'error': e.message, 'destinations': []},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        return Response(
            {'destinations': ScoredDestinationSerializer(destinations, many=True).data},
            status=status.HTTP_200_OK
        )


class TopAttractionCitiesView(APIView):
    """
    API endpoint for the cities with the most attractions.

    GET /api/recommendations/cities/top-attractions/?limit=10
    """
    permission_classes = [AllowAny]

    def get(self, request):
        query = CityListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        limit = query.validated_data['limit']

        try:
            cities = DestinationLookupService.top_attraction_cities(limit)
        except DataAccessFailure as e:
            logger.exception(f"Top attraction cities failed: {e.__cause__}")
            return Response(
                {'error': e.message, 'cities': [], 'limit': limit},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        return Response({
            'cities': CityPoiCountSerializer(cities, many=True).data,
            'limit': limit,
        })


class WarmBudgetCitiesView(APIView):
    """
    API endpoint for warm, affordable cities with enough to see.

    GET /api/recommendations/cities/warm-budget/?limit=10&minTemp=18
    """
    permission_classes = [AllowAny]

    def get(self, request):
        query = WarmBudgetQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        limit = query.validated_data['limit']
        min_temp = query.validated_data['minTemp']

        try:
            cities = DestinationLookupService.warm_budget_cities(
                limit=limit,
                min_temp=min_temp,
                poi_threshold=getattr(settings, 'WARM_BUDGET_POI_THRESHOLD', 3),
            )
        except DataAccessFailure as e:
            logger.exception(f"Warm budget cities failed: {e.__cause__}")
            return Response(
                {'error': e.message, 'cities': [], 'limit': limit, 'minTemp': min_temp},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        return Response({
            'cities': WarmBudgetCitySerializer(cities, many=True).data,
            'limit': limit,
            'minTemp': min_temp,
        })


class BalancedCitiesView(APIView):
    """
    API endpoint for cities that balance cheap food, attractions and hotel quality.

    GET /api/recommendations/cities/balanced/?limit=20
    """
    permission_classes = [AllowAny]

    def get(self, request):
        query = BalancedQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        limit = query.validated_data['limit']

        try:
            cities = rank_balanced_cities(DestinationLookupService.balanced_city_candidates(), limit)
        except DataAccessFailure as e:
            logger.exception(f"Balanced cities failed: {e.__cause__}")
            return Response(
                {'error': e.message, 'cities': [], 'limit': limit},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        return Response({
            'cities': BalancedCitySerializer(cities, many=True).data,
            'limit': limit,
        })


class BestCitiesPerCountryView(APIView):
    """
    API endpoint for the best rated cities, per country or globally.

    GET /api/recommendations/cities/best-per-country/?minPoi=1&minHotels=1&mode=perCountry&topKPerCountry=1
    GET /api/recommendations/cities/best-per-country/?mode=global&limit=10
    """
    permission_classes = [AllowAny]

    def get(self, request):
        query = BestCitiesQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data
        per_country = params['mode'] == BestCitiesQuerySerializer.MODE_PER_COUNTRY

        try:
            cities = DestinationLookupService.best_cities(
                min_poi=params['minPoi'],
                min_hotels=params['minHotels'],
                per_country=per_country,
                top_k=params['topKPerCountry'],
                limit=params['limit'],
            )
        except DataAccessFailure as e:
            logger.exception(f"Best cities failed: {e.__cause__}")
            return Response(
                {
                    'error': e.message,
                    'bestCities': [],
                    'minPoi': params['minPoi'],
                    'minHotels': params['minHotels'],
                },
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        serializer_class = RankedBestCitySerializer if per_country else BestCitySerializer
        payload = {
            'bestCities': serializer_class(cities, many=True).data,
            'minPoi': params['minPoi'],
            'minHotels': params['minHotels'],
            'mode': params['mode'],
            'returned': len(cities),
        }
        if per_country:
            payload['topKPerCountry'] = params['topKPerCountry']
        else:
            payload['limit'] = params['limit']
        return Response(payload)


class DestinationAvailabilityView(APIView):
    """
    API endpoint for destinations reachable by air from a group of origin cities.

    POST /api/recommendations/destinations/availability/cities/
    POST /api/recommendations/destinations/availability/countries/
    Body:
    {
        "originCityIds": [1, 2],
        "requireAllReach": false,
        "maxStop": 1,
        "limit": 20
    }
    """
    permission_classes = [AllowAny]
    destination_scope = Scope.CITY

    def post(self, request):
        serializer = AvailabilityRequestSerializer(data=request.data)
        if not serializer.is_valid():
            errors = serializer.errors
            message = 'originCityIds must be a non-empty array of integers.' if 'originCityIds' in errors else errors
            return Response({'error': message, 'destinations': []}, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        try:
            destinations = DestinationLookupService.reachable_destinations(
                data['originCityIds'],
                scope=self.destination_scope,
                max_stops=data['maxStop'],
                require_all=data['requireAllReach'],
                limit=data['limit'],
            )
        except DataAccessFailure as e:
            logger.exception(f"Availability lookup failed: {e.__cause__}")
            return Response(
                {'error': e.message, 'destinations': []},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        serializer_class = ReachableCountrySerializer if self.destination_scope == Scope.COUNTRY \
            else ReachableCitySerializer
        return Response({'destinations': serializer_class(destinations, many=True).data})
