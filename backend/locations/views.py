"""
API views for locations app endpoints.
"""
import logging
import math

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import DataAccessFailure
from recommendations.dtos import Scope
from .models import City, Country
from .serializers import (
    CityListSerializer, CitySerializer, CountrySerializer, HotelSerializer, POISerializer
)
from .services import DestinationLookupService

logger = logging.getLogger(__name__)


class CountryViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Read-only country lookups.

    Query parameters (list):
    - q: str (optional, case-insensitive name search)
    """
    queryset = Country.objects.all().order_by('name')
    serializer_class = CountrySerializer
    permission_classes = [AllowAny]

    def get_queryset(self):
        queryset = super().get_queryset()
        search = self.request.query_params.get('q')
        if search:
            queryset = queryset.filter(name__icontains=search)
        return queryset


class CityViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Read-only city lookups plus the POIs and hotels of a city.

    Query parameters (list):
    - countryId: int (optional)
    - q: str (optional, case-insensitive name search)
    - minTemp, maxTemp: float (optional, average temperature bounds)
    - maxFood: float (optional, upper bound on the average meal price)
    """
    RANGE_FILTERS = (
        ('minTemp', 'avg_temperature__gte'),
        ('maxTemp', 'avg_temperature__lte'),
        ('maxFood', 'avg_food_price__lte'),
    )

    queryset = City.objects.select_related('country').order_by('name')
    serializer_class = CitySerializer
    permission_classes = [AllowAny]

    def get_serializer_class(self):
        """Use lightweight serializer for list views"""
        if self.action == 'list':
            return CityListSerializer
        return CitySerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.action != 'list':
            return queryset

        country_id = self.request.query_params.get('countryId')
        if country_id:
            try:
                queryset = queryset.filter(country_id=int(country_id))
            except ValueError:
                return queryset.none()

        search = self.request.query_params.get('q')
        if search:
            queryset = queryset.filter(name__icontains=search)

        # unparseable bounds are ignored
        for param, lookup in self.RANGE_FILTERS:
            value = _float_or_none(self.request.query_params.get(param))
            if value is not None:
                queryset = queryset.filter(**{lookup: value})
        return queryset

    @action(detail=True, methods=['get'])
    def pois(self, request, pk=None):
        """
        POIs of a city.

        Query parameters:
        - category: str (optional filter on the primary category)
        """
        city = self.get_object()
        pois = city.pois.all().order_by('id')

        category = request.query_params.get('category')
        if category:
            pois = pois.filter(primary_category=category)

        page = self.paginate_queryset(pois)
        if page is not None:
            return self.get_paginated_response(POISerializer(page, many=True).data)
        return Response(POISerializer(pois, many=True).data)

    @action(detail=True, methods=['get'])
    def hotels(self, request, pk=None):
        """
        Hotels of a city, best rated first.

        Query parameters:
        - minRating: float (optional)
        """
        city = self.get_object()
        hotels = city.hotels.all().order_by('-rating', 'name')

        min_rating = request.query_params.get('minRating')
        if min_rating:
            try:
                hotels = hotels.filter(rating__gte=float(min_rating))
            except ValueError:
                return Response(
                    {'error': 'minRating must be a number'},
                    status=status.HTTP_400_BAD_REQUEST
                )

        page = self.paginate_queryset(hotels)
        if page is not None:
            return self.get_paginated_response(HotelSerializer(page, many=True).data)
        return Response(HotelSerializer(hotels, many=True).data)


class RandomDestinationView(APIView):
    """
    Random destination for the "surprise me" button.

    GET /api/locations/destinations/random/?scope=city&countryId=12
    """
    permission_classes = [AllowAny]

    def get(self, request):
        scope = request.query_params.get('scope') or Scope.CITY
        if scope not in Scope.CHOICES:
            return Response(
                {'error': 'scope must be "city" or "country"'},
                status=status.HTTP_400_BAD_REQUEST
            )

        country_id = request.query_params.get('countryId')
        if country_id:
            try:
                country_id = int(country_id)
            except ValueError:
                return Response(
                    {'error': 'countryId must be an integer'},
                    status=status.HTTP_400_BAD_REQUEST
                )
        else:
            country_id = None

        try:
            destination = DestinationLookupService.random_destination(scope, country_id)
        except DataAccessFailure as e:
            logger.exception(f"Random destination lookup failed: {e.__cause__}")
            return Response({'error': e.message}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(destination)


def _float_or_none(value):
    if value in (None, ''):
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None
