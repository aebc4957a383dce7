"""
API views for trips app endpoints.
"""
import logging

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import DataAccessFailure, InvalidArgument, NotFound
from locations.services import OrmDestinationDataAccess
from .dtos import ItinerarySummary
from .serializers import ItineraryRequestSerializer, ItinerarySerializer, ItinerarySummarySerializer
from .services import ItineraryBuilder

logger = logging.getLogger(__name__)


class GenerateItineraryView(APIView):
    """
    API endpoint for generating day-by-day itineraries.

    POST /api/planning/itineraries/
    Body:
    {
        "level": "city" | "country",
        "cityId": 1,                      (level = city)
        "countryId": 10,                  (level = country)
        "numDays": 5,
        "maxCities": 2,                   (optional, default ceil(numDays / 2))
        "poisPerDay": 3,                  (optional)
        "preferredCategoriesByDay": [["museum"], [], ["park"]],
        "avoidCategories": ["zoo"]
    }

    Failures keep the success shape (empty itinerary, zeroed summary).
    """
    permission_classes = [AllowAny]

    def post(self, request):
        """Build an itinerary"""
        serializer = ItineraryRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return self._failure(serializer.errors, status.HTTP_400_BAD_REQUEST)

        builder = ItineraryBuilder(OrmDestinationDataAccess())
        try:
            itinerary = builder.build(serializer.to_request())
        except InvalidArgument as e:
            return self._failure(e.message, status.HTTP_400_BAD_REQUEST)
        except NotFound as e:
            return self._failure(e.message, status.HTTP_404_NOT_FOUND)
        except DataAccessFailure as e:
            logger.exception(f"Itinerary generation failed: {e.__cause__}")
            return self._failure(e.message, status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(ItinerarySerializer(itinerary).data, status=status.HTTP_200_OK)

    @staticmethod
    def _failure(message, status_code: int) -> Response:
        return Response(
            {
                'error': message,
                'itinerary': [],
                'summary': ItinerarySummarySerializer(ItinerarySummary.empty()).data,
            },
            status=status_code
        )
