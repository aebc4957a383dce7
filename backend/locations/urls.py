"""
URL routing for locations app.
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import CityViewSet, CountryViewSet, RandomDestinationView

router = DefaultRouter()
router.register(r'countries', CountryViewSet, basename='country')
router.register(r'cities', CityViewSet, basename='city')

app_name = 'locations'

urlpatterns = [
    path('destinations/random/', RandomDestinationView.as_view(), name='random-destination'),
    path('', include(router.urls)),
]
