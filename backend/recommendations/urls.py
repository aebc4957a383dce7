"""
URL configuration for the recommendations module.
"""
from django.urls import path
from recommendations.dtos import Scope
from recommendations.views import (
    BalancedCitiesView, BestCitiesPerCountryView, DestinationAvailabilityView, DestinationFeaturesView,
    TopAttractionCitiesView, WarmBudgetCitiesView
)

app_name = 'recommendations'

urlpatterns = [
    path('destinations/features/', DestinationFeaturesView.as_view(), name='destination-features'),
    path(
        'destinations/availability/cities/',
        DestinationAvailabilityView.as_view(destination_scope=Scope.CITY),
        name='availability-cities'
    ),
    path(
        'destinations/availability/countries/',
        DestinationAvailabilityView.as_view(destination_scope=Scope.COUNTRY),
        name='availability-countries'
    ),
    path('cities/top-attractions/', TopAttractionCitiesView.as_view(), name='top-attraction-cities'),
    path('cities/warm-budget/', WarmBudgetCitiesView.as_view(), name='warm-budget-cities'),
    path('cities/balanced/', BalancedCitiesView.as_view(), name='balanced-cities'),
    path('cities/best-per-country/', BestCitiesPerCountryView.as_view(), name='best-cities-per-country'),
]
