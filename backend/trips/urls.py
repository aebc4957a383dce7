"""
URL routing for trips app.
"""
from django.urls import path
from .views import GenerateItineraryView

app_name = 'trips'

urlpatterns = [
    path('itineraries/', GenerateItineraryView.as_view(), name='generate-itinerary'),
]
