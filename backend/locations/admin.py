from django.contrib import admin
from .models import Airport, City, Country, Hotel, POI, Route


@admin.register(Country)
class CountryAdmin(admin.ModelAdmin):
    list_display = ['name', 'alpha_2_code', 'alpha_3_code', 'gdp']
    search_fields = ['name', 'other_name', 'alpha_2_code', 'alpha_3_code']


@admin.register(City)
class CityAdmin(admin.ModelAdmin):
    """
    Admin interface for City.
    Metrics are grouped the way they are imported: climate, then cost of living.
    """
    list_display = ['name', 'country', 'avg_temperature', 'avg_food_price']
    list_filter = ['country']
    search_fields = ['name', 'country__name']
    list_select_related = ['country']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'country', 'latitude', 'longitude')
        }),
        ('Climate', {
            'fields': ('avg_temperature', 'latest_temp_year')
        }),
        ('Cost of Living', {
            'fields': ('avg_food_price', 'avg_gas_price', 'avg_monthly_salary')
        }),
    )


@admin.register(POI)
class POIAdmin(admin.ModelAdmin):
    list_display = ['name', 'primary_category', 'city', 'country']
    list_filter = ['primary_category', 'country']
    search_fields = ['name', 'address']
    raw_id_fields = ['city', 'country']


@admin.register(Hotel)
class HotelAdmin(admin.ModelAdmin):
    list_display = ['name', 'city', 'rating']
    list_filter = ['rating']
    search_fields = ['name', 'address', 'city__name']
    raw_id_fields = ['city']


@admin.register(Airport)
class AirportAdmin(admin.ModelAdmin):
    list_display = ['name', 'iata_code', 'city']
    search_fields = ['name', 'iata_code', 'city__name']
    raw_id_fields = ['city']


@admin.register(Route)
class RouteAdmin(admin.ModelAdmin):
    list_display = ['source', 'destination', 'airline', 'stops']
    list_filter = ['stops']
    search_fields = ['source__iata_code', 'destination__iata_code', 'airline']
    raw_id_fields = ['source', 'destination']
