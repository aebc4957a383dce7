from django.db import models


class Country(models.Model):
    """
    Country - top level of the destination hierarchy.
    Country wide statistics are stored here, city level metrics live on City.
    """

    # Basic Information
    name = models.CharField(max_length=255, help_text="Official English country name")
    alpha_2_code = models.CharField(max_length=2, blank=True, default="", help_text="ISO 3166-1 alpha-2 code")
    alpha_3_code = models.CharField(max_length=3, blank=True, default="", help_text="ISO 3166-1 alpha-3 code")
    other_name = models.CharField(max_length=255, blank=True, default="", help_text="Alternative or local name")

    # Statistics
    gdp = models.FloatField(null=True, blank=True)
    avg_heat_index = models.FloatField(null=True, blank=True)

    class Meta:
        db_table = 'locations_country'
        ordering = ['name']
        verbose_name_plural = 'countries'

    def __str__(self):
        return self.name


class City(models.Model):
    """
    City - the main unit of destination scoring and itinerary planning.
    Every metric is nullable; a missing value means "unknown", never zero.
    """

    # Foreign Keys
    country = models.ForeignKey(
        Country,
        on_delete=models.CASCADE,
        related_name='cities',
        help_text="Country the city belongs to"
    )

    # Basic Information
    name = models.CharField(max_length=255)
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)

    # Climate & Cost of Living
    avg_temperature = models.FloatField(
        null=True,
        blank=True,
        help_text="Average temperature (Celsius) of the latest recorded year"
    )
    latest_temp_year = models.IntegerField(null=True, blank=True)
    avg_food_price = models.FloatField(null=True, blank=True, help_text="Average price of a meal")
    avg_gas_price = models.FloatField(null=True, blank=True)
    avg_monthly_salary = models.FloatField(null=True, blank=True)

    class Meta:
        db_table = 'locations_city'
        ordering = ['name']
        verbose_name_plural = 'cities'
        indexes = [
            models.Index(fields=['country'], name='city_country_idx'),
            models.Index(fields=['avg_temperature'], name='city_avg_temp_idx'),
            models.Index(fields=['avg_food_price'], name='city_food_price_idx'),
        ]

    def __str__(self):
        return f"{self.name}, {self.country.name}"


class POI(models.Model):
    """
    Point of Interest (POI) - a single attraction.
    A POI without a city is a country-only POI: it belongs to the country but
    is not tied to any of its cities.
    """

    # Basic Information
    name = models.CharField(max_length=255, help_text="The official name of the place")
    address = models.CharField(max_length=512, blank=True, default="", help_text="Human readable physical address")
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)

    # Classification (free-form, e.g. "museum", "park")
    primary_category = models.CharField(max_length=100, help_text="Primary category of the place")

    # Foreign Keys
    city = models.ForeignKey(
        City,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='pois',
        help_text="Null for country-only POIs"
    )
    country = models.ForeignKey(
        Country,
        on_delete=models.CASCADE,
        related_name='pois'
    )

    class Meta:
        db_table = 'locations_poi'
        indexes = [
            models.Index(fields=['city', 'primary_category'], name='poi_city_category_idx'),
            models.Index(fields=['country', 'city'], name='poi_country_city_idx'),
        ]

    def __str__(self):
        return self.name

    @property
    def is_country_only(self) -> bool:
        return self.city_id is None


class Hotel(models.Model):
    """Hotel located in a city. Ratings feed the destination hotel metrics."""

    city = models.ForeignKey(
        City,
        on_delete=models.CASCADE,
        related_name='hotels'
    )
    name = models.CharField(max_length=255)
    rating = models.FloatField(null=True, blank=True, help_text="Star/guest rating, null when unrated")
    address = models.CharField(max_length=512, blank=True, default="")
    description = models.TextField(blank=True, default="")

    class Meta:
        db_table = 'locations_hotel'
        indexes = [
            models.Index(fields=['city', 'rating'], name='hotel_city_rating_idx'),
        ]

    def __str__(self):
        return self.name


class Airport(models.Model):
    """Airport serving a city. Flight reachability between cities goes through airports."""

    city = models.ForeignKey(
        City,
        on_delete=models.CASCADE,
        related_name='airports'
    )
    name = models.CharField(max_length=255)
    iata_code = models.CharField(max_length=3, blank=True, default="", help_text="IATA airport code")
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)

    class Meta:
        db_table = 'locations_airport'
        indexes = [
            models.Index(fields=['city'], name='airport_city_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.iata_code})" if self.iata_code else self.name


class Route(models.Model):
    """Scheduled flight route between two airports"""

    source = models.ForeignKey(
        Airport,
        on_delete=models.CASCADE,
        related_name='departures'
    )
    destination = models.ForeignKey(
        Airport,
        on_delete=models.CASCADE,
        related_name='arrivals'
    )
    airline = models.CharField(max_length=100, blank=True, default="")
    stops = models.PositiveSmallIntegerField(default=0, help_text="0 for a direct flight")

    class Meta:
        db_table = 'locations_route'
        indexes = [
            models.Index(fields=['source', 'stops'], name='route_source_stops_idx'),
        ]

    def __str__(self):
        return f"{self.source} -> {self.destination}"
