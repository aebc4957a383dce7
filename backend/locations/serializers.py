"""
DRF Serializers for the destination models.
"""
from rest_framework import serializers
from .models import City, Country, Hotel, POI


class CountrySerializer(serializers.ModelSerializer):
    """Serializer for Country model"""

    alpha2Code = serializers.CharField(source='alpha_2_code', read_only=True)
    alpha3Code = serializers.CharField(source='alpha_3_code', read_only=True)
    otherName = serializers.CharField(source='other_name', read_only=True)
    avgHeatIndex = serializers.FloatField(source='avg_heat_index', read_only=True)

    class Meta:
        model = Country
        fields = ['id', 'name', 'alpha2Code', 'alpha3Code', 'otherName', 'gdp', 'avgHeatIndex']
        read_only_fields = fields


class CityListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for city lists"""

    countryId = serializers.IntegerField(source='country_id', read_only=True)
    countryName = serializers.CharField(source='country.name', read_only=True)

    class Meta:
        model = City
        fields = ['id', 'name', 'countryId', 'countryName']
        read_only_fields = fields


class CitySerializer(CityListSerializer):
    """Full city details including climate and cost of living metrics"""

    avgTemperature = serializers.FloatField(source='avg_temperature', read_only=True)
    latestTempYear = serializers.IntegerField(source='latest_temp_year', read_only=True)
    avgFoodPrice = serializers.FloatField(source='avg_food_price', read_only=True)
    avgGasPrice = serializers.FloatField(source='avg_gas_price', read_only=True)
    avgMonthlySalary = serializers.FloatField(source='avg_monthly_salary', read_only=True)

    class Meta(CityListSerializer.Meta):
        fields = CityListSerializer.Meta.fields + [
            'latitude',
            'longitude',
            'avgTemperature',
            'latestTempYear',
            'avgFoodPrice',
            'avgGasPrice',
            'avgMonthlySalary',
        ]
        read_only_fields = fields


class POISerializer(serializers.ModelSerializer):
    category = serializers.CharField(source='primary_category', read_only=True)
    cityId = serializers.IntegerField(source='city_id', read_only=True, allow_null=True)
    countryId = serializers.IntegerField(source='country_id', read_only=True)

    class Meta:
        model = POI
        fields = ['id', 'name', 'address', 'category', 'latitude', 'longitude', 'cityId', 'countryId']
        read_only_fields = fields


class HotelSerializer(serializers.ModelSerializer):
    cityId = serializers.IntegerField(source='city_id', read_only=True)

    class Meta:
        model = Hotel
        fields = ['id', 'name', 'rating', 'address', 'description', 'cityId']
        read_only_fields = fields
