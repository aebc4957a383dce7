"""
Tests for the recommendations module.
"""
from types import SimpleNamespace

from django.db import DatabaseError
from django.test import SimpleTestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase
from unittest.mock import MagicMock, patch

from core.exceptions import DataAccessFailure, InvalidArgument
from locations.dtos import POIRecord
from locations.models import Airport, City, Country, Hotel, POI, Route
from locations.services import DestinationDataAccess, DestinationLookupService
from recommendations.aggregation import reduce_to_country
from recommendations.dtos import DestinationFeatureRow, FeatureFilters, Scope, ScoringWeights
from recommendations.scoring_service import FeatureScorer, ScoringService, normalize_weights, rank_balanced_cities


def city_row(city_id, country_id=1, **metrics):
    return DestinationFeatureRow(
        id=city_id,
        scope=Scope.CITY,
        name=f"City {city_id}",
        country_id=country_id,
        country_name=f"Country {country_id}",
        **metrics
    )


class NormalizeWeightsTestCase(SimpleTestCase):
    """Test cases for weight normalization"""

    def test_weights_sum_to_one(self):
        for raw in ({'food': 2, 'attractions': 1, 'hotels': 1}, {'food': 0.1}, {}, None):
            with self.subTest(raw=raw):
                weights = normalize_weights(raw)
                self.assertAlmostEqual(weights.total, 1.0)

    def test_relative_weights_kept(self):
        weights = normalize_weights({'food': 2, 'attractions': 1, 'hotels': 1})
        self.assertAlmostEqual(weights.food, 0.5)
        self.assertAlmostEqual(weights.attractions, 0.25)
        self.assertAlmostEqual(weights.hotels, 0.25)

    def test_unset_weights_use_defaults(self):
        weights = normalize_weights({'food': None}, defaults={'food': 1, 'attractions': 1, 'hotels': 2})
        self.assertAlmostEqual(weights.hotels, 0.5)

    def test_all_zero_weights(self):
        weights = normalize_weights({'food': 0, 'attractions': 0, 'hotels': 0})
        self.assertEqual((weights.food, weights.attractions, weights.hotels), (0, 0, 0))


class FeatureScorerTestCase(SimpleTestCase):
    """Test cases for FeatureScorer"""

    def setUp(self):
        self.rows = [
            city_row(1, avg_food_price=20.0, poi_count=10, hotel_count=2),
            city_row(2, avg_food_price=10.0, poi_count=5, hotel_count=8),
            city_row(3, avg_food_price=None, poi_count=0, hotel_count=0),
            city_row(4, avg_food_price=40.0, poi_count=1, hotel_count=1),
        ]

    def test_sub_scores(self):
        scored = {destination.id: destination for destination in FeatureScorer().score(self.rows)}

        self.assertAlmostEqual(scored[2].food_score, 0.75)
        self.assertAlmostEqual(scored[4].food_score, 0.0)
        self.assertEqual(scored[3].food_score, 0.0)
        self.assertAlmostEqual(scored[1].attractions_score, 1.0)
        self.assertAlmostEqual(scored[2].attractions_score, 0.5)
        self.assertAlmostEqual(scored[2].hotel_score, 1.0)
        self.assertEqual(scored[3].hotel_score, 0.0)

    def test_composite_score_bounds(self):
        weights = normalize_weights({'food': 3, 'attractions': 1, 'hotels': 5})
        for destination in FeatureScorer(weights).score(self.rows):
            self.assertGreaterEqual(destination.composite_score, 0.0)
            self.assertLessEqual(destination.composite_score, 1.0)

    def test_sorted_by_composite_descending(self):
        scored = FeatureScorer().score(self.rows)
        composites = [destination.composite_score for destination in scored]
        self.assertEqual(composites, sorted(composites, reverse=True))

    def test_ties_keep_input_order(self):
        rows = [city_row(city_id, avg_food_price=5.0, poi_count=3, hotel_count=3) for city_id in (7, 3, 5)]
        scored = FeatureScorer().score(rows)
        self.assertEqual([destination.id for destination in scored], [7, 3, 5])

    def test_small_maxima_are_floored(self):
        rows = [city_row(1, avg_food_price=0.5, poi_count=0, hotel_count=0)]
        destination = FeatureScorer(ScoringWeights(food=1, attractions=0, hotels=0)).score(rows)[0]
        self.assertAlmostEqual(destination.food_score, 0.5)
        self.assertAlmostEqual(destination.composite_score, 0.5)


class ReduceToCountryTestCase(SimpleTestCase):
    """Test cases for country aggregation"""

    def test_means_ignore_missing_values(self):
        rows = [
            city_row(1, avg_food_price=10.0, avg_temperature=None, hotel_count=2, poi_count=3),
            city_row(2, avg_food_price=20.0, avg_temperature=24.0, hotel_count=1, poi_count=4,
                     matching_poi_count=2),
        ]
        country = reduce_to_country(rows)[0]

        self.assertEqual(country.id, 1)
        self.assertEqual(country.scope, Scope.COUNTRY)
        self.assertEqual(country.name, 'Country 1')
        self.assertAlmostEqual(country.avg_food_price, 15.0)
        self.assertAlmostEqual(country.avg_temperature, 24.0)
        self.assertEqual(country.hotel_count, 3)
        self.assertEqual(country.poi_count, 7)
        self.assertEqual(country.matching_poi_count, 2)

    def test_metric_without_values_is_none(self):
        country = reduce_to_country([city_row(1), city_row(2)])[0]
        self.assertIsNone(country.avg_hotel_rating)
        self.assertIsNone(country.avg_food_price)

    def test_groups_keep_first_seen_order(self):
        rows = [city_row(1, country_id=9), city_row(2, country_id=4), city_row(3, country_id=9)]
        self.assertEqual([country.id for country in reduce_to_country(rows)], [9, 4])


class ScoringServiceTestCase(SimpleTestCase):
    """Test cases for ScoringService orchestration"""

    def setUp(self):
        self.data_access = MagicMock(spec=DestinationDataAccess)
        self.service = ScoringService(self.data_access, default_limit=20, sample_size=5)

    def test_filtered_out_rows_skip_enrichment(self):
        self.data_access.fetch_destination_feature_rows.return_value = [city_row(1, hotel_count=1)]

        result = self.service.score_destinations(Scope.CITY, FeatureFilters(min_hotel_count=5))

        self.assertEqual(result, [])
        self.data_access.fetch_sample_attractions.assert_not_called()

    def test_invalid_scope(self):
        with self.assertRaises(InvalidArgument):
            self.service.score_destinations('region')
        self.data_access.fetch_destination_feature_rows.assert_not_called()

    def test_unknown_rating_passes_rating_filter(self):
        self.data_access.fetch_destination_feature_rows.return_value = [
            city_row(1, avg_hotel_rating=None),
            city_row(2, avg_hotel_rating=2.0),
        ]
        self.data_access.fetch_sample_attractions.return_value = {}

        result = self.service.score_destinations(Scope.CITY, FeatureFilters(min_hotel_rating=3.0))
        self.assertEqual([destination.id for destination in result], [1])

    def test_samples_fetched_once_for_truncated_set(self):
        self.data_access.fetch_destination_feature_rows.return_value = [
            city_row(1, poi_count=1),
            city_row(2, poi_count=9),
            city_row(3, poi_count=5),
        ]
        sample = POIRecord(poi_id=50, name='Old Town', category='landmark', city_id=2)
        self.data_access.fetch_sample_attractions.return_value = {2: [sample]}

        result = self.service.score_destinations(
            Scope.CITY, weights={'food': 0, 'attractions': 1, 'hotels': 0}, limit=2
        )

        self.assertEqual([destination.id for destination in result], [2, 3])
        self.data_access.fetch_sample_attractions.assert_called_once_with([2, 3], Scope.CITY, 5)
        self.assertEqual(result[0].sample_attractions, [sample])
        self.assertEqual(result[1].sample_attractions, [])

    def test_country_scope_aggregates_before_scoring(self):
        self.data_access.fetch_destination_feature_rows.return_value = [
            city_row(1, country_id=10, poi_count=2),
            city_row(2, country_id=20, poi_count=3),
            city_row(3, country_id=10, poi_count=4),
        ]
        self.data_access.fetch_sample_attractions.return_value = {}

        result = self.service.score_destinations(Scope.COUNTRY, weights={'food': 0, 'attractions': 1, 'hotels': 0})

        self.assertEqual([(destination.id, destination.poi_count) for destination in result], [(10, 6), (20, 3)])
        self.assertTrue(all(destination.scope == Scope.COUNTRY for destination in result))
        self.data_access.fetch_sample_attractions.assert_called_once_with([10, 20], Scope.COUNTRY, 5)

    def test_default_limit(self):
        self.data_access.fetch_destination_feature_rows.return_value = [city_row(i) for i in range(1, 31)]
        self.data_access.fetch_sample_attractions.return_value = {}
        self.assertEqual(len(self.service.score_destinations(Scope.CITY)), 20)


class DestinationDataTestCase(APITestCase):
    """Spain and Norway with a few cities, POIs and hotels"""

    def setUp(self):
        self.spain = Country.objects.create(name='Spain')
        self.norway = Country.objects.create(name='Norway')
        self.seville = City.objects.create(country=self.spain, name='Seville',
                                           avg_temperature=25.0, avg_food_price=12.0)
        self.madrid = City.objects.create(country=self.spain, name='Madrid',
                                          avg_temperature=20.0, avg_food_price=15.0)
        self.oslo = City.objects.create(country=self.norway, name='Oslo',
                                        avg_temperature=6.0, avg_food_price=30.0)

        for index in range(4):
            POI.objects.create(name=f"Seville POI {index}", primary_category='museum',
                               city=self.seville, country=self.spain)
        for index in range(6):
            POI.objects.create(name=f"Madrid POI {index}", primary_category='park',
                               city=self.madrid, country=self.spain)
        POI.objects.create(name='Vigeland Park', primary_category='park', city=self.oslo, country=self.norway)

        Hotel.objects.create(city=self.seville, name='Alfonso XIII', rating=5.0)
        Hotel.objects.create(city=self.seville, name='Hostal', rating=3.0)
        Hotel.objects.create(city=self.madrid, name='Ritz', rating=4.5)


class RecommendationsAPITestCase(DestinationDataTestCase):
    """Test cases for the recommendation endpoints"""

    def test_destination_features_city_scope(self):
        url = reverse('recommendations:destination-features')
        response = self.client.post(url, {
            'scope': 'city',
            'minTemp': 15,
            'preferredCategories': ['museum'],
            'weights': {'food': 1, 'attractions': 0, 'hotels': 0},
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        destinations = response.data['destinations']
        self.assertEqual([destination['id'] for destination in destinations], [self.seville.id, self.madrid.id])

        seville = destinations[0]
        self.assertEqual(seville['countryName'], 'Spain')
        self.assertEqual(seville['hotelCount'], 2)
        self.assertEqual(seville['poiCount'], 4)
        self.assertEqual(seville['matchingPoiCount'], 4)
        self.assertAlmostEqual(seville['avgHotelRating'], 4.0)
        self.assertEqual(len(seville['sampleAttractions']), 4)
        self.assertEqual(destinations[1]['matchingPoiCount'], 0)
        self.assertEqual(len(destinations[1]['sampleAttractions']), 5)

    def test_destination_features_country_scope(self):
        url = reverse('recommendations:destination-features')
        response = self.client.post(url, {'scope': 'country', 'limit': 1}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        destinations = response.data['destinations']
        self.assertEqual(len(destinations), 1)
        self.assertEqual(destinations[0]['id'], self.spain.id)
        self.assertEqual(destinations[0]['scope'], 'country')
        self.assertEqual(destinations[0]['poiCount'], 10)
        self.assertEqual(len(destinations[0]['sampleAttractions']), 5)

    def test_destination_features_post_filters(self):
        url = reverse('recommendations:destination-features')
        response = self.client.post(url, {'scope': 'city', 'minHotelCount': 5}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['destinations'], [])

    def test_destination_features_bad_scope(self):
        url = reverse('recommendations:destination-features')
        response = self.client.post(url, {'scope': 'planet'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'scope must be "city" or "country"')
        self.assertEqual(response.data['destinations'], [])

    @patch('recommendations.views.ScoringService.score_destinations', side_effect=DataAccessFailure())
    def test_destination_features_data_failure(self, mock_score):
        url = reverse('recommendations:destination-features')
        response = self.client.post(url, {'scope': 'city'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data['destinations'], [])

    def test_top_attraction_cities(self):
        response = self.client.get(reverse('recommendations:top-attraction-cities'), {'limit': 2})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['limit'], 2)
        self.assertEqual([city['name'] for city in response.data['cities']], ['Madrid', 'Seville'])
        self.assertEqual(response.data['cities'][0]['poiCount'], 6)

    def test_top_attraction_cities_invalid_limit_falls_back(self):
        response = self.client.get(reverse('recommendations:top-attraction-cities'), {'limit': 'abc'})
        self.assertEqual(response.data['limit'], 10)
        self.assertEqual(len(response.data['cities']), 3)

    def test_warm_budget_cities(self):
        response = self.client.get(reverse('recommendations:warm-budget-cities'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['minTemp'], 18.0)
        # Oslo is too cold and has too few POIs
        self.assertEqual([city['name'] for city in response.data['cities']], ['Seville', 'Madrid'])

    @override_settings(WARM_BUDGET_POI_THRESHOLD=5)
    def test_warm_budget_poi_threshold(self):
        response = self.client.get(reverse('recommendations:warm-budget-cities'), {'minTemp': 10})
        self.assertEqual([city['name'] for city in response.data['cities']], ['Madrid'])

    @patch.object(DestinationLookupService, 'cities_with_poi_counts')
    def test_city_list_data_failure(self, mock_cities):
        mock_cities.side_effect = DatabaseError('connection lost')

        response = self.client.get(reverse('recommendations:top-attraction-cities'))

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data['cities'], [])


class RankBalancedCitiesTestCase(SimpleTestCase):
    """Test cases for the balanced city ranking"""

    @staticmethod
    def city(city_id, name, food, pois, rating):
        return SimpleNamespace(
            id=city_id, name=name, country=SimpleNamespace(name='Testland'),
            avg_food_price=food, poi_count=pois, avg_hotel_rating=rating,
        )

    def test_composite_is_mean_of_min_max_scores(self):
        cities = [
            self.city(1, 'Cheap', 10.0, 2, 3.0),
            self.city(2, 'Pricey', 30.0, 10, 5.0),
            self.city(3, 'Middle', 20.0, 6, 4.0),
        ]
        ranked = {city.city_id: city for city in rank_balanced_cities(cities, limit=10)}

        self.assertAlmostEqual(ranked[1].food_score, 1.0)
        self.assertAlmostEqual(ranked[1].attractions_score, 0.0)
        self.assertAlmostEqual(ranked[3].composite_score, 0.5)
        self.assertAlmostEqual(ranked[2].composite_score, 2 / 3)

    def test_cities_with_unknown_metrics_are_skipped(self):
        cities = [
            self.city(1, 'No Food Data', None, 5, 4.0),
            self.city(2, 'No Hotels', 12.0, 5, None),
            self.city(3, 'Known', 15.0, 1, 3.0),
            self.city(4, 'Also Known', 25.0, 9, 4.0),
        ]
        ranked = rank_balanced_cities(cities, limit=10)
        self.assertEqual([city.city_id for city in ranked], [4, 3])

    def test_flat_metric_sorts_last(self):
        cities = [self.city(1, 'Beta', 10.0, 3, 4.0), self.city(2, 'Alpha', 10.0, 3, 4.0)]
        ranked = rank_balanced_cities(cities, limit=10)

        self.assertIsNone(ranked[0].composite_score)
        self.assertEqual([city.city_name for city in ranked], ['Alpha', 'Beta'])

    def test_limit(self):
        cities = [self.city(i, f"City {i}", float(i), i, float(i)) for i in range(1, 6)]
        self.assertEqual(len(rank_balanced_cities(cities, limit=2)), 2)


class CityListsAPITestCase(DestinationDataTestCase):
    """Test cases for the balanced and best-per-country lists"""

    def test_balanced_cities(self):
        response = self.client.get(reverse('recommendations:balanced-cities'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['limit'], 20)
        # Oslo has no rated hotels
        self.assertEqual([city['cityName'] for city in response.data['cities']], ['Madrid', 'Seville'])
        madrid = response.data['cities'][0]
        self.assertEqual(madrid['attractionCount'], 6)
        self.assertAlmostEqual(madrid['compositeScore'], (15 / 18 + 1 + 1) / 3)

    @patch.object(DestinationLookupService, 'city_quality_stats')
    def test_balanced_cities_data_failure(self, mock_stats):
        mock_stats.side_effect = DatabaseError('connection lost')

        response = self.client.get(reverse('recommendations:balanced-cities'), {'limit': 5})

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data['cities'], [])
        self.assertEqual(response.data['limit'], 5)

    def test_best_city_per_country(self):
        response = self.client.get(reverse('recommendations:best-cities-per-country'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['mode'], 'perCountry')
        self.assertEqual(response.data['topKPerCountry'], 1)
        self.assertNotIn('limit', response.data)
        # Oslo has no hotels, so Norway has no eligible city
        best = response.data['bestCities']
        self.assertEqual([(city['cityName'], city['rankInCountry']) for city in best], [('Madrid', 1)])
        self.assertEqual(response.data['returned'], 1)

    def test_top_k_per_country(self):
        response = self.client.get(reverse('recommendations:best-cities-per-country'), {'topKPerCountry': 2})
        best = response.data['bestCities']
        self.assertEqual([(city['cityName'], city['rankInCountry']) for city in best],
                         [('Madrid', 1), ('Seville', 2)])

    def test_low_rated_hotel_disqualifies_city(self):
        Hotel.objects.create(city=self.madrid, name='Hostel Ruin', rating=1.5)

        response = self.client.get(reverse('recommendations:best-cities-per-country'))
        self.assertEqual([city['cityName'] for city in response.data['bestCities']], ['Seville'])

    def test_best_cities_global_mode(self):
        response = self.client.get(reverse('recommendations:best-cities-per-country'),
                                   {'mode': 'GLOBAL', 'minHotels': 2, 'limit': 5})

        self.assertEqual(response.data['mode'], 'global')
        self.assertEqual(response.data['limit'], 5)
        self.assertNotIn('topKPerCountry', response.data)
        self.assertEqual([city['cityName'] for city in response.data['bestCities']], ['Seville'])
        self.assertNotIn('rankInCountry', response.data['bestCities'][0])

    def test_best_cities_invalid_params_fall_back(self):
        response = self.client.get(reverse('recommendations:best-cities-per-country'),
                                   {'minPoi': 'lots', 'minHotels': -3, 'mode': 'sideways'})
        self.assertEqual(response.data['minPoi'], 1)
        self.assertEqual(response.data['minHotels'], 1)
        self.assertEqual(response.data['mode'], 'perCountry')

    def test_warm_budget_non_numeric_min_temp_falls_back(self):
        response = self.client.get(reverse('recommendations:warm-budget-cities'), {'minTemp': 'warm'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['minTemp'], 18.0)
        self.assertEqual([city['name'] for city in response.data['cities']], ['Seville', 'Madrid'])


class DestinationAvailabilityAPITestCase(DestinationDataTestCase):
    """Test cases for the flight availability endpoints"""

    def setUp(self):
        super().setUp()
        seville_airport = Airport.objects.create(city=self.seville, name='Seville Airport', iata_code='SVQ')
        madrid_airport = Airport.objects.create(city=self.madrid, name='Barajas', iata_code='MAD')
        oslo_airport = Airport.objects.create(city=self.oslo, name='Gardermoen', iata_code='OSL')

        Route.objects.create(source=seville_airport, destination=oslo_airport, stops=0)
        Route.objects.create(source=madrid_airport, destination=oslo_airport, stops=1)
        Route.objects.create(source=madrid_airport, destination=seville_airport, stops=2)

        self.cities_url = reverse('recommendations:availability-cities')
        self.countries_url = reverse('recommendations:availability-countries')
        self.origins = [self.seville.id, self.madrid.id]

    def test_reachable_cities_default_max_stop(self):
        response = self.client.post(self.cities_url, {'originCityIds': self.origins}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        destinations = response.data['destinations']
        self.assertEqual(len(destinations), 1)
        self.assertEqual(destinations[0]['cityName'], 'Oslo')
        self.assertEqual(destinations[0]['countryName'], 'Norway')
        self.assertTrue(destinations[0]['reachableFromAll'])
        self.assertEqual(destinations[0]['reachableFrom'], sorted(self.origins))

    def test_reachable_from_all_sorted_first(self):
        response = self.client.post(self.cities_url, {'originCityIds': self.origins, 'maxStop': 2}, format='json')

        destinations = response.data['destinations']
        self.assertEqual([city['cityName'] for city in destinations], ['Oslo', 'Seville'])
        self.assertEqual(destinations[1]['reachableFrom'], [self.madrid.id])
        self.assertFalse(destinations[1]['reachableFromAll'])

    def test_require_all_reach(self):
        response = self.client.post(self.cities_url, {
            'originCityIds': self.origins, 'maxStop': 2, 'requireAllReach': True
        }, format='json')
        self.assertEqual([city['cityName'] for city in response.data['destinations']], ['Oslo'])

    def test_direct_flights_only(self):
        response = self.client.post(self.cities_url, {'originCityIds': self.origins, 'maxStop': 0}, format='json')

        destinations = response.data['destinations']
        self.assertEqual(destinations[0]['reachableFrom'], [self.seville.id])
        self.assertFalse(destinations[0]['reachableFromAll'])

    def test_invalid_max_stop_falls_back_to_one(self):
        response = self.client.post(self.cities_url, {'originCityIds': self.origins, 'maxStop': -2}, format='json')
        self.assertEqual([city['cityName'] for city in response.data['destinations']], ['Oslo'])

    def test_reachable_countries(self):
        response = self.client.post(self.countries_url, {'originCityIds': self.origins, 'maxStop': 2}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        destinations = response.data['destinations']
        self.assertEqual([country['countryName'] for country in destinations], ['Norway', 'Spain'])
        self.assertTrue(destinations[0]['reachableFromAll'])
        self.assertEqual(destinations[1]['reachableFrom'], [self.madrid.id])
        self.assertNotIn('cityId', destinations[0])

    def test_limit(self):
        response = self.client.post(self.cities_url, {
            'originCityIds': self.origins, 'maxStop': 2, 'limit': 1
        }, format='json')
        self.assertEqual(len(response.data['destinations']), 1)

    def test_origin_city_ids_required(self):
        for body in ({}, {'originCityIds': []}, {'originCityIds': 'Seville'}, {'originCityIds': ['x']}):
            with self.subTest(body=body):
                response = self.client.post(self.cities_url, body, format='json')
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
                self.assertEqual(response.data['error'], 'originCityIds must be a non-empty array of integers.')
                self.assertEqual(response.data['destinations'], [])

    @patch('locations.services.Route.objects.filter')
    def test_data_failure(self, mock_filter):
        mock_filter.side_effect = DatabaseError('connection lost')

        response = self.client.post(self.countries_url, {'originCityIds': self.origins}, format='json')

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data['error'], 'Database query failed')
        self.assertEqual(response.data['destinations'], [])
