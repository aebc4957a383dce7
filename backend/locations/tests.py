from django.db import DatabaseError
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase
from unittest.mock import patch

from core.exceptions import DataAccessFailure
from recommendations.dtos import FeatureFilters, Scope
from .models import Airport, City, Country, Hotel, POI, Route
from .services import DestinationLookupService, OrmDestinationDataAccess


class LocationDataMixin:
    def create_locations(self):
        self.france = Country.objects.create(name='France', alpha_2_code='FR', alpha_3_code='FRA')
        self.peru = Country.objects.create(name='Peru', alpha_2_code='PE', alpha_3_code='PER')
        self.paris = City.objects.create(country=self.france, name='Paris',
                                         avg_temperature=13.0, avg_food_price=25.0)
        self.lyon = City.objects.create(country=self.france, name='Lyon',
                                        avg_temperature=14.0, avg_food_price=18.0)
        self.lima = City.objects.create(country=self.peru, name='Lima',
                                        avg_temperature=None, avg_food_price=8.0)

        self.louvre = POI.objects.create(name='Louvre', primary_category='museum',
                                         city=self.paris, country=self.france)
        self.tuileries = POI.objects.create(name='Tuileries', primary_category='park',
                                            city=self.paris, country=self.france)
        self.orsay = POI.objects.create(name="Musee d'Orsay", primary_category='museum',
                                        city=self.paris, country=self.france)
        self.fourviere = POI.objects.create(name='Fourviere', primary_category='church',
                                            city=self.lyon, country=self.france)
        self.mont_blanc = POI.objects.create(name='Mont Blanc', primary_category='mountain',
                                             country=self.france)

        Hotel.objects.create(city=self.paris, name='Le Meurice', rating=5.0)
        Hotel.objects.create(city=self.paris, name='Ibis', rating=3.0)
        Hotel.objects.create(city=self.paris, name='Unrated Inn', rating=None)


class POIModelTests(TestCase):
    def test_country_only_poi(self):
        france = Country.objects.create(name='France')
        paris = City.objects.create(country=france, name='Paris')
        city_poi = POI.objects.create(name='Louvre', primary_category='museum', city=paris, country=france)
        country_poi = POI.objects.create(name='Mont Blanc', primary_category='mountain', country=france)

        self.assertFalse(city_poi.is_country_only)
        self.assertTrue(country_poi.is_country_only)
        self.assertEqual(str(paris), 'Paris, France')


class OrmDestinationDataAccessTests(LocationDataMixin, TestCase):
    def setUp(self):
        self.create_locations()
        self.data_access = OrmDestinationDataAccess(randomize=False)

    def test_fetch_city_info(self):
        info = self.data_access.fetch_city_info(self.paris.id)
        self.assertEqual(info.city_name, 'Paris')
        self.assertEqual(info.country_id, self.france.id)
        self.assertEqual(info.country_name, 'France')
        self.assertIsNone(self.data_access.fetch_city_info(999999))

    def test_fetch_city_pois_excludes_avoided(self):
        pois = self.data_access.fetch_city_pois(self.paris.id, ['park'])
        self.assertEqual([poi.poi_id for poi in pois], [self.louvre.id, self.orsay.id])
        self.assertTrue(all(poi.city_id == self.paris.id for poi in pois))

    def test_fetch_city_pois_with_country_only(self):
        pois = self.data_access.fetch_city_pois(self.lyon.id, [], include_country_only=True)
        self.assertEqual([poi.poi_id for poi in pois], [self.fourviere.id, self.mont_blanc.id])

    def test_fetch_country_only_pois(self):
        pois = self.data_access.fetch_country_only_pois(self.france.id, [])
        self.assertEqual([poi.name for poi in pois], ['Mont Blanc'])
        self.assertIsNone(pois[0].city_id)
        self.assertEqual(self.data_access.fetch_country_only_pois(self.france.id, ['mountain']), [])

    def test_fetch_cities_with_poi_counts(self):
        cities = self.data_access.fetch_cities_with_poi_counts(self.france.id, [])
        self.assertEqual([(city.city_name, city.poi_count) for city in cities], [('Paris', 3), ('Lyon', 1)])

        cities = self.data_access.fetch_cities_with_poi_counts(self.france.id, ['church'])
        self.assertEqual([city.city_name for city in cities], ['Paris'])

    def test_fetch_destination_feature_rows(self):
        rows = self.data_access.fetch_destination_feature_rows(FeatureFilters(preferred_categories=['museum']))
        by_id = {row.id: row for row in rows}

        self.assertEqual([row.id for row in rows], sorted(by_id))
        paris = by_id[self.paris.id]
        self.assertEqual(paris.scope, Scope.CITY)
        self.assertEqual(paris.hotel_count, 3)
        self.assertEqual(paris.poi_count, 3)
        self.assertEqual(paris.matching_poi_count, 2)
        self.assertAlmostEqual(paris.avg_hotel_rating, 4.0)
        self.assertEqual(by_id[self.lima.id].avg_hotel_rating, 0.0)
        self.assertEqual(by_id[self.lima.id].hotel_count, 0)

    def test_fetch_destination_feature_rows_sql_filters(self):
        rows = self.data_access.fetch_destination_feature_rows(FeatureFilters(
            candidate_city_ids=[self.paris.id, self.lyon.id, self.lima.id],
            min_temp=13.5,
            max_avg_food_price=20.0,
        ))
        self.assertEqual([row.name for row in rows], ['Lyon'])

    def test_fetch_sample_attractions(self):
        samples = self.data_access.fetch_sample_attractions([self.paris.id, self.lima.id], Scope.CITY, 2)
        self.assertEqual([poi.poi_id for poi in samples[self.paris.id]], [self.louvre.id, self.tuileries.id])
        self.assertNotIn(self.lima.id, samples)

    def test_fetch_sample_attractions_country_scope(self):
        samples = self.data_access.fetch_sample_attractions([self.france.id], Scope.COUNTRY)
        names = [poi.name for poi in samples[self.france.id]]
        self.assertEqual(len(names), 4)
        self.assertNotIn('Mont Blanc', names)

    def test_country_samples_follow_city_country(self):
        # tagged with France but located in a Peruvian city
        misfiled = POI.objects.create(name='Huaca Pucllana', primary_category='ruins',
                                      city=self.lima, country=self.france)

        samples = self.data_access.fetch_sample_attractions([self.france.id, self.peru.id], Scope.COUNTRY)

        self.assertNotIn(misfiled.id, [poi.poi_id for poi in samples[self.france.id]])
        self.assertEqual([poi.poi_id for poi in samples[self.peru.id]], [misfiled.id])

    def test_fetch_sample_attractions_without_ids(self):
        self.assertEqual(self.data_access.fetch_sample_attractions([], Scope.CITY), {})

    @patch('locations.services.City.objects.select_related')
    def test_database_error_becomes_data_access_failure(self, mock_select_related):
        mock_select_related.side_effect = DatabaseError('connection refused')

        with self.assertRaises(DataAccessFailure) as context:
            self.data_access.fetch_city_info(self.paris.id)
        self.assertIsInstance(context.exception.__cause__, DatabaseError)


class DestinationLookupServiceTests(LocationDataMixin, TestCase):
    def setUp(self):
        self.create_locations()

    def test_random_city_within_country(self):
        destination = DestinationLookupService.random_destination(Scope.CITY, self.peru.id)
        self.assertEqual(destination['cityId'], self.lima.id)
        self.assertEqual(destination['countryName'], 'Peru')

    def test_random_country(self):
        destination = DestinationLookupService.random_destination(Scope.COUNTRY)
        self.assertIn(destination['countryId'], [self.france.id, self.peru.id])
        self.assertIsNone(destination['cityId'])

    def test_random_destination_empty(self):
        self.assertIsNone(DestinationLookupService.random_destination(Scope.CITY, 999999))

    def test_top_attraction_cities(self):
        cities = DestinationLookupService.top_attraction_cities(limit=5)
        self.assertEqual([(city.name, city.poi_count) for city in cities],
                         [('Paris', 3), ('Lyon', 1), ('Lima', 0)])

    def test_city_quality_stats(self):
        paris = DestinationLookupService.city_quality_stats().get(id=self.paris.id)
        self.assertEqual(paris.poi_count, 3)
        self.assertEqual(paris.hotel_count, 3)
        self.assertAlmostEqual(paris.avg_hotel_rating, 4.0)
        self.assertEqual(paris.min_hotel_rating, 3.0)

    def test_best_cities(self):
        Hotel.objects.create(city=self.lima, name='Miraflores Park', rating=4.0)

        cities = DestinationLookupService.best_cities(min_poi=1, min_hotels=1)
        # Lima has a hotel but no POIs
        self.assertEqual([(city.name, city.rank_in_country) for city in cities], [('Paris', 1)])

        # equal average rating, Paris has more hotels
        cities = DestinationLookupService.best_cities(min_poi=0, min_hotels=1, per_country=False, limit=5)
        self.assertEqual([city.name for city in cities], ['Paris', 'Lima'])

    def test_reachable_cities(self):
        self.create_routes()

        destinations = DestinationLookupService.reachable_destinations([self.paris.id, self.lyon.id])

        self.assertEqual([destination.city_name for destination in destinations], ['Lima', 'Paris'])
        self.assertTrue(destinations[0].reachable_from_all)
        self.assertEqual(destinations[0].reachable_from, sorted([self.paris.id, self.lyon.id]))
        self.assertEqual(destinations[1].reachable_from, [self.lyon.id])

    def test_reachable_countries_direct_only(self):
        self.create_routes()

        destinations = DestinationLookupService.reachable_destinations(
            [self.paris.id, self.lyon.id], scope=Scope.COUNTRY, max_stops=0
        )

        self.assertEqual([destination.country_name for destination in destinations], ['France', 'Peru'])
        self.assertFalse(any(destination.reachable_from_all for destination in destinations))
        self.assertIsNone(destinations[0].city_id)

    def test_reachable_require_all(self):
        self.create_routes()
        destinations = DestinationLookupService.reachable_destinations(
            [self.paris.id, self.lyon.id], require_all=True
        )
        self.assertEqual([destination.city_name for destination in destinations], ['Lima'])

    def create_routes(self):
        cdg = Airport.objects.create(city=self.paris, name='Charles de Gaulle', iata_code='CDG')
        lys = Airport.objects.create(city=self.lyon, name='Saint-Exupery', iata_code='LYS')
        lim = Airport.objects.create(city=self.lima, name='Jorge Chavez', iata_code='LIM')
        Route.objects.create(source=cdg, destination=lim, stops=1)
        Route.objects.create(source=lys, destination=lim, stops=0)
        Route.objects.create(source=lys, destination=cdg, stops=0)


class LocationsAPITests(LocationDataMixin, APITestCase):
    def setUp(self):
        self.create_locations()

    def test_list_countries(self):
        response = self.client.get(reverse('locations:country-list'), {'q': 'fra'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([country['name'] for country in response.data['results']], ['France'])
        self.assertEqual(response.data['results'][0]['alpha2Code'], 'FR')

    def test_list_cities_by_country(self):
        response = self.client.get(reverse('locations:city-list'), {'countryId': self.france.id})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([city['name'] for city in response.data['results']], ['Lyon', 'Paris'])

    def test_list_cities_invalid_country(self):
        response = self.client.get(reverse('locations:city-list'), {'countryId': 'abc'})
        self.assertEqual(response.data['results'], [])

    def test_city_detail(self):
        response = self.client.get(reverse('locations:city-detail', args=[self.paris.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['avgFoodPrice'], 25.0)
        self.assertEqual(response.data['countryName'], 'France')

    def test_city_pois(self):
        response = self.client.get(reverse('locations:city-pois', args=[self.paris.id]), {'category': 'museum'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([poi['name'] for poi in response.data['results']], ['Louvre', "Musee d'Orsay"])

    def test_city_hotels(self):
        response = self.client.get(reverse('locations:city-hotels', args=[self.paris.id]), {'minRating': 4})
        self.assertEqual([hotel['name'] for hotel in response.data['results']], ['Le Meurice'])

        response = self.client.get(reverse('locations:city-hotels', args=[self.paris.id]), {'minRating': 'high'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_list_cities_by_climate_and_price(self):
        url = reverse('locations:city-list')

        response = self.client.get(url, {'minTemp': 13.5})
        self.assertEqual([city['name'] for city in response.data['results']], ['Lyon'])

        response = self.client.get(url, {'maxTemp': 13.5, 'maxFood': 30})
        self.assertEqual([city['name'] for city in response.data['results']], ['Paris'])

        response = self.client.get(url, {'maxFood': 20})
        self.assertEqual([city['name'] for city in response.data['results']], ['Lima', 'Lyon'])

    def test_list_cities_ignores_unparseable_bounds(self):
        response = self.client.get(reverse('locations:city-list'), {'minTemp': 'warm', 'maxFood': 'cheap'})
        self.assertEqual(len(response.data['results']), 3)

    def test_random_destination(self):
        url = reverse('locations:random-destination')
        response = self.client.get(url, {'scope': 'city', 'countryId': self.peru.id})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['cityName'], 'Lima')

        response = self.client.get(url, {'scope': 'continent'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_city_returns_404(self):
        response = self.client.get(reverse('locations:city-detail', args=[999999]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
