from django.test import SimpleTestCase, override_settings
from django.urls import reverse
from rest_framework.test import APITestCase
from rest_framework import status
from unittest.mock import patch

from core.exceptions import DataAccessFailure, InvalidArgument, NotFound
from locations.dtos import CityInfo, CityPoiCount, POIRecord
from locations.models import City, Country, POI
from locations.services import DestinationDataAccess, OrmDestinationDataAccess
from .dtos import ItineraryRequest, ItinerarySummary, Level
from .services import DayAllocator, ItineraryBuilder, POIPool


def make_poi(poi_id, category, city_id=None):
    return POIRecord(poi_id=poi_id, name=f"POI {poi_id}", category=category, city_id=city_id)


class InMemoryDataAccess(DestinationDataAccess):
    """DestinationDataAccess over plain lists, POIs returned in insertion order"""

    def __init__(self, cities=None, pois=None, country_names=None):
        # cities: {city_id: (name, country_id)}, pois: [(POIRecord, country_id)]
        self.cities = cities or {}
        self.pois = pois or []
        self.country_names = country_names or {}

    def _allowed(self, poi, avoid_categories):
        return poi.category not in set(avoid_categories)

    def fetch_city_info(self, city_id):
        if city_id not in self.cities:
            return None
        name, country_id = self.cities[city_id]
        return CityInfo(city_id, name, country_id, self.country_names.get(country_id, ''))

    def fetch_city_pois(self, city_id, avoid_categories, include_country_only=False):
        country_id = self.cities[city_id][1]
        return [
            poi for poi, poi_country in self.pois
            if self._allowed(poi, avoid_categories) and (
                poi.city_id == city_id
                or (include_country_only and poi.city_id is None and poi_country == country_id)
            )
        ]

    def fetch_country_only_pois(self, country_id, avoid_categories):
        return [
            poi for poi, poi_country in self.pois
            if poi.city_id is None and poi_country == country_id and self._allowed(poi, avoid_categories)
        ]

    def fetch_cities_with_poi_counts(self, country_id, avoid_categories):
        counts = []
        for city_id, (name, city_country) in self.cities.items():
            if city_country != country_id:
                continue
            count = len(self.fetch_city_pois(city_id, avoid_categories))
            if count:
                counts.append(CityPoiCount(city_id, name, country_id, self.country_names.get(country_id, ''), count))
        return sorted(counts, key=lambda city: -city.poi_count)

    def fetch_destination_feature_rows(self, filters):
        return []

    def fetch_sample_attractions(self, ids, scope, per_destination=5):
        return {}


class POIPoolTest(SimpleTestCase):
    """Test cases for POIPool extraction"""

    def setUp(self):
        self.pool = POIPool([
            make_poi(1, 'park'),
            make_poi(2, 'museum'),
            make_poi(3, 'park'),
            make_poi(4, 'museum'),
            make_poi(5, 'beach'),
        ])

    def test_extract_preferred_takes_matching_first(self):
        picked = self.pool.extract_preferred(['museum'], 1)
        self.assertEqual([poi.poi_id for poi in picked], [2])
        # leftover matching POIs move ahead of the rest
        self.assertEqual([poi.poi_id for poi in self.pool.snapshot()], [4, 1, 3, 5])

    def test_extract_preferred_never_takes_non_matching(self):
        picked = self.pool.extract_preferred(['museum'], 5)
        self.assertEqual([poi.poi_id for poi in picked], [2, 4])
        self.assertEqual(len(self.pool), 3)

    def test_extract_any_keeps_pool_order(self):
        picked = self.pool.extract_any(2)
        self.assertEqual([poi.poi_id for poi in picked], [1, 2])
        self.assertEqual([poi.poi_id for poi in self.pool.snapshot()], [3, 4, 5])

    def test_underflow_returns_what_is_left(self):
        self.assertEqual(len(self.pool.extract_any(10)), 5)
        self.assertEqual(self.pool.extract_any(3), [])
        self.assertEqual(self.pool.extract_preferred(['park'], 3), [])
        self.assertFalse(self.pool)

    def test_extracted_poi_leaves_pool(self):
        poi = self.pool.extract_any(1)[0]
        self.assertNotIn(poi, self.pool)


class DayAllocatorTest(SimpleTestCase):
    """Test cases for DayAllocator"""

    def setUp(self):
        self.allocator = DayAllocator()

    def test_preferred_then_any_from_primary(self):
        primary = POIPool([make_poi(1, 'park'), make_poi(2, 'museum'), make_poi(3, 'beach')])
        pois = self.allocator.allocate(primary, None, ['museum'], 2)
        self.assertEqual([poi.poi_id for poi in pois], [2, 1])

    def test_fallback_only_covers_shortfall(self):
        primary = POIPool([make_poi(1, 'park')])
        fallback = POIPool([make_poi(10, 'park'), make_poi(11, 'museum'), make_poi(12, 'museum')])
        pois = self.allocator.allocate(primary, fallback, ['museum'], 2)
        self.assertEqual([poi.poi_id for poi in pois], [1, 11])
        self.assertEqual([poi.poi_id for poi in fallback.snapshot()], [12, 10])

    def test_fallback_untouched_when_primary_suffices(self):
        primary = POIPool([make_poi(1, 'park'), make_poi(2, 'park')])
        fallback = POIPool([make_poi(10, 'park')])
        self.allocator.allocate(primary, fallback, [], 2)
        self.assertEqual(len(fallback), 1)

    def test_exhausted_pools_give_short_day(self):
        pois = self.allocator.allocate(POIPool(), POIPool(), ['museum'], 3)
        self.assertEqual(pois, [])


class ItineraryBuilderTest(SimpleTestCase):
    """Test cases for ItineraryBuilder"""

    def test_city_mode_follows_daily_preferences(self):
        data_access = InMemoryDataAccess(
            cities={1: ('Florence', 10)},
            pois=[(make_poi(100, 'museum', 1), 10), (make_poi(101, 'park', 1), 10)],
            country_names={10: 'Italy'},
        )
        itinerary = ItineraryBuilder(data_access).build(ItineraryRequest(
            level=Level.CITY,
            city_id=1,
            num_days=2,
            pois_per_day=1,
            preferred_categories_by_day=[['museum'], []],
        ))

        self.assertEqual([poi.poi_id for poi in itinerary.days[0].pois], [100])
        self.assertEqual([poi.poi_id for poi in itinerary.days[1].pois], [101])
        self.assertEqual(itinerary.days[0].category_focus, ['museum'])
        self.assertEqual(itinerary.summary.total_pois, 2)
        self.assertEqual(itinerary.summary.total_cities, 1)
        self.assertEqual(itinerary.summary.categories_used, {'museum', 'park'})

    def test_city_mode_merges_country_only_pois(self):
        data_access = InMemoryDataAccess(
            cities={1: ('Florence', 10), 2: ('Rome', 10)},
            pois=[
                (make_poi(100, 'museum', 1), 10),
                (make_poi(200, 'ruins', 2), 10),
                (make_poi(300, 'lake'), 10),
            ],
        )
        itinerary = ItineraryBuilder(data_access).build(
            ItineraryRequest(level=Level.CITY, city_id=1, num_days=1, pois_per_day=5)
        )
        self.assertEqual([poi.poi_id for poi in itinerary.days[0].pois], [100, 300])

    def test_city_mode_pool_exhaustion_degrades(self):
        data_access = InMemoryDataAccess(
            cities={1: ('Florence', 10)},
            pois=[(make_poi(100, 'museum', 1), 10), (make_poi(101, 'park', 1), 10)],
        )
        itinerary = ItineraryBuilder(data_access).build(
            ItineraryRequest(level=Level.CITY, city_id=1, num_days=3, pois_per_day=1)
        )
        self.assertEqual(len(itinerary.days), 3)
        self.assertEqual(itinerary.days[2].pois, [])
        self.assertEqual(itinerary.summary.total_days, 3)
        self.assertEqual(itinerary.summary.total_pois, 2)

    def test_avoided_categories_never_appear(self):
        data_access = InMemoryDataAccess(
            cities={1: ('Florence', 10)},
            pois=[(make_poi(100, 'zoo', 1), 10), (make_poi(101, 'park', 1), 10)],
        )
        itinerary = ItineraryBuilder(data_access).build(ItineraryRequest(
            level=Level.CITY, city_id=1, num_days=2, pois_per_day=2, avoid_categories=['zoo']
        ))
        self.assertNotIn('zoo', itinerary.summary.categories_used)

    def test_missing_city_raises_not_found(self):
        with self.assertRaises(NotFound):
            ItineraryBuilder(InMemoryDataAccess()).build(
                ItineraryRequest(level=Level.CITY, city_id=42, num_days=2)
            )

    def test_country_mode_distributes_days(self):
        pois = []
        for city_id, count in ((1, 6), (2, 5), (3, 4)):
            pois += [(make_poi(city_id * 100 + i, 'museum', city_id), 10) for i in range(count)]
        data_access = InMemoryDataAccess(
            cities={1: ('Rome', 10), 2: ('Milan', 10), 3: ('Naples', 10)},
            pois=pois,
        )
        itinerary = ItineraryBuilder(data_access).build(
            ItineraryRequest(level=Level.COUNTRY, country_id=10, num_days=7, max_cities=3, pois_per_day=1)
        )

        self.assertEqual([day.city_id for day in itinerary.days], [1, 1, 1, 2, 2, 3, 3])
        self.assertEqual([day.day_number for day in itinerary.days], list(range(1, 8)))
        self.assertEqual(itinerary.summary.total_cities, 3)

    def test_country_mode_defaults_to_half_the_days(self):
        data_access = InMemoryDataAccess(
            cities={1: ('Rome', 10), 2: ('Milan', 10), 3: ('Naples', 10)},
            pois=[(make_poi(city_id, 'museum', city_id), 10) for city_id in (1, 2, 3)],
        )
        itinerary = ItineraryBuilder(data_access).build(
            ItineraryRequest(level=Level.COUNTRY, country_id=10, num_days=3, pois_per_day=1)
        )
        # ceil(3 / 2) = 2 cities
        self.assertEqual(itinerary.summary.total_cities, 2)
        self.assertEqual(len(itinerary.days), 3)

    def test_max_cities_above_num_days_keeps_day_count(self):
        data_access = InMemoryDataAccess(
            cities={city_id: (f"City {city_id}", 10) for city_id in range(1, 6)},
            pois=[(make_poi(city_id, 'museum', city_id), 10) for city_id in range(1, 6)],
        )
        itinerary = ItineraryBuilder(data_access).build(
            ItineraryRequest(level=Level.COUNTRY, country_id=10, num_days=2, max_cities=5, pois_per_day=1)
        )
        self.assertEqual(len(itinerary.days), 2)
        self.assertEqual(itinerary.summary.total_cities, 2)

    def test_country_mode_uses_country_only_fallback(self):
        data_access = InMemoryDataAccess(
            cities={1: ('Rome', 10)},
            pois=[(make_poi(100, 'museum', 1), 10), (make_poi(900, 'lake'), 10)],
        )
        itinerary = ItineraryBuilder(data_access).build(
            ItineraryRequest(level=Level.COUNTRY, country_id=10, num_days=1, pois_per_day=2)
        )
        self.assertEqual([poi.poi_id for poi in itinerary.days[0].pois], [100, 900])

    def test_country_only_itinerary(self):
        data_access = InMemoryDataAccess(
            pois=[(make_poi(poi_id, 'lake'), 10) for poi_id in (900, 901, 902)],
        )
        itinerary = ItineraryBuilder(data_access).build(
            ItineraryRequest(level=Level.COUNTRY, country_id=10, num_days=3, pois_per_day=1)
        )

        self.assertEqual(len(itinerary.days), 3)
        for day in itinerary.days:
            self.assertIsNone(day.city_id)
            self.assertEqual(day.country_id, 10)
        self.assertEqual(itinerary.summary.total_cities, 0)
        self.assertEqual(itinerary.summary.total_pois, 3)

    def test_country_without_pois_raises_not_found(self):
        with self.assertRaises(NotFound):
            ItineraryBuilder(InMemoryDataAccess()).build(
                ItineraryRequest(level=Level.COUNTRY, country_id=10, num_days=3)
            )

    def test_invalid_requests(self):
        builder = ItineraryBuilder(InMemoryDataAccess())
        invalid = [
            ItineraryRequest(level='planet', city_id=1, num_days=2),
            ItineraryRequest(level=Level.CITY, city_id=None, num_days=2),
            ItineraryRequest(level=Level.COUNTRY, city_id=1, num_days=2),
            ItineraryRequest(level=Level.CITY, city_id=1, num_days=0),
        ]
        for request in invalid:
            with self.subTest(request=request):
                with self.assertRaises(InvalidArgument):
                    builder.build(request)

    def test_distribute_days(self):
        self.assertEqual(ItineraryBuilder.distribute_days(7, 3), [3, 2, 2])
        self.assertEqual(ItineraryBuilder.distribute_days(2, 3), [1, 1, 0])
        self.assertEqual(ItineraryBuilder.distribute_days(4, 0), [])

    def test_default_pois_per_day(self):
        data_access = InMemoryDataAccess(
            cities={1: ('Florence', 10)},
            pois=[(make_poi(poi_id, 'museum', 1), 10) for poi_id in range(10)],
        )
        itinerary = ItineraryBuilder(data_access, default_pois_per_day=4).build(
            ItineraryRequest(level=Level.CITY, city_id=1, num_days=1)
        )
        self.assertEqual(len(itinerary.days[0].pois), 4)


class ItinerarySummaryTest(SimpleTestCase):
    def test_empty_summary(self):
        summary = ItinerarySummary.empty()
        self.assertEqual((summary.total_days, summary.total_cities, summary.total_pois), (0, 0, 0))
        self.assertEqual(summary.categories_used, set())


@override_settings(ITINERARY_RANDOMIZE_POIS=False)
class GenerateItineraryAPITest(APITestCase):
    """Test cases for the itinerary endpoint"""

    def setUp(self):
        self.url = reverse('trips:generate-itinerary')
        self.italy = Country.objects.create(name='Italy', alpha_2_code='IT', alpha_3_code='ITA')
        self.rome = City.objects.create(country=self.italy, name='Rome')
        self.milan = City.objects.create(country=self.italy, name='Milan')
        self.colosseum = POI.objects.create(name='Colosseum', primary_category='ruins',
                                            city=self.rome, country=self.italy)
        self.vatican = POI.objects.create(name='Vatican Museums', primary_category='museum',
                                          city=self.rome, country=self.italy)
        self.duomo = POI.objects.create(name='Duomo', primary_category='church',
                                        city=self.milan, country=self.italy)
        self.dolomites = POI.objects.create(name='Dolomites', primary_category='mountain',
                                            country=self.italy)

    def test_city_itinerary(self):
        response = self.client.post(self.url, {
            'level': 'city',
            'cityId': self.rome.id,
            'numDays': 2,
            'poisPerDay': 1,
            'preferredCategoriesByDay': [['museum']],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        days = response.data['itinerary']
        self.assertEqual(len(days), 2)
        self.assertEqual(days[0]['cityName'], 'Rome')
        self.assertEqual(days[0]['countryName'], 'Italy')
        self.assertEqual(days[0]['pois'][0]['poiId'], self.vatican.id)
        self.assertEqual(days[1]['pois'][0]['poiId'], self.colosseum.id)
        self.assertEqual(response.data['summary']['totalPois'], 2)
        self.assertEqual(response.data['summary']['categoriesUsed'], ['museum', 'ruins'])

    def test_country_itinerary(self):
        response = self.client.post(self.url, {
            'level': 'country',
            'countryId': self.italy.id,
            'numDays': 2,
            'maxCities': 2,
            'poisPerDay': 2,
            'avoidCategories': ['mountain'],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        days = response.data['itinerary']
        self.assertEqual([day['cityId'] for day in days], [self.rome.id, self.milan.id])
        self.assertEqual(response.data['summary']['totalCities'], 2)
        self.assertNotIn('mountain', response.data['summary']['categoriesUsed'])

    def test_invalid_level(self):
        response = self.client.post(self.url, {'level': 'planet', 'numDays': 2}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], "level must be either 'city' or 'country'.")
        self.assertEqual(response.data['itinerary'], [])
        self.assertEqual(response.data['summary']['totalDays'], 0)

    def test_non_integer_num_days(self):
        response = self.client.post(self.url, {
            'level': 'city', 'cityId': self.rome.id, 'numDays': 'three'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'numDays must be a positive integer.')

    def test_unknown_city(self):
        response = self.client.post(self.url, {'level': 'city', 'cityId': 999999, 'numDays': 2}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'City not found.')
        self.assertEqual(response.data['itinerary'], [])

    @patch.object(OrmDestinationDataAccess, 'fetch_city_info', side_effect=DataAccessFailure())
    def test_data_access_failure(self, mock_fetch):
        response = self.client.post(self.url, {'level': 'city', 'cityId': self.rome.id, 'numDays': 2}, format='json')

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data['error'], 'Database query failed')
        self.assertEqual(response.data['itinerary'], [])
        self.assertEqual(response.data['summary']['totalPois'], 0)
        mock_fetch.assert_called_once()
