import datetime as dt
import unittest

from returns.pipeline import is_successful

from climate_monitoring.internal import entities

from ._dummy_adaptors import DummyRecordStore
from .city_service import CityService


def _entries(**scored: entities.CategoryEntry) -> list[entities.CategoryEntry]:
    return [scored.get(c.value, entities.CategoryEntry()) for c in entities.Category]


class TestCityService(unittest.TestCase):
    """Test the business methods of the CityService."""

    store: DummyRecordStore
    service: CityService

    def setUp(self) -> None:
        self.store = DummyRecordStore()
        self.service = CityService.from_store(self.store)

    def test_from_adaptors(self) -> None:
        result = CityService.from_adaptors(store_adaptor=DummyRecordStore)
        self.assertTrue(is_successful(result), msg=result)

    def test_get_city(self) -> None:
        self.assertEqual("Lugano", self.service.get_city(3).unwrap().name)
        self.assertIsInstance(self.service.get_city(42).failure(), entities.NotFoundError)

    def test_search(self) -> None:
        self.assertEqual([2], [c.id for c in self.service.search_by_name("Varese").unwrap()])
        for name in ["varese", "VARESE", " vArEsE "]:
            with self.subTest(name=name):
                self.assertEqual([2], [c.id for c in self.service.search_by_name(name).unwrap()])
        self.assertEqual([], self.service.search_by_name("Vares").unwrap())
        self.assertEqual([1, 2], [c.id for c in self.service.search_by_country("it").unwrap()])
        self.assertEqual(
            [3], [c.id for c in self.service.search_by_coordinates(46.0101, 8.96).unwrap()],
        )
        self.assertEqual([], self.service.search_by_coordinates(46.0, 8.96).unwrap())

    def test_weather_summary(self) -> None:
        for wind in [
            entities.CategoryEntry(2, "calm"),
            entities.CategoryEntry(None, None),
            entities.CategoryEntry(4, "gusty"),
        ]:
            self.store.add_weather(
                city_id=1, center_id=1, date=dt.date(2024, 1, 1), entries=_entries(wind=wind),
            ).unwrap()
        # Records for other cities are not included
        self.store.add_weather(
            city_id=2, center_id=1, date=dt.date(2024, 1, 1),
            entries=_entries(wind=entities.CategoryEntry(5, "storm")),
        ).unwrap()

        result = self.service.weather_summary(1)
        self.assertTrue(is_successful(result), msg=result)

        summary = result.unwrap()
        self.assertEqual(3, summary.avg_score("wind"))
        self.assertEqual(2, summary.record_count("wind"))
        self.assertEqual(["calm", "gusty"], summary.comments("wind"))
        self.assertIsNone(summary.avg_score("humidity"))

    def test_weather_summary_without_records(self) -> None:
        for city_id in [1, 42]:
            with self.subTest(city_id=city_id):
                result = self.service.weather_summary(city_id)
                self.assertIsInstance(result.failure(), entities.NotFoundError)


if __name__ == "__main__":
    unittest.main()
