import unittest
from unittest import mock

from geopy.exc import GeocoderServiceError, GeocoderTimedOut
from geopy.extra.rate_limiter import RateLimiter

from museumnight import geocode
from museumnight.geocode import MIN_DELAY_SECONDS, fill_missing_coordinates, geocode_address
from museumnight.models import Coordinate, Stop


def location(lat, lng):
    return mock.Mock(latitude=lat, longitude=lng)


class TestGeocodeAddress(unittest.TestCase):
    def setUp(self):
        geocode_address.cache_clear()
        patcher = mock.patch.object(geocode, "_get_geocode")
        self.geocode = patcher.start().return_value
        self.addCleanup(patcher.stop)
        self.addCleanup(geocode_address.cache_clear)

    def test_found(self):
        self.geocode.return_value = location(52.36, 4.8852)
        self.assertEqual(geocode_address("Museumstraat 1"), Coordinate(52.36, 4.8852))

    def test_not_found(self):
        self.geocode.return_value = None
        self.assertIsNone(geocode_address("Nowhere 1"))

    def test_results_are_cached(self):
        self.geocode.return_value = location(52.36, 4.8852)
        geocode_address("Museumstraat 1")
        geocode_address("Museumstraat 1")
        self.assertEqual(self.geocode.call_count, 1)

    def test_timeout_is_retried(self):
        self.geocode.side_effect = [GeocoderTimedOut(), location(52.37, 4.89)]
        self.assertEqual(geocode_address("Dam 1"), Coordinate(52.37, 4.89))
        self.assertEqual(self.geocode.call_args.kwargs["timeout"], 20)

    def test_service_error(self):
        self.geocode.side_effect = GeocoderServiceError("down")
        with self.assertLogs("museumnight.geocode", level="WARNING"):
            self.assertIsNone(geocode_address("Dam 1"))


class TestRateLimiting(unittest.TestCase):
    def setUp(self):
        patcher = mock.patch.object(geocode, "_geocode", None)
        patcher.start()
        self.addCleanup(patcher.stop)

    @mock.patch.object(geocode, "Nominatim")
    def test_nominatim_is_rate_limited(self, mock_nominatim):
        limited = geocode._get_geocode()
        self.assertIsInstance(limited, RateLimiter)
        self.assertEqual(limited.min_delay_seconds, MIN_DELAY_SECONDS)
        self.assertGreaterEqual(MIN_DELAY_SECONDS, 1.0)
        self.assertIs(geocode._get_geocode(), limited)

    @mock.patch.object(geocode, "Nominatim")
    def test_errors_reach_the_caller(self, mock_nominatim):
        geocode_address.cache_clear()
        self.addCleanup(geocode_address.cache_clear)
        mock_nominatim.return_value.geocode.side_effect = GeocoderServiceError("down")
        with self.assertLogs("museumnight.geocode", level="WARNING"):
            self.assertIsNone(geocode_address("Dam 1"))
        self.assertEqual(mock_nominatim.return_value.geocode.call_count, 1)


class TestFillMissingCoordinates(unittest.TestCase):
    @mock.patch.object(geocode, "geocode_address")
    def test_fill(self, mock_geocode):
        mock_geocode.side_effect = lambda address: Coordinate(52.36, 4.88) if address == "Known" else None
        located = Stop(id=1, name="Located", coords=Coordinate(52.37, 4.89))
        known = Stop(id=2, name="Known address", address="Known")
        unknown = Stop(id=3, name="Unknown address", address="Unknown")
        bare = Stop(id=4, name="No address")
        filled = fill_missing_coordinates([located, known, unknown, bare])
        self.assertEqual(filled[0], located)
        self.assertEqual(filled[1].coords, Coordinate(52.36, 4.88))
        self.assertEqual(filled[1].name, "Known address")
        self.assertIsNone(filled[2].coords)
        self.assertIs(filled[3], bare)
        self.assertEqual(mock_geocode.call_count, 2)


if __name__ == "__main__":
    unittest.main()
