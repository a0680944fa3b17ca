import random
import unittest

from museumnight.config import DAM_SQUARE, TourSettings
from museumnight.models import Coordinate, Stop
from museumnight.planner import plan_tour


class TestSimulation(unittest.TestCase):
    def test_random_cases(self):
        # Plan a handful of random tours to verify that the pipeline
        # functions end-to-end without raising exceptions.
        rng = random.Random(42)
        settings = TourSettings()
        for _ in range(10):
            n = rng.randint(1, 6)
            stops = []
            for i in range(1, n + 1):
                # random museums around the Amsterdam canal ring
                lat = 52.34 + rng.random() * 0.05
                lng = 4.86 + rng.random() * 0.07
                stops.append(Stop(id=i, name=f"Museum {i}", coords=Coordinate(lat, lng)))
            plan = plan_tour(stops, settings)
            self.assertEqual(len(plan.tour), n + 1)
            self.assertEqual(plan.tour.start, DAM_SQUARE)
            self.assertEqual({s.id for s in plan.tour.visits}, {s.id for s in stops})
            waypoints = plan.link[len(settings.maps_base_url):].split("/")
            self.assertEqual(len(waypoints), n + 1)
            self.assertGreaterEqual(plan.total_minutes, 48 * n)


if __name__ == "__main__":
    unittest.main()
