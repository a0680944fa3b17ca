import unittest
from datetime import date, time

from museumnight.schedule import format_duration, parse_time_string, report

TOUR_DATE = date(2024, 10, 5)


class TestReport(unittest.TestCase):
    def test_feasible_tour(self):
        summary = report(125, time(19, 0), tour_date=TOUR_DATE)
        self.assertTrue(summary.feasible)
        self.assertEqual(summary.start, "19:00")
        self.assertEqual(summary.end, "21:05")
        self.assertEqual(summary.duration, "2h 5m")
        self.assertEqual(summary.text, "Estimated tour time: 2h 5m\nStart: 19:00\nEnd: 21:05")

    def test_ending_at_two_is_infeasible(self):
        summary = report(420, time(19, 0), tour_date=TOUR_DATE)
        self.assertFalse(summary.feasible)
        self.assertEqual(summary.end, "02:00")
        self.assertIn("extend past 02:00", summary.text)
        self.assertIn("reducing the number of museums", summary.text)

    def test_last_minute_before_closing(self):
        summary = report(419, time(19, 0), tour_date=TOUR_DATE)
        self.assertTrue(summary.feasible)
        self.assertEqual(summary.end, "01:59")

    def test_after_midnight_is_feasible(self):
        self.assertTrue(report(300, time(19, 0), tour_date=TOUR_DATE).feasible)

    def test_empty_tour(self):
        summary = report(0, time(19, 0), tour_date=TOUR_DATE)
        self.assertTrue(summary.feasible)
        self.assertEqual(summary.duration, "0h 0m")

    def test_later_start(self):
        self.assertFalse(report(360, time(20, 0), tour_date=TOUR_DATE).feasible)
        self.assertTrue(report(359, time(20, 0), tour_date=TOUR_DATE).feasible)

    def test_tour_wrapping_into_next_evening(self):
        summary = report(24 * 60 + 30, time(19, 0), tour_date=TOUR_DATE)
        self.assertEqual(summary.end, "19:30")
        self.assertFalse(summary.feasible)

    def test_custom_window(self):
        summary = report(
            150,
            time(18, 0),
            window_start=time(18, 0),
            window_end=time(20, 0),
            tour_date=TOUR_DATE,
        )
        self.assertFalse(summary.feasible)
        self.assertIn("extend past 20:00", summary.message)

    def test_window_within_one_day(self):
        kwargs = dict(window_start=time(10, 0), window_end=time(17, 0), tour_date=TOUR_DATE)
        self.assertTrue(report(300, time(10, 0), **kwargs).feasible)
        self.assertFalse(report(420, time(10, 0), **kwargs).feasible)

    def test_defaults_to_today(self):
        self.assertEqual(report(60, time(19, 0)).end, "20:00")


class TestFormatting(unittest.TestCase):
    def test_format_duration(self):
        self.assertEqual(format_duration(0), "0h 0m")
        self.assertEqual(format_duration(59), "0h 59m")
        self.assertEqual(format_duration(165), "2h 45m")

    def test_parse_time_string(self):
        self.assertEqual(parse_time_string("19:00"), time(19, 0))
        self.assertEqual(parse_time_string(" 2:05 "), time(2, 5))


if __name__ == "__main__":
    unittest.main()
