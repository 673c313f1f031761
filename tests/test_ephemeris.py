import datetime as dt
import unittest

from hd_core.config import ChartConfig
from hd_core.ephemeris import (
    activations_at,
    asc_mc,
    body_longitudes,
    compute_birth_chart,
    compute_transit_activations,
    julday_utc,
    jd_to_utc,
    local_to_utc,
)
from hd_core.errors import InvalidInputError


def _arc(a: float, b: float) -> float:
    d = abs((a - b) % 360.0)
    return 360.0 - d if d > 180.0 else d


class TestTimeHelpers(unittest.TestCase):
    def test_local_to_utc(self):
        utc = local_to_utc("2000-01-01", "05:30", "Asia/Kolkata")
        self.assertEqual(utc, dt.datetime(2000, 1, 1, 0, 0, tzinfo=dt.UTC))

    def test_bad_zone_and_time(self):
        with self.assertRaises(InvalidInputError):
            local_to_utc("2000-01-01", "12:00", "Mars/Olympus_Mons")
        with self.assertRaises(InvalidInputError):
            local_to_utc("2000-01-01", "25:00", "UTC")
        with self.assertRaises(InvalidInputError):
            local_to_utc("2000-13-01", "12:00", "UTC")
        with self.assertRaises(InvalidInputError):
            local_to_utc("2000-01-01", "noon", "UTC")

    def test_julian_day_round_trip(self):
        dtu = dt.datetime(2000, 1, 1, 12, 0, tzinfo=dt.UTC)
        jd = julday_utc(dtu)
        self.assertAlmostEqual(jd, 2451545.0, places=6)
        back = jd_to_utc(jd)
        self.assertLess(abs((back - dtu).total_seconds()), 1.0)

    def test_naive_datetime_rejected(self):
        with self.assertRaises(InvalidInputError):
            julday_utc(dt.datetime(2000, 1, 1, 12, 0))


class TestEphemeris(unittest.TestCase):
    def setUp(self):
        self.config = ChartConfig()
        self.jd = julday_utc(dt.datetime(2000, 1, 1, 12, 0, tzinfo=dt.UTC))

    def test_sun_at_j2000(self):
        lons = body_longitudes(self.jd, self.config)
        # ~280.37° tropical
        self.assertAlmostEqual(lons["Sun"], 280.37, delta=0.05)

    def test_derived_bodies_are_opposite(self):
        acts = activations_at(self.jd, None, self.config)
        self.assertAlmostEqual(_arc(acts["Sun"].longitude, acts["Earth"].longitude), 180.0, places=6)
        self.assertAlmostEqual(_arc(acts["NorthNode"].longitude, acts["SouthNode"].longitude), 180.0, places=6)
        self.assertEqual(acts["Sun"].gate, 38)
        self.assertIsNone(acts["Sun"].house)

    def test_cosmetic_bodies_can_be_disabled(self):
        cfg = ChartConfig(include_cosmetic_bodies=False)
        lons = body_longitudes(self.jd, cfg)
        self.assertNotIn("Chiron", lons)
        self.assertNotIn("Black Moon Lilith", lons)

    def test_houses(self):
        ascmc = asc_mc(self.jd, 51.5, -0.13, self.config)
        self.assertIsNotNone(ascmc)
        self.assertEqual(len(ascmc), 4)
        acts = activations_at(self.jd, ascmc[0], self.config)
        for act in acts.values():
            self.assertTrue(1 <= act.house <= 12)


class TestBirthChart(unittest.TestCase):
    def test_design_is_88_degrees_of_sun_earlier(self):
        data = compute_birth_chart("1991-07-14", "22:35:00", "Asia/Kolkata", 19.076, 72.8777)
        p_sun = data.chart.personality["Sun"].longitude
        d_sun = data.chart.design["Sun"].longitude
        self.assertAlmostEqual(_arc(p_sun, d_sun), 88.0, delta=0.01)

        days = (data.birth_utc - data.design_utc).total_seconds() / 86400.0
        self.assertGreater(days, 84.0)
        self.assertLess(days, 94.0)
        self.assertEqual(data.birth_utc, dt.datetime(1991, 7, 14, 17, 5, tzinfo=dt.UTC))

    def test_transit_activations(self):
        acts, ascmc = compute_transit_activations("2025-11-01", "12:00")
        self.assertIn("Sun", acts)
        self.assertIn("SouthNode", acts)
        if ascmc is not None:
            self.assertIsNotNone(acts["Sun"].house)


if __name__ == "__main__":
    unittest.main()
