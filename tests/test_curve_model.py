"""
Tests for the CurveModel control point editor.

Tests cover:
- Default identity point set
- Adding points with x-epsilon rejection
- Updating points with clamping and re-sorting
- Removing points with the two-point floor
- Lookup table recomputation
- Serialization and malformed input fallback
"""

import unittest

from BB_Libs.CurvesLib.curve_lut import identity_lut
from BB_Libs.CurvesLib.curve_model import (
    ControlPoint,
    CurveModel,
    default_points,
    deserialize_points,
    serialize_points,
)


class TestCurveModelDefaults(unittest.TestCase):
    """Test the initial state of a curve."""

    def test_default_points(self):
        curve = CurveModel()

        self.assertEqual(len(curve), 2)
        self.assertEqual(curve.points, default_points())
        self.assertEqual([(p.x, p.y) for p in curve.points], [(0, 0), (255, 255)])

    def test_default_lut_is_identity(self):
        curve = CurveModel()
        self.assertEqual(curve.lut, identity_lut())
        self.assertEqual(curve.compute_lut(), identity_lut())

    def test_too_few_points_fall_back_to_defaults(self):
        curve = CurveModel([ControlPoint("only", 10, 10)])
        self.assertEqual(curve.points, default_points())

    def test_constructor_sorts_and_clamps(self):
        curve = CurveModel([
            ControlPoint("b", 300, 128),
            ControlPoint("a", -5, 400),
        ])
        self.assertEqual([(p.id, p.x, p.y) for p in curve.points], [("a", 0, 255), ("b", 255, 128)])


class TestAddPoint(unittest.TestCase):
    """Test CurveModel.add_point."""

    def setUp(self):
        self.curve = CurveModel()

    def test_add_point_inserts_sorted(self):
        high = self.curve.add_point(200, 220)
        low = self.curve.add_point(60, 30)

        self.assertIsNotNone(high)
        self.assertIsNotNone(low)
        self.assertEqual([p.x for p in self.curve.points], [0, 60, 200, 255])

    def test_add_point_generates_unique_ids(self):
        first = self.curve.add_point(60, 30)
        second = self.curve.add_point(120, 130)
        self.assertNotEqual(first.id, second.id)
        self.assertNotIn(first.id, ("start", "end"))

    def test_add_point_within_epsilon_is_rejected(self):
        self.assertIsNone(self.curve.add_point(4, 100))
        self.assertIsNone(self.curve.add_point(251, 100))
        self.assertEqual(len(self.curve), 2)

    def test_add_point_at_epsilon_is_accepted(self):
        self.assertIsNotNone(self.curve.add_point(5, 100))
        self.assertEqual(len(self.curve), 3)

    def test_add_point_out_of_range_is_clamped_before_check(self):
        """x=300 clamps onto the end point and is rejected."""
        self.assertIsNone(self.curve.add_point(300, 10))
        self.assertEqual(len(self.curve), 2)

    def test_add_point_updates_lut(self):
        self.curve.add_point(128, 200)
        self.assertEqual(self.curve.lut[128], 200)
        self.assertEqual(self.curve.lut[0], 0)
        self.assertEqual(self.curve.lut[255], 255)


class TestUpdatePoint(unittest.TestCase):
    """Test CurveModel.update_point."""

    def setUp(self):
        self.curve = CurveModel()
        self.point = self.curve.add_point(128, 128)

    def test_update_moves_point(self):
        self.assertTrue(self.curve.update_point(self.point.id, 100, 180))

        moved = self.curve.get_point(self.point.id)
        self.assertEqual((moved.x, moved.y), (100, 180))
        self.assertEqual(self.curve.lut[100], 180)

    def test_update_clamps_each_coordinate(self):
        self.curve.update_point("start", -20, 300)

        start = self.curve.get_point("start")
        self.assertEqual((start.x, start.y), (0, 255))

    def test_update_resorts_after_crossing(self):
        other = self.curve.add_point(200, 60)
        self.curve.update_point(other.id, 50, 60)

        self.assertEqual([p.id for p in self.curve.points], ["start", other.id, self.point.id, "end"])

    def test_update_allows_crossing_in_y(self):
        self.curve.add_point(64, 250)
        self.curve.update_point(self.point.id, 128, 5)

        lut = self.curve.lut
        self.assertEqual(lut[64], 250)
        self.assertEqual(lut[128], 5)
        self.assertTrue(all(0 <= value <= 255 for value in lut))

    def test_update_onto_existing_x_keeps_lut_valid(self):
        self.curve.update_point(self.point.id, 255, 40)

        lut = self.curve.lut
        self.assertEqual(len(lut), 256)
        self.assertTrue(all(0 <= value <= 255 for value in lut))

    def test_update_rounds_halves_up(self):
        self.curve.update_point(self.point.id, 100.5, 50.5)

        moved = self.curve.get_point(self.point.id)
        self.assertEqual((moved.x, moved.y), (101, 51))

    def test_update_unknown_id_is_noop(self):
        before = self.curve.points
        self.assertFalse(self.curve.update_point("missing", 10, 10))
        self.assertEqual(self.curve.points, before)


class TestRemoveAndReset(unittest.TestCase):
    """Test CurveModel.remove_point and CurveModel.reset."""

    def test_remove_on_two_points_is_noop(self):
        curve = CurveModel()
        self.assertFalse(curve.remove_point("start"))
        self.assertFalse(curve.remove_point("end"))
        self.assertEqual(len(curve), 2)

    def test_remove_added_point(self):
        curve = CurveModel()
        point = curve.add_point(128, 200)

        self.assertTrue(curve.remove_point(point.id))
        self.assertEqual(len(curve), 2)
        self.assertEqual(curve.lut, identity_lut())

    def test_remove_unknown_id(self):
        curve = CurveModel()
        curve.add_point(128, 200)
        self.assertFalse(curve.remove_point("missing"))
        self.assertEqual(len(curve), 3)

    def test_remove_boundary_point_with_three_points(self):
        curve = CurveModel()
        curve.add_point(128, 200)
        self.assertTrue(curve.remove_point("start"))
        self.assertEqual(len(curve), 2)
        self.assertEqual(curve.lut[0], 200)

    def test_remove_deletes_only_one_point(self):
        curve = CurveModel([
            ControlPoint("a", 0, 0),
            ControlPoint("b", 128, 200),
            ControlPoint("end", 255, 255),
        ])
        first = curve.points[0]

        self.assertTrue(curve.remove_point("a"))
        self.assertEqual(len(curve), 2)
        self.assertNotIn(first, curve.points)

    def test_constructor_replaces_repeated_ids(self):
        curve = CurveModel([
            ControlPoint("a", 0, 0),
            ControlPoint("a", 128, 200),
            ControlPoint("end", 255, 255),
        ])

        ids = [point.id for point in curve.points]
        self.assertEqual(len(set(ids)), 3)
        self.assertTrue(curve.remove_point("a"))
        self.assertEqual(len(curve), 2)

    def test_reset_restores_identity(self):
        curve = CurveModel()
        curve.add_point(64, 10)
        curve.add_point(192, 250)

        curve.reset()

        self.assertEqual(curve.points, default_points())
        self.assertEqual(curve.lut, identity_lut())


class TestSerialization(unittest.TestCase):
    """Test serialize/deserialize of point sets."""

    def test_round_trip(self):
        curve = CurveModel()
        curve.add_point(90, 40)

        restored = CurveModel.deserialize(curve.serialize())

        self.assertEqual(restored.points, curve.points)
        self.assertEqual(restored.lut, curve.lut)

    def test_serialize_points_format(self):
        data = serialize_points(default_points())
        self.assertEqual(data, [
            {"id": "start", "x": 0, "y": 0},
            {"id": "end", "x": 255, "y": 255},
        ])

    def test_deserialize_generates_missing_ids(self):
        points = deserialize_points([{"x": 0, "y": 10}, {"x": 255, "y": 200}])
        self.assertEqual(len(points), 2)
        self.assertTrue(all(point.id for point in points))

    def test_deserialize_clamps_values(self):
        points = deserialize_points([{"id": "a", "x": -10, "y": 999}, {"id": "b", "x": 255, "y": 0}])
        self.assertEqual((points[0].x, points[0].y), (0, 255))

    def test_deserialize_rounds_halves_up(self):
        points = deserialize_points([{"id": "a", "x": 0.5, "y": 2.5}, {"id": "b", "x": 255, "y": 0}])
        self.assertEqual((points[0].x, points[0].y), (1, 3))

    def test_deserialize_replaces_repeated_ids(self):
        points = deserialize_points([
            {"id": "a", "x": 0, "y": 0},
            {"id": "a", "x": 128, "y": 200},
            {"id": "end", "x": 255, "y": 255},
        ])

        self.assertEqual(points[0].id, "a")
        self.assertNotEqual(points[1].id, "a")
        self.assertEqual(len({point.id for point in points}), 3)

    def test_removing_restored_point_keeps_two_points(self):
        curve = CurveModel.deserialize([
            {"id": "a", "x": 0, "y": 0},
            {"id": "a", "x": 128, "y": 200},
            {"id": "end", "x": 255, "y": 255},
        ])

        self.assertTrue(curve.remove_point("a"))
        self.assertEqual(len(curve), 2)
        self.assertFalse(curve.remove_point("end"))
        self.assertEqual([(p.x, p.y) for p in curve.points], [(128, 200), (255, 255)])

    def test_malformed_data_returns_none(self):
        for data in (
            None,
            "points",
            {"x": 1, "y": 2},
            [{"id": "a", "x": 0, "y": 0}],
            [{"id": "a", "x": 0, "y": 0}, "bad"],
            [{"id": "a", "x": 0, "y": 0}, {"id": "b", "x": "high", "y": 1}],
            [{"id": "a", "x": 0}, {"id": "b", "x": 255, "y": 255}],
            [{"x": 0, "y": 0}, {"x": float("nan"), "y": 1}],
        ):
            with self.subTest(data=data):
                self.assertIsNone(deserialize_points(data))

    def test_deserialize_malformed_gives_identity_curve(self):
        curve = CurveModel.deserialize([{"x": 0}])
        self.assertEqual(curve.points, default_points())


if __name__ == "__main__":
    unittest.main()
