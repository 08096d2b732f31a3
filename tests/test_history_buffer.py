import pathlib
import sys
import unittest

# Ensure src/ is on path for direct test execution
ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from trackbuddy.core import HistoryBuffer, Point2D, RingBuffer, calculate_capacity  # noqa: E402


class RingBufferTest(unittest.TestCase):
    def test_requires_positive_capacity(self):
        with self.assertRaises(ValueError):
            RingBuffer(0)

    def test_indexing_follows_logical_order_after_wrap(self):
        buf = RingBuffer(3)
        for i in range(5):
            buf.append(i)
        self.assertEqual(buf.to_list(), [2, 3, 4])
        self.assertEqual(buf[0], 2)
        self.assertEqual(buf[-1], 4)
        self.assertTrue(buf.is_full())
        with self.assertRaises(IndexError):
            buf[3]


class HistoryBufferTest(unittest.TestCase):
    def test_capacity_from_rate_and_retention(self):
        self.assertEqual(calculate_capacity(10.0, 1.0), 10)
        self.assertEqual(calculate_capacity(15.0, 2.0), 30)
        # ceil, not round
        self.assertEqual(calculate_capacity(15.0, 1.1), 17)
        self.assertEqual(HistoryBuffer.for_window(15.0, 3.0).capacity, 45)

    def test_capacity_rejects_non_positive_inputs(self):
        with self.assertRaises(ValueError):
            calculate_capacity(0.0, 1.0)
        with self.assertRaises(ValueError):
            calculate_capacity(10.0, -1.0)

    def test_keeps_last_capacity_points_in_order(self):
        buf = HistoryBuffer.for_window(10.0, 1.0)
        points = [Point2D(float(i), float(-i)) for i in range(15)]
        for p in points:
            buf.push(p)

        self.assertEqual(len(buf), 10)
        self.assertEqual(buf.snapshot(), points[5:])
        self.assertEqual(buf.latest(), points[-1])

    def test_len_never_exceeds_capacity(self):
        buf = HistoryBuffer(4)
        for k in range(12):
            buf.push(Point2D(k, k))
            self.assertLessEqual(len(buf), 4)

    def test_snapshot_is_a_copy(self):
        buf = HistoryBuffer(3)
        buf.push(Point2D(1.0, 1.0))
        snap = buf.snapshot()
        buf.push(Point2D(2.0, 2.0))
        self.assertEqual(snap, [Point2D(1.0, 1.0)])

    def test_empty_buffer(self):
        buf = HistoryBuffer(2)
        self.assertEqual(buf.snapshot(), [])
        self.assertIsNone(buf.latest())


if __name__ == "__main__":
    unittest.main()
