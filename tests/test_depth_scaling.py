import unittest

import numpy as np

from utils.depth_scaling import scale_depth_for_display


class DepthScalingTests(unittest.TestCase):

    def _scale(self, values):
        return scale_depth_for_display(np.array(values, dtype=np.uint16)).tolist()

    def test_range_endpoints(self):
        self.assertEqual(self._scale([0, 10000]), [255, 0])

    def test_values_past_range_clamp_to_black(self):
        self.assertEqual(self._scale([10001, 20000, 65535]), [0, 0, 0])

    def test_rounding_near_zero(self):
        # 255 - 19 * 0.0255 = 254.5155 ; 255 - 20 * 0.0255 = 254.49
        self.assertEqual(self._scale([19, 20]), [255, 254])

    def test_midpoint(self):
        self.assertEqual(self._scale([5000]), [128])

    def test_output_is_uint8_with_same_shape(self):
        depth = np.zeros((3, 4), dtype=np.uint16)
        scaled = scale_depth_for_display(depth)
        self.assertEqual(scaled.dtype, np.uint8)
        self.assertEqual(scaled.shape, (3, 4))

    def test_custom_range(self):
        scaled = scale_depth_for_display(np.array([1000], dtype=np.uint16), depth_range_mm=2000)
        self.assertEqual(scaled.tolist(), [128])


if __name__ == "__main__":
    unittest.main()
