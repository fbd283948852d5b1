import tempfile
import unittest
from pathlib import Path
from unittest import mock

import numpy as np

from domain.conversion_options import ConversionOptions
from domain.errors import UnsupportedFormatError
from domain.frames import FrameBundle
from domain.pixel_format import PixelFormat
from domain.stream_descriptor import StreamDescriptor
from domain.stream_kind import StreamKind
from tests.fakes import FakeCaptureSource, color_frame, depth_frame, infrared_frame, make_raw
from utils.bag_converter import (
    BagConverter,
    EndReason,
    SessionState,
    is_end_of_recording,
    position_delta,
)
from utils.preview import NullPreview, PreviewSink

STREAMS = [
    StreamDescriptor(StreamKind.COLOR, 0, PixelFormat.RGB8, 2, 2),
    StreamDescriptor(StreamKind.DEPTH, 0, PixelFormat.Z16, 2, 2),
    StreamDescriptor(StreamKind.INFRARED, 1, PixelFormat.Y8, 2, 2),
    StreamDescriptor(StreamKind.INFRARED, 2, PixelFormat.Y8, 2, 2),
]


def _full_bundle(n: int) -> FrameBundle:
    return FrameBundle(position=n, frames=[
        color_frame(n), depth_frame(n), infrared_frame(n, index=1), infrared_frame(n, index=2),
    ])


class PositionDeltaTests(unittest.TestCase):

    def test_forward_and_backward(self):
        self.assertEqual(position_delta(100, 150), 50)
        self.assertEqual(position_delta(200, 50), -150)
        self.assertFalse(is_end_of_recording(100, 100))
        self.assertTrue(is_end_of_recording(200, 50))

    def test_unsigned_counter_overflow_counts_as_forward(self):
        self.assertEqual(position_delta(2 ** 64 - 1, 0), 1)
        self.assertFalse(is_end_of_recording(2 ** 64 - 10, 5))


class BagConverterTests(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.bag = Path(self._tmp.name) / "walk.bag"
        self.root = Path(self._tmp.name) / "walk"

    def tearDown(self):
        self._tmp.cleanup()

    def _converter(self, source, **options):
        return BagConverter(ConversionOptions(self.bag, **options), source=source, preview=NullPreview())

    def test_run_stops_when_position_goes_backwards(self):
        source = FakeCaptureSource(STREAMS, [_full_bundle(n) for n in range(5)], [100, 150, 200, 50])
        converter = self._converter(source)

        summary = converter.run()

        self.assertEqual(source.bundles_pulled, 3)
        self.assertEqual(summary.bundles, 3)
        self.assertIs(summary.end_reason, EndReason.END_OF_RECORDING)
        self.assertEqual(summary.first_position, 100)
        self.assertEqual(summary.last_position, 50)
        self.assertTrue(source.stopped)
        self.assertIs(converter.state, SessionState.TERMINATED)

    def test_every_stream_is_written_per_frame(self):
        source = FakeCaptureSource(STREAMS, [_full_bundle(n) for n in range(3)], [0, 1, 2, 0])
        summary = self._converter(source).run()

        self.assertEqual(sorted(p.name for p in (self.root / "Color").iterdir()),
                         ["000000.jpg", "000001.jpg", "000002.jpg"])
        self.assertEqual(len(list((self.root / "Depth").glob("*.png"))), 3)
        self.assertEqual(len(list((self.root / "Infrared 1").glob("*.jpg"))), 3)
        self.assertEqual(len(list((self.root / "Infrared 2").glob("*.jpg"))), 3)
        self.assertEqual(summary.total_frames, 12)

    def test_source_is_opened_and_all_streams_enabled(self):
        source = FakeCaptureSource(STREAMS, [], [0])
        self._converter(source).run()
        self.assertEqual(source.opened, self.bag)
        self.assertEqual(source.started_with, STREAMS)
        self.assertTrue((self.root / "Infrared 2").is_dir())

    def test_missing_streams_are_skipped(self):
        bundles = [FrameBundle(position=0, frames=[depth_frame(5)])]
        source = FakeCaptureSource(STREAMS, bundles, [0, 0, 0])
        summary = self._converter(source).run()

        self.assertEqual(summary.frames_written, {"Depth": 1})
        self.assertEqual(list((self.root / "Color").iterdir()), [])
        self.assertIs(summary.end_reason, EndReason.END_OF_STREAM)

    def test_end_of_stream_ends_the_run(self):
        source = FakeCaptureSource(STREAMS, [_full_bundle(0)], [0, 1])
        summary = self._converter(source).run()
        self.assertEqual(summary.bundles, 1)
        self.assertIs(summary.end_reason, EndReason.END_OF_STREAM)

    def test_unsupported_format_aborts_the_run(self):
        bad = make_raw(StreamKind.COLOR, PixelFormat.MJPEG, 2, 2, bytes(12))
        bundles = [_full_bundle(0), FrameBundle(position=1, frames=[bad]), _full_bundle(2)]
        source = FakeCaptureSource(STREAMS, bundles, [0, 1, 2, 3])
        converter = self._converter(source)

        with self.assertRaises(UnsupportedFormatError):
            converter.run()

        self.assertEqual(source.bundles_pulled, 2)
        self.assertTrue(source.stopped)
        self.assertIs(converter.state, SessionState.TERMINATED)

    def test_user_quit_ends_the_run(self):
        preview = mock.create_autospec(PreviewSink, instance=True)
        preview.poll_quit.return_value = True
        source = FakeCaptureSource(STREAMS, [_full_bundle(n) for n in range(3)], [0, 1, 2, 3])
        converter = BagConverter(ConversionOptions(self.bag), source=source, preview=preview)

        summary = converter.run()

        self.assertEqual(summary.bundles, 1)
        self.assertIs(summary.end_reason, EndReason.USER_QUIT)
        preview.show.assert_not_called()
        preview.close.assert_called_once()

    def test_display_shows_each_stream_with_scaled_depth(self):
        preview = mock.create_autospec(PreviewSink, instance=True)
        preview.poll_quit.return_value = False
        source = FakeCaptureSource(STREAMS, [_full_bundle(0)], [0, 1])
        converter = BagConverter(ConversionOptions(self.bag, display=True), source=source, preview=preview)

        converter.run()

        shown = {c.args[0]: c.args[1] for c in preview.show.call_args_list}
        self.assertEqual(sorted(shown), ["Color", "Depth", "Infrared 1", "Infrared 2"])
        self.assertEqual(shown["Depth"].dtype, np.uint8)
        self.assertEqual(shown["Color"][0, 0].tolist(), [30, 20, 10])

    def test_scaling_option_writes_8bit_depth(self):
        source = FakeCaptureSource(STREAMS, [FrameBundle(0, [depth_frame(0, value=0)])], [0, 1])
        self._converter(source, scaling=True).run()

        import cv2
        loaded = cv2.imread(str(self.root / "Depth" / "000000.png"), cv2.IMREAD_UNCHANGED)
        self.assertEqual(loaded.dtype, np.uint8)
        self.assertTrue((loaded == 255).all())

    def test_open_failure_still_stops_source(self):
        source = FakeCaptureSource(STREAMS, [], [0])
        source.open = mock.Mock(side_effect=FileNotFoundError("missing"))
        converter = self._converter(source)

        with self.assertRaises(FileNotFoundError):
            converter.run()
        self.assertTrue(source.stopped)
        self.assertFalse(self.root.exists())


if __name__ == "__main__":
    unittest.main()
