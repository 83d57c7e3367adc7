"""Tests for frame header parsing and phase partitioning."""

import pytest

from classification.exceptions import InputSizeError, MalformedFrameError
from classification.models import CaptureDirection
from classification.partitioner import build_frames, parse_frame_header, partition_frames

from conftest import TIMESTAMP, make_uploads


class TestParseFrameHeader:
    """Tests for parse_frame_header."""

    def test_parses_all_fields(self):
        header = parse_frame_header("frame_1700000000_3_IN.jpg")
        assert header.timestamp == 1700000000
        assert header.sequence_index == 3
        assert header.direction is CaptureDirection.INTO_FRIDGE

    def test_without_extension(self):
        header = parse_frame_header("cam_1700000000_0_OUT")
        assert header.direction is CaptureDirection.OUT_OF_FRIDGE

    def test_dot_in_prefix(self):
        header = parse_frame_header("cam.v2_1700000000_3_IN")
        assert header.timestamp == 1700000000
        assert header.sequence_index == 3
        assert header.direction is CaptureDirection.INTO_FRIDGE

    def test_dot_in_prefix_with_extension(self):
        header = parse_frame_header("cam.v2_1700000000_4_OUT.jpeg")
        assert header.direction is CaptureDirection.OUT_OF_FRIDGE

    def test_extra_fields_are_ignored(self):
        header = parse_frame_header("cam_1700000000_2_OUT_left.png")
        assert header.direction is CaptureDirection.OUT_OF_FRIDGE
        assert header.sequence_index == 2

    @pytest.mark.parametrize("name", [
        "",
        "frame.jpg",
        "frame_1700000000_1.jpg",
        "frame_notatime_1_IN.jpg",
        "frame_1700000000_x_IN.jpg",
        "frame_1700000000_1_SIDEWAYS.jpg",
        "frame_1700000000_1_in.jpg",
    ])
    def test_rejects_malformed_names(self, name):
        with pytest.raises(MalformedFrameError):
            parse_frame_header(name)


class TestBuildFrames:
    """Tests for build_frames."""

    def test_keeps_upload_order_and_bytes(self):
        frames = build_frames(make_uploads(2, 1))
        assert [f.name for f in frames] == [
            f"frame_{TIMESTAMP}_0_IN.jpg",
            f"frame_{TIMESTAMP}_1_IN.jpg",
            f"frame_{TIMESTAMP}_0_OUT.jpg",
        ]
        assert frames[2].image == b"OUT-0"

    def test_rejects_mixed_timestamps(self):
        uploads = make_uploads(1, 0) + make_uploads(0, 1, timestamp=TIMESTAMP + 5)
        with pytest.raises(MalformedFrameError) as exc_info:
            build_frames(uploads)
        assert "differs from event timestamp" in str(exc_info.value)

    def test_empty_upload(self):
        assert build_frames([]) == []


class TestPartitionFrames:
    """Tests for partition_frames."""

    def test_balanced_split(self):
        into_fridge, out_of_fridge = partition_frames(build_frames(make_uploads()), 5)
        assert len(into_fridge) == 5
        assert len(out_of_fridge) == 5
        assert all(f.direction is CaptureDirection.INTO_FRIDGE for f in into_fridge)
        assert all(f.direction is CaptureDirection.OUT_OF_FRIDGE for f in out_of_fridge)

    def test_interleaved_upload_is_grouped_and_sorted(self):
        uploads = make_uploads()
        interleaved = [u for pair in zip(reversed(uploads[:5]), uploads[5:]) for u in pair]
        into_fridge, out_of_fridge = partition_frames(build_frames(interleaved), 5)
        assert [f.sequence_index for f in into_fridge] == [0, 1, 2, 3, 4]
        assert [f.sequence_index for f in out_of_fridge] == [0, 1, 2, 3, 4]

    def test_nine_frames_is_input_size_error(self):
        with pytest.raises(InputSizeError) as exc_info:
            partition_frames(build_frames(make_uploads(5, 4)), 5)
        assert exc_info.value.expected == 10
        assert exc_info.value.received == 9

    def test_too_many_frames(self):
        with pytest.raises(InputSizeError):
            partition_frames(build_frames(make_uploads(6, 5)), 5)

    def test_unbalanced_phases(self):
        with pytest.raises(InputSizeError) as exc_info:
            partition_frames(build_frames(make_uploads(6, 4)), 5)
        assert "6 IN and 4 OUT" in str(exc_info.value)

    def test_custom_frames_per_action(self):
        into_fridge, out_of_fridge = partition_frames(build_frames(make_uploads(3, 3)), 3)
        assert len(into_fridge) == len(out_of_fridge) == 3
