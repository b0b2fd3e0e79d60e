import numpy as np
import pytest

from livokit.file_formats import FileReader, ImageNameAndPose, ImuRotvelLinacc, PoseStamped


def test_imu_format():
    entry = ImuRotvelLinacc(1.5, np.array([1.0, 2.0, 3.0]), np.array([4.0, 5.0, 6.0]))
    assert str(entry) == "1.5 1 2 3 4 5 6\n"


def test_imu_round_trip():
    entry = ImuRotvelLinacc(12.25, np.array([0.5, -0.25, 3.0]), np.array([9.5, 0.0, -1.0]))
    back = ImuRotvelLinacc.parse(str(entry).split())
    assert back.timestamp == entry.timestamp
    assert np.allclose(back.w, entry.w)
    assert np.allclose(back.a, entry.a)


def test_pose_quaternion_is_normalized():
    pose = PoseStamped.parse("3 1 2 3 0 0 0 2".split())
    assert np.allclose(pose.q, [0.0, 0.0, 0.0, 1.0])
    assert np.allclose(pose.t, [1.0, 2.0, 3.0])


def test_pose_round_trip_has_trailing_space():
    pose = PoseStamped(2.0, np.array([1.0, 0.5, -2.0]), np.array([0.0, 0.6, 0.0, 0.8]))
    text = str(pose)
    assert text.endswith(" \n")
    back = PoseStamped.parse(text.split())
    assert np.allclose(back.q, pose.q)
    assert np.allclose(back.t, pose.t)


def test_image_name_and_pose_round_trip():
    entry = ImageNameAndPose(4.5, "img_0001.png", np.array([1.0, 2.0, 3.0]), np.array([0.6, 0.0, 0.0, 0.8]))
    back = ImageNameAndPose.parse(str(entry).split())
    assert back.image_name == "img_0001.png"
    assert back.timestamp == entry.timestamp
    assert np.allclose(back.q, entry.q)


def test_incomplete_entry_raises():
    with pytest.raises(ValueError):
        ImuRotvelLinacc.parse("1 2 3".split())


def test_reader_skips_comments_and_reads_all(tmp_path):
    path = tmp_path / "imu.txt"
    path.write_text("# header\n# more\n1 0 0 0 0 0 9.81\n2 0 0 1 0 0 9.81\n")
    with FileReader(path, ImuRotvelLinacc) as reader:
        reader.skip_comments()
        entries = reader.read_all_entries()
    assert [e.timestamp for e in entries] == [1.0, 2.0]
    assert entries[1].w[2] == 1.0


def test_reader_skip_lines_and_end(tmp_path):
    path = tmp_path / "poses.txt"
    path.write_text("timestamp tx ty tz qx qy qz qw\n5 1 2 3 0 0 0 1\n")
    with FileReader(path, PoseStamped) as reader:
        reader.skip(1)
        assert reader.next() is True
        assert reader.entry.timestamp == 5.0
        assert reader.has_entry
        assert reader.next() is False


def test_reader_empty_file_yields_nothing(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_text("\n\n")
    with FileReader(path, ImuRotvelLinacc) as reader:
        assert reader.read_all_entries() == []


def test_reader_truncated_entry_raises(tmp_path):
    path = tmp_path / "bad.txt"
    path.write_text("1 0 0 0 0 0 9.81\n2 0 0\n")
    with FileReader(path, ImuRotvelLinacc) as reader:
        assert reader.next()
        with pytest.raises(ValueError):
            reader.next()