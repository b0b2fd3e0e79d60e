# livokit

Building blocks for LiDAR-inertial-visual odometry, written with NumPy.

## Contents

- `livokit.so3` provides rotation helpers: `skew`, `exp_map(ang, dt=1.0)`, `exp_components(v1, v2, v3)`, `log_map` and `rot_to_euler`.
- `livokit.states` holds the filter state `StatesGroup`. A state supports `state + delta` and `state += delta`, where `delta` is a 19-vector. `state_a - state_b` returns such a vector. The module also has `copy()`, `reset_pose()`, the `Pose6D` record and its builder `set_pose6d`, `PointWithVar`, and the enums `LidarType`, `SlamMode` and `EkfState`.
- `livokit.math_utils` has the projection helpers `project2d`, `unproject2d`, `project3d` and `unproject3d`. It also has `sqew`, `norm_max`, `get_median`, the pyramid scaling functions `pyr_from_zero_d` and `pyr_from_zero_2d`, and the 2x6 Jacobian `frame_jac_xyz2uv`.
- `livokit.patch_score` has `ZMSSD(half_patch_size, ref_patch)`, the zero-mean sum of squared differences between 8-bit patches. Use it as follows:
  - The `threshold` property gives the score above which two patches count as different.
  - `compute_score(cur_patch, stride=None)` accepts a flat patch, a 2-D image, or a flat buffer read row by row with `stride`.
- `livokit.file_formats` has whitespace-separated text records: `ImuRotvelLinacc`, `PoseStamped` and `ImageNameAndPose`. Each record has a `parse(tokens)` class method, and `str()` writes it back as a line. `FileReader(path, entry_type)` reads such records one after another:
  - It is a context manager and an iterator.
  - It provides `skip`, `skip_comments`, `next`, `read_all_entries` and `close`.
- `livokit.voxel_map` holds the voxel map data types: `VoxelMapConfig`, `PointToPlane`, `VoxelPlane`, `DsPoint` and `VoxelOctoTree`. `VoxelOctoTree.collect_points()` gathers the points stored in its leaves. `VoxelLocation` is a hashable integer voxel key.
- `livokit.preprocess` has the point classification enums `LidarFeature`, `Surround` and `EJump`, the per-point record `OrgType`, and `is_valid`.
- `livokit.sample` has `Sample(seed=None)`, a seedable source of random values:
  - `uniform_int(low, high)` returns an integer, with both ends included.
  - `uniform()` returns a value in [0, 1).
  - `gaussian(stddev)` returns zero-mean noise.
  - `seed(value)` and `set_time_based_seed()` reseed the source.
- `livokit.markers` builds visualisation `Marker`s and `TransformStamped`s. Each marker is handed, as a copy, to a `publish` callable that you supply, and the published copies are returned. The functions are:
  - `publish_point_marker`
  - `publish_line_marker`
  - `publish_arrow_marker`
  - `publish_hexacopter_marker`
  - `publish_camera_marker`
  - `publish_frame_marker`

  `publish_tf_transform` turns a rotation matrix and a translation into a transform and passes it to a `broadcaster` callable.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
import numpy as np
from livokit.so3 import exp_map, log_map
from livokit.states import StatesGroup
from livokit.markers import publish_point_marker

rot = exp_map(np.array([0.0, 0.0, 0.5]))
print(log_map(rot))          # approximately [0, 0, 0.5]

state = StatesGroup()
delta = np.zeros(19)
delta[3:6] = [1.0, 2.0, 3.0]
moved = state + delta
print(moved - state)         # recovers delta

sent = []
publish_point_marker(sent.append, moved.pos_end, "poses", 0.0, 1, 0, 0.1, (1.0, 0.0, 0.0))
print(sent[0].position)      # (1.0, 2.0, 3.0)
```

## What the package does not do

The package contains data types and helpers. It does not contain a complete odometry pipeline:

- There is no command-line program.
- There are no camera models.
- There is no image interpolation.
- There is no least-squares solver.
- There is no scan preprocessing beyond the classification types.
- There is no plane fitting and no state estimation over the voxel map.

Markers and transforms are plain Python objects. Sending them to a viewer or a message bus is up to the callables you pass in.