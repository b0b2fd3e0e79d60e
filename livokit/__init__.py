"""SO(3) helpers, filter state, patch scores, log formats, voxel map types and markers for odometry."""

__version__ = "0.1.0"