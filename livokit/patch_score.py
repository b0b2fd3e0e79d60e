"""Zero-mean sum of squared differences between image patches."""

from __future__ import annotations

import numpy as np


def _as_pixels(values) -> np.ndarray:
    arr = np.asarray(values).astype(np.int64)
    if arr.size and (arr.min() < 0 or arr.max() > 255):
        raise ValueError("patch pixels must lie in 0..255")
    return arr


class ZMSSD:
    """Zero-mean SSD score of square patches of side ``2 * half_patch_size``."""

    def __init__(self, half_patch_size: int, ref_patch):
        if half_patch_size <= 0:
            raise ValueError("half patch size must be positive")
        self.patch_size = 2 * half_patch_size
        self.patch_area = self.patch_size * self.patch_size
        ref = _as_pixels(ref_patch).reshape(-1)
        if ref.size != self.patch_area:
            raise ValueError(f"reference patch must hold {self.patch_area} pixels, got {ref.size}")
        self.ref_patch = ref
        self.sum_a = int(ref.sum())
        self.sum_aa = int((ref * ref).sum())

    @property
    def threshold(self) -> int:
        """Score above which two patches are considered different."""
        return 2000 * self.patch_area

    def _block(self, cur_patch, stride) -> np.ndarray:
        arr = _as_pixels(cur_patch)
        ps = self.patch_size
        if arr.ndim == 2:
            if arr.shape[0] < ps or arr.shape[1] < ps:
                raise ValueError(f"patch must be at least {ps}x{ps}")
            return arr[:ps, :ps].reshape(-1)
        flat = arr.reshape(-1)
        if stride is None:
            if flat.size < self.patch_area:
                raise ValueError(f"patch must hold {self.patch_area} pixels")
            return flat[: self.patch_area]
        if stride < ps:
            raise ValueError("stride must not be smaller than the patch size")
        if flat.size < (ps - 1) * stride + ps:
            raise ValueError("buffer too small for the patch at this stride")
        return np.concatenate([flat[y * stride : y * stride + ps] for y in range(ps)])

    def compute_score(self, cur_patch, stride=None) -> int:
        """Score of ``cur_patch``: a flat patch, a 2-D image, or a buffer read with ``stride``."""
        b = self._block(cur_patch, stride)
        sum_b = int(b.sum())
        sum_bb = int((b * b).sum())
        sum_ab = int((b * self.ref_patch).sum())
        mean_term = (self.sum_a * self.sum_a - 2 * self.sum_a * sum_b + sum_b * sum_b) // self.patch_area
        return self.sum_aa - 2 * sum_ab + sum_bb - mean_term