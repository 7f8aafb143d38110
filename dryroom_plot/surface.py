from __future__ import annotations

from abc import ABC, abstractmethod
import logging
from pathlib import Path

import numpy as np
from PIL import Image
import torch

from dryroom_plot.errors import SurfaceUnavailableError


LOGGER = logging.getLogger(__name__)


class RenderSurface(ABC):
    """Fixed-size RGBA pixel surface owned by a single caller.

    Drawing uses a staged commit: `begin_frame` hands out a scratch canvas and
    `commit_frame` swaps it in, so an aborted draw never leaves partial pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        self.width = width
        self.height = height
        self._revision = 0

    @property
    def revision(self) -> int:
        return self._revision

    def begin_frame(self) -> np.ndarray:
        self._ensure_drawable()
        return np.zeros((self.height, self.width, 4), dtype=np.uint8)

    def commit_frame(self, canvas: np.ndarray) -> None:
        if canvas.dtype != np.uint8 or canvas.shape != (self.height, self.width, 4):
            raise ValueError(f"frame must be uint8 with shape {(self.height, self.width, 4)}, got {canvas.dtype} {canvas.shape}")
        self._ensure_drawable()
        self._store(canvas)
        self._revision += 1
        LOGGER.debug("committed frame revision=%d size=%dx%d", self._revision, self.width, self.height)

    @abstractmethod
    def read_snapshot(self) -> np.ndarray:
        """Copy of the visible pixels as a (H, W, 4) uint8 array."""
        raise NotImplementedError

    @abstractmethod
    def _store(self, canvas: np.ndarray) -> None:
        raise NotImplementedError

    def _ensure_drawable(self) -> None:
        return

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.read_snapshot())

    def save_png(self, path: str | Path) -> Path:
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        self.to_image().save(out, format="PNG")
        return out


class RasterSurface(RenderSurface):
    def __init__(self, width: int, height: int) -> None:
        super().__init__(width, height)
        self._pixels = np.zeros((height, width, 4), dtype=np.uint8)

    def read_snapshot(self) -> np.ndarray:
        return self._pixels.copy()

    def _store(self, canvas: np.ndarray) -> None:
        self._pixels = canvas.copy()


class TensorSurface(RenderSurface):
    """Surface backed by a (H, W, 4) uint8 torch tensor, the window-matrix frame format.

    Only CPU tensors can be drawn to; anything else makes the drawing context
    unavailable and the draw aborts before touching the tensor.
    """

    def __init__(self, tensor: torch.Tensor) -> None:
        if tensor.ndim != 3 or tensor.shape[2] != 4:
            raise ValueError(f"tensor must have shape (H, W, 4), got {tuple(tensor.shape)}")
        super().__init__(width=int(tensor.shape[1]), height=int(tensor.shape[0]))
        self._tensor = tensor

    @classmethod
    def blank(cls, width: int, height: int) -> "TensorSurface":
        return cls(torch.zeros((height, width, 4), dtype=torch.uint8))

    @property
    def tensor(self) -> torch.Tensor:
        return self._tensor

    def read_snapshot(self) -> np.ndarray:
        return self._tensor.detach().cpu().numpy().copy()

    def _ensure_drawable(self) -> None:
        if self._tensor.device.type != "cpu":
            raise SurfaceUnavailableError(f"cannot draw to tensor on device {self._tensor.device}")
        if self._tensor.dtype != torch.uint8:
            raise SurfaceUnavailableError(f"cannot draw to tensor of dtype {self._tensor.dtype}")

    def _store(self, canvas: np.ndarray) -> None:
        with torch.no_grad():
            self._tensor.copy_(torch.from_numpy(np.ascontiguousarray(canvas)))
