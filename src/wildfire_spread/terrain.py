"""Landscape layers read by the simulator, and GeoTIFF input/output."""

import logging
from typing import NamedTuple, Sequence

import numpy as np
import rasterio
from affine import Affine

from .constants import LAYER_NAMES, NON_BURNABLE_CLASS
from .errors import LandscapeError

logger = logging.getLogger(__name__)


class TerrainAttributes(NamedTuple):
    vegetation: int
    elevation: float
    wind_direction: float  # radians, direction the wind blows from
    wind_speed: float  # m/s


def _read_only(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


class Landscape:
    """Read-only per-cell vegetation and terrain layers.

    Keep in mind that cells are addressed as (row, col), like numpy arrays,
    while raster images are usually described as (width, height).
    """

    def __init__(
        self,
        vegetation,
        elevation,
        wind_direction,
        wind_speed,
        *,
        crs=None,
        transform: Affine | None = None,
    ):
        layers = {
            "vegetation": np.asarray(vegetation),
            "elevation": np.asarray(elevation, dtype=np.float64),
            "wind_direction": np.asarray(wind_direction, dtype=np.float64),
            "wind_speed": np.asarray(wind_speed, dtype=np.float64),
        }
        shape = layers["vegetation"].shape
        for name, layer in layers.items():
            if layer.ndim != 2:
                logger.error(f"Layer {name} must be 2D, got shape {layer.shape}")
                raise LandscapeError(f"Layer {name} must be 2D (rows x cols), got shape={layer.shape}")
            if layer.shape != shape:
                logger.error(f"Layer {name} has shape {layer.shape}, expected {shape}")
                raise LandscapeError(f"Layer shape mismatch: {name}={layer.shape} vegetation={shape}")

        veg = layers["vegetation"]
        if not np.issubdtype(veg.dtype, np.integer):
            if not np.all(np.isfinite(veg)) or np.any(veg != np.round(veg)):
                logger.error("Vegetation layer holds fractional or non-finite classes")
                raise LandscapeError("Vegetation classes must be whole numbers")
        # Copies, so that callers can't mutate the layers under a running simulation
        self.vegetation = _read_only(veg.astype(np.int64))
        self.elevation = _read_only(layers["elevation"].copy())
        self.wind_direction = _read_only(layers["wind_direction"].copy())
        self.wind_speed = _read_only(layers["wind_speed"].copy())
        self.crs = crs
        self.transform = transform

    @classmethod
    def from_cube(cls, cube, layer_names: Sequence[str] | None = None, **kwargs) -> "Landscape":
        """
        Build a landscape from a rows x cols x layers array.

        Without `layer_names` the layers are taken positionally: vegetation
        first, then elevation, wind direction and wind speed. Extra layers are
        ignored.
        """
        cube = np.asarray(cube)
        if cube.ndim != 3:
            logger.error(f"Landscape cube has shape {cube.shape}")
            raise LandscapeError(f"Landscape cube must be 3D (rows x cols x layers), got shape={cube.shape}")

        if layer_names is None:
            if cube.shape[2] < len(LAYER_NAMES):
                logger.error(f"Landscape cube has only {cube.shape[2]} layers")
                raise LandscapeError(
                    f"Landscape needs at least {len(LAYER_NAMES)} layers, got {cube.shape[2]}"
                )
            indices = range(len(LAYER_NAMES))
        else:
            names = list(layer_names)
            if len(names) != cube.shape[2]:
                logger.error(f"Got {len(names)} layer names for {cube.shape[2]} layers")
                raise LandscapeError(f"Got {len(names)} layer names for {cube.shape[2]} layers")
            missing = [name for name in LAYER_NAMES if name not in names]
            if missing:
                logger.error(f"Missing landscape layers {missing}")
                raise LandscapeError(f"Missing landscape layers: {', '.join(missing)}")
            indices = [names.index(name) for name in LAYER_NAMES]

        return cls(*(cube[:, :, i] for i in indices), **kwargs)

    @classmethod
    def from_raster(cls, tiff_path) -> "Landscape":
        """
        Build a landscape from a multi-band GeoTIFF.

        Bands whose descriptions match the layer names are picked by name,
        otherwise the first four bands are used in the standard order.
        """
        with rasterio.open(tiff_path) as dataset:
            bands = dataset.read()
            descriptions = list(dataset.descriptions)
            crs = dataset.crs
            transform = dataset.transform

        cube = np.moveaxis(bands, 0, -1)
        layer_names = descriptions if all(name in descriptions for name in LAYER_NAMES) else None
        landscape = cls.from_cube(cube, layer_names, crs=crs, transform=transform)
        logger.info(f"Loaded landscape {landscape.n_rows}x{landscape.n_cols} from {tiff_path}")
        return landscape

    @property
    def shape(self) -> tuple[int, int]:
        return self.vegetation.shape

    @property
    def n_rows(self) -> int:
        return self.vegetation.shape[0]

    @property
    def n_cols(self) -> int:
        return self.vegetation.shape[1]

    @property
    def n_cells(self) -> int:
        return self.vegetation.size

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.n_rows and 0 <= col < self.n_cols

    def is_burnable(self, row: int, col: int) -> bool:
        return int(self.vegetation[row, col]) != NON_BURNABLE_CLASS

    def burnable_classes(self) -> np.ndarray:
        """Distinct vegetation classes present, excluding the non-burnable one."""
        classes = np.unique(self.vegetation)
        return classes[classes != NON_BURNABLE_CLASS]

    def attributes(self, row: int, col: int) -> TerrainAttributes:
        """Terrain of an in-bounds cell. Bounds are not checked here."""
        return TerrainAttributes(
            int(self.vegetation[row, col]),
            float(self.elevation[row, col]),
            float(self.wind_direction[row, col]),
            float(self.wind_speed[row, col]),
        )


def write_raster(tiff_path, grid, landscape: Landscape) -> None:
    """Write a result grid (e.g. the burned mask) as a single-band GeoTIFF."""
    array = np.asarray(grid)
    if array.shape != landscape.shape:
        logger.error(f"Grid shape {array.shape} does not match landscape {landscape.shape}")
        raise LandscapeError(f"Grid shape {array.shape} does not match landscape {landscape.shape}")
    if array.dtype == bool:
        array = array.astype(np.uint8)

    transform = landscape.transform if landscape.transform is not None else Affine.identity()
    with rasterio.open(
        tiff_path,
        "w",
        driver="GTiff",
        height=array.shape[0],
        width=array.shape[1],
        count=1,
        dtype=array.dtype.name,
        crs=landscape.crs,
        transform=transform,
    ) as dst:
        dst.write(array, 1)
