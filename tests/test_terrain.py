"""Unit tests for Landscape construction and raster I/O."""

import numpy as np
import pytest
import rasterio
from rasterio.transform import from_origin
from wildfire_spread.errors import LandscapeError
from wildfire_spread.terrain import Landscape, TerrainAttributes, write_raster


def make_cube(n_rows=3, n_cols=4, n_layers=4):
    cube = np.zeros((n_rows, n_cols, n_layers))
    cube[:, :, 0] = np.arange(n_rows * n_cols).reshape(n_rows, n_cols) % 3  # vegetation
    cube[:, :, 1] = np.arange(n_rows * n_cols).reshape(n_rows, n_cols) * 10.0  # elevation
    cube[:, :, 2] = np.pi  # wind direction
    cube[:, :, 3] = 4.0  # wind speed
    return cube


class TestLandscape:
    """Test cases for Landscape."""

    def test_from_cube_positional(self):
        landscape = Landscape.from_cube(make_cube())
        assert landscape.shape == (3, 4)
        assert landscape.n_rows == 3
        assert landscape.n_cols == 4
        assert landscape.n_cells == 12
        assert landscape.attributes(1, 2) == TerrainAttributes(0, 60.0, np.pi, 4.0)

    def test_from_cube_extra_layers_ignored(self):
        cube = make_cube(n_layers=6)
        cube[:, :, 4:] = -1.0
        landscape = Landscape.from_cube(cube)
        assert landscape.attributes(0, 0).wind_speed == 4.0

    def test_from_cube_named_layers(self):
        cube = make_cube()[:, :, [3, 1, 0, 2]]
        names = ["wind_speed", "elevation", "vegetation", "wind_direction"]
        landscape = Landscape.from_cube(cube, names)
        assert landscape.attributes(1, 2) == TerrainAttributes(0, 60.0, np.pi, 4.0)

    def test_from_cube_missing_named_layer(self):
        with pytest.raises(LandscapeError):
            Landscape.from_cube(make_cube(), ["vegetation", "elevation", "wind_direction", "slope"])

    def test_from_cube_too_few_layers(self):
        with pytest.raises(LandscapeError):
            Landscape.from_cube(make_cube()[:, :, :3])

    def test_from_cube_wrong_dimensions(self):
        with pytest.raises(LandscapeError):
            Landscape.from_cube(np.zeros((3, 4)))

    def test_layer_shape_mismatch(self):
        with pytest.raises(LandscapeError):
            Landscape(np.zeros((3, 3), dtype=int), np.zeros((3, 4)), np.zeros((3, 3)), np.zeros((3, 3)))

    def test_layers_must_be_2d(self):
        with pytest.raises(LandscapeError):
            Landscape(np.zeros(9, dtype=int), np.zeros(9), np.zeros(9), np.zeros(9))

    def test_fractional_vegetation_rejected(self):
        cube = make_cube()
        cube[0, 0, 0] = 0.5
        with pytest.raises(LandscapeError):
            Landscape.from_cube(cube)

    def test_layers_are_read_only_copies(self):
        vegetation = np.zeros((2, 2), dtype=int)
        landscape = Landscape(vegetation, np.zeros((2, 2)), np.zeros((2, 2)), np.zeros((2, 2)))
        vegetation[0, 0] = 5
        assert landscape.vegetation[0, 0] == 0
        with pytest.raises(ValueError):
            landscape.elevation[0, 0] = 1.0

    def test_bounds_and_burnable(self):
        vegetation = np.array([[0, 99], [1, 2]])
        landscape = Landscape(vegetation, np.zeros((2, 2)), np.zeros((2, 2)), np.zeros((2, 2)))
        assert landscape.in_bounds(1, 1)
        assert not landscape.in_bounds(2, 0)
        assert not landscape.in_bounds(0, -1)
        assert landscape.is_burnable(0, 0)
        assert not landscape.is_burnable(0, 1)
        assert landscape.burnable_classes().tolist() == [0, 1, 2]


class TestRaster:
    """Test cases for GeoTIFF reading and writing."""

    @pytest.fixture
    def tiff_path(self, tmp_path):
        path = tmp_path / "landscape.tif"
        cube = make_cube()
        bands = np.moveaxis(cube, -1, 0)
        with rasterio.open(
            path,
            "w",
            driver="GTiff",
            height=cube.shape[0],
            width=cube.shape[1],
            count=4,
            dtype="float64",
            transform=from_origin(0.0, 90.0, 30.0, 30.0),
        ) as dst:
            dst.write(bands)
            for i, name in enumerate(["vegetation", "elevation", "wind_direction", "wind_speed"], start=1):
                dst.set_band_description(i, name)
        return path

    def test_from_raster(self, tiff_path):
        landscape = Landscape.from_raster(tiff_path)
        assert landscape.shape == (3, 4)
        assert landscape.attributes(2, 3) == TerrainAttributes(2, 110.0, np.pi, 4.0)
        assert landscape.transform == from_origin(0.0, 90.0, 30.0, 30.0)

    def test_write_raster_roundtrip(self, tiff_path, tmp_path):
        landscape = Landscape.from_raster(tiff_path)
        mask = np.zeros(landscape.shape, dtype=bool)
        mask[1, 1:3] = True

        out = tmp_path / "burned.tif"
        write_raster(out, mask, landscape)

        with rasterio.open(out) as src:
            assert src.transform == landscape.transform
            assert src.read(1).tolist() == mask.astype(np.uint8).tolist()

    def test_write_raster_shape_mismatch(self, tiff_path, tmp_path):
        landscape = Landscape.from_raster(tiff_path)
        with pytest.raises(LandscapeError):
            write_raster(tmp_path / "bad.tif", np.zeros((2, 2)), landscape)
