import io
import random

import pytest

from floodsim.surface import WaterSurface


def test_index_is_row_major():
    surface = WaterSurface(4, 3)
    assert surface.index(0, 0) == 0
    assert surface.index(3, 0) == 3
    assert surface.index(1, 2) == 9
    assert len(surface.cells) == 12


def test_neighbour_links():
    surface = WaterSurface(3, 3)
    centre = surface.cells[surface.index(1, 1)]
    assert centre.north is surface.cells[surface.index(1, 2)]
    assert centre.east is surface.cells[surface.index(2, 1)]
    assert centre.south is surface.cells[surface.index(1, 0)]
    assert centre.west is surface.cells[surface.index(0, 1)]
    corner = surface.cells[surface.index(0, 0)]
    assert corner.south is None and corner.west is None


def test_set_levels_ignore_out_of_range():
    surface = WaterSurface(2, 2)
    surface.set_water_level(1, 1, 2.0)
    surface.set_water_level(2, 0, 5.0)
    surface.set_water_level(-1, 0, 5.0)
    surface.set_ground_level(0, 5, 3.0)
    surface.set_ground_level(0, 1, 3.0)
    assert surface.total_water_level() == 2.0
    assert surface.cells[surface.index(0, 1)].ground == 3.0


def test_update_conserves_water():
    surface = WaterSurface(5, 5)
    surface.set_water_level(2, 2, 1.0)
    for _ in range(20):
        surface.update()
    assert surface.total_water_level() == pytest.approx(1.0, abs=1e-9)
    assert all(cell.water >= 0 for cell in surface.cells)
    assert surface.cells[surface.index(2, 3)].water > 0


def test_still_water_stays_still():
    surface = WaterSurface(3, 3)
    for cell in surface.cells:
        cell.water = 0.5
    surface.update()
    assert all(cell.water == pytest.approx(0.5) for cell in surface.cells)


def test_check_underflow_clears_negative_water():
    surface = WaterSurface(2, 1)
    west, east = surface.cells
    west.water = -0.25
    east.water = 1.0
    west.velocity_e = -1.0
    surface.check_underflow(0, 0)
    assert west.water == 0.0
    assert surface.total_water_level() == pytest.approx(0.75)


def test_display_ascii():
    surface = WaterSurface(2, 1)
    surface.set_water_level(1, 0, 2.0)
    buffer = io.StringIO()
    surface.display_ascii(buffer)
    lines = buffer.getvalue().splitlines()
    assert lines[0] == "\033[48;5;196m  \033[0m\033[48;5;255m  \033[0m"
    assert lines[1] == "Wave speed = 10"


def test_water_vertex_height_delegates():
    surface = WaterSurface(2, 2)
    surface.set_ground_level(1, 1, 1.0)
    surface.set_water_level(1, 1, 0.5)
    assert surface.water_vertex_height(1, 1) == 1.5
    assert surface.water_vertex_height(0, 1) == 1.5


def test_load_ground_map_short_map():
    surface = WaterSurface(2, 2)
    surface.load_ground_map([1.0, 2.0, 3.0])
    assert [cell.ground for cell in surface.cells] == [1.0, 2.0, 3.0, 0.0]


def test_update_ground_normal_on_flat_ground():
    surface = WaterSurface(2, 2)
    surface.update_ground_normal()
    assert all(cell.ground_normal == pytest.approx((0.0, 0.0, 1.0)) for cell in surface.cells)


def test_reset_water():
    surface = WaterSurface(3, 3)
    surface.make_wave(1.0)
    surface.update()
    surface.reset_water()
    assert surface.total_water_level() == 0.0
    assert all(cell.velocity_n == 0.0 and cell.velocity_e == 0.0 for cell in surface.cells)


def test_rise_water_respects_threshold():
    surface = WaterSurface(2, 1)
    surface.set_ground_level(1, 0, 5.0)
    surface.rise_water(0.5, 0.1)
    assert [cell.water for cell in surface.cells] == [0.5, 0.0]
    surface.rise_water(0.0, 10.0)
    assert [cell.water for cell in surface.cells] == [0.5, 0.0]


def test_make_rain_drops_expected_amount():
    surface = WaterSurface(10, 10)
    surface.rng = random.Random(42)
    surface.make_rain(0.1, 1.5)
    assert surface.total_water_level() == pytest.approx(10 * 1.5)


def test_make_rain_ignores_non_positive():
    surface = WaterSurface(4, 4)
    surface.make_rain(0.0, 1.5)
    surface.make_rain(1.0, 0.0)
    assert surface.total_water_level() == 0.0


def test_make_wave_fills_southern_row():
    surface = WaterSurface(3, 2)
    surface.make_wave(0.3)
    assert [surface.cells[surface.index(x, 0)].water for x in range(3)] == [0.3] * 3
    assert [surface.cells[surface.index(x, 1)].water for x in range(3)] == [0.0] * 3


def test_flush_selected_edges():
    surface = WaterSurface(3, 3)
    for cell in surface.cells:
        cell.water = 1.0
    surface.flush(True, False, True, False)
    assert surface.cells[surface.index(1, 2)].water == 0.0
    assert surface.cells[surface.index(2, 0)].water == 0.0
    assert surface.cells[surface.index(0, 0)].water == 1.0
    assert surface.cells[surface.index(1, 1)].water == 1.0
    assert surface.total_water_level() == pytest.approx(4.0)