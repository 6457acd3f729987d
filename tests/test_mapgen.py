import pytest
from PIL import Image

from floodsim.mapgen import (
    HEIGHT_COEFF,
    height_map_from_image,
    height_map_from_points,
    idw_interpolation,
    load_height_map,
    map_ratio,
    normalize_points,
    parse_mod,
)


def test_parse_mod_points():
    assert parse_mod("(1,2,3) (4,5,6)\n(7,8,9)") == [(1, 2, 3), (4, 5, 6), (7, 8, 9)]


def test_parse_mod_allows_spaces():
    assert parse_mod("( 1 , 2 , 3 )") == [(1, 2, 3)]


def test_parse_mod_empty():
    assert parse_mod("\n  \n") == []


@pytest.mark.parametrize(
    "text, message",
    [
        ("[1,2,3]", "expected '\\('"),
        ("(1;2,3)", "expected 'x,y,z'"),
        ("(a,2,3)", "expected 'x,y,z'"),
        ("(1,2,3", "expected '\\)'"),
        ("(-1,2,3)", "must be positive"),
    ],
)
def test_parse_mod_errors(text, message):
    with pytest.raises(ValueError, match=message):
        parse_mod(text)


def test_map_ratio_matches_extent():
    assert map_ratio([(10, 10, 5), (90, 90, 5)], 100) == pytest.approx(1.0)


def test_map_ratio_degenerate():
    with pytest.raises(ValueError):
        map_ratio([(0, 0, 3)], 100)


def test_normalize_points_scales_everything():
    points = [(10, 10, 5), (90, 90, 5)]
    assert normalize_points(points, 100) == points
    assert normalize_points(points, 200) == [(2 * x, 2 * y, 2 * z) for x, y, z in points]


def test_idw_exact_point():
    assert idw_interpolation([(3, 4, 7), (0, 0, 0)], 3, 4, 4.0) == 7.0


def test_idw_empty():
    assert idw_interpolation([], 1, 1, 4.0) == 0.0


def test_idw_midpoint_and_bounds():
    points = [(0, 0, 0), (4, 0, 10)]
    assert idw_interpolation(points, 2, 0, 4.0) == pytest.approx(5.0)
    value = idw_interpolation(points, 1, 3, 4.0)
    assert 0.0 <= value <= 10.0


def test_height_map_from_points():
    size = 10
    heights = height_map_from_points([(5, 5, 8)], size)
    assert len(heights) == size * size
    assert heights[5 + 5 * size] == 8.0
    border = [heights[x] for x in range(size)] + [heights[x * size] for x in range(size)]
    assert all(h == 0.0 for h in border)
    assert all(0.0 <= h <= 8.0 for h in heights)


def test_height_map_from_image_orientation(tmp_path):
    path = tmp_path / "map.png"
    image = Image.new("L", (2, 2), 0)
    image.putpixel((1, 0), 255)
    image.save(path)
    assert height_map_from_image(path, 2) == [0.0, 0.0, HEIGHT_COEFF, 0.0]


def test_height_map_from_white_image(tmp_path):
    path = tmp_path / "white.png"
    Image.new("L", (4, 4), 255).save(path)
    heights = load_height_map(path, 3)
    assert heights == [HEIGHT_COEFF] * 9


def test_bad_image(tmp_path):
    path = tmp_path / "broken.png"
    path.write_text("not an image")
    with pytest.raises(ValueError):
        height_map_from_image(path, 4)


def test_missing_image(tmp_path):
    with pytest.raises(ValueError, match="Invalid filepath"):
        height_map_from_image(tmp_path / "missing.png", 4)


def test_load_mod_file(tmp_path):
    path = tmp_path / "hill.mod1"
    path.write_text("(5,5,8)\n")
    assert load_height_map(path, 10) == height_map_from_points([(5, 5, 8)], 10)


def test_load_mod_missing(tmp_path):
    with pytest.raises(ValueError, match="Invalid filepath"):
        load_height_map(str(tmp_path / "missing.mod1"), 10)


def test_load_without_extension():
    with pytest.raises(ValueError, match="extension"):
        load_height_map("noextension", 10)


def test_load_negative_size(tmp_path):
    with pytest.raises(ValueError, match="size"):
        load_height_map(tmp_path / "x.mod1", -1)