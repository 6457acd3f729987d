# floodsim

A headless water simulation over a grid of terrain heights. Each cell
holds a ground level and a water level. Water flows between neighbouring
cells in proportion to their height difference, and the flow is damped
over time. You can raise water over the lowlands, let it rain, send a
wave in from the southern edge, or drain the borders.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Terrain maps

`floodsim.mapgen.load_height_map(path, size)` builds a height map with
`size × size` entries. It reads one of two kinds of file:

- A `.mod1` file lists known points as `(x,y,z)` triples of non-negative
  integers. Any amount of whitespace may separate them. For example:

  ```
  (5000,5000,2000) (10000,10000,5000)
  (15000,5000,1000)
  ```

  The points, heights included, are scaled to fit the grid. The grid
  border is fixed at height 0. Inverse-distance weighting (power 4) fills
  in every other height.

- A file with any other extension is opened with Pillow as a greyscale
  image. Brightness maps to a height from 0 to 20. The image is sampled
  column by column.

A path without an extension, a negative size, an unreadable file or
malformed `.mod1` content raises `ValueError`.

The lower-level steps are also public: `parse_mod`, `map_ratio`,
`normalize_points`, `idw_interpolation`, `height_map_from_points` and
`height_map_from_image`.

## Command line

```
floodsim path/to/map.mod1 --size 100 --frames 600 --ascii
```

- `map` (optional): a `.mod1` file or an image. Without it the ground
  is flat.
- `--size`: the grid size. The default is 400.
- `--frames`: the number of frames to simulate. Without it the command
  runs until you interrupt it with Ctrl+C.
- `--ascii`: when the run ends, print the water depth as a greyscale
  block picture in the terminal.

The command prints the control summary and then, once a second, the
number of frames completed. It exits with status 1 and prints the
message if the map cannot be loaded.

## From Python

```python
from floodsim.mapgen import load_height_map
from floodsim.simulation import Simulation

size = 100
heights = load_height_map("terrain.mod1", size)

sim = Simulation()
sim.initialize_water_surface(heights, size)
sim.initialize_camera(size)

sim.handle_key("1", True)   # hold rise mode
sim.handle_scroll(5)        # raise the rise intensity by 5
for _ in range(120):
    sim.step()

print(sim.surface.total_water_level())
```

`Simulation.run(height_map, size, frames=None, stream=None)` does the
same setup and then steps for `frames` frames. It writes its messages to
`stream`, or to standard output if none is given, and returns the
`WaterSurface`.

## Controls

`Simulation.handle_key(key, pressed)` takes key names, in any case.
`Simulation.handle_scroll(offset)` sets the scroll amount for the next
step.

| Key name                          | Effect                                     |
|-----------------------------------|--------------------------------------------|
| `w` `a` `s` `d`                   | move the camera                            |
| `e` / `q`                         | move the camera up / down                  |
| `up` `down` `left` `right`        | turn the camera                            |
| `1` + scroll, `=` / `-`           | change the water rise intensity            |
| `2` + scroll, `=` / `-`           | change the rain intensity                  |
| `3` + scroll, `=` / `-`           | change the wave intensity                  |
| `4`                               | toggle draining of the north and east sides |
| `space`                           | pause the simulation                       |
| `delete`                          | reset all water and intensities            |

Each intensity is kept between 0 and 20. `controls_text()` returns a
text summary of the controls. `fit_viewport(width, height)` computes a
centred 4:3 viewport for a window of the given size.

## Building blocks

- `floodsim.cell.Cell`: one grid cell. It handles velocity,
  acceleration, underflow and surface normals.
- `floodsim.surface.WaterSurface`: the grid of linked cells. It offers
  `update`, `rise_water`, `make_rain`, `make_wave`, `flush`,
  `reset_water`, `total_water_level` and `display_ascii`.
- `floodsim.camera.Camera` and `InputState`: the free-flying camera and
  the keyboard state that drives it.
- `floodsim.mesh.MeshBuilder`: builds flat vertex lists of triangles
  for the ground and water surfaces and their side walls.

## What it does not do

floodsim opens no window and draws nothing. It reads no keyboard or
mouse input of its own. Input comes only through `handle_key` and
`handle_scroll`. The vertex lists from `MeshBuilder` are plain float
lists, which you can pass to a renderer of your own. In the terminal,
`display_ascii` is the only view of the water.