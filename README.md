# cubcaster

cubcaster is a small library for a grid-based, first-person raycast view. It
has the following parts:

- checks on a map grid: valid characters, exactly one player, and walls that
  close the map,
- placement of the player and a built-in demo map,
- ray casting through the grid, with wall slices sized for each screen column,
- an in-memory frame buffer that a complete frame can be drawn into,
- an XPM image reader that understands `#rrggbb` and named colours,
- windows, images and drawing built on pygame.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Maps

A map is a sequence of strings, one per row. A cell holds `0` (floor), `1`
(wall), a space (void), or one of `N`, `S`, `E`, `W`. The letter marks where
the player starts and the direction they face.

`cubcaster.mapgrid` provides:

- `has_only_valid_characters(grid)`: true when every cell is `0`, `1`, a space
  or a player letter, and there is exactly one player.
- `map_width(grid)`: the length of the longest row.
- `find_player(grid)`: `(y, x)` of the first player cell, or `None`.
- `flood_fill(grid, y, x)`: true when no open cell that can be reached from
  `(y, x)` touches a space, the end of a row or the edge of the grid. The grid
  is not changed.
- `is_map_closed(grid)`: runs `flood_fill` from the player.

`cubcaster.player` provides the `Player` dataclass (position, direction and
camera plane), `init_player(grid)`, which puts the player at the centre of the
first player cell with a camera plane of 0.666, and `create_hard_map()`, which
returns a small closed demo map.

## Rendering a frame in memory

```python
from cubcaster.player import create_hard_map, init_player
from cubcaster.render import FrameBuffer, create_rgb, render_frame

grid = create_hard_map()
player = init_player(grid)
frame = FrameBuffer(320, 200)
render_frame(frame, grid, player,
             ceiling=create_rgb(0, 135, 206, 235),
             floor=create_rgb(0, 128, 200, 128))
pixel = frame.get_pixel(160, 100)
```

`cubcaster.raycast` holds the steps that `render_frame` uses:
`camera_ray(player, x, width)`, `cast_ray(grid, player, ray_dir_x, ray_dir_y)`
(which raises `ValueError` if a ray leaves the grid before it hits a wall),
`wall_slice(ray, height)` and `column_slice(...)`. A wall crossed along x is
drawn in `0x00FF00` and one crossed along y in `0x00B010`.
`render_tree_frame(frame)` paints the sky, ground and tree demo pattern.

## XPM images

`cubcaster.xpm.read_xpm_file(path)`, `parse_xpm_text(text)` and
`parse_xpm(lines)` return an `XpmImage` with `width`, `height` and a row-by-row
list of `pixels`. Comments outside quoted strings are ignored. Transparent
(`None`) pixels become `0xFF000000`, and a pixel code that is not defined gives
0. Malformed data raises `XpmError`. `cubcaster.colornames.lookup_color(name)`
looks up colour names without regard to case.

## Windows

```python
from cubcaster.display import Display

with Display() as display:
    window = display.new_window(640, 480, "demo")
    image = display.new_image(64, 64)
    image.put_pixel(10, 10, 0xFF0000)
    window.put_image(image, 20, 20)
    window.string_put(10, 200, 0xFFFFFF, "hello")
```

pygame shows one window at a time, so the window created most recently is the
one on screen. Every `Window` still keeps its own surface. Drawing on a
destroyed window, or on a display that has been closed, raises `DisplayError`.

## What the package does not do

- It has no command to run and no game loop. You drive drawing yourself.
- It does not read `.cub` scene files. Texture paths and floor and ceiling
  colours are not parsed, so you build the grid and pick the colours in code.
- `Window.hook`, `key_hook`, `mouse_hook` and `expose_hook` only record
  callbacks. Nothing in the package reads pygame events or calls them.
- Walls are drawn in flat colours. XPM images can be loaded, but they are not
  used as wall textures.