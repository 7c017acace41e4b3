# proctext

A small pure-Python toolkit with three independent parts:

* **Simplex noise** (`proctext.noise`): 1D, 2D and 3D simplex noise plus
  fractal Brownian motion (fBm) summation, driven by a seeded permutation table.
* **Sky-sphere geometry** (`proctext.geosphere`): an icosahedron, midpoint
  subdivision, and an inward-facing geodesic sphere with normals, tangents
  and spherical texture coordinates.
* **Text editing engine** (`proctext.layout`, `proctext.undo`, `proctext.editor`):
  cursor, selection, keyboard and mouse handling for a multi-line or
  single-line text field, with a bounded undo/redo history.

It has no third-party dependencies.

## Installation

```
pip install proctext
```

For running the tests:

```
pip install "proctext[test]"
pytest
```

## Noise

```python
from proctext.noise import SimplexNoise, fast_floor

gen = SimplexNoise(frequency=1.0, amplitude=1.0, lacunarity=2.0,
                   persistence=0.5, seed=42)

gen.noise(0.3)              # 1D
gen.noise(0.3, 1.7)         # 2D
gen.noise(0.3, 1.7, -2.2)   # 3D
gen.fractal(6, 0.3, 1.7)    # 6 octaves of 2D fBm

fast_floor(-0.5)            # -1
```

* `noise` and `grad` take one, two or three coordinates; any other count
  raises `TypeError`. Noise values lie roughly within `[-1, 1]`, and are 0 at
  integer coordinates in 1D.
* The permutation table (`gen.perm`, 256 entries) is drawn from
  `random.Random(seed)`, so the same seed always gives the same field.
  `gen.hash(i)` looks up the table with the low 8 bits of `i`.
* `fractal(octaves, *coords)` sums octaves whose frequency is multiplied by
  `lacunarity` and amplitude by `persistence` at each step, and divides by the
  total amplitude. With zero octaves (or zero total amplitude) it returns NaN.

## Sky sphere

```python
from proctext.geosphere import icosahedron, subdivide, build_sky_sphere

base = icosahedron()                     # 12 vertices, 60 indices
finer = subdivide(base.vertices, base.indices)
finer.triangle_count                     # 80

mesh = build_sky_sphere(radius=20000.0, subdivisions=5)
mesh.vertices[0].position   # on the sphere of the given radius
mesh.indices                # triangle list
for a, b, c in mesh.triangles():
    ...
```

* `Vertex` is a frozen dataclass with `position`, `normal`, `tangent_u` and
  `tex_c`. `Mesh` holds `vertices` and `indices`, with `index_count`,
  `triangle_count` and `triangles()`.
* `subdivide` splits every triangle into four through its edge midpoints; each
  input triangle yields six unshared vertices. An index count that is not a
  multiple of 3 raises `ValueError`.
* `build_sky_sphere` subdivides at most `MAX_SUBDIVISIONS` (5) times, then
  places each vertex on the opposite side of a sphere of the given radius
  (default `DEFAULT_RADIUS`, 20000), so the triangles face inward. Normals keep
  the outward direction; texture coordinates come from the spherical angles of
  the projected position. A non-positive radius or a negative subdivision
  count raises `ValueError`.

## Text editing

A text field is any object implementing the `TextBuffer` abstract class;
`SimpleTextBuffer` is a ready-made monospaced implementation that breaks rows
only at newlines.

```python
from proctext.layout import SimpleTextBuffer
from proctext.editor import TextEditState, Key

buf = SimpleTextBuffer("hello\nworld", glyph_width=8.0, line_height=16.0)
state = TextEditState(single_line=False)

state.click(buf, 20.0, 20.0)          # place the cursor with the mouse
state.key(buf, Key.LINEEND)
state.key(buf, "!")                   # type a character (ord("!") works too)
state.key(buf, Key.LEFT | Key.SHIFT)  # extend the selection
state.cut(buf)                        # True: the selection was deleted
state.paste(buf, "?")
state.key(buf, Key.UNDO)
state.key(buf, Key.REDO)
buf.text
```

* `Key` covers arrows, page up/down, line and text start/end, word left/right,
  delete, backspace, undo, redo and insert (overwrite) mode. Combine a movement
  key with `Key.SHIFT` to extend the selection.
* `state.cursor`, `state.select_start` and `state.select_end` give the cursor
  and selection; `has_selection()` tells whether anything is selected, and
  `clamp(buffer)` brings them back inside a buffer changed from outside.
* Page up/down move `state.row_count_per_page` rows. In single-line mode, up
  and down act as left and right, and newlines cannot be typed.

Lower-level helpers are available as well: `locate_coord` and `find_charpos`
in `proctext.layout`, `move_word_left` and `move_word_right` in
`proctext.editor`, and the bounded `UndoState` history in `proctext.undo`
(99 records and 999 stored characters by default; the oldest edits are dropped
when it fills).

## What it does not do

`proctext` computes data only. It does not render anything: there is no GPU
upload, no window, no shader or texture handling, and no drawing of text or
meshes. The text-editing engine keeps no clipboard; copy the selection out of
the buffer yourself before calling `cut`.