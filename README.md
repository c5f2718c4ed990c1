# enginekit

Maths primitives and typed configuration values for small game engines. The package has no dependencies outside the standard library.

## What is inside

- `enginekit.vector` provides `Vector2`, `Vector3` and `Vector4`. These are frozen dataclasses with the `+`, `-`, `*`, `/` and unary `-` operators. They also provide dot products, cross products (`Vector3.cross` and the three-argument `Vector4.cross`), `lerp`, `maximize`, `minimize`, and `catmull_rom`, `hermite` and `barycentric` interpolation. They can be transformed by any 4x4 row-major matrix. `from_string` parses text such as `"[1, 2, 3]"` or `"(1; 2; 3)"` and raises `ValueError` on bad input. `str()` prints a vector with six decimals. The module also has `Viewport`, which `Vector3.project` and `Vector3.unproject` use, and `vec3n(x, y, z)`, which builds a normalized `Vector3`.
- `enginekit.matrix` provides `Matrix`, an immutable row-major 4x4 matrix that treats vectors as row vectors.
  - `a @ b`, which is the same as `a.multiply(b)`, applies `a` first and then `b`.
  - Constructors: translation, scaling, rotations about the axes or about an arbitrary axis, rotation from a quaternion, yaw/pitch/roll, `look_at_lh` and `look_at_rh`, orthographic and perspective projections (including off-centre ones), `reflect`, `shadow`, `transformation` and `affine_transformation`.
  - Other methods: `inverse` (which raises `ValueError` when the matrix is singular), `determinant`, `transpose`, the axis properties, and `scale`.
  - `MatrixStack` is a push/pop stack of matrices that starts with the identity. Popping the last matrix raises `IndexError`.
- `enginekit.quaternion` provides `Quaternion`, with multiplication, `slerp`, `exp`, `ln`, `inverse`, `barycentric` and `to_axis_angle`. Constructors build a quaternion from an axis and angle, from a matrix, or from yaw/pitch/roll.
- Geometry:
  - `Plane` and `Classification` (in `enginekit.plane`).
  - `Line` (in `enginekit.line`).
  - `Ray`, `Triangle` and `RayHit` (in `enginekit.ray`). The ray/triangle tests count only front-facing hits.
  - `LineSegment` (in `enginekit.line_segment`).
  - `Sphere` (in `enginekit.sphere`). `test_collision` accepts a point, plane, sphere, box, line, ray or segment.
  - `Box`, an axis-aligned box (in `enginekit.box`).
  - `Circle2D`, `Box2D` and `Cylinder` (in `enginekit.primitives`).
- `enginekit.frustum` provides culling:
  - `Frustum`, an abstract base class.
  - `OrthoFrustum`, which is aimed at a focus sphere.
  - `PerspectiveFrustum`, which is built from a view matrix and a projection matrix.
  - `intersects` classifies a `Sphere` or a `Box` as `FrustumIntersect.IN_FRUSTUM`, `OUT_FRUSTUM` or `PARTIAL`. It can optionally apply a world matrix first.
- `enginekit.property_value` provides `PropertyValue`, which wraps one raw text value and gives typed views of it.
  - Single values: `as_float`, `as_int`, `as_bool`.
  - Tuples: `as_float2` to `as_float4`, `as_int2` to `as_int4`, `as_bool2` to `as_bool4`.
  - Object references written as `Type(name);`: `as_object` and `set_as_object`.
  - `or_default` returns a fallback when the text is empty.

## Installing

```
pip install .
```

## Example

```python
from enginekit.vector import Vector3
from enginekit.matrix import Matrix
from enginekit.sphere import Sphere
from enginekit.frustum import PerspectiveFrustum

frustum = PerspectiveFrustum()
frustum.set_view_matrix(Matrix.look_at_lh(Vector3(0, 0, -10), Vector3(0, 0, 0), Vector3(0, 1, 0)))
frustum.set_proj_matrix(Matrix.perspective_fov_lh(1.0, 1.0, 0.1, 100.0))

print(frustum.intersects(Sphere(Vector3(0, 0, 0), 1.0)))

spin = Matrix.rotation_y(0.5) @ Matrix.translation(1.0, 2.0, 3.0)
print(Vector3(1, 0, 0).transform_coord(spin))
```

Typed property values:

```python
from enginekit.property_value import PropertyValue

print(PropertyValue("[1280, 720]").as_int2())     # (1280, 720)
print(PropertyValue("false").as_bool())           # False
print(PropertyValue("Sprite(hero);").as_object()) # ('Sprite', 'hero')
print(PropertyValue("").or_default(30, PropertyValue.as_int))  # 30
```

## What it does not do

The package has no configuration files and no property sections. It can convert single values from text, but it cannot read, merge or write files of nested `type(name) { key = value; }` sections. Any parsing of such files, and any storage of the parsed sections, is left to the calling code.

## Running the tests

```
pip install .[test]
pytest
```