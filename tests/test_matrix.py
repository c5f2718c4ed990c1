import math
from collections import namedtuple

import pytest

from enginekit.matrix import Matrix, MatrixStack
from enginekit.quaternion import Quaternion
from enginekit.vector import Vector3, Vector4

_Plane = namedtuple("_Plane", "a b c d")


def _flat(m):
    return [v for row in m for v in row]


def test_default_is_identity():
    assert Matrix() == Matrix.identity()
    assert Matrix.identity().is_identity()
    assert not Matrix.translation(1.0, 0.0, 0.0).is_identity()


def test_rejects_wrong_shape():
    with pytest.raises(ValueError):
        Matrix(((1.0, 2.0),))


def test_translation_moves_origin():
    m = Matrix.translation(4.0, 5.0, 6.0)
    assert m.t_axis == Vector3(4.0, 5.0, 6.0)
    assert tuple(Vector3().transform_coord(m)) == pytest.approx((4.0, 5.0, 6.0), abs=1e-9)
    assert Matrix.translation(Vector3(4.0, 5.0, 6.0)) == m


def test_inverse_product_is_identity():
    m = Matrix.rotation_axis(Vector3(1.0, 2.0, 3.0), 0.9) @ Matrix.translation(1.0, -2.0, 3.0)
    assert _flat(m @ m.inverse()) == pytest.approx(_flat(Matrix.identity()), abs=1e-9)


def test_inverse_of_singular_raises():
    with pytest.raises(ValueError):
        Matrix.scaling(1.0, 0.0, 1.0).inverse()


def test_determinant_is_multiplicative():
    a = Matrix.scaling(2.0, 3.0, 4.0) @ Matrix.rotation_x(0.4)
    b = Matrix.translation(1.0, 2.0, 3.0) @ Matrix.scaling(0.5, 2.0, 5.0)
    assert (a @ b).determinant() == pytest.approx(a.determinant() * b.determinant())
    assert Matrix.rotation_axis(Vector3(1.0, 1.0, 0.0), 1.0).determinant() == pytest.approx(1.0)
    assert Matrix.scaling(1.0, 0.0, 1.0).determinant() == 0.0


def test_transpose_twice_is_original():
    m = Matrix.rotation_y(0.3) @ Matrix.translation(1.0, 2.0, 3.0)
    assert m.transpose().transpose() == m
    assert m.transpose()[0, 3] == m[3, 0]


@pytest.mark.parametrize(
    "factory, axis",
    [
        (Matrix.rotation_x, Vector3(1.0, 0.0, 0.0)),
        (Matrix.rotation_y, Vector3(0.0, 1.0, 0.0)),
        (Matrix.rotation_z, Vector3(0.0, 0.0, 1.0)),
    ],
)
def test_axis_rotations_agree(factory, axis):
    expected = _flat(factory(0.8))
    assert _flat(Matrix.rotation_axis(axis, 0.8)) == pytest.approx(expected, abs=1e-9)
    q = Quaternion.rotation_axis(axis, 0.8)
    assert _flat(Matrix.rotation_quaternion(q)) == pytest.approx(expected, abs=1e-9)


def test_unit_scale_detection():
    assert Matrix.rotation_axis(Vector3(1.0, 2.0, 3.0), 2.0).is_unit_scale()
    assert not Matrix.scaling(2.0, 1.0, 1.0).is_unit_scale()


def test_axis_setters_round_trip():
    v = Vector3(7.0, 8.0, 9.0)
    m = Matrix.identity()
    assert m.with_t_axis(v).t_axis == v
    assert m.with_x_axis(v).x_axis == v
    assert m.with_y_axis(v).y_axis == v
    assert m.with_z_axis(v).z_axis == v


def test_row_string_round_trip():
    m = Matrix.translation(1.5, -2.25, 3.0)
    text = m.row_to_string(3)
    restored = Matrix.identity().with_row_from_string(text, 3)
    assert _flat(restored) == pytest.approx(_flat(m), abs=1e-5)


def test_row_from_bad_string_raises():
    with pytest.raises(ValueError):
        Matrix.identity().with_row_from_string("(1, 2, 3)", 0)


def test_look_at_lh_puts_target_on_positive_z():
    eye, at = Vector3(1.0, 2.0, 3.0), Vector3(4.0, 6.0, 3.0)
    m = Matrix.look_at_lh(eye, at, Vector3(0.0, 0.0, 1.0))
    assert tuple(eye.transform_coord(m)) == pytest.approx((0.0, 0.0, 0.0), abs=1e-9)
    assert tuple(at.transform_coord(m)) == pytest.approx((0.0, 0.0, 5.0), abs=1e-9)


def test_look_at_rh_puts_target_on_negative_z():
    eye, at = Vector3(1.0, 2.0, 3.0), Vector3(4.0, 6.0, 3.0)
    m = Matrix.look_at_rh(eye, at, Vector3(0.0, 0.0, 1.0))
    assert tuple(at.transform_coord(m)) == pytest.approx((0.0, 0.0, -5.0), abs=1e-9)


def test_ortho_lh_maps_volume_to_unit_box():
    m = Matrix.ortho_lh(4.0, 2.0, 1.0, 10.0)
    assert tuple(Vector3(2.0, 1.0, 1.0).transform_coord(m)) == pytest.approx((1.0, 1.0, 0.0), abs=1e-9)
    assert tuple(Vector3(-2.0, -1.0, 10.0).transform_coord(m)) == pytest.approx((-1.0, -1.0, 1.0), abs=1e-9)


def test_ortho_rh_maps_negative_depth():
    m = Matrix.ortho_rh(4.0, 2.0, 1.0, 10.0)
    assert Vector3(0.0, 0.0, -1.0).transform_coord(m).z == pytest.approx(0.0)
    assert Vector3(0.0, 0.0, -10.0).transform_coord(m).z == pytest.approx(1.0)


def test_symmetric_off_center_matches_centered():
    assert _flat(Matrix.ortho_off_center_lh(-2.0, 2.0, -1.0, 1.0, 1.0, 10.0)) == pytest.approx(
        _flat(Matrix.ortho_lh(4.0, 2.0, 1.0, 10.0)), abs=1e-9
    )
    assert _flat(Matrix.perspective_off_center_lh(-2.0, 2.0, -1.0, 1.0, 1.0, 10.0)) == pytest.approx(
        _flat(Matrix.perspective_lh(4.0, 2.0, 1.0, 10.0)), abs=1e-9
    )
    assert _flat(Matrix.perspective_off_center_rh(-2.0, 2.0, -1.0, 1.0, 1.0, 10.0)) == pytest.approx(
        _flat(Matrix.perspective_rh(4.0, 2.0, 1.0, 10.0)), abs=1e-9
    )


def test_perspective_depth_range():
    lh = Matrix.perspective_fov_lh(1.0, 1.5, 0.5, 20.0)
    assert Vector3(0.0, 0.0, 0.5).transform_coord(lh).z == pytest.approx(0.0)
    assert Vector3(0.0, 0.0, 20.0).transform_coord(lh).z == pytest.approx(1.0)
    rh = Matrix.perspective_fov_rh(1.0, 1.5, 0.5, 20.0)
    assert Vector3(0.0, 0.0, -0.5).transform_coord(rh).z == pytest.approx(0.0)
    assert Vector3(0.0, 0.0, -20.0).transform_coord(rh).z == pytest.approx(1.0)
    plain = Matrix.perspective_lh(4.0, 2.0, 0.5, 20.0)
    assert Vector3(0.0, 0.0, 20.0).transform_coord(plain).z == pytest.approx(1.0)


def test_reflect_is_an_involution_and_fixes_plane():
    m = Matrix.reflect(_Plane(0.0, 2.0, 0.0, -4.0))
    p = Vector3(1.0, 5.0, 3.0)
    assert tuple(p.transform_coord(m).transform_coord(m)) == pytest.approx(tuple(p), abs=1e-9)
    on_plane = Vector3(7.0, 2.0, -1.0)
    assert tuple(on_plane.transform_coord(m)) == pytest.approx(tuple(on_plane), abs=1e-9)


def test_shadow_flattens_onto_plane():
    plane = _Plane(0.0, 1.0, 0.0, 0.0)
    m = Matrix.shadow(Vector4(1.0, -1.0, 0.5, 0.0), plane)
    assert Vector3(2.0, 3.0, 4.0).transform_coord(m).y == pytest.approx(0.0)


def test_transformation_defaults_and_translation():
    assert _flat(Matrix.transformation()) == pytest.approx(_flat(Matrix.identity()), abs=1e-9)
    t = Vector3(1.0, 2.0, 3.0)
    assert _flat(Matrix.transformation(translation=t)) == pytest.approx(
        _flat(Matrix.translation(t)), abs=1e-9
    )


def test_transformation_scales_about_centre():
    centre = Vector3(1.0, 1.0, 1.0)
    m = Matrix.transformation(scaling_center=centre, scaling=Vector3(3.0, 3.0, 3.0))
    assert tuple(centre.transform_coord(m)) == pytest.approx((1.0, 1.0, 1.0), abs=1e-9)


def test_affine_transformation_rotates_about_centre():
    centre = Vector3(2.0, 0.0, 0.0)
    q = Quaternion.rotation_axis(Vector3(0.0, 0.0, 1.0), 1.0)
    m = Matrix.affine_transformation(1.0, centre, q, None)
    assert tuple(centre.transform_coord(m)) == pytest.approx((2.0, 0.0, 0.0), abs=1e-9)
    expected = Matrix.translation(-centre) @ Matrix.rotation_z(1.0) @ Matrix.translation(centre)
    assert _flat(m) == pytest.approx(_flat(expected), abs=1e-9)


def test_stack_starts_with_identity():
    stack = MatrixStack()
    assert len(stack) == 1
    assert stack.top.is_identity()


def test_stack_push_pop_restores():
    stack = MatrixStack()
    stack.push()
    stack.translate(1.0, 2.0, 3.0)
    assert stack.top == Matrix.translation(1.0, 2.0, 3.0)
    assert stack.pop() == Matrix.translation(1.0, 2.0, 3.0)
    assert stack.top.is_identity()


def test_stack_pop_last_raises():
    with pytest.raises(IndexError):
        MatrixStack().pop()


def test_stack_post_and_local_orders():
    post = MatrixStack()
    post.translate(1.0, 2.0, 3.0)
    post.scale(2.0, 2.0, 2.0)
    assert post.top == Matrix.translation(1.0, 2.0, 3.0) @ Matrix.scaling(2.0, 2.0, 2.0)

    local = MatrixStack()
    local.translate(1.0, 2.0, 3.0)
    local.scale_local(2.0, 2.0, 2.0)
    assert local.top == Matrix.scaling(2.0, 2.0, 2.0) @ Matrix.translation(1.0, 2.0, 3.0)
    assert local.top != post.top


def test_stack_rotations_and_loads():
    stack = MatrixStack()
    base = Matrix.translation(1.0, 0.0, 0.0)
    stack.load_matrix(base)
    stack.rotate_axis(Vector3(0.0, 1.0, 0.0), 0.5)
    assert _flat(stack.top) == pytest.approx(_flat(base @ Matrix.rotation_y(0.5)), abs=1e-9)
    stack.load_identity()
    stack.rotate_yaw_pitch_roll_local(0.1, 0.2, 0.3)
    stack.translate_local(0.0, 1.0, 0.0)
    expected = Matrix.translation(0.0, 1.0, 0.0) @ Matrix.rotation_yaw_pitch_roll(0.1, 0.2, 0.3)
    assert _flat(stack.top) == pytest.approx(_flat(expected), abs=1e-9)


def test_stack_mult_matrix_orders():
    a = Matrix.rotation_x(0.3)
    b = Matrix.translation(0.0, 4.0, 0.0)
    stack = MatrixStack()
    stack.load_matrix(a)
    stack.mult_matrix(b)
    assert stack.top == a @ b
    stack.load_matrix(a)
    stack.mult_matrix_local(b)
    assert stack.top == b @ a
    stack.load_identity()
    stack.rotate_axis_local(Vector3(0.0, 0.0, 1.0), math.pi / 4)
    stack.rotate_yaw_pitch_roll(0.2, 0.0, 0.0)
    expected = Matrix.rotation_z(math.pi / 4) @ Matrix.rotation_y(0.2)
    assert _flat(stack.top) == pytest.approx(_flat(expected), abs=1e-9)