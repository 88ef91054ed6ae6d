import math

import pytest

from crafthouse.cameras.orbit import (
    OrbitController, OrbitState, is_upside_down, orbit_update, spawn_orbit_state,
)
from crafthouse.cameras.pose import CameraPose
from crafthouse.config import OrbitConfig
from crafthouse.core.input import InputFrame
from crafthouse.core.math3d import Vec2, Vec3, Quat

VIEWPORT = Vec2(1280.0, 720.0)


def motion(*deltas, enabled=True):
    return InputFrame(
        mouse_deltas=tuple(Vec2(dx, dy) for dx, dy in deltas),
        viewport=VIEWPORT,
        enabled=enabled,
    )


def same_rotation(a, b, tol=1e-9):
    return abs(abs(a.dot(b)) - 1.0) < tol


def upright_state(radius=5.0):
    return OrbitState(
        focus=Vec3.zero(),
        radius=radius,
        upside_down=False,
        pose=CameraPose(position=Vec3(0.0, 0.0, radius), rotation=Quat.identity()),
    )


def test_spawn_defaults():
    state = spawn_orbit_state()
    assert state.radius == pytest.approx(math.sqrt(4.0 + 6.25 + 25.0))
    assert state.upside_down is False
    assert state.position.to_tuple() == pytest.approx((-2.0, 2.5, 5.0))
    # Camera looks at the focus
    forward = state.rotation.forward()
    to_focus = (state.focus - state.position).normalized()
    assert forward.to_tuple() == pytest.approx(to_focus.to_tuple())


def test_zero_motion_is_a_no_op():
    state = spawn_orbit_state()
    before = CameraPose(Vec3(*state.position.to_tuple()), Quat(*state.rotation.to_tuple()))

    result = orbit_update(state, motion())
    assert result is state
    assert result.pose == before

    result = orbit_update(state, motion((0.0, 0.0), (0.0, 0.0)))
    assert result is state


def test_cancelling_events_in_one_tick_are_a_no_op():
    state = spawn_orbit_state()
    assert orbit_update(state, motion((15.0, -4.0), (-15.0, 4.0))) is state


def test_closed_gate_ignores_motion():
    state = spawn_orbit_state()
    assert orbit_update(state, motion((200.0, 50.0), enabled=False)) is state


def test_gate_can_be_disabled_in_config():
    state = spawn_orbit_state()
    config = OrbitConfig(require_grab=False)
    result = orbit_update(state, motion((200.0, 0.0), enabled=False), config)
    assert result is not state


def test_quarter_width_yaws_by_a_right_angle():
    state = upright_state()
    result = orbit_update(state, motion((VIEWPORT.x / 4, 0.0)))

    assert same_rotation(result.rotation, Quat.from_rotation_y(-math.pi / 2))
    # Yaw is pre-multiplied around world Y: +Z arm swings to -X
    assert result.position.to_tuple() == pytest.approx((-5.0, 0.0, 0.0), abs=1e-9)


def test_pure_yaw_round_trip():
    state = spawn_orbit_state()
    there = orbit_update(state, motion((137.0, 0.0)))
    back = orbit_update(there, motion((-137.0, 0.0)))

    assert same_rotation(back.rotation, state.rotation)
    assert back.position.to_tuple() == pytest.approx(state.position.to_tuple(), abs=1e-9)


def test_events_in_a_tick_are_summed():
    state = spawn_orbit_state()
    batched = orbit_update(state, motion((100.0, 10.0), (60.0, -30.0)))
    single = orbit_update(state, motion((160.0, -20.0)))

    assert same_rotation(batched.rotation, single.rotation)
    assert batched.position.to_tuple() == pytest.approx(single.position.to_tuple())


def test_camera_stays_on_the_sphere():
    state = spawn_orbit_state()
    for dx, dy in [(40.0, 5.0), (-300.0, 120.0), (15.0, -400.0), (900.0, 900.0)]:
        state = orbit_update(state, motion((dx, dy)))
        distance = (state.position - state.focus).length()
        assert distance == pytest.approx(state.radius)
        assert abs(state.rotation.length() - 1.0) < 1e-9


def test_orbit_around_offset_focus():
    config = OrbitConfig(focus=(1.0, 2.0, 3.0), start_position=(1.0, 2.0, 7.0))
    state = spawn_orbit_state(config)
    assert state.radius == pytest.approx(4.0)

    state = orbit_update(state, motion((VIEWPORT.x / 2, 0.0)), config)
    # Half a turn puts the camera on the other side of the focus
    assert state.position.to_tuple() == pytest.approx((1.0, 2.0, -1.0), abs=1e-9)


def test_upside_down_follows_previous_orientation():
    # Small vertical steps carry the camera over the pole
    state = upright_state()
    flips = 0
    for _ in range(30):
        previous = state
        state = orbit_update(state, motion((0.0, 36.0)))
        assert state.upside_down == is_upside_down(previous.rotation)
        if state.upside_down != previous.upside_down:
            flips += 1
    assert flips >= 1


def test_horizontal_response_inverts_across_the_pole():
    dx = 64.0
    delta = dx / VIEWPORT.x * 2 * math.pi

    upright = upright_state()
    # 0.6 of a half turn of pitch puts the camera past the pole
    flipped = orbit_update(upright, motion((0.0, VIEWPORT.y * 0.6)))
    assert flipped.upside_down is False
    assert is_upside_down(flipped.rotation)

    up_next = orbit_update(upright, motion((dx, 0.0)))
    flip_next = orbit_update(flipped, motion((dx, 0.0)))

    assert up_next.upside_down is False
    assert flip_next.upside_down is True

    # Same mouse input, opposite yaw about world Y
    assert same_rotation(up_next.rotation, Quat.from_rotation_y(-delta) * upright.rotation)
    assert same_rotation(flip_next.rotation, Quat.from_rotation_y(delta) * flipped.rotation)


def test_controller_owns_state():
    controller = OrbitController()
    start = controller.pose.position.to_tuple()

    pose = controller.update(motion((50.0, 0.0)), 1 / 60)
    assert pose is controller.state.pose
    assert pose.position.to_tuple() != pytest.approx(start)

    controller.reset()
    assert controller.pose.position.to_tuple() == pytest.approx(start)


if __name__ == "__main__":
    test_spawn_defaults()
    test_zero_motion_is_a_no_op()
    test_quarter_width_yaws_by_a_right_angle()
    test_pure_yaw_round_trip()
    test_horizontal_response_inverts_across_the_pole()
