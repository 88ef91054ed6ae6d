import math
import random

import pytest

from crafthouse.cameras.free_fly import (
    FreeFlyController, FreeFlyState, LookAngles,
    accumulate_look, ease_look, freefly_update, movement_direction, spawn_free_fly_state,
)
from crafthouse.cameras.pose import CameraPose
from crafthouse.config import FreeFlyConfig, MovementPolicy
from crafthouse.core.input import InputFrame, MoveKey
from crafthouse.core.math3d import Vec2, Vec3, normalize_direction

DT = 1.0 / 60.0
LIMIT = math.pi / 2 - 0.01


def tick(keys=(), deltas=(), enabled=True):
    return InputFrame(
        keys=frozenset(keys),
        mouse_deltas=tuple(Vec2(dx, dy) for dx, dy in deltas),
        enabled=enabled,
    )


def state_with_look(yaw, pitch, position=(0.0, 1.0, 0.0)):
    look = LookAngles(yaw, pitch)
    return FreeFlyState(
        position=Vec3(*position),
        desired_look=look,
        current_look=look,
        pose=CameraPose(position=Vec3(*position)),
    )


def test_spawn_defaults():
    state = spawn_free_fly_state()
    assert state.position == Vec3(0.0, 1.0, 0.0)
    assert state.desired_look == LookAngles(math.pi, 0.0)
    assert state.current_look == state.desired_look
    assert state.pose.forward().to_tuple() == pytest.approx((-1.0, 0.0, 0.0), abs=1e-9)


def test_forward_step_from_spawn():
    state = spawn_free_fly_state()
    result = freefly_update(state, tick(keys=[MoveKey.FORWARD]), DT, FreeFlyConfig(speed=0.1))
    assert result.position.to_tuple() == pytest.approx((-0.1, 1.0, 0.0), abs=1e-9)
    assert result.pose.position == result.position


def test_no_input_keeps_position():
    state = spawn_free_fly_state()
    result = freefly_update(state, tick(), DT)
    assert result.position == state.position
    assert result.current_look == state.current_look


def test_closed_gate_is_passthrough():
    state = spawn_free_fly_state()
    frame = tick(keys=[MoveKey.FORWARD], deltas=[(30.0, 30.0)], enabled=False)
    assert freefly_update(state, frame, DT) is state


def test_forward_wins_over_right():
    state = spawn_free_fly_state()
    both = freefly_update(state, tick(keys=[MoveKey.FORWARD, MoveKey.RIGHT]), DT)
    forward = freefly_update(state, tick(keys=[MoveKey.FORWARD]), DT)
    assert both.position == forward.position


def test_priority_order():
    look = LookAngles(0.3, 0.2)
    cases = [
        ([MoveKey.BACK, MoveKey.RIGHT], MoveKey.BACK),
        ([MoveKey.LEFT, MoveKey.RIGHT], MoveKey.RIGHT),
        ([MoveKey.LEFT, MoveKey.UP], MoveKey.LEFT),
        ([MoveKey.DOWN, MoveKey.UP], MoveKey.UP),
        ([MoveKey.FORWARD, MoveKey.BACK], MoveKey.FORWARD),
    ]
    for held, winner in cases:
        assert movement_direction(held, look) == movement_direction([winner], look)


def test_forward_follows_pitch_but_strafe_does_not():
    look = LookAngles(0.0, 0.5)
    forward = movement_direction([MoveKey.FORWARD], look)
    assert forward.to_tuple() == pytest.approx(normalize_direction(0.0, 0.5).to_tuple())
    assert forward.y > 0.0

    for key in (MoveKey.RIGHT, MoveKey.LEFT):
        d = movement_direction([key], look)
        assert d.y == 0.0
        assert d.length() == pytest.approx(1.0)
        assert d.dot(forward) == pytest.approx(0.0, abs=1e-9)

    assert movement_direction([MoveKey.UP], look) == Vec3(0.0, 1.0, 0.0)
    assert movement_direction([MoveKey.DOWN], look) == Vec3(0.0, -1.0, 0.0)


def test_right_is_to_the_right_of_the_view():
    state = spawn_free_fly_state()
    right = movement_direction([MoveKey.RIGHT], state.current_look)
    camera_right = state.pose.rotation.rotate_vec(Vec3.unit_x())
    assert right.to_tuple() == pytest.approx(camera_right.to_tuple(), abs=1e-9)


def test_combined_policy_moves_diagonally():
    config = FreeFlyConfig(movement_policy=MovementPolicy.COMBINED, speed=0.1)
    state = spawn_free_fly_state(config)

    result = freefly_update(state, tick(keys=[MoveKey.FORWARD, MoveKey.RIGHT]), DT, config)
    step = 0.1 * math.sqrt(0.5)
    assert result.position.to_tuple() == pytest.approx((-step, 1.0, -step), abs=1e-9)

    # Opposite keys cancel out
    result = freefly_update(state, tick(keys=[MoveKey.FORWARD, MoveKey.BACK]), DT, config)
    assert result.position.to_tuple() == pytest.approx(state.position.to_tuple())


def test_mouse_turns_the_look():
    config = FreeFlyConfig(sensitivity=0.02)
    state = spawn_free_fly_state(config)
    result = freefly_update(state, tick(deltas=[(10.0, 5.0)]), DT, config)

    assert result.desired_look.yaw == pytest.approx(math.pi + 0.2)
    # Mouse down looks down
    assert result.desired_look.pitch == pytest.approx(-0.1)
    assert result.current_look == result.desired_look


def test_only_first_two_motion_events_count():
    config = FreeFlyConfig()
    state = spawn_free_fly_state(config)
    result = freefly_update(state, tick(deltas=[(10.0, 0.0)] * 5), DT, config)
    assert result.desired_look.yaw == pytest.approx(math.pi + 2 * 10.0 * 0.02)

    # Discarded events do not carry over to the next tick
    again = freefly_update(result, tick(), DT, config)
    assert again.desired_look == result.desired_look


def test_event_cap_is_configurable():
    config = FreeFlyConfig(max_look_events=3)
    look = accumulate_look(LookAngles(0.0, 0.0), [Vec2(1.0, 0.0)] * 5, config)
    assert look.yaw == pytest.approx(3 * 0.02)


def test_pitch_never_leaves_clamp_range():
    rng = random.Random(1234)
    config = FreeFlyConfig()
    state = spawn_free_fly_state(config)
    for _ in range(500):
        deltas = [(rng.uniform(-400, 400), rng.uniform(-400, 400))
                  for _ in range(rng.randint(0, 4))]
        state = freefly_update(state, tick(deltas=deltas), DT, config)
        assert -LIMIT <= state.current_look.pitch <= LIMIT
        assert -LIMIT <= state.desired_look.pitch <= LIMIT
        assert state.pose.rotation.forward().is_finite()


def test_pitch_clamps_at_the_pole():
    config = FreeFlyConfig()
    state = spawn_free_fly_state(config)
    state = freefly_update(state, tick(deltas=[(0.0, -10000.0)]), DT, config)
    assert state.current_look.pitch == pytest.approx(LIMIT)

    # Forward still moves mostly up, never NaN
    state = freefly_update(state, tick(keys=[MoveKey.FORWARD]), DT, config)
    assert state.position.is_finite()
    assert state.position.y > 1.09


def test_snap_without_smoothing():
    desired = LookAngles(1.0, 0.5)
    assert ease_look(LookAngles(0.0, 0.0), desired, DT, FreeFlyConfig()) == desired


def test_exponential_smoothing():
    config = FreeFlyConfig(smoothing_rate=6.0)
    current = LookAngles(0.0, 0.0)
    desired = LookAngles(1.0, -0.5)

    eased = ease_look(current, desired, DT, config)
    assert eased.yaw == pytest.approx(0.1)
    assert eased.pitch == pytest.approx(-0.05)

    # Large dt never overshoots
    assert ease_look(current, desired, 10.0, config) == desired


def test_smoothed_look_converges():
    config = FreeFlyConfig(smoothing_rate=6.0)
    state = spawn_free_fly_state(config)
    state = freefly_update(state, tick(deltas=[(25.0, 0.0)]), DT, config)
    assert state.current_look.yaw < state.desired_look.yaw

    for _ in range(300):
        state = freefly_update(state, tick(), DT, config)
    assert state.current_look.yaw == pytest.approx(state.desired_look.yaw)


def test_pose_looks_along_current_look():
    state = state_with_look(0.4, -0.3)
    result = freefly_update(state, tick(), DT)
    expected = normalize_direction(0.4, -0.3)
    assert result.pose.forward().to_tuple() == pytest.approx(expected.to_tuple(), abs=1e-9)
    # World up keeps the horizon level
    assert result.pose.rotation.rotate_vec(Vec3.unit_x()).y == pytest.approx(0.0, abs=1e-9)


def test_controller_update_and_reset():
    controller = FreeFlyController()
    controller.update(tick(keys=[MoveKey.UP]), DT)
    controller.update(tick(keys=[MoveKey.UP]), DT)
    assert controller.pose.position.y == pytest.approx(1.2)

    controller.reset()
    assert controller.pose.position == Vec3(0.0, 1.0, 0.0)


if __name__ == "__main__":
    test_forward_step_from_spawn()
    test_forward_wins_over_right()
    test_pitch_never_leaves_clamp_range()
