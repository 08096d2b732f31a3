from trackbuddy.config import AxisMapping
from trackbuddy.core import AccelerationSample, ExtremaState, ExtremaTracker


def _sample(x: float = 0.0, z: float = 0.0) -> AccelerationSample:
    return AccelerationSample(x=x, y=0.0, z=z)


def test_extrema_move_away_from_zero_only() -> None:
    tracker = ExtremaTracker()
    values = [0.3, -0.2, 0.8, 0.1, -0.9, 0.5, -0.4]
    previous = tracker.state
    for v in values:
        state = tracker.observe(_sample(x=v, z=v))
        assert state.max_acceleration >= previous.max_acceleration
        assert state.max_braking <= previous.max_braking
        assert state.max_left >= previous.max_left
        assert state.max_right <= previous.max_right
        previous = state

    assert previous == ExtremaState(
        max_acceleration=0.8, max_braking=-0.9, max_left=0.8, max_right=-0.9
    )


def test_extrema_sign_invariant_holds() -> None:
    tracker = ExtremaTracker()
    for v in (0.5, 0.7, 0.6):
        tracker.observe(_sample(x=v, z=v))
    state = tracker.state
    assert state.max_acceleration >= 0.0 >= state.max_braking
    assert state.max_left >= 0.0 >= state.max_right
    assert state.max_braking == 0.0
    assert state.max_right == 0.0


def test_reset_zeroes_and_is_idempotent() -> None:
    tracker = ExtremaTracker()
    tracker.observe(_sample(x=-1.2, z=2.0))
    tracker.reset()
    once = tracker.state
    tracker.reset()
    assert tracker.state == once == ExtremaState()


def test_flipped_longitudinal_sign_swaps_accel_and_braking() -> None:
    tracker = ExtremaTracker(AxisMapping(longitudinal_sign=-1))
    state = tracker.observe(_sample(z=1.0))
    assert state.max_acceleration == 0.0
    assert state.max_braking == -1.0


def test_custom_axes_read_configured_channels() -> None:
    tracker = ExtremaTracker(AxisMapping(lateral_axis="y", longitudinal_axis="x"))
    state = tracker.observe(AccelerationSample(x=0.4, y=-0.6, z=9.0))
    assert state.max_acceleration == 0.4
    assert state.max_right == -0.6
    assert state.max_left == 0.0
