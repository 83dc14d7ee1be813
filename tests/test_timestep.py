import pytest

from timestep import FixedStepper


class StepRecorder:
    def __init__(self):
        self.calls = []

    def __call__(self, dt):
        self.calls.append(dt)


def test_short_frame_only_renders():
    stepper = FixedStepper(fixed_step=0.01)
    recorder = StepRecorder()

    assert stepper.advance(0.005, recorder) == 0
    assert recorder.calls == []
    assert stepper.last_time == 0.0
    assert stepper.accumulator == 0.0


def test_full_step_frame_advances():
    stepper = FixedStepper(fixed_step=0.125)
    recorder = StepRecorder()

    assert stepper.advance(0.125, recorder) == 1
    assert recorder.calls == [0.125]
    assert stepper.last_time == 0.125


def test_accumulator_carries_leftover_between_frames():
    stepper = FixedStepper(fixed_step=0.125, max_frame_delta=0.25)
    recorder = StepRecorder()

    assert stepper.advance(0.0625, recorder) == 0
    assert stepper.advance(0.1875, recorder) == 1
    assert stepper.accumulator == 0.0625
    assert stepper.alpha == 0.5

    # 0.3125s elapsed, clamped to 0.25
    assert stepper.advance(0.5, recorder) == 2
    assert stepper.accumulator == 0.0625
    assert stepper.clamped_frames == 1
    assert stepper.steps_taken == 3
    assert stepper.frames == 3
    assert recorder.calls == [0.125] * 3


def test_drain_matches_cumulative_delta():
    fixed = 0.01
    stepper = FixedStepper(fixed_step=fixed)
    recorder = StepRecorder()

    wall_time = 0.0
    for delta in (0.005, 0.006, 0.029):
        wall_time += delta
        stepper.advance(wall_time, recorder)

    assert stepper.steps_taken == 4
    assert stepper.accumulator == pytest.approx(0.0, abs=1e-9)
    assert stepper.accumulator >= 0.0
    assert recorder.calls == [fixed] * 4


def test_clamp_bounds_catch_up_after_stall():
    stepper = FixedStepper(fixed_step=0.01, max_frame_delta=0.25)
    recorder = StepRecorder()

    steps = stepper.advance(10.0, recorder)

    assert steps == 25
    assert stepper.clamped_frames == 1
    assert stepper.last_time == 10.0


def test_clamp_with_exact_step():
    stepper = FixedStepper(fixed_step=0.125, max_frame_delta=0.25)
    assert stepper.advance(10.0, StepRecorder()) == 2
    assert stepper.accumulator == 0.0


def test_start_time_offsets_first_frame():
    stepper = FixedStepper(fixed_step=0.125, last_time=100.0)
    assert stepper.advance(100.0625, StepRecorder()) == 0
    assert stepper.advance(100.25, StepRecorder()) == 2


def test_reset_clears_state():
    stepper = FixedStepper(fixed_step=0.125)
    stepper.advance(0.1875, StepRecorder())

    stepper.reset(5.0)

    assert stepper.last_time == 5.0
    assert stepper.accumulator == 0.0
    assert stepper.steps_taken == 0
    assert stepper.frames == 0


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(fixed_step=0.0),
        dict(fixed_step=-0.01),
        dict(fixed_step=0.1, max_frame_delta=0.05),
    ],
)
def test_invalid_configuration(kwargs):
    with pytest.raises(ValueError):
        FixedStepper(**kwargs)


def test_leftover_is_kept_without_extra_step():
    fixed = 0.01
    stepper = FixedStepper(fixed_step=fixed)

    assert stepper.advance(0.035, StepRecorder()) == 3
    assert stepper.accumulator == pytest.approx(0.005, abs=1e-12)


class FailingStep:
    def __init__(self, fail_on):
        self.fail_on = fail_on
        self.calls = 0

    def __call__(self, dt):
        self.calls += 1
        if self.calls == self.fail_on:
            raise RuntimeError("step failed")


def test_failed_step_is_still_booked():
    stepper = FixedStepper(fixed_step=0.125, max_frame_delta=0.5)
    simulate = FailingStep(fail_on=2)

    with pytest.raises(RuntimeError):
        stepper.advance(0.5, simulate)

    assert simulate.calls == 2
    assert stepper.steps_taken == 2
    assert stepper.accumulator == 0.25
    assert stepper.last_time == 0.5
