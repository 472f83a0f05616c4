import time

import pytest

from huewake.ramp import RampStep, produce_brightness_ramp, run_ramp


def test_ramp_levels():
    levels = [step.level for step in produce_brightness_ramp(1800)]
    assert len(levels) == 256
    assert levels == list(range(256))


def test_ramp_pacing_adds_up_to_duration():
    steps = list(produce_brightness_ramp(1800))
    assert steps[0] == RampStep(0, pytest.approx(1800 / 255))
    # No pause once full brightness is reached.
    assert steps[-1] == RampStep(255, 0)
    assert sum(step.pause for step in steps) == pytest.approx(1800)


def test_ramp_is_consumed_once():
    ramp = produce_brightness_ramp(10)
    assert len(list(ramp)) == 256
    assert list(ramp) == []


def test_run_ramp_applies_every_level_before_pausing():
    events = []
    run_ramp(
        produce_brightness_ramp(2.55),
        apply=lambda level: events.append(("apply", level)),
        sleep=lambda pause: events.append(("sleep", pause)),
    )
    applied = [value for kind, value in events if kind == "apply"]
    slept = [value for kind, value in events if kind == "sleep"]
    assert applied == list(range(256))
    assert len(slept) == 255
    assert sum(slept) == pytest.approx(2.55)
    assert events[0] == ("apply", 0)
    assert events[-1] == ("apply", 255)


def test_run_ramp_wall_clock():
    start = time.monotonic()
    run_ramp(produce_brightness_ramp(0.255), apply=lambda level: None)
    elapsed = time.monotonic() - start
    assert 0.25 <= elapsed < 2
