import pytest

from chatwordle.config import RoundTimings
from chatwordle.utils.helpers import format_time


@pytest.mark.parametrize('seconds,expected', [
    (300, '05:00'),
    (61, '01:01'),
    (9, '00:09'),
    (0, '00:00'),
    (None, None),
])
def test_format_time(seconds, expected):
    assert format_time(seconds) == expected


def test_round_timings_from_config_overrides():
    class FastConfig:
        ROUND_DURATION_SECONDS = '30'
        GUESS_COOLDOWN_SECONDS = 0.1

    timings = RoundTimings.from_config(FastConfig)

    assert timings.round_duration == 30
    assert timings.guess_cooldown == 0.1
    assert timings.summary_delay == 1.5
    assert timings.restart_transition == 0.5
