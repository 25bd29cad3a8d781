from __future__ import annotations

import pytest

from backend.api.formatting import format_duration


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (0, "0s"),
        (42e-9, "42ns"),
        (512e-6, "512µs"),
        (0.00125, "1.25ms"),
        (0.25, "250ms"),
        (2.003, "2.003s"),
        (90, "1m30s"),
        (3600, "1h0m0s"),
        (3723.5, "1h2m3.5s"),
    ],
)
def test_format_duration_matches_go_rendering(seconds, expected) -> None:
    assert format_duration(seconds) == expected


def test_negative_durations_keep_sign() -> None:
    assert format_duration(-1.5) == "-1.5s"
