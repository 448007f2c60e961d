from datetime import timedelta

import pytest

from dodel.utils.humanize import human_time
from tests.conftest import START


@pytest.mark.parametrize(
    ("elapsed", "expected"),
    [
        (timedelta(0), "just now"),
        (timedelta(seconds=4), "just now"),
        (timedelta(seconds=5), "5 seconds ago"),
        (timedelta(seconds=59), "59 seconds ago"),
        (timedelta(minutes=1, seconds=30), "a minute ago"),
        (timedelta(minutes=2), "2 minutes ago"),
        (timedelta(minutes=59), "59 minutes ago"),
        (timedelta(hours=1, minutes=30), "an hour ago"),
        (timedelta(hours=2), "2 hours ago"),
        (timedelta(hours=30), "30 hours ago"),
    ],
)
def test_human_time(elapsed: timedelta, expected: str) -> None:
    assert human_time(START, START + elapsed) == expected
