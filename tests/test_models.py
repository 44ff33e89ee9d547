"""Tests for helpers in :mod:`booking_checker.models`."""
from __future__ import annotations

import pytest

from booking_checker.models import date_portion


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2025-05-20T10:15:00", "2025-05-20"),
        ("2025-05-20 10:15", "2025-05-20"),
        ("2025-05-20", "2025-05-20"),
        ("20 OCT 2025", "20 OCT 2025"),
        ("Tue, 20/05/2025", "Tue, 20/05/2025"),
        ("  ", None),
        (None, None),
    ],
)
def test_date_portion(value, expected) -> None:
    assert date_portion(value) == expected
