"""Tests for the rotation helpers."""

import pytest

from pdfcollate.utils.rotation import normalize_rotation


class TestNormalizeRotation:
    @pytest.mark.parametrize(
        "degrees, expected",
        [(0, 0), (90, 90), (360, 0), (450, 90), (-90, 270), (-270, 90)],
    )
    def test_quarter_turns(self, degrees, expected):
        assert normalize_rotation(degrees) == expected

    def test_rounds_to_nearest_quarter(self):
        assert normalize_rotation(100) == 90
        assert normalize_rotation(350) == 0

