"""
Tests for coordinate transforms.
"""

import pytest

from llm_web_inspector.snapshot.coordinates import to_absolute
from llm_web_inspector.snapshot.models import Point, Size


class TestToAbsolute:
    """Test model scale to page pixels."""
    
    def test_center_of_page(self):
        assert to_absolute(Point(500, 500), Size(1000, 800)) == Point(500, 400)
    
    def test_corners(self):
        size = Size(1280, 720)
        
        assert to_absolute(Point(0, 0), size) == Point(0, 0)
        assert to_absolute(Point(1000, 1000), size) == Point(1280, 720)
    
    @pytest.mark.parametrize("point,size", [
        (Point(333, 777), Size(1366, 768)),
        (Point(1, 999), Size(1920, 1080)),
        (Point(123.4, 56.7), Size(375, 812)),
        (Point(999.9, 0.1), Size(3, 7)),
    ])
    def test_rounds_to_three_decimals(self, point, size):
        result = to_absolute(point, size)
        
        assert result.x == pytest.approx(round(point.x / 1000 * size.width, 3), abs=1e-3)
        assert result.y == pytest.approx(round(point.y / 1000 * size.height, 3), abs=1e-3)
        assert round(result.x, 3) == result.x
        assert round(result.y, 3) == result.y
    
    def test_out_of_range_is_not_an_error(self):
        """Off-page points transform; they just match nothing later."""
        assert to_absolute(Point(1500, -100), Size(1000, 1000)) == Point(1500, -100)
