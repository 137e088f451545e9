"""
Coordinate transforms between the model's normalized scale and page pixels.

Vision models report points on a 0-1000 grid regardless of the screenshot
resolution. Results are rounded to three decimals.
"""

from llm_web_inspector.snapshot.models import Point, Size

MODEL_COORDINATE_SCALE = 1000
COORDINATE_PRECISION = 3


def to_absolute(point: Point, size: Size) -> Point:
    """
    Map a normalized point onto the page.

    Out-of-range input is transformed as-is; an off-page result simply
    matches no element later on.

    Args:
        point: Point on the 0-1000 scale
        size: Page size in pixels

    Returns:
        Absolute point in pixels
    """
    return Point(
        x=round(point.x / MODEL_COORDINATE_SCALE * size.width, COORDINATE_PRECISION),
        y=round(point.y / MODEL_COORDINATE_SCALE * size.height, COORDINATE_PRECISION),
    )
