import pytest

from image_morse.models.errors import InvalidDimensions
from image_morse.models.frame_model import Dimensions
from image_morse.services.raster_scanner import RasterScanner, scan


def test_row_major_order():
    assert list(scan(3, 2)) == [(0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1)]


def test_scan_is_restartable_and_bounded():
    first = list(scan(4, 5))
    second = list(scan(4, 5))
    assert first == second
    assert len(first) == 20
    assert first[0] == (0, 0)
    assert first[-1] == (3, 4)


def test_scanner_object_can_be_iterated_repeatedly():
    scanner = RasterScanner(2, 2)
    assert len(scanner) == 4
    assert list(scanner) == list(scanner) == [(0, 0), (1, 0), (0, 1), (1, 1)]


def test_single_pixel():
    assert list(scan(1, 1)) == [(0, 0)]


@pytest.mark.parametrize("width, height", [(0, 0), (0, 3), (3, 0), (-1, 2), (2, -5)])
def test_non_positive_dimensions_are_rejected_at_call_time(width, height):
    # no iteration: the check must not be deferred to the generator body
    with pytest.raises(InvalidDimensions):
        scan(width, height)
    with pytest.raises(InvalidDimensions):
        RasterScanner(width, height)


def test_scanner_from_dimensions():
    scanner = RasterScanner.for_dimensions(Dimensions(3, 1))
    assert len(scanner) == 3
    assert list(scanner) == list(scan(3, 1))
