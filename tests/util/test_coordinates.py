from burrow.util.coordinates import Rect


class TestRect:
    def test_corners_and_size(self) -> None:
        rect = Rect(2, 3, 5, 4)
        assert (rect.x1, rect.y1, rect.x2, rect.y2) == (2, 3, 7, 7)
        assert rect.width == 5
        assert rect.height == 4

    def test_from_bounds(self) -> None:
        assert Rect.from_bounds(1, 1, 6, 4) == Rect(1, 1, 5, 3)

    def test_center_rounds_down(self) -> None:
        assert Rect(0, 0, 5, 5).center() == (2, 2)
        assert Rect(1, 1, 6, 9).center() == (4, 5)

    def test_intersects_overlap_and_touch(self) -> None:
        a = Rect(0, 0, 5, 5)
        assert a.intersects(Rect(3, 3, 5, 5))
        # Sharing an edge counts as intersecting
        assert a.intersects(Rect(5, 0, 3, 3))
        assert not a.intersects(Rect(6, 0, 3, 3))

    def test_intersects_margin(self) -> None:
        a = Rect(0, 0, 5, 5)
        b = Rect(7, 0, 3, 3)
        assert not a.intersects(b)
        assert a.intersects(b, margin=2)

    def test_hashable(self) -> None:
        assert len({Rect(0, 0, 2, 2), Rect(0, 0, 2, 2), Rect(1, 0, 2, 2)}) == 2
