from mazeswipe.services.motion import Motion, cell_center


def test_cell_center_is_x_then_y():
    assert cell_center((0, 0), 32) == (16.0, 16.0)
    assert cell_center((2, 5), 10) == (55.0, 25.0)


def test_motion_interpolates_between_centres():
    m = Motion(source=(1, 1), dest=(1, 5), started_at=10.0, duration=0.5)
    assert m.distance == 4
    assert m.ends_at == 10.5
    assert m.position(10.0, 10) == cell_center((1, 1), 10)
    assert m.position(10.25, 10) == (35.0, 15.0)
    assert m.position(99, 10) == cell_center((1, 5), 10)


def test_progress_is_clamped():
    m = Motion((1, 1), (4, 1), started_at=5.0, duration=1.0)
    assert m.progress(0) == 0.0
    assert m.progress(5.5) == 0.5
    assert m.progress(7) == 1.0
    assert Motion((1, 1), (1, 1), 0.0, 0.0).progress(0) == 1.0
