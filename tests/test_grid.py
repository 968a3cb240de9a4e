from gridsnake.grid import Direction, Point, equals, in_bounds, step


def test_in_bounds_edges():
    assert in_bounds(Point(0, 0))
    assert in_bounds(Point(39, 29))
    assert not in_bounds(Point(-1, 0))
    assert not in_bounds(Point(40, 0))
    assert not in_bounds(Point(0, 30))
    assert in_bounds((4, 4), width=5, height=5)
    assert not in_bounds((5, 4), width=5, height=5)


def test_point_is_a_value():
    assert equals(Point(3, 4), (3, 4))
    assert Point(3, 4) == (3, 4)
    assert not equals(Point(3, 4), Point(4, 3))
    assert Point(1, 2) in {(1, 2)}


def test_direction_opposites():
    assert Direction.UP.opposite is Direction.DOWN
    assert Direction.LEFT.opposite is Direction.RIGHT
    assert Direction.UP.is_opposite(Direction.DOWN)
    assert not Direction.UP.is_opposite(Direction.LEFT)
    assert not Direction.UP.is_opposite(Direction.UP)


def test_step_uses_screen_orientation():
    assert step(Point(5, 5), Direction.UP) == (5, 4)
    assert step(Point(5, 5), Direction.DOWN) == (5, 6)
    assert step(Point(5, 5), Direction.LEFT) == (4, 5)
    assert step(Point(0, 5), Direction.LEFT) == (-1, 5)
