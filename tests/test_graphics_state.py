from pdf_stream_markdown.extractors import GraphicsState, Matrix
from pdf_stream_markdown.models import LineSegment


def test_multiply_applies_right_operand_first():
    scale = Matrix(2, 0, 0, 2, 0, 0)
    shift = Matrix.translation(10, 5)

    # shift then scale
    assert scale.multiply(shift).origin == (20.0, 10.0)
    # scale then shift
    assert shift.multiply(scale).origin == (10.0, 5.0)


def test_apply_maps_points():
    m = Matrix(1, 0, 0, -1, 0, 792)
    assert m.apply(72, 700) == (72.0, 92.0)


def test_identity_is_neutral():
    m = Matrix(1, 2, 3, 4, 5, 6)
    assert Matrix.identity().multiply(m) == m
    assert m.multiply(Matrix.identity()) == m


def test_states_are_immutable_snapshots():
    state = GraphicsState()
    moved = state.move_text(10, 20)

    assert state.text_position == (0.0, 0.0)
    assert moved.text_position == (10.0, 20.0)


def test_text_position_combines_ctm_and_tm():
    state = GraphicsState().set_ctm(Matrix(2, 0, 0, 2, 100, 0)).move_text(10, 10)
    assert state.text_position == (120.0, 20.0)


def test_next_line_uses_leading():
    state = GraphicsState().move_text_set_leading(0, -14).next_line()
    assert state.leading == 14.0
    assert state.text_position == (0.0, -28.0)


def test_rectangle_edges_follow_corners():
    state, edges = GraphicsState().rectangle(0, 0, 10, 5)

    assert edges == (
        LineSegment((0.0, 0.0), (10.0, 0.0)),
        LineSegment((10.0, 0.0), (10.0, 5.0)),
        LineSegment((10.0, 5.0), (0.0, 5.0)),
        LineSegment((0.0, 5.0), (0.0, 0.0)),
    )
    assert state.current_point == (0, 0)
