import pytest

from pdf_stream_markdown.detectors import TableDetector, quantize
from pdf_stream_markdown.models import LineSegment
from pdf_stream_markdown.postprocessors import PostProcessorPipeline, SegmentDeduplicator


def rectangle(x, y, w, h):
    corners = [(x, y), (x + w, y), (x + w, y + h), (x, y + h)]
    return [LineSegment(corners[i], corners[(i + 1) % 4]) for i in range(4)]


@pytest.fixture
def detector():
    return TableDetector()


def test_two_by_two_cells_make_one_table(detector):
    segments = []
    for x in (0, 50):
        for y in (0, 50):
            segments += rectangle(x, y, 50, 50)

    [table] = detector.detect(segments)

    assert len(table.boundaries) == 4
    assert (table.x, table.y) == (50.0, 50.0)
    first = table.boundaries[0]
    assert (first.minx, first.maxx, first.miny, first.maxy) == (0.0, 50.0, 0.0, 50.0)


def test_grid_drawn_edge_by_edge(detector):
    xs, ys = (100, 200, 300), (100, 150, 200)
    segments = [LineSegment((x0, y), (x1, y)) for y in ys for x0, x1 in zip(xs, xs[1:])]
    segments += [LineSegment((x, y0), (x, y1)) for x in xs for y0, y1 in zip(ys, ys[1:])]

    [table] = detector.detect(segments)
    assert len(table.boundaries) == 4
    assert (table.x, table.y) == (200.0, 150.0)


def test_endpoint_only_clustering_misses_crossing_rulings(detector):
    segments = rectangle(100, 100, 200, 100) + [
        LineSegment((100, 150), (300, 150)),
        LineSegment((200, 100), (200, 200)),
    ]

    # Known limitation: clusters connect through endpoints only, so rulings
    # that cross the border away from its corners form separate clusters
    assert detector.detect(segments) == []


def test_bare_rectangle_is_not_a_table(detector):
    assert detector.detect(rectangle(0, 0, 100, 100)) == []


def test_lines_without_both_orientations_are_ignored(detector):
    segments = [LineSegment((0, y), (100, y)) for y in (0, 5, 10)]
    assert detector.detect(segments) == []


def test_clusters_join_only_on_near_endpoints(detector):
    a = LineSegment((0, 0), (100, 0))
    b = LineSegment((105, 0), (105, 100))
    c = LineSegment((0, 150), (100, 150))

    clusters = detector.cluster_segments([a, b, c])
    assert clusters == [[a, b], [c]]


def test_separate_grids_become_separate_tables(detector):
    left = rectangle(0, 0, 50, 50) + rectangle(50, 0, 50, 50)
    right = rectangle(400, 0, 50, 50) + rectangle(450, 0, 50, 50)

    tables = detector.detect(left + right)
    assert len(tables) == 2
    assert [t.x for t in tables] == [50.0, 450.0]


def test_deduplicator_ignores_direction():
    seg = LineSegment((0, 0), (100, 0))
    reverse = LineSegment((101, 1), (1, 0))
    other = LineSegment((0, 10), (100, 10))

    pipeline = PostProcessorPipeline().add(SegmentDeduplicator(tolerance=5.0))
    assert len(pipeline) == 1
    assert pipeline([seg, reverse, other]) == [seg, other]


def test_disabled_processor_passes_through():
    dedup = SegmentDeduplicator()
    dedup.enabled = False
    seg = LineSegment((0, 0), (100, 0))

    assert dedup([seg, seg]) == [seg, seg]


def test_grid_rows_are_ordered_bottom_up(detector):
    rows = detector.arrange_grid([(50, 51), (0, 0), (0, 50), (50, 1)])
    assert rows == [[(0, 0), (50, 1)], [(0, 50), (50, 51)]]


def test_quantize_rounds_half_away_from_zero():
    assert quantize(4.5, 3.0) == 2
    assert quantize(-4.5, 3.0) == -2
    assert quantize(4.4, 3.0) == 1


def test_segment_length_and_orientation():
    seg = LineSegment((0, 0), (30, 40))

    assert seg.length == 50.0
    assert not seg.is_horizontal()
    assert LineSegment((0, 0), (100, 1)).is_horizontal()
    assert LineSegment((0, 0), (1, 100)).is_vertical()
