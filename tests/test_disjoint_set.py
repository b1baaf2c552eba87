from pdf_stream_markdown.detectors import BaseDetector, DisjointSet


def test_union_and_find():
    ds = DisjointSet(5)
    assert ds.union(0, 1)
    assert ds.union(3, 4)
    assert not ds.union(1, 0)

    assert ds.connected(0, 1)
    assert not ds.connected(1, 3)
    assert ds.groups() == [[0, 1], [2], [3, 4]]


def test_union_by_size_keeps_larger_root():
    ds = DisjointSet(4)
    ds.union(0, 1)
    ds.union(0, 2)
    root = ds.find(0)
    ds.union(3, 2)

    assert ds.find(3) == root
    assert ds.sizes[root] == 4


def test_long_chain_is_compressed():
    n = 5000
    ds = DisjointSet(n)
    for i in range(n - 1):
        ds.parents[i] = i + 1

    root = ds.find(0)
    assert root == n - 1
    assert ds.parents[0] == root
    assert ds.parents[n // 2] == root


def test_cluster_points_returns_centroids():
    points = [(0.0, 0.0), (4.0, 0.0), (100.0, 100.0), (2.0, 3.0)]
    centroids = BaseDetector.cluster_points(points, radius=10.0)

    assert centroids == [(2.0, 1.0), (100.0, 100.0)]
