"""
Reading-order helpers shared by table cells and page layout.
"""

from typing import List, Sequence, TypeVar

T = TypeVar("T")


def sort_into_rows(items: Sequence[T], tolerance: float = 1.0) -> List[List[T]]:
    """
    Order positioned items top-to-bottom, left-to-right.

    Items are sorted by descending y (ascending x on ties). An item joins the
    current row while its y is within ``tolerance`` of the y of the row's
    first item. Each row is then sorted by x.
    """
    ordered = sorted(items, key=lambda item: (-item.y, item.x))

    rows: List[List[T]] = []
    for item in ordered:
        if rows and abs(rows[-1][0].y - item.y) <= tolerance:
            rows[-1].append(item)
        else:
            rows.append([item])

    for row in rows:
        row.sort(key=lambda item: item.x)
    return rows
