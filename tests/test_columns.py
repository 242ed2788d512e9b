import pytest

pytest.importorskip("PySide6.QtTest")

from PySide6.QtCore import Qt  # noqa: E402

from bibliodesk.core.paging import PagedListModel  # noqa: E402
from bibliodesk.core.search import ALL_FIELDS, SearchCriteria  # noqa: E402
from bibliodesk.gui.columns import ColumnDescriptor, PageTableModel, RecordRole  # noqa: E402

COLUMNS = (
    ColumnDescriptor("Name", lambda record: record["name"]),
    ColumnDescriptor("Pages", lambda record: record.get("pages"), alignment=Qt.AlignmentFlag.AlignRight),
)


@pytest.fixture
def paged():
    model = PagedListModel(3, accessors={"name": lambda record: record["name"]})
    model.set_master([{"name": f"book {i}", "pages": i * 10} for i in range(7)])
    return model


def test_rows_follow_current_page(qtbot, paged):
    table = PageTableModel(paged, COLUMNS)

    assert table.rowCount() == 3
    assert table.columnCount() == 2
    assert table.data(table.index(0, 0)) == "book 0"

    paged.next_page()

    assert table.data(table.index(0, 0)) == "book 3"


def test_reset_is_signalled_on_filter(qtbot, paged):
    table = PageTableModel(paged, COLUMNS)

    with qtbot.waitSignal(table.modelReset, timeout=1000):
        paged.set_criteria(SearchCriteria(ALL_FIELDS, "book 6"))

    assert table.rowCount() == 1
    assert table.record_at(0)["name"] == "book 6"
    assert table.record_at(5) is None


def test_none_values_display_as_empty_text(qtbot):
    paged = PagedListModel(5)
    paged.set_master([{"name": "untitled"}])
    table = PageTableModel(paged, COLUMNS)

    assert table.data(table.index(0, 1)) == ""


def test_headers_and_roles(qtbot, paged):
    table = PageTableModel(paged, COLUMNS)
    paged.next_page()

    assert table.headerData(0, Qt.Orientation.Horizontal) == "Name"
    assert table.headerData(0, Qt.Orientation.Vertical) == "4"
    assert table.data(table.index(0, 1), Qt.ItemDataRole.TextAlignmentRole) == Qt.AlignmentFlag.AlignRight
    assert table.data(table.index(0, 0), RecordRole)["pages"] == 30


def test_detach_stops_following(qtbot, paged):
    table = PageTableModel(paged, COLUMNS)
    table.detach()
    paged.next_page()

    assert table.data(table.index(0, 0)) == "book 0"
