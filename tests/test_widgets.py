import pytest

pytest.importorskip("PySide6.QtTest")


from bibliodesk.core.paging import PagedListModel  # noqa: E402
from bibliodesk.core.search import ALL_FIELDS  # noqa: E402
from bibliodesk.gui.widgets import PaginationBar, SearchBar  # noqa: E402

FIELDS = (("title", "Title"), ("isbn", "ISBN"))
ACCESSORS = {"title": lambda r: r[0], "isbn": lambda r: r[1]}


@pytest.fixture
def paged():
    model = PagedListModel(2, accessors=ACCESSORS)
    model.set_master([("Victus", "111"), ("Senyoria", "222"), ("Aloma", "333"), ("Blanquerna", "411")])
    return model


def test_search_bar_filters_model(qtbot, paged):
    bar = SearchBar(paged, FIELDS)
    qtbot.addWidget(bar)

    with qtbot.waitSignal(bar.criteriaChanged, timeout=1000):
        bar.query_edit.setText("al")

    assert paged.criteria.field == ALL_FIELDS
    assert [title for title, _ in paged.filtered] == ["Aloma"]


def test_search_bar_field_selection(qtbot, paged):
    bar = SearchBar(paged, FIELDS, all_label="Everything")
    qtbot.addWidget(bar)

    assert bar.field_combo.itemText(0) == "Everything"
    bar.field_combo.setCurrentIndex(2)
    bar.query_edit.setText("1")

    assert paged.criteria.field == "isbn"
    assert [isbn for _, isbn in paged.filtered] == ["111", "411"]


def test_pagination_bar_tracks_model(qtbot, paged):
    bar = PaginationBar(paged)
    qtbot.addWidget(bar)

    assert bar.page_label.text() == "Page 1 of 2"
    assert not bar.previous_button.isEnabled()
    assert bar.next_button.isEnabled()

    bar.next_button.click()

    assert paged.page_index == 1
    assert bar.page_label.text() == "Page 2 of 2"
    assert bar.previous_button.isEnabled()
    assert not bar.next_button.isEnabled()

    bar.previous_button.click()
    assert paged.page_index == 0


def test_pagination_bar_disables_next_when_nothing_matches(qtbot, paged):
    bar = PaginationBar(paged)
    qtbot.addWidget(bar)
    paged.set_master([])

    assert bar.page_label.text() == "Page 1 of 1"
    assert not bar.next_button.isEnabled()
    assert not bar.previous_button.isEnabled()
