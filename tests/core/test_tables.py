import pytest

from markup_desktop.core.tables import edit_table, locate_table, table_markup

GRID = (
    "<table><tbody>"
    "<tr><td>a</td><td>b</td></tr>"
    "<tr><td>c</td><td>d</td></tr>"
    "</tbody></table>"
)


def _at(markup: str, cell_text: str) -> int:
    return markup.index(f"{cell_text}</td>")


def _grid(*rows: str) -> str:
    return "<table><tbody>" + "".join(rows) + "</tbody></table>"


def test_table_markup():
    assert table_markup(1, 2) == "<table><tbody><tr><td></td><td></td></tr></tbody></table>"


def test_locate_table_inside_and_outside():
    markup = "<p>x</p>" + GRID + "<p>y</p>"
    start = markup.index("<table>")
    end = start + len(GRID)
    assert locate_table(markup, _at(markup, "c")) == (start, end)
    assert locate_table(markup, 2) is None
    assert locate_table(markup, len(markup) - 2) is None


def test_add_row_before_caret_row():
    result = edit_table(GRID, _at(GRID, "c"), "addRow", direction="before")
    assert result == _grid(
        "<tr><td>a</td><td>b</td></tr>",
        "<tr><td></td><td></td></tr>",
        "<tr><td>c</td><td>d</td></tr>",
    )


def test_add_row_after_caret_row():
    result = edit_table(GRID, _at(GRID, "a"), "addRow", direction="after")
    assert result == _grid(
        "<tr><td>a</td><td>b</td></tr>",
        "<tr><td></td><td></td></tr>",
        "<tr><td>c</td><td>d</td></tr>",
    )


@pytest.mark.parametrize("cell, direction", [("a", "after"), ("b", "before")])
def test_add_column(cell, direction):
    result = edit_table(GRID, _at(GRID, cell), "addCol", direction=direction)
    assert result == _grid(
        "<tr><td>a</td><td></td><td>b</td></tr>",
        "<tr><td>c</td><td></td><td>d</td></tr>",
    )


def test_add_header_once():
    result = edit_table(GRID, _at(GRID, "a"), "addHeader")
    assert result.startswith("<table><thead><tr><th></th><th></th></tr></thead><tbody>")
    assert edit_table(result, _at(result, "a"), "addHeader") is None


def test_delete_row():
    result = edit_table(GRID, _at(GRID, "c"), "deleteTableArea", area="row")
    assert result == _grid("<tr><td>a</td><td>b</td></tr>")


def test_delete_column():
    result = edit_table(GRID, _at(GRID, "b"), "deleteTableArea", area="col")
    assert result == _grid("<tr><td>a</td></tr>", "<tr><td>c</td></tr>")


def test_delete_table_keeps_surrounding_markup():
    markup = "<p  class=x>before</p>" + GRID + "<p>after</p>"
    result = edit_table(markup, _at(markup, "d"), "deleteTableArea", area="table")
    assert result == "<p  class=x>before</p><p>after</p>"


def test_deleting_the_last_row_removes_the_table():
    markup = "<p>x</p>" + table_markup(1, 1)
    offset = markup.index("</td>")
    assert edit_table(markup, offset, "deleteTableArea", area="row") == "<p>x</p>"


def test_border_class_is_replaced():
    markup = GRID.replace("<table>", '<table class="wide bordered-table-cell">')
    result = edit_table(markup, _at(markup, "a"), "borderTable", border="outer")
    assert result.startswith('<table class="wide bordered-table-outer">')
    assert edit_table(result, _at(result, "a"), "borderTable", border="outer") is None


def test_caret_outside_table_changes_nothing():
    markup = "<p>text</p>" + GRID
    assert edit_table(markup, 3, "addRow", direction="after") is None


def test_unknown_command_is_rejected():
    with pytest.raises(ValueError):
        edit_table(GRID, 1, "bold")
