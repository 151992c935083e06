from rustico.events import KeyEvent, KeyKind
from rustico.select_table import SelectTable


def make_table(count, row_height=1):
    table = SelectTable(["Name", "Size"])
    table.set_content([[f"n{i}", str(i)] for i in range(count)], row_height)
    return table


def test_widths_include_header():
    table = SelectTable(["Name", "Size"])
    table.set_content([["a", "1"], ["longer name", "22"]], 1)
    assert table.widths == [len("longer name"), len("Size")]


def test_scroll_length_follows_content():
    table = make_table(6, row_height=3)
    assert table.rows == 6
    assert table.scroll_length == 6 * 3


def test_nothing_selected_initially():
    table = make_table(5)
    table.next()
    table.end()
    assert table.selected is None


def test_set_to_moves_scroll_position():
    table = make_table(5, row_height=2)
    table.set_to(3)
    assert table.selected == 3
    assert table.scroll_position == 3 * 2


def test_forward_and_back_are_clamped():
    table = make_table(4)
    table.select(2)
    table.go_forward(10)
    assert table.selected == 3
    table.go_back(10)
    assert table.selected == 0


def test_paging_uses_displayed_rows():
    table = make_table(20, row_height=2)
    table.select(0)
    table.set_rows(10)
    assert table.rows_display == 5
    table.page_down()
    assert table.selected == table.rows_display
    table.page_up()
    assert table.selected == 0


def test_key_input():
    table = make_table(5)
    table.select(0)
    table.input(KeyEvent("down"))
    assert table.selected == 1
    table.input(KeyEvent("end"))
    assert table.selected == 4
    table.input(KeyEvent("up"))
    assert table.selected == 3
    table.input(KeyEvent("home"))
    assert table.selected == 0


def test_released_keys_are_ignored():
    table = make_table(5)
    table.select(0)
    table.input(KeyEvent("down", kind=KeyKind.RELEASE))
    assert table.selected == 0