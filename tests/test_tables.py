from rustico.tables import table_right_from, table_with_titles


def test_markdown_layout():
    table = table_with_titles(["Name", "Size"])
    table.add_row(["a", "10"])
    assert table.render() == "| Name | Size |\n|------|------|\n| a    | 10   |"


def test_right_aligned_columns():
    table = table_right_from(1, ["Name", "Size"])
    table.add_row(["file", "7"])
    lines = table.render().splitlines()
    assert lines[2] == "| file |    7 |"
    assert lines[2].startswith("| file")


def test_all_lines_have_same_length():
    table = table_with_titles(["ID", "Host", "Paths"])
    table.add_row(["1234abcd", "server", "/home"])
    table.add_row(["x", "y", "/very/long/path/name"])
    lengths = {len(line) for line in table.render().splitlines()}
    assert len(lengths) == 1


def test_rows_longer_than_header_add_columns():
    table = table_with_titles(["A"])
    table.add_row(["1", "extra"])
    lines = table.render().splitlines()
    assert "extra" in lines[-1]
    assert len({len(line) for line in lines}) == 1


def test_multiline_cells_span_lines():
    table = table_with_titles(["Tags", "N"])
    table.add_row(["a\nb", "x"])
    lines = table.render().splitlines()
    assert [line.split("|")[1].strip() for line in lines[2:]] == ["a", "b"]


def test_cells_are_converted_to_strings():
    table = table_with_titles(["A", "B"])
    table.add_row([1, 2])
    assert table.rows == [["1", "2"]]


def test_empty_table_renders_nothing():
    assert table_with_titles([]).render() == ""