from softraster.hsf import HsfContent, HsfReader

DOCUMENT = """Size: 1, 2, 3
 4, 5

Tags: (a, b), "x, y", c // trailing comment
// a full comment line
Grid: [1, 2], {3, 4}
"""


def test_entries_are_read_in_order():
    reader = HsfReader.from_text(DOCUMENT)
    assert [c.name for c in reader.contents] == ["size", "tags", "grid"]


def test_rows_are_joined_and_counted():
    content = HsfReader.from_text(DOCUMENT).get_content("size")
    assert content.data == ["1", "2", "3", "4", "5"]
    assert content.vert_size == 2


def test_brackets_and_quotes_keep_commas():
    content = HsfReader.from_text(DOCUMENT).get_content("tags")
    assert content.data == ["(a, b)", '"x, y"', "c"]
    assert content.vert_size == 1


def test_square_and_curly_brackets():
    content = HsfReader.from_text(DOCUMENT).get_content("grid")
    assert content.data == ["[1, 2]", "{3, 4}"]


def test_text_is_lowercased():
    reader = HsfReader.from_text("KEY: VALUE")
    assert reader.get_content("key").data == ["value"]
    assert reader.get_content("KEY") == HsfContent()


def test_missing_entry_is_empty():
    reader = HsfReader.from_text(DOCUMENT)
    missing = reader.get_content("nothing")
    assert missing == HsfContent()
    assert missing.data == []
    assert missing.vert_size == 0


def test_lines_before_first_entry_are_ignored():
    reader = HsfReader.from_text("stray, values\nname: v")
    assert len(reader.contents) == 1
    assert reader.contents[0].data == ["v"]


def test_empty_entry_has_no_rows():
    reader = HsfReader.from_text("empty:\nnext: 1")
    assert reader.get_content("empty").vert_size == 0
    assert reader.get_content("next").data == ["1"]


def test_empty_document():
    assert HsfReader.from_text("").contents == []


def test_from_file_matches_from_text(tmp_path):
    path = tmp_path / "doc.hsf"
    path.write_text(DOCUMENT, encoding="utf-8")
    assert HsfReader.from_file(path) == HsfReader.from_text(DOCUMENT)