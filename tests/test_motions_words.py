import pytest

from subword_engine.buffer import Position, Range, TextDocument
from subword_engine.motions import InvariantViolation, extend_to_word, find_word_edge


def at(document: TextDocument, offset: int) -> Position:
    return document.position_at(offset)


def test_find_word_edge_scans_both_directions() -> None:
    document = TextDocument.from_text("hello world")

    assert find_word_edge(document, at(document, 2), 1) == at(document, 5)
    assert find_word_edge(document, at(document, 2), -1) == at(document, 0)


def test_find_word_edge_is_a_fixed_point_at_the_boundary() -> None:
    document = TextDocument.from_text("hello world")

    for offset in range(1, 5):
        end = find_word_edge(document, at(document, offset), 1)
        start = find_word_edge(document, at(document, offset), -1)
        assert find_word_edge(document, end, 1) == end
        assert find_word_edge(document, start, -1) == start


def test_find_word_edge_returns_input_when_neighbour_is_not_a_word_char() -> None:
    document = TextDocument.from_text("ab  cd")

    assert find_word_edge(document, at(document, 3), 1) == at(document, 3)
    assert find_word_edge(document, at(document, 3), -1) == at(document, 3)


def test_find_word_edge_stops_at_document_edges() -> None:
    document = TextDocument.from_text("abc")

    assert find_word_edge(document, at(document, 0), -1) == at(document, 0)
    assert find_word_edge(document, at(document, 3), 1) == at(document, 3)


def test_find_word_edge_rejects_bad_direction() -> None:
    document = TextDocument.from_text("abc")

    with pytest.raises(InvariantViolation):
        find_word_edge(document, at(document, 1), 2)


def test_extend_to_word_is_symmetric_inside_a_word() -> None:
    document = TextDocument.from_text("say my-var_name2 now")
    expected = Range(at(document, 4), at(document, 16))

    for offset in range(5, 16):
        assert extend_to_word(document, at(document, offset)) == expected


def test_extend_to_word_outside_any_word_is_empty() -> None:
    document = TextDocument.from_text("a   b")

    result = extend_to_word(document, at(document, 2))

    assert result.is_empty
    assert result.start == at(document, 2)


def test_extend_to_word_never_crosses_lines() -> None:
    document = TextDocument.from_text("foo\nbar")

    result = extend_to_word(document, Position(1, 1))

    assert result == Range(Position(1, 0), Position(1, 3))


def test_extend_to_word_honours_extra_chars() -> None:
    document = TextDocument.from_text("x = $foo.bar")

    plain = extend_to_word(document, at(document, 6))
    extended = extend_to_word(document, at(document, 6), "$")

    assert document.get_text(plain) == "foo"
    assert document.get_text(extended) == "$foo"
