from subword_engine.motions import (
    is_digit,
    is_hex_digit,
    is_hex_string,
    is_hyphen,
    is_underscore,
    is_upper,
    is_word_char,
)


def test_word_chars_cover_ascii_alphanumerics_hyphen_and_underscore() -> None:
    for char in ("a", "Z", "5", "-", "_"):
        assert is_word_char(char)


def test_non_word_chars() -> None:
    for char in (" ", "\t", "#", ".", "|", "é", "\n"):
        assert not is_word_char(char)


def test_empty_string_is_never_a_word_char() -> None:
    assert not is_word_char("")
    assert not is_word_char("", extra="$")


def test_extra_chars_join_the_word_alphabet() -> None:
    assert not is_word_char("$")
    assert is_word_char("$", extra="$@")
    assert is_word_char("@", extra="$@")


def test_multi_character_strings_need_every_char_to_qualify() -> None:
    assert is_word_char("abc_1")
    assert not is_word_char("ab c")


def test_hex_digits() -> None:
    assert all(is_hex_digit(char) for char in "0123456789abcdefABCDEF")
    assert not is_hex_digit("g")
    assert not is_hex_digit("")
    assert is_hex_string("DeadBeef")
    assert not is_hex_string("ff00zz")


def test_upper_includes_accented_allowlist() -> None:
    for char in "AZÉÈÊÀÓÒŽŠ":
        assert is_upper(char)
    for char in ("a", "é", "1", "_", ""):
        assert not is_upper(char)


def test_single_character_membership_helpers() -> None:
    assert is_digit("7") and not is_digit("x")
    assert is_underscore("_") and not is_underscore("-")
    assert is_hyphen("-") and not is_hyphen("_")
