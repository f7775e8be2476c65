import pytest

from vim_remap.keymaps import (
    KeyNotationError,
    KeyStroke,
    Remapping,
    RemappedKeyStroke,
    SpecialKey,
    parse_key_strokes,
)


def test_keystroke_equality_is_by_kind_and_value() -> None:
    assert KeyStroke.char("a") == KeyStroke("char", "a")
    assert hash(KeyStroke.char("a")) == hash(KeyStroke("char", "a"))
    assert KeyStroke.char("a") != KeyStroke.char("a", ctrl=True)
    assert KeyStroke.special("esc") == KeyStroke.special(SpecialKey.ESC)


def test_keystroke_rejects_invalid_values() -> None:
    with pytest.raises(ValueError):
        KeyStroke.char("")
    with pytest.raises(ValueError):
        KeyStroke.char("ab")
    with pytest.raises(ValueError):
        KeyStroke("special", "Esc")


def test_parse_named_and_modified_keys() -> None:
    assert parse_key_strokes("<Leader>w") == (
        KeyStroke.special(SpecialKey.LEADER),
        KeyStroke.char("w"),
    )
    assert parse_key_strokes("<C-W>h") == (
        KeyStroke.char("w", ctrl=True),
        KeyStroke.char("h"),
    )
    assert parse_key_strokes("<esc><CR><F5>") == (
        KeyStroke.special(SpecialKey.ESC),
        KeyStroke.special(SpecialKey.RETURN),
        KeyStroke.special(SpecialKey.F5),
    )
    assert parse_key_strokes("<Space><lt><Bslash>") == (
        KeyStroke.char(" "),
        KeyStroke.char("<"),
        KeyStroke.char("\\"),
    )


def test_unrecognised_brackets_are_literal() -> None:
    assert [k.token for k in parse_key_strokes("a<b")] == ["a", "<lt>", "b"]
    assert len(parse_key_strokes("<Foo>")) == 5


def test_parse_single_token() -> None:
    assert KeyStroke.parse("<A-x>") == KeyStroke.char("x", alt=True)
    with pytest.raises(KeyNotationError):
        KeyStroke.parse("ab")
    with pytest.raises(KeyNotationError):
        KeyStroke.parse("<Nope>")


def test_token_renders_vim_notation() -> None:
    assert KeyStroke.char("a").token == "a"
    assert KeyStroke.char(" ").token == "<Space>"
    assert KeyStroke.char("w", ctrl=True).token == "<C-w>"
    assert KeyStroke.special(SpecialKey.PAGE_DOWN).token == "<PageDown>"
    assert str(RemappedKeyStroke(KeyStroke.special("esc"), False)) == "<Esc>"


def test_remapping_parse_and_notation() -> None:
    remapping = Remapping.parse(":w<CR>", recursive=False)

    assert remapping.recursive is False
    assert len(remapping.key_strokes) == 3
    assert remapping.notation == ":w<CR>"
    assert Remapping.parse("").key_strokes == ()


def test_remapped_keystroke_equality_includes_flag() -> None:
    key = KeyStroke.char("a")

    assert RemappedKeyStroke(key, True) == RemappedKeyStroke(key, True)
    assert RemappedKeyStroke(key, True) != RemappedKeyStroke(key, False)
