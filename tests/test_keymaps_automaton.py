from vim_remap.keymaps import (
    KeyMap,
    KeyStroke,
    Remapping,
    Transition,
    union_states,
    union_transitions,
)


def k(char: str) -> KeyStroke:
    return KeyStroke.char(char)


def test_press_reports_prefix_terminal_and_both() -> None:
    keymap = KeyMap(
        {
            "ab": Remapping.parse("x"),
            "c": Remapping.parse("y"),
            "d": Remapping.parse("z"),
            "de": Remapping.parse("w"),
        }
    )

    prefix = keymap.press(k("a"))
    assert prefix is not None
    assert prefix.value is None and prefix.next_state is not None

    terminal = keymap.press(k("c"))
    assert terminal is not None
    assert terminal.value == Remapping.parse("y") and terminal.next_state is None

    both = keymap.press(k("d"))
    assert both is not None
    assert both.value == Remapping.parse("z") and both.next_state is not None

    assert keymap.press(k("q")) is None


def test_map_overwrites_and_counts() -> None:
    keymap = KeyMap()
    keymap.map("jj", Remapping.parse("<Esc>"))
    keymap.map("jj", Remapping.parse("<C-c>"))
    keymap.map([k("j")], Remapping.parse("gj"))

    assert len(keymap) == 2
    assert keymap.get("jj") == Remapping.parse("<C-c>")
    assert "j" in keymap
    assert "jk" not in keymap
    assert keymap.revision == 3


def test_unmap_prunes_dead_branches() -> None:
    keymap = KeyMap({"abc": Remapping.parse("x"), "a": Remapping.parse("y")})

    assert keymap.unmap("abc") == Remapping.parse("x")
    trans = keymap.press(k("a"))
    assert trans is not None
    assert trans.next_state is None
    assert keymap.unmap("abc") is None
    assert len(keymap) == 1


def test_clear_empties_keymap() -> None:
    keymap = KeyMap({"a": Remapping.parse("b")})

    keymap.clear()

    assert len(keymap) == 0
    assert keymap.press(k("a")) is None


def test_union_transitions_prefers_primary_value() -> None:
    primary = Transition(value=Remapping.parse("p"))
    secondary = Transition(value=Remapping.parse("s"))

    assert union_transitions(primary, None) is primary
    assert union_transitions(None, secondary) is secondary
    assert union_transitions(None, None) is None
    merged = union_transitions(primary, secondary)
    assert merged is not None
    assert merged.value == Remapping.parse("p")
    assert merged.next_state is None


def test_union_state_walks_both_branches() -> None:
    left = KeyMap({"ab": Remapping.parse("1")})
    right = KeyMap({"ac": Remapping.parse("2")})
    left_a = left.press(k("a"))
    right_a = right.press(k("a"))
    assert left_a is not None and right_a is not None

    state = union_states(left_a.next_state, right_a.next_state)
    assert state is not None

    via_b = state.press(k("b"))
    via_c = state.press(k("c"))
    assert via_b is not None and via_b.value == Remapping.parse("1")
    assert via_c is not None and via_c.value == Remapping.parse("2")
    assert union_states(None, right) is right
