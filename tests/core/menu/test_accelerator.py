import pytest

from markup_desktop.core.menu.accelerator import split_sequence, translate


@pytest.mark.parametrize("sequence, expected", [
    ("Mod-b", "Cmd+B"),
    ("Meta-1", "Alt+1"),
    ("Shift-ArrowRight", "Shift+ArrowRight"),
    ("Enter", "Enter"),
    ("Shift-Ctrl-q", "Shift+Ctrl+Q"),
    ("Mod-`", "Cmd+`"),
    ("Mod-]", "Cmd+]"),
    ("Ctrl-,", "Ctrl+,"),
])
def test_translate(sequence, expected):
    assert translate(sequence) == expected


def test_first_binding_of_a_list_wins():
    assert translate(["Mod-B", "Mod-b"]) == "Cmd+B"
    assert translate(["Ctrl-u", "Mod-u"]) == "Ctrl+U"


def test_minus_key():
    assert split_sequence("Mod--") == (["Mod"], "-")
    assert translate("Mod--") == "Cmd+-"


def test_custom_modifier_names():
    assert translate("Mod-b", {"Mod": "Ctrl", "Meta": "Alt"}) == "Ctrl+B"


def test_empty_inputs_are_rejected():
    with pytest.raises(ValueError):
        translate([])
    with pytest.raises(ValueError):
        translate("")
