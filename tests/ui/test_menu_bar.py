import tkinter as tk

import pytest

from markup_desktop.core.menu import MenuBuilder, MenuConfiguration
from markup_desktop.core.models import CommandEntry, MenuGroup
from markup_desktop.ui.menu_bar import MenuBar, display_accelerator, to_tk_sequence


def _can_create_tk_root() -> bool:
    try:
        r = tk.Tk()
        r.destroy()
        return True
    except tk.TclError:
        return False


requires_tk = pytest.mark.skipif(
    not _can_create_tk_root(),
    reason="Tkinter root cannot be created in this environment (likely headless CI without display).",
)


@pytest.mark.parametrize("accelerator, platform, expected", [
    ("Cmd+B", "linux", "<Control-b>"),
    ("Cmd+B", "darwin", "<Command-b>"),
    ("Shift+Cmd+S", "darwin", "<Shift-Command-S>"),
    ("Shift+Cmd+S", "win32", "<Shift-Control-S>"),
    ("Cmd+`", "linux", "<Control-grave>"),
    ("Ctrl+Alt+1", "linux", "<Control-Alt-Key-1>"),
    ("Alt+1", "darwin", "<Option-Key-1>"),
    ("Ctrl+,", "linux", "<Control-comma>"),
    ("Cmd+]", "linux", "<Control-bracketright>"),
    ("Cmd+-", "linux", "<Control-minus>"),
    ("Cmd++", "linux", "<Control-plus>"),
    ("Shift+ArrowRight", "linux", "<Shift-Right>"),
    ("Enter", "linux", "<Return>"),
])
def test_to_tk_sequence(accelerator, platform, expected):
    assert to_tk_sequence(accelerator, platform=platform) == expected


def test_to_tk_sequence_without_accelerator():
    assert to_tk_sequence("", platform="linux") is None


def test_display_accelerator():
    assert display_accelerator("Shift+Cmd+S", platform="linux") == "Shift+Ctrl+S"
    assert display_accelerator("Shift+Cmd+S", platform="darwin") == "Shift+Cmd+S"
    assert display_accelerator(None, platform="linux") is None


@pytest.fixture
def tk_root():
    root = tk.Tk()
    # Avoid showing a window during tests
    root.withdraw()
    yield root
    try:
        root.update_idletasks()
    except tk.TclError:
        pass
    root.destroy()


@requires_tk
class TestMenuBar:

    def _groups(self, calls, keymap):
        config = MenuConfiguration(keymap=keymap)
        return MenuBuilder(lambda cid, **p: calls.append(cid)).build(config)

    def test_renders_entries_and_separators(self, tk_root):
        calls = []
        bar = MenuBar(tk_root, platform="linux")
        menu = bar.set_cascade("Format", self._groups(calls, {"link": "Mod-k", "bold": "Mod-b"}))
        assert menu.type(0) == "command"
        assert menu.entrycget(0, "label") == "Link"
        assert menu.type(1) == "separator"
        assert menu.entrycget(2, "accelerator") == "Ctrl+B"
        menu.invoke(2)
        assert calls == ["bold"]

    def test_accelerators_are_bound(self, tk_root):
        bar = MenuBar(tk_root, platform="linux")
        bar.set_cascade("Format", self._groups([], {"bold": "Mod-b"}))
        assert tk_root.bind_all("<Control-b>")

    def test_rebuild_replaces_bindings(self, tk_root):
        bar = MenuBar(tk_root, platform="linux")
        bar.set_cascade("Format", self._groups([], {"bold": "Mod-b"}))
        menu = bar.set_cascade("Format", self._groups([], {"italic": "Mod-i"}))
        assert not tk_root.bind_all("<Control-b>")
        assert tk_root.bind_all("<Control-i>")
        assert menu.index("end") == 0
        assert bar.menubar.index("end") == 0

    def test_failing_command_does_not_raise(self, tk_root):
        def boom():
            raise RuntimeError("broken")

        bar = MenuBar(tk_root, platform="linux")
        menu = bar.set_cascade("File", [MenuGroup("File", [CommandEntry("Boom", boom)])])
        menu.invoke(0)

    def test_hidden_entries_are_skipped(self, tk_root):
        bar = MenuBar(tk_root, platform="linux")
        entries = [CommandEntry("Shown", lambda: None), CommandEntry("Hidden", lambda: None, visible=False)]
        menu = bar.set_cascade("File", [MenuGroup("File", entries)])
        assert menu.index("end") == 0
