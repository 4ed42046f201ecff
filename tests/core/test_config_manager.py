import os

import yaml

from markup_desktop.config import ConfigManager


def test_singleton_until_reset():
    first = ConfigManager()
    assert ConfigManager() is first
    ConfigManager.reset()
    assert ConfigManager() is not first


def test_packaged_defaults_are_loaded():
    manager = ConfigManager()
    editor_cfg = manager.get_markup_editor_config()
    assert editor_cfg["toolbar"]["visibility"]["formatBar"] is True
    assert editor_cfg["keymap"]["bold"] == ["Mod-B", "Mod-b"]
    assert manager.get_app_config()["window"]["title"] == "MarkupDesktop"
    assert manager.get_logging_config()["version"] == 1


def test_user_config_files_are_created():
    ConfigManager()
    user_dir = os.environ["MARKUP_DESKTOP_CONFIG_DIR"]
    assert sorted(os.listdir(user_dir)) == ["app.yml", "logging.yml", "markup_editor.yml"]


def test_user_overrides_merge_key_by_key(tmp_path):
    user_dir = tmp_path / "user_config"
    user_dir.mkdir(parents=True, exist_ok=True)
    (user_dir / "markup_editor.yml").write_text(yaml.safe_dump({
        "toolbar": {"visibility": {"formatBar": False}},
        "keymap": {"bold": None},
    }), encoding="utf-8")

    cfg = ConfigManager().get_markup_editor_config()
    assert cfg["toolbar"]["visibility"]["formatBar"] is False
    assert cfg["toolbar"]["visibility"]["insertBar"] is True
    assert cfg["keymap"]["bold"] is None
    assert cfg["keymap"]["italic"] == ["Mod-I", "Mod-i"]


def test_invalid_user_file_falls_back_to_defaults(tmp_path):
    user_dir = tmp_path / "user_config"
    user_dir.mkdir(parents=True, exist_ok=True)
    (user_dir / "app.yml").write_text("window: [unclosed", encoding="utf-8")

    assert ConfigManager().get_app_config()["window"]["width"] == 900
