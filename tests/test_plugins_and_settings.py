import logging

import pytest

from formats import FormatRegistry, load_format_plugins
from keywords import FormatMismatch, LoggingSink
import settings


def test_load_format_plugins_single_and_multi(tmp_path):
    (tmp_path / "a_single.yaml").write_text(
        "type: string\nformat: abs-path\nvalidator: os.path:isabs\n", encoding="utf-8")
    (tmp_path / "b_multi.yaml").write_text(
        "formats:\n"
        "  - {type: string, format: dir, validator: os.path.isdir}\n"
        "  - {type: integer, format: even, validator: 'operator:not_'}\n",
        encoding="utf-8")
    (tmp_path / "ignored.txt").write_text("type: string", encoding="utf-8")

    plugins = load_format_plugins(tmp_path)
    assert plugins == {
        ("string", "abs-path"): "os.path:isabs",
        ("string", "dir"): "os.path.isdir",
        ("integer", "even"): "operator:not_",
    }


def test_load_format_plugins_missing_dir_is_noop(tmp_path):
    assert load_format_plugins(None) == {}
    assert load_format_plugins(tmp_path / "absent") == {}


def test_load_format_plugins_rejects_incomplete_entries(tmp_path):
    (tmp_path / "bad.yaml").write_text("type: string\nformat: slug\n", encoding="utf-8")
    with pytest.raises(ValueError) as exc:
        load_format_plugins(tmp_path)
    assert "bad.yaml" in str(exc.value) and "validator" in str(exc.value)


def test_registry_picks_up_plugins(tmp_path):
    (tmp_path / "paths.yaml").write_text(
        "type: string\nformat: abs-path\nvalidator: os.path:isabs\n", encoding="utf-8")
    reg = FormatRegistry(plugins_dir=tmp_path)
    assert ("string", "abs-path") in reg
    assert ("string", "date-time") in reg
    assert reg.lookup("string", "abs-path")("/etc")


def test_load_config_defaults_and_merge(tmp_path):
    assert settings.load_config(None) == settings.DEFAULT_CONFIG
    assert settings.load_config(tmp_path / "missing.yaml") == settings.DEFAULT_CONFIG

    path = tmp_path / "config.yaml"
    path.write_text("diagnostics:\n  enabled: false\nlogging:\n  level: DEBUG\n", encoding="utf-8")
    cfg = settings.load_config(path)
    assert cfg["diagnostics"]["enabled"] is False
    assert cfg["logging"]["level"] == "DEBUG"
    assert cfg["logging"]["format"] == settings.DEFAULT_CONFIG["logging"]["format"]
    assert cfg["formats"]["builtins"] is True
    # defaults are not mutated by a merge
    assert settings.DEFAULT_CONFIG["diagnostics"]["enabled"] is True


def test_build_type_keyword_from_config(tmp_path):
    plugins = tmp_path / "plugins"
    plugins.mkdir()
    (plugins / "paths.yaml").write_text(
        "type: string\nformat: abs-path\nvalidator: os.path:isabs\n", encoding="utf-8")
    cfg = settings.load_config(None)
    cfg["formats"] = {
        "plugins_dir": str(plugins),
        "builtins": False,
        "extra": {"string": {"dir": "os.path:isdir"}},
    }

    kw = settings.build_type_keyword(cfg)
    assert kw.registry.frozen
    assert kw.registry.formats() == [("string", "abs-path"), ("string", "dir")]
    assert isinstance(kw.sink, LoggingSink)

    kw.validate("/", "string", "abs-path")
    kw.validate(str(tmp_path), "string", "dir")
    kw.validate("x", "string", "date-time")  # builtins disabled
    with pytest.raises(FormatMismatch):
        kw.validate("relative", "string", "abs-path")


def test_build_type_keyword_without_diagnostics():
    cfg = settings.load_config(None)
    cfg["diagnostics"] = {"enabled": False}
    kw = settings.build_type_keyword(cfg)
    assert kw.sink is None
    assert len(kw.validate("true", "boolean")) == 1


def test_configure_logging_level(monkeypatch):
    seen = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: seen.update(kw))
    settings.configure_logging({"logging": {"level": "debug"}})
    assert seen["level"] == logging.DEBUG
    assert seen["format"] == settings.DEFAULT_CONFIG["logging"]["format"]
