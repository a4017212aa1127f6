"""Test settings defaults, YAML layering and environment overrides."""

from pathlib import Path

from structconv.settings import Settings, default_config_path

CONFIGS = Path(__file__).resolve().parents[1] / "configs"


def test_defaults(monkeypatch):
    for var in ("STRUCTCONV_XML__ESCAPE", "STRUCTCONV_XML__ROOT_TAG"):
        monkeypatch.delenv(var, raising=False)
    s = Settings()
    assert s.xml.root_tag == "root"
    assert s.xml.item_tag == "item"
    assert s.xml.escape is False
    assert s.formatting.xml_indent == 2
    assert s.formatting.json_indent == 2


def test_load_without_path_returns_defaults():
    assert Settings.load(None).xml.root_tag == "root"


def test_load_merges_over_base(tmp_path):
    (tmp_path / "base.yaml").write_text(
        "xml:\n  root_tag: doc\n  escape: false\nlogging:\n  level: INFO\n",
        encoding="utf-8",
    )
    (tmp_path / "local.yaml").write_text("xml:\n  escape: true\n", encoding="utf-8")
    s = Settings.load(str(tmp_path / "local.yaml"))
    assert s.xml.root_tag == "doc"
    assert s.xml.escape is True
    assert s.logging.level == "INFO"


def test_load_without_base(tmp_path):
    (tmp_path / "only.yaml").write_text("formatting:\n  json_indent: 4\n", encoding="utf-8")
    assert Settings.load(str(tmp_path / "only.yaml")).formatting.json_indent == 4


def test_shipped_environments():
    dev = Settings.load(str(CONFIGS / "dev.yaml"))
    prod = Settings.load(str(CONFIGS / "prod.yaml"))
    assert dev.logging.format == "human"
    assert dev.xml.escape is False
    assert prod.logging.format == "json"
    assert prod.xml.escape is True


def test_environment_override(monkeypatch):
    monkeypatch.setenv("STRUCTCONV_XML__ESCAPE", "true")
    monkeypatch.setenv("STRUCTCONV_XML__ROOT_TAG", "envroot")
    s = Settings()
    assert s.xml.escape is True
    assert s.xml.root_tag == "envroot"


def test_default_config_path(monkeypatch, tmp_path):
    monkeypatch.delenv("STRUCTCONV_CONFIG", raising=False)
    assert default_config_path() is None
    cfg = tmp_path / "c.yaml"
    monkeypatch.setenv("STRUCTCONV_CONFIG", str(cfg))
    assert default_config_path() is None
    cfg.write_text("{}\n", encoding="utf-8")
    assert default_config_path() == str(cfg)
