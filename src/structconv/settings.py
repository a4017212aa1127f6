# src/structconv/settings.py
import os

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from structconv.constants import (
    DEFAULT_ITEM_TAG,
    DEFAULT_ROOT_TAG,
    JSON_INDENT,
    XML_INDENT,
)


class LoggingConfig(BaseModel):
    level: str = "WARNING"
    format: str = "human"  # "json" or "human"
    structured: bool = False


class XmlConfig(BaseModel):
    root_tag: str = DEFAULT_ROOT_TAG
    item_tag: str = DEFAULT_ITEM_TAG
    # json_to_xml writes text and attribute values verbatim unless enabled
    escape: bool = False


class FormattingConfig(BaseModel):
    xml_indent: int = Field(default=XML_INDENT, ge=0)
    json_indent: int = Field(default=JSON_INDENT, ge=0)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="STRUCTCONV_",
        env_nested_delimiter="__",
        extra="ignore",
    )
    logging: LoggingConfig = LoggingConfig()
    xml: XmlConfig = XmlConfig()
    formatting: FormattingConfig = FormattingConfig()

    @staticmethod
    def _deep_update(d: dict, u: dict) -> dict:
        # Recursively update dict d with values from u
        for k, v in u.items():
            if isinstance(v, dict) and isinstance(d.get(k), dict):
                d[k] = Settings._deep_update(d[k], v)
            else:
                d[k] = v
        return d

    @staticmethod
    def _read_yaml(path: str) -> dict:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data or {}

    @staticmethod
    def load(path: str | None = None) -> "Settings":
        """Load settings from a YAML file merged over ``base.yaml``.

        ``base.yaml`` is looked up next to ``path`` and is optional. With no
        path the defaults (plus any ``STRUCTCONV_*`` environment variables)
        are returned.
        """
        if not path:
            return Settings()
        base_path = os.path.join(os.path.dirname(path), "base.yaml")
        merged: dict = {}
        if os.path.exists(base_path) and os.path.abspath(base_path) != os.path.abspath(
            path
        ):
            merged = Settings._read_yaml(base_path)
        merged = Settings._deep_update(merged, Settings._read_yaml(path))
        return Settings(**merged)


def default_config_path() -> str | None:
    """Return the config file named by STRUCTCONV_CONFIG, if it exists."""
    path = os.getenv("STRUCTCONV_CONFIG")
    if path and os.path.exists(path):
        return path
    return None
