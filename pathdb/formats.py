from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import yaml


@dataclass(frozen=True)
class JsonCodec:
    indent: int = 4
    sort_keys: bool = False

    name: str = "json"
    extensions: tuple[str, ...] = (".json",)

    def decode(self, text: str) -> Any:
        return json.loads(text)

    def encode(self, doc: dict[str, Any]) -> str:
        return json.dumps(doc, indent=self.indent, sort_keys=self.sort_keys, ensure_ascii=False)


@dataclass(frozen=True)
class YamlCodec:
    sort_keys: bool = False

    name: str = "yaml"
    extensions: tuple[str, ...] = (".yml", ".yaml")

    def decode(self, text: str) -> Any:
        return yaml.safe_load(text)

    def encode(self, doc: dict[str, Any]) -> str:
        return yaml.safe_dump(doc, sort_keys=self.sort_keys, allow_unicode=True, default_flow_style=False)


# Errors a codec raises for unparseable input.
DECODE_ERRORS: tuple[type[Exception], ...] = (json.JSONDecodeError, yaml.YAMLError)
