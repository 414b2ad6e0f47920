from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from mushland.engine.types import CardCatalog, CardTemplate, Habitat, Power


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: [str(p) for p in e.absolute_path])
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_str(obj: Mapping[str, object], key: str) -> str:
    v = obj.get(key)
    if not isinstance(v, str):
        raise ContentError(f"Expected string for {key}")
    return v


def _require_int(obj: Mapping[str, object], key: str) -> int:
    v = obj.get(key)
    if not isinstance(v, int):
        raise ContentError(f"Expected int for {key}")
    return v


def _optional_power(obj: Mapping[str, object]) -> Power | None:
    v = obj.get("power")
    if v is None:
        return None
    if not isinstance(v, str):
        raise ContentError("Expected string or null for power")
    return v  # type: ignore[return-value]  # schema restricts values


def parse_template(item: Mapping[str, object]) -> CardTemplate:
    habitat: Habitat = _require_str(item, "habitat")  # type: ignore[assignment]
    return CardTemplate(
        id=_require_str(item, "id"),
        name=_require_str(item, "name"),
        habitat=habitat,
        cost=_require_int(item, "cost"),
        points=_require_int(item, "points"),
        power=_optional_power(item),
        art_path=str(item.get("art_path", "")),
        description=str(item.get("description", "")),
    )


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def load_catalog(self) -> CardCatalog:
        cards_path = self._data_dir / "cards.json"
        schema_path = self._schema_dir / "cards.schema.json"
        raw = _load_json(cards_path)
        schema = _load_json(schema_path)
        validate_json(raw, schema, context=str(cards_path))

        if not isinstance(raw, dict):
            raise ContentError("cards.json must be an object")
        raw_cards = raw.get("cards")
        if not isinstance(raw_cards, list):
            raise ContentError("cards.json.cards must be a list")

        templates: list[CardTemplate] = []
        seen: set[str] = set()
        for item in raw_cards:
            if not isinstance(item, dict):
                continue
            template = parse_template(item)
            if template.id in seen:
                raise ContentError(f"Duplicate card id: {template.id}")
            seen.add(template.id)
            templates.append(template)
        return CardCatalog(templates=tuple(templates))

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        _ = self.load_catalog()
