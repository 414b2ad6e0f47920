from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping

from mushland.engine.actions import Action
from mushland.engine.game import GameState
from mushland.engine.serialize import action_to_dict


@dataclass
class TelemetryService:
    """Append-only JSONL event log."""

    path: Path
    enabled: bool = True

    def log(self, event_type: str, payload: Mapping[str, object]) -> None:
        if not self.enabled:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        rec = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "type": event_type,
            "payload": dict(payload),
        }
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(rec, ensure_ascii=False) + "\n")

    def log_action(self, action: Action, before: GameState, after: GameState) -> None:
        self.log(
            "action",
            {
                "action": action_to_dict(action),
                "accepted": after != before,
                "nutrients": after.nutrients,
                "spores": after.spores,
                "score": after.score,
                "deck": len(after.deck),
                "hand": len(after.hand),
            },
        )

    def read_events(self) -> list[dict[str, object]]:
        if not self.path.exists():
            return []
        out: list[dict[str, object]] = []
        for line in self.path.read_text(encoding="utf-8").splitlines():
            if line.strip():
                out.append(json.loads(line))
        return out
