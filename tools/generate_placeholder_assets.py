from __future__ import annotations

import json
import math
import os
import struct
import wave
from pathlib import Path

# Allow headless generation (CI, terminals without a display)
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame  # type: ignore[import-not-found]


def _repo_root() -> Path:
    # tools/generate_placeholder_assets.py -> parents: [tools, repo_root]
    return Path(__file__).resolve().parents[1]


HABITAT_COLORS: dict[str, tuple[int, int, int]] = {
    "forest": (45, 106, 79),
    "log": (139, 90, 43),
    "soil": (91, 70, 54),
}

# name -> (frequency Hz, duration s)
SOUNDS: dict[str, tuple[float, float]] = {
    "click": (880.0, 0.05),
    "play": (523.25, 0.18),
    "draw": (659.25, 0.10),
}


def generate_all() -> None:
    root = _repo_root()
    data_dir = root / "src" / "mushland" / "data"
    assets_dir = root / "assets"
    cards_dir = assets_dir / "cards"
    sounds_dir = assets_dir / "sounds"
    music_dir = assets_dir / "music"
    for d in (cards_dir, sounds_dir, music_dir):
        d.mkdir(parents=True, exist_ok=True)

    cards = json.loads((data_dir / "cards.json").read_text(encoding="utf-8"))["cards"]

    pygame.init()
    pygame.font.init()
    font = pygame.font.SysFont(None, 24)

    # Card art placeholders: a cap and a stem on the habitat colour
    size = (256, 180)
    for card in cards:
        cid = card["id"]
        color = HABITAT_COLORS.get(card.get("habitat", ""), (90, 90, 90))
        surf = pygame.Surface(size)
        surf.fill(color)
        cx = size[0] // 2
        pygame.draw.rect(surf, (235, 225, 200), pygame.Rect(cx - 14, 80, 28, 70), border_radius=6)
        pygame.draw.ellipse(surf, (200, 60, 50), pygame.Rect(cx - 70, 40, 140, 70))
        title = font.render(card.get("name", cid), True, (240, 240, 240))
        surf.blit(title, (10, 10))
        pygame.image.save(surf, (cards_dir / f"{cid}.png").as_posix())

    for name, (freq, duration) in SOUNDS.items():
        _write_tone(sounds_dir / f"{name}.wav", freq, duration)
    _write_theme(music_dir / "theme.wav")

    pygame.quit()
    print("Generated placeholder assets under ./assets/")


def _tone_frames(freq: float, duration: float, rate: int, volume: float) -> bytes:
    n = int(rate * duration)
    out = bytearray()
    for i in range(n):
        # short linear fade-out avoids clicks at the end of the sample
        env = 1.0 - (i / n)
        sample = int(32767 * volume * env * math.sin(2 * math.pi * freq * i / rate))
        out += struct.pack("<h", sample)
    return bytes(out)


def _write_tone(path: Path, freq: float, duration: float, rate: int = 22050) -> None:
    with wave.open(path.as_posix(), "wb") as w:
        w.setnchannels(1)
        w.setsampwidth(2)
        w.setframerate(rate)
        w.writeframes(_tone_frames(freq, duration, rate, volume=0.6))


def _write_theme(path: Path, rate: int = 22050) -> None:
    notes = [261.63, 329.63, 392.0, 329.63, 293.66, 349.23, 440.0, 349.23]
    with wave.open(path.as_posix(), "wb") as w:
        w.setnchannels(1)
        w.setsampwidth(2)
        w.setframerate(rate)
        for f in notes:
            w.writeframes(_tone_frames(f, 0.4, rate, volume=0.3))


if __name__ == "__main__":
    generate_all()
