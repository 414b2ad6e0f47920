from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pygame  # type: ignore[import-not-found]


@dataclass
class Fonts:
    ui: pygame.font.Font
    small: pygame.font.Font
    big: pygame.font.Font


class AssetManager:
    def __init__(self, repo_root: Path, assets_dir: Path, muted: bool = False) -> None:
        self.repo_root = repo_root
        self.assets_dir = assets_dir
        self.muted = muted
        self._cache: dict[tuple[str, int, int], pygame.Surface] = {}
        self._sounds: dict[str, pygame.mixer.Sound | None] = {}
        self._music_loaded = False

        pygame.font.init()
        self.fonts = Fonts(
            ui=pygame.font.SysFont(None, 24),
            small=pygame.font.SysFont(None, 18),
            big=pygame.font.SysFont(None, 40),
        )

    def _resolve(self, path_str: str) -> Path:
        p = Path(path_str)
        if p.is_absolute():
            return p
        # Allow data files to reference "assets/..."
        if path_str.startswith("assets/"):
            return self.repo_root / path_str
        return self.assets_dir / path_str

    def get_image(self, path_str: str, size: tuple[int, int] | None = None) -> pygame.Surface:
        w, h = size if size is not None else (0, 0)
        key = (path_str, w, h)
        if key in self._cache:
            return self._cache[key]

        path = self._resolve(path_str)
        if path_str and path.exists():
            try:
                img = pygame.image.load(path.as_posix()).convert_alpha()
                if size is not None:
                    img = pygame.transform.smoothscale(img, size)
                self._cache[key] = img
                return img
            except pygame.error:
                pass

        # Fallback placeholder
        fallback = pygame.Surface(size or (64, 64))
        fallback.fill((120, 90, 60))
        self._cache[key] = fallback
        return fallback

    def _mixer_ready(self) -> bool:
        if self.muted:
            return False
        if pygame.mixer.get_init() is None:
            try:
                pygame.mixer.init()
            except pygame.error:
                # No audio device; stay silent for the rest of the session.
                self.muted = True
                return False
        return True

    def play_sound(self, name: str, volume: float = 0.3) -> None:
        if not self._mixer_ready():
            return
        if name not in self._sounds:
            path = self.assets_dir / "sounds" / f"{name}.wav"
            sound: pygame.mixer.Sound | None = None
            if path.exists():
                try:
                    sound = pygame.mixer.Sound(path.as_posix())
                    sound.set_volume(volume)
                except pygame.error:
                    sound = None
            self._sounds[name] = sound
        snd = self._sounds[name]
        if snd is not None:
            snd.play()

    def toggle_music(self, track: str = "theme.wav", volume: float = 0.25) -> bool:
        """Start or pause the looping theme. Returns True if it is now playing."""
        if not self._mixer_ready():
            return False
        if not self._music_loaded:
            path = self.assets_dir / "music" / track
            if not path.exists():
                return False
            pygame.mixer.music.load(path.as_posix())
            pygame.mixer.music.set_volume(volume)
            pygame.mixer.music.play(loops=-1)
            self._music_loaded = True
            return True
        if pygame.mixer.music.get_busy():
            pygame.mixer.music.pause()
            return False
        pygame.mixer.music.unpause()
        return True

    def stop_music(self) -> None:
        if self._music_loaded and pygame.mixer.get_init() is not None:
            pygame.mixer.music.stop()
