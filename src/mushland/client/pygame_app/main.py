from __future__ import annotations

import argparse
import random

import pygame  # type: ignore[import-not-found]

from mushland.engine.game import GameConfig
from mushland.paths import get_paths
from mushland.services.content import ContentService
from mushland.services.telemetry import TelemetryService

from .app import App, GameContext
from .asset_manager import AssetManager
from .scenes.boot import BootScene


def main() -> int:
    parser = argparse.ArgumentParser(prog="mushland")
    parser.add_argument("--width", type=int, default=1024)
    parser.add_argument("--height", type=int, default=768)
    parser.add_argument("--seed", type=int, default=None, help="shuffle seed (random if omitted)")
    parser.add_argument("--nutrients", type=int, default=GameConfig.starting_nutrients)
    parser.add_argument("--mute", action="store_true", help="disable sounds and music")
    parser.add_argument("--no-telemetry", action="store_true")
    args = parser.parse_args()

    seed = args.seed if args.seed is not None else random.randrange(2**31)

    pygame.init()
    screen = pygame.display.set_mode((args.width, args.height))
    pygame.display.set_caption("Mushland")

    clock = pygame.time.Clock()
    paths = get_paths()

    assets = AssetManager(repo_root=paths.repo_root, assets_dir=paths.assets_dir, muted=args.mute)
    content = ContentService(data_dir=paths.data_dir, schema_dir=paths.schema_dir)
    telemetry = TelemetryService(paths.telemetry_path, enabled=not args.no_telemetry)

    ctx = GameContext(
        screen=screen,
        clock=clock,
        paths=paths,
        assets=assets,
        content=content,
        telemetry=telemetry,
        config=GameConfig(starting_nutrients=args.nutrients),
        seed=seed,
    )

    app = App(ctx, BootScene(ctx))
    return app.run()


if __name__ == "__main__":
    raise SystemExit(main())
