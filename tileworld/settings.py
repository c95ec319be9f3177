from pathlib import Path

# ---- Display & timing ----
WINDOW_W = 800
WINDOW_H = 600
FPS = 60
LOG_LEVEL = "INFO"

# ---- World & tiles ----
TILE_SIZE = 64
WORLD_W = 150
WORLD_H = 150
SEED = 1337  # change for different procedural layouts

# ---- Player ----
PLAYER_SIZE = 64
PLAYER_SPEED = 4    # pixels per tick
SPRINT_SPEED = 6
ANIMATION_SPEED = 8  # ticks per walk frame; lower = faster

# ---- Content ----
CONTENT_DIR = Path(__file__).resolve().parent / "content"
