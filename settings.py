from __future__ import annotations

# Window
WINDOW_W = 1280
WINDOW_H = 720
FPS = 60
WINDOW_TITLE = "Skirmish"

# Grid (demo map size; levels loaded from disk bring their own)
GRID_COLS = 16
GRID_ROWS = 12

# Isometric tile size (2:1 diamond)
TILE_W = 64
TILE_H = 32

# Where the (0,0) tile's top vertex lands on screen.
ORIGIN_X = WINDOW_W // 2
ORIGIN_Y = 90
ORIGIN = (ORIGIN_X, ORIGIN_Y)
PAN_STEP = 32  # pixels per Shift+WASD press

# Movement costs per tile; IMPASSABLE_COST is effectively infinite
COST_NONE = 2
COST_STREET = 1
COST_FOREST = 3
IMPASSABLE_COST = 9999

# Potential-field seeds
MOVE_BUDGET = 9          # seed for the "can ever reach" range
CURSOR_GOAL = 99         # seed at the cursor for the player's goal field
AI_GOAL = 30             # seed at every opposing unit for the AI's goal field
OCCUPIED = -99           # sentinel stamped onto occupied cells

# Units
HP_MAX = 10

# Animation pacing (progress per second / ticks)
MOVE_LERP_SPEED = 25.0
ATTACK_LERP_SPEED = 5.0
ATTACK_DAMAGE = 5
DAMAGE_TICK_WAIT = 5
AI_HIGHLIGHT_TICKS = 20
AI_ATTACK_PAUSE_TICKS = 20

# Draw layers for buffered commands (lower draws first; tiles render beneath all of them)
Z_MOVE_HIGHLIGHT = 11
Z_MOVE_ARROW = 12
Z_UNIT = 20
Z_UNIT_HP = 21
Z_FIELD_DEBUG = 30
Z_CURSOR = 100

# Demo armies: (team, unit type, grid cell)
UNIT_SPAWNS = [
    ("blue", "infantry", (2, 3)),
    ("blue", "tank", (2, 5)),
    ("blue", "infantry", (3, 8)),
    ("red", "infantry", (12, 3)),
    ("red", "tank", (13, 6)),
    ("red", "infantry", (12, 9)),
]

# Key bindings (pygame key names)
KEY_CONFIRM = "space"      # stand still / confirm attack
KEY_WAIT = "w"
KEY_ATTACK = "f"
KEY_CYCLE_TARGET = "tab"
KEY_CANCEL = "escape"
KEY_END_PHASE = "return"
KEY_TOGGLE_FIELD = "l"
KEY_TOGGLE_AI_FIELD = "m"
KEY_TOGGLE_WATER = "b"
KEY_CYCLE_TERRAIN = "h"

# HUD / action bar
UI_BAR_H = 56
UI_BTN_W = 150
UI_BTN_H = 36
UI_BTN_GAP = 10
HUD_MESSAGES = 4
DEBUG_MAX_MESSAGES = 60

# Logging
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
