from __future__ import annotations

BG = (14, 16, 18)
OUTLINE = (22, 25, 28)   # diamond outline

# Ground / terrain
GRASS_A = (78, 120, 70)
GRASS_B = (86, 130, 76)
WATER = (50, 95, 160)
WATER_OUTLINE = (70, 120, 190)
STREET = (150, 140, 120)
FOREST = (40, 85, 45)
FOREST_OUTLINE = (25, 60, 30)

TEXT = (220, 220, 220)

# Move range (use on an alpha surface)
MOVE_FILL = (80, 140, 255, 70)
MOVE_OUTLINE = (80, 140, 255)

# Path arrows
ARROW = (255, 255, 255)

# Cursor
CURSOR_OUTLINE = (250, 245, 200)

# Units by team; moved units are drawn with DIMMED
TEAM_FILL = {
    "blue": (120, 170, 255),
    "red": (230, 80, 80),
}
UNIT_OUTLINE = (20, 25, 35)
DIMMED = (120, 120, 125)
HP_TEXT = (255, 230, 120)

# Potential-field overlay
FIELD_SHADE = (25, 25, 25, 128)
FIELD_TEXT = (240, 240, 240)

# Action bar UI
UI_BG = (15, 18, 24)
UI_FRAME = (40, 45, 55)
UI_BTN = (60, 110, 170)
UI_BTN_HOVER = (80, 140, 210)
UI_BTN_DISABLED = (70, 70, 75)
UI_BTN_TEXT = (245, 245, 250)
UI_BTN_TEXT_DISABLED = (180, 180, 185)
