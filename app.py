from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pygame as pg

import settings as S
from skirmish import colors as C
from skirmish.actors import ActorStore
from skirmish.combat import enemies_in_range
from skirmish.controller import FrameInput, update
from skirmish.draw import DrawCommand, DrawKind
from skirmish.errors import SkirmishError
from skirmish.iso import IsoView
from skirmish.level import load_level
from skirmish.map import GroundType, TerrainType, TileMap
from skirmish.state import GameState
from skirmish.turns import MoveState, Phase
from skirmish.unit import Actor, Team, UnitType

logger = logging.getLogger("skirmish.app")

Coord = Tuple[int, int]

_SIDES = {"w": (-1, 0), "e": (1, 0), "n": (0, -1), "s": (0, 1)}


# ---------- Setup ----------

def build_state(level_path: Optional[str]) -> GameState:
    if level_path:
        level = load_level(Path(level_path))
        state = GameState(level.tmap)
        level.populate(state.actors)
        logger.info("loaded %s: %dx%d, %d units", level_path, level.tmap.cols, level.tmap.rows, len(state.actors))
        return state
    state = GameState(TileMap.demo(S.GRID_COLS, S.GRID_ROWS))
    spawn_demo_units(state.actors)
    return state


def spawn_demo_units(actors: ActorStore) -> None:
    for team, unit_type, pos in S.UNIT_SPAWNS:
        actors.insert(Actor.spawn(pos, Team(team), UnitType(unit_type)))


# ---------- Drawing ----------

def draw_map(surface: pg.Surface, view: IsoView, tmap: TileMap) -> None:
    """Ground checkerboard, water, then streets and woods on top."""
    for j in range(tmap.rows):
        for i in range(tmap.cols):
            poly = view.diamond(i, j)
            if tmap.ground[(i, j)] is GroundType.WATER:
                pg.draw.polygon(surface, C.WATER, poly)
                pg.draw.polygon(surface, C.WATER_OUTLINE, poly, width=1)
                continue
            fill = C.GRASS_A if (i + j) % 2 == 0 else C.GRASS_B
            pg.draw.polygon(surface, fill, poly)
            pg.draw.polygon(surface, C.OUTLINE, poly, width=1)
            terrain = tmap.terrain[(i, j)]
            if terrain is TerrainType.STREET:
                pg.draw.polygon(surface, C.STREET, view.diamond(i, j, inset=0.3))
            elif terrain is TerrainType.FOREST:
                inner = view.diamond(i, j, inset=0.35)
                pg.draw.polygon(surface, C.FOREST, inner)
                pg.draw.polygon(surface, C.FOREST_OUTLINE, inner, width=2)


def _side_point(view: IsoView, pos: Tuple[float, float], side: str) -> Tuple[int, int]:
    dx, dy = _SIDES[side]
    return view.center(pos[0] + dx / 2.0, pos[1] + dy / 2.0)


def draw_arrow(surface: pg.Surface, view: IsoView, cmd: DrawCommand) -> None:
    # sprite is "arrow_<sides>"; two letters = body joining both sides, one = head
    sides = cmd.sprite.split("_", 1)[1]
    center = view.center(*cmd.pos)
    if len(sides) == 2:
        for side in sides:
            pg.draw.line(surface, C.ARROW, center, _side_point(view, cmd.pos, side), width=3)
        return
    back = {"w": "e", "e": "w", "n": "s", "s": "n"}[sides]
    pg.draw.line(surface, C.ARROW, center, _side_point(view, cmd.pos, back), width=3)
    pg.draw.circle(surface, C.ARROW, center, 6)


def draw_unit(surface: pg.Surface, view: IsoView, cmd: DrawCommand, font: pg.font.Font) -> None:
    unit_type, team = cmd.sprite.split("_", 1)
    cx, cy = view.center(*cmd.pos)
    r = max(8, S.TILE_H // 3 + 2)
    fill = C.DIMMED if cmd.dimmed else C.TEAM_FILL.get(team, C.TEXT)
    pg.draw.circle(surface, fill, (cx, cy), r)
    pg.draw.circle(surface, C.UNIT_OUTLINE, (cx, cy), r, width=2)
    label = font.render(unit_type[:1].upper(), True, C.UNIT_OUTLINE)
    surface.blit(label, (cx - label.get_width() // 2, cy - label.get_height() // 2))


def tile_shade(view: IsoView, color: Tuple[int, int, int, int], inset: float = 0.0) -> pg.Surface:
    """One translucent diamond on a tile-sized surface, to be blitted per cell."""
    w, h = view.tile_w, view.tile_h
    hw, hh = w / 2.0 * (1.0 - inset), h / 2.0 * (1.0 - inset)
    cx, cy = w / 2.0, h / 2.0
    surf = pg.Surface((w, h), pg.SRCALPHA)
    pg.draw.polygon(surf, color, [(cx, cy - hh), (cx + hw, cy), (cx, cy + hh), (cx - hw, cy)])
    return surf


def render_commands(surface: pg.Surface, view: IsoView, commands: List[DrawCommand], font: pg.font.Font) -> None:
    """Dispatch buffered draw commands (already sorted by z) to pygame."""
    overlay = pg.Surface(surface.get_size(), pg.SRCALPHA)
    overlay_used = False
    shade: Optional[pg.Surface] = None
    for cmd in commands:
        if cmd.kind is DrawKind.HIGHLIGHT:
            poly = view.diamond(*cmd.pos)
            pg.draw.polygon(overlay, C.MOVE_FILL, poly)
            pg.draw.polygon(overlay, C.MOVE_OUTLINE, poly, width=1)
            overlay_used = True
            continue
        if overlay_used:
            # Flush translucent highlights before anything drawn above them
            surface.blit(overlay, (0, 0))
            overlay.fill((0, 0, 0, 0))
            overlay_used = False
        if cmd.kind is DrawKind.ARROW:
            draw_arrow(surface, view, cmd)
        elif cmd.kind is DrawKind.UNIT:
            draw_unit(surface, view, cmd, font)
        elif cmd.kind is DrawKind.HP:
            cx, cy = view.center(*cmd.pos)
            surf = font.render(cmd.text, True, C.HP_TEXT)
            surface.blit(surf, (cx + S.TILE_H // 3, cy - S.TILE_H // 2 - surf.get_height() // 2))
        elif cmd.kind is DrawKind.FIELD_VALUE:
            if shade is None:
                shade = tile_shade(view, C.FIELD_SHADE, inset=0.2)
            cx, cy = view.center(*cmd.pos)
            surface.blit(shade, (cx - shade.get_width() // 2, cy - shade.get_height() // 2))
            surf = font.render(cmd.text, True, C.FIELD_TEXT)
            surface.blit(surf, (cx - surf.get_width() // 2, cy - surf.get_height() // 2))
        elif cmd.kind is DrawKind.CURSOR:
            pg.draw.polygon(surface, C.CURSOR_OUTLINE, view.diamond(*cmd.pos), width=3)
    if overlay_used:
        surface.blit(overlay, (0, 0))


# ---------- Action bar ----------

def _btn_rects() -> Dict[str, pg.Rect]:
    y = S.WINDOW_H - S.UI_BAR_H + (S.UI_BAR_H - S.UI_BTN_H) // 2
    rects: Dict[str, pg.Rect] = {}
    x = 10
    for name in ("wait", "attack", "end"):
        rects[name] = pg.Rect(x, y, S.UI_BTN_W, S.UI_BTN_H)
        x += S.UI_BTN_W + S.UI_BTN_GAP
    return rects


def _draw_button(surface: pg.Surface, rect: pg.Rect, label: str, enabled: bool, mouse_pos: Tuple[int, int], font: pg.font.Font) -> None:
    if not enabled:
        fill = C.UI_BTN_DISABLED
    else:
        fill = C.UI_BTN_HOVER if rect.collidepoint(mouse_pos) else C.UI_BTN
    pg.draw.rect(surface, fill, rect, border_radius=8)
    pg.draw.rect(surface, C.UI_FRAME, rect, width=2, border_radius=8)
    txt = font.render(label, True, C.UI_BTN_TEXT if enabled else C.UI_BTN_TEXT_DISABLED)
    surface.blit(txt, (rect.centerx - txt.get_width() // 2, rect.centery - txt.get_height() // 2))


def enabled_actions(state: GameState) -> Dict[str, bool]:
    ui = state.ui
    confirming = state.phase is Phase.PLAYER and ui.move_state is MoveState.CONFIRM and ui.selected in state.actors
    can_attack = confirming and bool(enemies_in_range(state.actors, state.tmap, ui.selected))
    return {
        "wait": confirming,
        "attack": can_attack,
        "end": state.phase is Phase.PLAYER and ui.move_state is MoveState.NONE,
    }


def draw_action_bar(surface: pg.Surface, state: GameState, font: pg.font.Font) -> None:
    bar = pg.Rect(0, S.WINDOW_H - S.UI_BAR_H, S.WINDOW_W, S.UI_BAR_H)
    pg.draw.rect(surface, C.UI_BG, bar)
    pg.draw.rect(surface, C.UI_FRAME, bar, width=2)
    labels = {"wait": "Wait (W)", "attack": "Attack (F)", "end": "End Phase (Enter)"}
    enabled = enabled_actions(state)
    mouse = pg.mouse.get_pos()
    for name, rect in _btn_rects().items():
        _draw_button(surface, rect, labels[name], enabled[name], mouse, font)


# ---------- Debug HUD ----------

def draw_debug(surface: pg.Surface, font: pg.font.Font, state: GameState, hovered: Optional[Coord]) -> None:
    phase_txt = "PLAYER" if state.phase is Phase.PLAYER else "ENEMY"
    lines = [
        f"Turn: {state.turns.turn}   Phase: {phase_txt}",
    ]
    if hovered is not None:
        lines.append(f"Cursor: {hovered}  {state.tmap.ground_at(hovered).value} / {state.tmap.terrain_at(hovered).value}")
    else:
        lines.append("Cursor: None")
    sel = state.actors.get(state.ui.selected) if state.ui.selected is not None else None
    if sel is not None:
        lines.append(f"Selected: {sel.sprite_name} @ {sel.pos}  HP {sel.hp}")
    else:
        lines.append("Selected: None")
    lines.append(f"Move State: {state.ui.move_state.name}")
    lines.append("Controls: click select/move | SPACE stay/confirm | W wait | F attack | TAB target | ESC cancel | ENTER end phase | L/M field | B water | H terrain | Shift+WASD pan")
    lines.extend(state.debug.drain())
    lines.extend(state.debug.recent(S.HUD_MESSAGES))

    x, y = 10, 10
    for text in lines:
        surf = font.render(text, True, C.TEXT)
        surface.blit(surf, (x, y))
        y += surf.get_height() + 2


# ---------- Input ----------

_KEY_INTENTS = {
    "confirm": S.KEY_CONFIRM,
    "wait": S.KEY_WAIT,
    "attack": S.KEY_ATTACK,
    "cycle_target": S.KEY_CYCLE_TARGET,
    "cancel": S.KEY_CANCEL,
    "end_phase": S.KEY_END_PHASE,
    "toggle_field": S.KEY_TOGGLE_FIELD,
    "toggle_ai_field": S.KEY_TOGGLE_AI_FIELD,
    "toggle_water": S.KEY_TOGGLE_WATER,
    "cycle_terrain": S.KEY_CYCLE_TERRAIN,
}
_PAN_KEYS = {"w": (0, S.PAN_STEP), "s": (0, -S.PAN_STEP), "a": (S.PAN_STEP, 0), "d": (-S.PAN_STEP, 0)}


def read_input(events: List[pg.event.Event], view: IsoView, tmap: TileMap) -> Tuple[FrameInput, bool]:
    """Translate this frame's pygame events. Returns (input, keep_running)."""
    key_to_intent = {pg.key.key_code(name): intent for intent, name in _KEY_INTENTS.items()}
    cell = view.to_grid(*pg.mouse.get_pos())
    inp = FrameInput(mouse_cell=cell if tmap.in_bounds(cell) else None)
    buttons = _btn_rects()
    running = True

    for e in events:
        if e.type == pg.QUIT:
            running = False
        elif e.type == pg.KEYDOWN:
            if pg.key.get_mods() & pg.KMOD_SHIFT:
                name = pg.key.name(e.key)
                if name in _PAN_KEYS:
                    view.pan(*_PAN_KEYS[name])
                    continue
            intent = key_to_intent.get(e.key)
            if intent is not None:
                setattr(inp, intent, True)
        elif e.type in (pg.MOUSEBUTTONDOWN, pg.MOUSEBUTTONUP) and e.button == 1:
            hit = next((name for name, rect in buttons.items() if rect.collidepoint(e.pos)), None)
            if hit is not None:
                if e.type == pg.MOUSEBUTTONDOWN:
                    setattr(inp, {"wait": "wait", "attack": "attack", "end": "end_phase"}[hit], True)
                continue
            if e.type == pg.MOUSEBUTTONDOWN:
                inp.left_pressed = True
            else:
                inp.left_released = True
    return inp, running


# ---------- Main ----------

def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=S.LOG_LEVEL, format=S.LOG_FORMAT)

    pg.init()
    try:
        screen = pg.display.set_mode((S.WINDOW_W, S.WINDOW_H))
        pg.display.set_caption(S.WINDOW_TITLE)
        clock = pg.time.Clock()
        font = pg.font.SysFont("consolas", 16)
        font_btn = pg.font.SysFont("consolas", 18)

        state = build_state(argv[0] if argv else None)
        view = IsoView(S.TILE_W, S.TILE_H, S.ORIGIN)

        running = True
        while running:
            dt = clock.tick(S.FPS) / 1000.0
            inp, running = read_input(pg.event.get(), view, state.tmap)

            update(state, inp, dt)

            screen.fill(C.BG)
            draw_map(screen, view, state.tmap)
            render_commands(screen, view, state.draw.flush(), font)
            draw_action_bar(screen, state, font_btn)
            draw_debug(screen, font, state, inp.mouse_cell)

            pg.display.flip()

        return 0
    except SkirmishError:
        logger.exception("fatal game error")
        raise
    except Exception:
        logger.exception("unexpected error")
        raise
    finally:
        pg.quit()


if __name__ == "__main__":
    sys.exit(main())
