# mazepath/app/viewer.py
#!/usr/bin/env python3
"""
Maze Search Viewer — step through A* or the all-best-paths search

- Keyboard:
    [1]..[4]     -> switch bundled map
    [D]/[A]      -> select algorithm (Dijkstra / A*)
    [SPACE]      -> run/pause
    [N]          -> single step
    [R]          -> reset
    [+]/[-]      -> steps/sec
    [Q]/[ESC]    -> quit

Overlays: cyan = discovered cells, magenta = expanded cells, mint = result cells.
"""

import sys
import time
from typing import Dict, List, Optional, Tuple

import pygame

from mazepath.core.astar import AStarAlgo
from mazepath.core.config import SearchConfig
from mazepath.core.dijkstra import AllBestPathsAlgo
from mazepath.core.errors import MalformedMazeError
from mazepath.core.maze import MAP_FILES, Maze, load_maze
from mazepath.core.types import Node, Pos

# ---------- Config ----------
MAP_KEYS = list(MAP_FILES)
PANEL_W = 360            # right band: metrics + buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 24
FONT_NAME = None  # default pygame font

# Colors
WHITE       = (255,255,255)
BLACK       = (  0,  0,  0)
BLUE        = ( 70,130,180)
RED         = (220, 50, 47)
WALL_GRAY   = ( 60, 64, 72)
FLOOR_GRAY  = (200,200,200)
NEON_CYAN_A = (0,150,255,110)
NEON_MAG_A  = (255,0,120,90)
NEON_MINT_A = (0,255,200,170)

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        if self.active and self.togglable:
            bg = (58, 86, 160, 235)
        elif self.hover:
            bg = (46, 50, 60, 230)
        else:
            bg = (36, 40, 48, 220)
        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)
        if self.active and self.togglable:
            pygame.draw.rect(screen, (120, 170, 255, 255), self.rect, width=2, border_radius=10)
        text = font.render(self.label, True, (235,238,242))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event):
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()


# ---------- Viewer ----------
class Viewer:
    def __init__(self, maze: Maze, *, algo: str = "Dijkstra", map_key: str = "custom",
                 config: Optional[SearchConfig] = None):
        pygame.init()

        self.maze = maze
        self.config = config or SearchConfig()
        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        self.cell_size = self._auto_cell_size(maze)
        win_w = GRID_MARGIN*2 + maze.width * self.cell_size + PANEL_W
        win_h = max(GRID_MARGIN*2 + maze.height * self.cell_size, 600)
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption(f"Maze search — {map_key}")

        self._buttons: List[UIButton] = []
        self.open_set: set[Pos] = set()
        self.closed_set: set[Pos] = set()
        self.path: List[Pos] = []
        self.current: Optional[Node] = None

        self.running = False
        self.clock = pygame.time.Clock()
        self.steps_per_sec = 8
        self._last_step_t = 0.0
        self.state = "Idle"
        self.selected_map_key = map_key
        self.selected_algo = algo

        self.algo = self._make_algo(algo)
        self.algo.init(self.maze)
        self._reset_overlays()
        self._layout(win_w, win_h)

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Integer cell size that fits the window; grid on the left, panel on the right."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = int(max(4, min(avail_w // self.maze.width, avail_h // self.maze.height)))
        self._grid_origin = (GRID_MARGIN, GRID_MARGIN)
        grid_right = GRID_MARGIN * 2 + self.maze.width * self.cell_size
        self._right_band = pygame.Rect(grid_right, 0, max(PANEL_W, win_w - grid_right), win_h)
        self._build_buttons()

    def _auto_cell_size(self, maze: Maze) -> int:
        target_h = 720 - GRID_MARGIN*2
        return max(4, min(CELL_SIZE_DEFAULT, target_h // maze.height))

    def run(self):
        while True:
            self._handle_events()
            if self.running:
                self._tick_algorithm()
            self._draw()
            self.clock.tick(60)

    def _tick_algorithm(self):
        now = time.time()
        if now - self._last_step_t >= 1.0 / max(1, self.steps_per_sec):
            self._last_step_t = now
            self._do_step()

    def _do_step(self):
        res = self.algo.step()
        self.open_set.update(res.opened)
        self.closed_set.update(res.closed)
        if res.current is not None:
            self.current = res.current
        if res.path is not None:
            self.path = res.path
        if res.status == "done":
            self.state = "Done"; self.running = False
        elif res.status == "no_path":
            self.state = "No path"; self.running = False
        if res.metrics:
            self._last_metrics = res.metrics
        self._refresh_active_states()

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    pygame.quit(); sys.exit(0)
                elif e.key == pygame.K_SPACE:
                    self._toggle_run()
                elif e.key == pygame.K_r:
                    self._reset()
                elif e.key == pygame.K_n:
                    self._do_step()
                elif e.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self._bump_speed(+1)
                elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
                    self._bump_speed(-1)
                elif pygame.K_1 <= e.key < pygame.K_1 + len(MAP_KEYS):
                    self._switch_map(MAP_KEYS[e.key - pygame.K_1])
                elif e.key == pygame.K_d:
                    self._switch_algo("Dijkstra")
                elif e.key == pygame.K_a:
                    self._switch_algo("A*")
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                self._layout(e.w, e.h)
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                for b in self._buttons:
                    b.handle_mouse(e)

    def _make_algo(self, label: str):
        if label == "A*":
            return AStarAlgo(name="A*", config=self.config)
        return AllBestPathsAlgo(name="Dijkstra", config=self.config)

    def _switch_map(self, key: str):
        try:
            self.maze = load_maze(key)
        except (OSError, MalformedMazeError) as ex:
            print(f"Failed to load map {key}: {ex}")
            return
        self.selected_map_key = key
        pygame.display.set_caption(f"Maze search — {key}")
        self.algo = self._make_algo(self.selected_algo)
        self.algo.init(self.maze)
        self.running = False; self.state = "Idle"
        self._reset_overlays()
        self._layout(*self.screen.get_size())

    def _switch_algo(self, label: str):
        self.selected_algo = label
        self.algo = self._make_algo(label)
        self.algo.init(self.maze)
        self.running = False; self.state = "Idle"
        self._reset_overlays()
        self._refresh_active_states()

    def _reset_overlays(self):
        self.open_set = {self.maze.start}
        self.closed_set.clear()
        self.path = []
        self.current = None
        self._last_metrics = {
            "algo": self.selected_algo,
            "popped": 0,
            "open_size": 0,
            "closed_count": 0,
            "path_len": 0,
            "total_cost": None,
        }

    def _reset(self):
        self.running = False
        self.state = "Idle"
        self.algo.reset()
        self._reset_overlays()
        self._refresh_active_states()

    # ---------- drawing ----------
    def _draw(self):
        self.screen.fill((24, 26, 32))
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _cell_rect(self, pos: Pos) -> pygame.Rect:
        cs = self.cell_size
        ox, oy = self._grid_origin
        row, col = pos
        return pygame.Rect(ox + col*cs, oy + row*cs, cs, cs)

    def _overlay(self, cells, rgba):
        cs = self.cell_size
        s = pygame.Surface((cs, cs), pygame.SRCALPHA); s.fill(rgba)
        for pos in cells:
            self.screen.blit(s, self._cell_rect(pos).topleft)

    def _draw_grid(self):
        for row, line in enumerate(self.maze.rows):
            for col, ch in enumerate(line):
                rect = self._cell_rect((row, col))
                pygame.draw.rect(self.screen, WALL_GRAY if ch == "#" else FLOOR_GRAY, rect)
                if self.cell_size >= 8:
                    pygame.draw.rect(self.screen, BLACK, rect, 1)

        self._overlay(self.open_set - self.closed_set, NEON_CYAN_A)
        self._overlay(self.closed_set, NEON_MAG_A)
        self._overlay(self.path, NEON_MINT_A)

        self._draw_badge(self.maze.start, BLUE, "S")
        self._draw_badge(self.maze.end, RED, "E")
        if self.current is not None:
            self._draw_facing(self.current)

    def _draw_badge(self, pos: Pos, color: Tuple[int,int,int], label: str):
        rect = self._cell_rect(pos)
        pygame.draw.circle(self.screen, color, rect.center, max(3, self.cell_size//2 - 2))
        if self.cell_size >= 14:
            txt = self.font_small.render(label, True, WHITE)
            self.screen.blit(txt, txt.get_rect(center=rect.center))

    def _draw_facing(self, node: Node):
        rect = self._cell_rect(node.pos)
        dr, dc = node.facing.delta
        cx, cy = rect.center
        reach = self.cell_size // 2 - 1
        pygame.draw.line(self.screen, ACCENT_GOLD, (cx, cy), (cx + dc*reach, cy + dr*reach), 3)

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 230  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 34
        gap = 8

        def add(label, cb, *, togglable=False, store_as: Optional[str] = None):
            btn = UIButton(label, pygame.Rect(x, y, w, h), cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Run / Pause", self._toggle_run, togglable=True, store_as="btn_run"); y += h + gap
        add("Step Once", self._do_step); y += h + gap
        add("Reset", self._reset);       y += h + gap
        add("Algo: Dijkstra (all best paths)", lambda: self._switch_algo("Dijkstra"),
            togglable=True, store_as="btn_algo_d"); y += h + gap
        add("Algo: A* (best cost)", lambda: self._switch_algo("A*"),
            togglable=True, store_as="btn_algo_a"); y += h + gap
        self._map_buttons: Dict[str, UIButton] = {}
        for i, key in enumerate(MAP_KEYS, start=1):
            add(f"Map {i}: {key}", lambda k=key: self._switch_map(k), togglable=True)
            self._map_buttons[key] = self._buttons[-1]
            y += h + gap

        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(self.running)
        if hasattr(self, "btn_algo_d"):
            self.btn_algo_d.set_active(self.selected_algo == "Dijkstra")
        if hasattr(self, "btn_algo_a"):
            self.btn_algo_a.set_active(self.selected_algo == "A*")
        for key, btn in getattr(self, "_map_buttons", {}).items():
            btn.set_active(self.selected_map_key == key)

    def _toggle_run(self):
        if self.state in ("Done", "No path"):
            return
        self.running = not self.running
        self.state = "Running" if self.running else "Paused"
        self._refresh_active_states()

    def _bump_speed(self, dv: int):
        self.steps_per_sec = int(max(1, min(240, self.steps_per_sec + dv)))

    def _draw_metrics_and_buttons(self):
        rb = self._right_band
        card = pygame.Surface((rb.width - 20, 210), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0,0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        line(f"{self.selected_algo} — {self.state}", big=True, color=ACCENT_GOLD)
        m = self._last_metrics
        line(f"Popped: {m.get('popped', 0)}")
        line(f"Open: {m.get('open_size', 0)}")
        line(f"Closed: {m.get('closed_count', 0)}")
        line(f"Result cells: {m.get('path_len', 0)}")
        if m.get("total_cost") is not None:
            line(f"Total Cost: {m['total_cost']}")
        if self.current is not None:
            line(f"Current: {self.current}")
        line(f"Speed: {self.steps_per_sec} steps/s")

        for b in self._buttons:
            b.draw(self.screen, self.font)


# ---------- main ----------
def main(source: str = MAP_KEYS[0], algo: str = "Dijkstra", config: Optional[SearchConfig] = None):
    try:
        maze = load_maze(source)
    except (OSError, MalformedMazeError) as ex:
        print(f"Failed to load map {source}: {ex}")
        sys.exit(1)
    key = source if source in MAP_FILES else "custom"
    Viewer(maze, algo=algo, map_key=key, config=config).run()


if __name__ == "__main__":
    main(*sys.argv[1:2])
