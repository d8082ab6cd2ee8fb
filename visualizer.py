#Pygame window for playing the maze

from __future__ import annotations

import random
import time

import pygame

from maze_gen import VICTORY_MESSAGE, Episode, move_player, new_episode


KEY_MOVES = {
    pygame.K_UP: "up",
    pygame.K_RIGHT: "right",
    pygame.K_DOWN: "down",
    pygame.K_LEFT: "left",
}

#Status panel needs room for the victory line and the reset button
MIN_WINDOW_WIDTH = 460
FONT_SIZE = 20

#color schemes for visual aspects
COLORS = {
    "background": (255, 255, 255),
    "wall": (0, 0, 0),
    "start": (144, 238, 144),
    "goal": (173, 216, 230),
    "player": (255, 0, 0),
    "panel": (25, 25, 25),
    "text": (235, 235, 235),
    "button": (70, 70, 70),
}


class MazeVisualizer:
    #One playable episode at a time, the reset button (or R) throws it away and builds a new one

    def __init__(
        self,
        width=20,
        height=20,
        rng=None,
        cell_size=30,
        panel_height=60,
        clock=time.perf_counter,
    ):
        self.width = width
        self.height = height
        self.rng = rng or random.Random()
        self.cell_size = cell_size
        self.panel_height = panel_height
        self.clock = clock
        self.episode: Episode = new_episode(width, height, rng=self.rng, clock=clock)
        self.message = ""

    @property
    def board_size(self):
        return self.width * self.cell_size, self.height * self.cell_size

    @property
    def window_size(self):
        board_w, board_h = self.board_size
        return max(board_w, MIN_WINDOW_WIDTH), board_h + self.panel_height

    def reset_button_rect(self) -> pygame.Rect:
        window_w, _ = self.window_size
        _, board_h = self.board_size
        return pygame.Rect(window_w - 110, board_h + 12, 100, self.panel_height - 24)

    def reset(self):
        self.episode = new_episode(self.width, self.height, rng=self.rng, clock=self.clock)
        self.message = ""

    def handle_key(self, key) -> bool:
        if key == pygame.K_r:
            self.reset()
            return False
        move = KEY_MOVES.get(key)
        if move is None:
            return False
        moved = move_player(self.episode, move)
        if moved and self.episode.has_won():
            self.message = VICTORY_MESSAGE
            print(f"Reached the exit in {self.episode.elapsed_seconds()}s")
        return moved

    def handle_click(self, pos) -> bool:
        if self.reset_button_rect().collidepoint(pos):
            self.reset()
            return True
        return False

    def _draw_cell_walls(self, screen, cell):
        size = self.cell_size
        x = cell.col * size
        y = cell.row * size
        corners = {
            "top": ((x, y), (x + size, y)),
            "right": ((x + size, y), (x + size, y + size)),
            "bottom": ((x + size, y + size), (x, y + size)),
            "left": ((x, y + size), (x, y)),
        }
        for side, (a, b) in corners.items():
            if cell.walls[side]:
                pygame.draw.line(screen, COLORS["wall"], a, b, 2)

    def _draw_marker(self, screen, pos, color):
        size = self.cell_size
        col, row = pos
        pygame.draw.rect(
            screen,
            color,
            pygame.Rect(col * size + 4, row * size + 4, size - 8, size - 8),
        )

    def draw(self, screen, font):
        episode = self.episode
        size = self.cell_size
        window_w, _ = self.window_size
        _, board_h = self.board_size
        screen.fill(COLORS["background"])

        self._draw_marker(screen, episode.start, COLORS["start"])
        self._draw_marker(screen, episode.exit, COLORS["goal"])
        for cell in episode.maze.cells:
            self._draw_cell_walls(screen, cell)

        pcol, prow = episode.player
        pygame.draw.circle(
            screen,
            COLORS["player"],
            (pcol * size + size // 2, prow * size + size // 2),
            max(2, size // 4),
        )

        panel = pygame.Rect(0, board_h, window_w, self.panel_height)
        pygame.draw.rect(screen, COLORS["panel"], panel)
        pad = 8
        screen.blit(font.render(episode.timer_text(), True, COLORS["text"]), (panel.x + pad, panel.y + pad))
        if self.message:
            screen.blit(
                font.render(self.message, True, COLORS["text"]),
                (panel.x + pad, panel.y + pad + font.get_linesize()),
            )

        button = self.reset_button_rect()
        pygame.draw.rect(screen, COLORS["button"], button)
        label = font.render("Reset", True, COLORS["text"])
        screen.blit(label, label.get_rect(center=button.center))

    def run(self):
        pygame.init()
        screen = pygame.display.set_mode(self.window_size)
        pygame.display.set_caption(f"Maze Game {self.width}x{self.height}")
        font = pygame.font.SysFont(None, FONT_SIZE)
        frame_clock = pygame.time.Clock()

        running = True
        while running:
            #Timer text only changes once a second, but keys should feel instant
            frame_clock.tick(30)
            for event in pygame.event.get():
                if event.type == pygame.QUIT or (
                    event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE
                ):
                    running = False
                elif event.type == pygame.KEYDOWN:
                    self.handle_key(event.key)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self.handle_click(event.pos)

            self.draw(screen, font)
            pygame.display.flip()

        pygame.quit()
