#Maze game core
#Generates a perfect maze with recursive backtracking, then places a random start and exit
#The player walks from start to exit, the clock stops when they get there

#To play, open terminal, follow directories to where the files are then run "python3 maze_gen.py"
#To print mazes as text instead, run "python3 maze_gen.py --mode cli --width 10 --height 6 --seed 7"

from __future__ import annotations

import argparse
import random
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple


#Sides in the fixed neighbour order: top, right, bottom, left
DIRS = {
    "top": (0, -1),
    "right": (1, 0),
    "bottom": (0, 1),
    "left": (-1, 0),
}

OPPOSITE = {"top": "bottom", "right": "left", "bottom": "top", "left": "right"}

#Player moves and the wall side each one has to pass through
MOVES = {
    "up": "top",
    "right": "right",
    "down": "bottom",
    "left": "left",
}

VICTORY_MESSAGE = "Congratulations! You reached the exit!"


class MazeConfigError(ValueError):
    pass


def within_bounds(width: int, height: int, col: int, row: int) -> bool:
    return 0 <= col < width and 0 <= row < height


def check_dimensions(width: int, height: int) -> None:
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise MazeConfigError(f"{name} must be an integer, got {value!r}")
        if value <= 0:
            raise MazeConfigError(f"{name} must be positive, got {value}")


def check_episode_dimensions(width: int, height: int) -> None:
    check_dimensions(width, height)
    if width * height < 2:
        raise MazeConfigError(
            f"a {width}x{height} grid has no room for separate start and exit cells"
        )


@dataclass
class Cell:
    col: int
    row: int
    walls: Dict[str, bool] = field(
        default_factory=lambda: {"top": True, "right": True, "bottom": True, "left": True}
    )
    visited: bool = False


def remove_walls(a: Cell, b: Cell) -> None:
    #Open the passage between two adjacent cells, both sides at once
    #Cells that are not neighbours are left alone
    for direction, (dc, dr) in DIRS.items():
        if a.col + dc == b.col and a.row + dr == b.row:
            a.walls[direction] = False
            b.walls[OPPOSITE[direction]] = False
            return


class Maze:
#Grid of width*height cells stored flat, cell (col, row) lives at row*width + col
#generate() carves it into a perfect maze: every cell reachable, exactly one path between any two

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.cells: List[Cell] = [
            Cell(col, row) for row in range(height) for col in range(width)
        ]

    def get_cell(self, col: int, row: int) -> Optional[Cell]:
        if not within_bounds(self.width, self.height, col, row):
            return None
        return self.cells[row * self.width + col]

    def unvisited_neighbors(self, cell: Cell) -> List[Cell]:
        neighbors = []
        for dc, dr in DIRS.values():
            nxt = self.get_cell(cell.col + dc, cell.row + dr)
            if nxt is not None and not nxt.visited:
                neighbors.append(nxt)
        return neighbors

    def generate(
        self,
        rng: Optional[random.Random] = None,
        start: Tuple[int, int] = (0, 0),
        on_visit: Optional[Callable[[Cell], None]] = None,
    ) -> "Maze":
        rng = rng or random.Random()
        current = self.get_cell(*start)
        if current is None:
            raise MazeConfigError(
                f"start {start} is outside the {self.width}x{self.height} grid"
            )

        def visit(cell: Cell) -> None:
            cell.visited = True
            if on_visit is not None:
                on_visit(cell)

        visit(current)
        stack: List[Cell] = []

        while True:
            neighbors = self.unvisited_neighbors(current)
            if neighbors:
                nxt = rng.choice(neighbors)
                visit(nxt)
                stack.append(current)
                remove_walls(current, nxt)
                current = nxt
            elif stack:
                current = stack.pop()  #backtrack
            else:
                break

        #visited is only scratch state for the carve
        for cell in self.cells:
            cell.visited = False
        return self

    def open_neighbors(self, col: int, row: int) -> List[Tuple[int, int]]:
        cell = self.get_cell(col, row)
        if cell is None:
            return []
        return [
            (nc, nr)
            for direction, (dc, dr) in DIRS.items()
            if not cell.walls[direction]
            and within_bounds(self.width, self.height, nc := col + dc, nr := row + dr)
        ]

    def corridor_edges(self) -> Iterable[Tuple[Tuple[int, int], Tuple[int, int]]]:
        seen = set()
        for row in range(self.height):
            for col in range(self.width):
                for nc, nr in self.open_neighbors(col, row):
                    edge = tuple(sorted(((col, row), (nc, nr))))
                    if edge not in seen:
                        seen.add(edge)
                        yield edge

    def dead_ends(self) -> List[Tuple[int, int]]:
        return [
            (cell.col, cell.row)
            for cell in self.cells
            if sum(cell.walls.values()) == 3
        ]

    def to_grid(self) -> List[List[int]]:
        #Tile view used for text output: 1 is floor, 0 is wall
        grid_w = self.width * 2 + 1
        grid_h = self.height * 2 + 1
        grid = [[0 for _ in range(grid_w)] for _ in range(grid_h)]
        for cell in self.cells:
            gx, gy = 2 * cell.col + 1, 2 * cell.row + 1
            grid[gy][gx] = 1
            if not cell.walls["top"]:
                grid[gy - 1][gx] = 1
            if not cell.walls["bottom"]:
                grid[gy + 1][gx] = 1
            if not cell.walls["left"]:
                grid[gy][gx - 1] = 1
            if not cell.walls["right"]:
                grid[gy][gx + 1] = 1
        return grid


def create_grid(width: int, height: int) -> Maze:
    check_dimensions(width, height)
    return Maze(width, height)


def get_cell(maze: Maze, col: int, row: int) -> Optional[Cell]:
    return maze.get_cell(col, row)


def get_unvisited_neighbors(maze: Maze, cell: Cell) -> List[Cell]:
    return maze.unvisited_neighbors(cell)


def generate_maze(
    width: int,
    height: int,
    start: Tuple[int, int] = (0, 0),
    rng: Optional[random.Random] = None,
) -> Maze:
    maze = create_grid(width, height)
    return maze.generate(rng=rng, start=start)


def pick_start_and_exit(
    width: int,
    height: int,
    rng: Optional[random.Random] = None,
) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    check_episode_dimensions(width, height)
    rng = rng or random.Random()
    start = (rng.randrange(width), rng.randrange(height))
    while True:
        exit_cell = (rng.randrange(width), rng.randrange(height))
        if exit_cell != start:
            return start, exit_cell


#Episode state: one maze plus start, exit and player, replaced wholesale on reset

@dataclass
class Episode:
    maze: Maze
    start: Tuple[int, int]
    exit: Tuple[int, int]
    player: Tuple[int, int]
    started_at: float
    finished_at: Optional[float] = None
    clock: Callable[[], float] = field(default=time.perf_counter, repr=False)

    def has_won(self) -> bool:
        return self.player == self.exit

    def elapsed_seconds(self, now: Optional[float] = None) -> int:
        if self.finished_at is not None:
            end = self.finished_at
        else:
            end = self.clock() if now is None else now
        return int(max(0.0, end - self.started_at))

    def timer_text(self, now: Optional[float] = None) -> str:
        return f"Time: {self.elapsed_seconds(now)}s"


def new_episode(
    width: int,
    height: int,
    rng: Optional[random.Random] = None,
    clock: Callable[[], float] = time.perf_counter,
) -> Episode:
    rng = rng or random.Random()
    #Checked before anything is carved
    check_episode_dimensions(width, height)
    maze = generate_maze(width, height, start=(0, 0), rng=rng)
    start, exit_cell = pick_start_and_exit(width, height, rng=rng)
    return Episode(
        maze=maze,
        start=start,
        exit=exit_cell,
        player=start,
        started_at=clock(),
        clock=clock,
    )


def move_player(episode: Episode, move: str) -> bool:
    #A move is legal iff the wall on that side of the player's cell is down
    if move not in MOVES:
        raise ValueError(f"unknown move {move!r}, expected one of {sorted(MOVES)}")
    if episode.has_won():
        return False
    side = MOVES[move]
    col, row = episode.player
    cell = episode.maze.get_cell(col, row)
    if cell is None or cell.walls[side]:
        return False
    dc, dr = DIRS[side]
    episode.player = (col + dc, row + dr)
    if episode.has_won():
        episode.finished_at = episode.clock()
    return True


def render_ascii(episode: Episode) -> str:
    grid = episode.maze.to_grid()
    chars = [["." if value == 1 else "#" for value in grid_row] for grid_row in grid]
    for (col, row), marker in (
        (episode.start, "S"),
        (episode.exit, "E"),
        (episode.player, "@"),
    ):
        chars[2 * row + 1][2 * col + 1] = marker
    return "\n".join("".join(line) for line in chars)


#CLI + game window

def run_visual_mode(args, rng: random.Random):
    from visualizer import MazeVisualizer

    print(f"Launching maze game {args.width}x{args.height} | seed: {args.seed}")
    viewer = MazeVisualizer(
        width=args.width,
        height=args.height,
        rng=rng,
        cell_size=args.cell_size,
    )
    viewer.run()


def run_cli_mode(args, rng: random.Random):
    for run_idx in range(args.runs):
        episode = new_episode(args.width, args.height, rng=rng)
        passages = sum(1 for _ in episode.maze.corridor_edges())
        print(f"\nRun {run_idx + 1}/{args.runs} | maze {args.width}x{args.height} | seed: {args.seed}")
        print(render_ascii(episode))
        print(
            f"start={episode.start} exit={episode.exit} "
            f"passages={passages} dead_ends={len(episode.maze.dead_ends())}"
        )


def prompt_for_mode():
    response = input("Open game window? (y/n): ").strip().lower()
    return "visual" if response.startswith("y") else "cli"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Recursive backtracking maze game with a pygame window.")
    parser.add_argument("--mode", choices=["visual", "cli"], help="Choose 'visual' to play in a pygame window or 'cli' to print mazes as text.")
    parser.add_argument("--width", type=int, default=20, help="Maze width in cells.")
    parser.add_argument("--height", type=int, default=20, help="Maze height in cells.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for maze generation and start/exit placement (default: random).")
    parser.add_argument("--cell-size", type=int, default=30, help="Cell size in pixels for visual mode.")
    parser.add_argument("--runs", type=int, default=1, help="Number of mazes to print in CLI mode.")
    return parser


def parse_args(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        check_episode_dimensions(args.width, args.height)
    except MazeConfigError as exc:
        parser.error(str(exc))
    if args.cell_size <= 0:
        parser.error("--cell-size must be positive")
    if args.runs <= 0:
        parser.error("--runs must be positive")
    if args.seed is None:
        args.seed = random.randint(0, 1_000_000_000)
    return args


def main(argv=None):
    args = parse_args(argv)
    rng = random.Random(args.seed)
    mode = args.mode or prompt_for_mode()
    if mode == "visual":
        run_visual_mode(args, rng)
    else:
        run_cli_mode(args, rng)


if __name__ == "__main__":
    main()
