"""
Board module for Reversi.
Handles the game board state, legal-move generation, capture resolution and
turn/pass/termination logic on a square board of even side length.
"""
from enum import IntEnum
from typing import FrozenSet, List, NamedTuple, Optional, Set, Tuple
import numpy as np


class BoardSizeError(ValueError):
    """Raised when a board is requested with an unsupported side length."""


class Player(IntEnum):
    """The two sides. BLACK always moves first."""
    BLACK = 1
    WHITE = 2

    @property
    def opponent(self) -> 'Player':
        return Player.WHITE if self is Player.BLACK else Player.BLACK

    @property
    def label(self) -> str:
        return self.name.capitalize()


class Coordinate(NamedTuple):
    """A (row, col) position on the board."""
    row: int
    col: int


# Compass directions as (row step, col step)
DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)


class Board:
    """
    Represents the Reversi game board.

    The grid is a numpy array holding EMPTY, BLACK or WHITE per cell. The board
    also owns the side to move, the cached set of legal destinations for that
    side and the winner once the game has ended.
    """

    # Cell values
    EMPTY = 0
    BLACK = Player.BLACK
    WHITE = Player.WHITE

    # Winner value for a drawn game; winner stays None while the game is running
    DRAW = 0

    MIN_SIZE = 4

    def __init__(self, size: int = 8):
        """
        Initialize a new Reversi board with the four starting disks.

        Args:
            size: Side length of the board, must be even and at least 4

        Raises:
            BoardSizeError: If the size is odd or too small
        """
        self._check_size(size)

        self.size = size
        self._grid = np.zeros((size, size), dtype=np.int8)

        lo = size // 2 - 1
        hi = lo + 1
        self._grid[lo, lo] = self.BLACK
        self._grid[hi, hi] = self.BLACK
        self._grid[lo, hi] = self.WHITE
        self._grid[hi, lo] = self.WHITE

        self.current_player = Player.BLACK
        self.winner: Optional[int] = None
        self.last_flipped: Tuple[Coordinate, ...] = ()
        self._valid_moves: FrozenSet[Coordinate] = frozenset(
            self.get_valid_moves(self.current_player))

    @staticmethod
    def _check_size(size: int) -> None:
        if size % 2 != 0:
            raise BoardSizeError(f"Board size must be even, got {size}")
        if size < Board.MIN_SIZE:
            raise BoardSizeError(f"Board size must be at least {Board.MIN_SIZE}, got {size}")

    @classmethod
    def from_array(cls, grid, current_player: int = Player.BLACK) -> 'Board':
        """
        Build a board from an arbitrary position.

        The legal-move cache is derived the same way move application derives
        it: if the side to move has no legal move the turn goes to the other
        side, and if neither side can move the game is over.

        Args:
            grid: Square array-like of EMPTY/BLACK/WHITE cell values
            current_player: The side to move

        Returns:
            A new Board in the given position
        """
        array = np.array(grid, dtype=np.int8)
        if array.ndim != 2 or array.shape[0] != array.shape[1]:
            raise ValueError(f"Grid must be square, got shape {array.shape}")
        cls._check_size(array.shape[0])
        if not np.isin(array, (cls.EMPTY, cls.BLACK, cls.WHITE)).all():
            raise ValueError("Grid contains values other than EMPTY, BLACK and WHITE")

        board = cls._blank(array.shape[0])
        board._grid = array
        player = Player(current_player)

        moves = board.get_valid_moves(player)
        if not moves:
            moves = board.get_valid_moves(player.opponent)
            if moves:
                player = player.opponent
            else:
                board._determine_winner()

        board.current_player = player
        board._valid_moves = frozenset(moves)
        return board

    @classmethod
    def _blank(cls, size: int) -> 'Board':
        """Allocate a board without running the starting-position setup."""
        board = cls.__new__(cls)
        board.size = size
        board.winner = None
        board.last_flipped = ()
        return board

    def copy(self) -> 'Board':
        """Create a deep copy of the board."""
        new_board = self._blank(self.size)
        new_board._grid = self._grid.copy()
        new_board.current_player = self.current_player
        new_board.winner = self.winner
        new_board.last_flipped = self.last_flipped
        new_board._valid_moves = self._valid_moves
        return new_board

    @property
    def grid(self) -> np.ndarray:
        """Read-only view of the grid. Use make_move to change the position."""
        view = self._grid.view()
        view.flags.writeable = False
        return view

    @property
    def valid_moves(self) -> FrozenSet[Coordinate]:
        """Cached legal destinations for the side to move."""
        return self._valid_moves

    @property
    def game_over(self) -> bool:
        return self.winner is not None

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self.game_over

    def _inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def get_valid_moves(self, player: Optional[int] = None) -> Set[Coordinate]:
        """
        Compute all legal destinations for the given player.

        From every disk of the player, walk each direction across a run of
        opponent disks; an empty in-bounds cell ending a non-empty run is a
        legal destination.

        Args:
            player: The player to get valid moves for. If None, uses current player.

        Returns:
            Set of Coordinates
        """
        if player is None:
            player = self.current_player
        opponent = Player(player).opponent
        cells = self._grid.tolist()
        moves = set()

        for row, col in np.argwhere(self._grid == player).tolist():
            for dr, dc in DIRECTIONS:
                r, c = row + dr, col + dc
                crossed = False
                while self._inside(r, c) and cells[r][c] == opponent:
                    r += dr
                    c += dc
                    crossed = True
                if crossed and self._inside(r, c) and cells[r][c] == self.EMPTY:
                    moves.add(Coordinate(r, c))

        return moves

    def has_any_valid_move(self, player: Optional[int] = None) -> bool:
        """Check if the player has any valid moves."""
        return len(self.get_valid_moves(player)) > 0

    def is_valid_move(self, row: int, col: int) -> bool:
        """Check if (row, col) is a legal destination for the side to move."""
        return Coordinate(row, col) in self._valid_moves

    def _flip_direction(self, row: int, col: int, dr: int, dc: int,
                        player: int) -> List[Coordinate]:
        """
        Flip the opponent disks bracketed between (row, col) and the first
        disk of `player` in one direction.

        Returns:
            The flipped coordinates, empty if the run is not anchored
        """
        opponent = Player(player).opponent
        r, c = row + dr, col + dc
        if not self._inside(r, c) or self._grid[r, c] != opponent:
            return []

        while self._inside(r, c) and self._grid[r, c] == opponent:
            r += dr
            c += dc

        if not self._inside(r, c) or self._grid[r, c] != player:
            return []

        # Walk back from the anchor to the placed disk
        flipped = []
        r -= dr
        c -= dc
        while (r, c) != (row, col):
            self._grid[r, c] = player
            flipped.append(Coordinate(r, c))
            r -= dr
            c -= dc
        return flipped

    def make_move(self, row: int, col: int) -> bool:
        """
        Make a move for the side to move.

        Args:
            row: Row of the move (0-based)
            col: Column of the move (0-based)

        Returns:
            bool: True if the move was valid and made, False otherwise
        """
        if self.game_over or Coordinate(row, col) not in self._valid_moves:
            return False

        player = self.current_player
        self._grid[row, col] = player

        flipped = []
        for dr, dc in DIRECTIONS:
            flipped.extend(self._flip_direction(row, col, dr, dc, player))
        self.last_flipped = tuple(flipped)

        # Opponent moves next if it can; otherwise it passes and the mover goes again
        next_moves = self.get_valid_moves(player.opponent)
        if next_moves:
            self.current_player = player.opponent
        else:
            next_moves = self.get_valid_moves(player)
            if not next_moves:
                self._determine_winner()

        self._valid_moves = frozenset(next_moves)
        return True

    def count(self, player: int) -> int:
        """Number of disks owned by the player."""
        return int(np.count_nonzero(self._grid == player))

    def get_score(self) -> Tuple[int, int]:
        """
        Get the current score (black, white).

        Returns:
            Tuple of (black_score, white_score)
        """
        return self.count(self.BLACK), self.count(self.WHITE)

    def _determine_winner(self) -> None:
        """Determine the winner based on piece counts."""
        black_count, white_count = self.get_score()

        if black_count > white_count:
            self.winner = Player.BLACK
        elif white_count > black_count:
            self.winner = Player.WHITE
        else:
            self.winner = self.DRAW

    def get_board_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            2D numpy array copy of the grid
        """
        return self._grid.copy()

    def __str__(self) -> str:
        """Return a string representation of the board."""
        symbols = {self.EMPTY: '.', self.BLACK: 'B', self.WHITE: 'W'}
        rows = [' '.join(symbols[cell] for cell in row) for row in self._grid.tolist()]

        status = ["\n".join(rows)]
        status.append(f"Current player: {self.current_player.label}")

        black_count, white_count = self.get_score()
        status.append(f"Score - Black: {black_count}, White: {white_count}")

        if self.game_over:
            if self.winner == self.DRAW:
                status.append("Game over! It's a draw!")
            else:
                status.append(f"Game over! {Player(self.winner).label} wins!")

        return "\n".join(status)
