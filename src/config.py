"""
Configuration parameters for Minimax Reversi.
"""
import os
from dataclasses import dataclass, asdict, field
from typing import Dict, Any, List
import json


@dataclass
class BoardConfig:
    """Configuration for the game board."""
    size: int = 8


@dataclass
class SearchConfig:
    """Configuration for the minimax search agent."""
    depth: int = 4


@dataclass
class EvalConfig:
    """Weights of the static evaluator."""
    piece_weight: int = 5
    corner_weight: int = 50
    line_weight: int = 100  # per full row or column
    parallel_lines: bool = False  # count rows and columns on two worker threads


@dataclass
class ServiceConfig:
    """Configuration for the in-memory session service."""
    board_size: int = 8


@dataclass
class TournamentConfig:
    """Configuration for agent tournaments."""
    rounds: int = 10
    depths: List[int] = field(default_factory=lambda: [1, 2, 3])
    include_random: bool = True
    k: float = 32.0
    initial_rating: float = 1500.0
    output_dir: str = "tournament_results"
    elo_file: str = "elo_ratings.json"


@dataclass
class LoggingConfig:
    """Configuration for logging and visualization."""
    log_dir: str = "logs"
    log_level: str = "INFO"
    use_tensorboard: bool = True
    verbose: bool = True


@dataclass
class Config:
    """Main configuration class."""
    project_name: str = "Minimax-Reversi"
    seed: int = 42
    board: BoardConfig = field(default_factory=BoardConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)
    service: ServiceConfig = field(default_factory=ServiceConfig)
    tournament: TournamentConfig = field(default_factory=TournamentConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    def save(self, filepath: str):
        """Save config to JSON file."""
        os.makedirs(os.path.dirname(os.path.abspath(filepath)), exist_ok=True)
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'Config':
        """Create config from dictionary. Missing sections fall back to defaults."""
        return cls(
            project_name=config_dict.get('project_name', 'Minimax-Reversi'),
            seed=config_dict.get('seed', 42),
            board=BoardConfig(**config_dict.get('board', {})),
            search=SearchConfig(**config_dict.get('search', {})),
            eval=EvalConfig(**config_dict.get('eval', {})),
            service=ServiceConfig(**config_dict.get('service', {})),
            tournament=TournamentConfig(**config_dict.get('tournament', {})),
            logging=LoggingConfig(**config_dict.get('logging', {}))
        )

    @classmethod
    def load(cls, filepath: str) -> 'Config':
        """Load config from JSON file."""
        with open(filepath, 'r') as f:
            config_dict = json.load(f)
        return cls.from_dict(config_dict)


def get_default_config() -> Config:
    """Get default configuration."""
    return Config()
