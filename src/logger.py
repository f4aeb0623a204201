"""
Logging utilities for Minimax Reversi.
"""
import os
import json
import logging
from dataclasses import asdict
from datetime import datetime
from typing import Dict, Any, Optional
import numpy as np
from torch.utils.tensorboard import SummaryWriter

from .config import Config


class Logger:
    """Logger for game, search and tournament metrics."""

    def __init__(self, config: Config, log_dir: Optional[str] = None):
        """
        Initialize the logger.

        Args:
            config: Configuration object
            log_dir: Directory to save logs (default: config.logging.log_dir)
        """
        self.config = config
        self.log_dir = log_dir or config.logging.log_dir
        self.run_name = f"{config.project_name}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
        self.run_dir = os.path.join(self.log_dir, self.run_name)

        os.makedirs(self.run_dir, exist_ok=True)

        level = getattr(logging, config.logging.log_level.upper(), logging.INFO)
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

        self.handlers = []
        if config.logging.verbose:
            console = logging.StreamHandler()
            console.setLevel(level)
            console.setFormatter(formatter)
            self.handlers.append(console)

        file_handler = logging.FileHandler(os.path.join(self.run_dir, 'run.log'))
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        self.handlers.append(file_handler)

        # Configure root logger so module loggers propagate here
        self.logger = logging.getLogger()
        self.logger.setLevel(level)
        for handler in self.handlers:
            self.logger.addHandler(handler)

        self.writer = None
        if config.logging.use_tensorboard:
            self.writer = SummaryWriter(log_dir=os.path.join(self.run_dir, 'tensorboard'))

        self.save_config()

    def save_config(self):
        """Save the configuration to a JSON file."""
        config_path = os.path.join(self.run_dir, 'config.json')
        with open(config_path, 'w') as f:
            json.dump(asdict(self.config), f, indent=2)

    def log_metrics(self, metrics: Dict[str, Any], step: int, prefix: str = ''):
        """
        Log metrics to console and TensorBoard.

        Args:
            metrics: Dictionary of metrics to log
            step: Current step (move number, game number, ...)
            prefix: Prefix for metric names (e.g., 'arena/', 'search/')
        """
        log_str = f"Step {step}:"
        for name, value in metrics.items():
            if isinstance(value, float):
                log_str += f" {prefix}{name}={value:.4f}"
            else:
                log_str += f" {prefix}{name}={value}"
        self.logger.info(log_str)

        if self.writer is not None:
            for name, value in metrics.items():
                if isinstance(value, (int, float)):
                    self.writer.add_scalar(f"{prefix}{name}", value, step)

    def log_search(self, stats, step: int):
        """Log the outcome of one root search (a SearchStats)."""
        self.log_metrics({
            'nodes': stats.nodes,
            'best_score': float(stats.best_score),
            'elapsed': stats.elapsed,
        }, step, prefix='search/')
        scores = [s for s in stats.root_scores.values() if np.isfinite(s)]
        if scores:
            self.log_histogram('search/root_scores', np.array(scores), step)

    def log_histogram(self, tag: str, values: np.ndarray, step: int):
        """Log a histogram of values to TensorBoard."""
        if self.writer is not None:
            self.writer.add_histogram(tag, values, step)

    def log_text(self, tag: str, text: str, step: int = 0):
        """Log text (e.g. a final board) to TensorBoard."""
        if self.writer is not None:
            self.writer.add_text(tag, text, step)

    def close(self):
        """Close the logger and flush all pending logs."""
        if self.writer is not None:
            self.writer.flush()
            self.writer.close()
            self.writer = None

        # Remove our handlers to prevent duplicate logging
        for handler in self.handlers:
            self.logger.removeHandler(handler)
            handler.close()
        self.handlers = []


def setup_logger(config: Config) -> Logger:
    """
    Set up and return a logger instance.

    Args:
        config: Configuration object

    Returns:
        Logger instance
    """
    return Logger(config)
