"""
Tests for the run logger.
"""
import json
import logging
import os

from src.config import get_default_config
from src.logger import Logger, setup_logger
from src.search import SearchStats
from src.game import Coordinate


def make_config(tmp_path, use_tensorboard=False):
    config = get_default_config()
    config.logging.log_dir = str(tmp_path / "logs")
    config.logging.use_tensorboard = use_tensorboard
    config.logging.verbose = False
    return config


def test_run_directory_and_config(tmp_path):
    config = make_config(tmp_path)
    run_logger = Logger(config)
    try:
        assert os.path.isdir(run_logger.run_dir)
        assert os.path.basename(run_logger.run_dir).startswith("Minimax-Reversi_")

        with open(os.path.join(run_logger.run_dir, 'config.json')) as f:
            saved = json.load(f)
        assert saved == config.to_dict()
    finally:
        run_logger.close()


def test_records_reach_the_run_file(tmp_path):
    run_logger = Logger(make_config(tmp_path))
    logging.getLogger("src.search.minimax").info("searching")
    run_logger.log_metrics({'black_disks': 10, 'ratio': 0.25}, step=3, prefix='arena/')
    run_logger.close()

    with open(os.path.join(run_logger.run_dir, 'run.log')) as f:
        text = f.read()
    assert "searching" in text
    assert "Step 3: arena/black_disks=10 arena/ratio=0.2500" in text


def test_close_removes_handlers(tmp_path):
    root = logging.getLogger()
    before = list(root.handlers)

    run_logger = Logger(make_config(tmp_path))
    assert len(root.handlers) == len(before) + 1
    run_logger.close()

    assert root.handlers == before
    assert run_logger.handlers == []


def test_log_search(tmp_path):
    run_logger = setup_logger(make_config(tmp_path))
    stats = SearchStats(nodes=42, best_move=Coordinate(0, 2), best_score=70.0,
                        root_scores={Coordinate(0, 2): 70.0, Coordinate(3, 1): 20.0},
                        elapsed=0.5)
    run_logger.log_search(stats, step=1)
    run_logger.close()

    with open(os.path.join(run_logger.run_dir, 'run.log')) as f:
        text = f.read()
    assert "search/nodes=42" in text
    assert "search/best_score=70.0000" in text


def test_tensorboard_writer(tmp_path):
    run_logger = Logger(make_config(tmp_path, use_tensorboard=True))
    assert run_logger.writer is not None
    run_logger.log_metrics({'nodes': 5}, step=0, prefix='search/')
    run_logger.log_text('game/final_board', "o x\nx o")
    run_logger.close()

    assert run_logger.writer is None
    assert os.path.isdir(os.path.join(run_logger.run_dir, 'tensorboard'))
