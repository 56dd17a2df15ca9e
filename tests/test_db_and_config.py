import os
import tempfile
import unittest
from unittest import mock

from game import (
    BEST_SCORE_KEY,
    BestScoreStore,
    GameConfig,
    GameSession,
    load_best_score,
    save_best_score,
)


class TestBestScoreStore(unittest.TestCase):
    def test_given_fresh_db_when_loading_then_zero(self):
        with tempfile.TemporaryDirectory() as td:
            self.assertEqual(load_best_score(os.path.join(td, "jd.db")), 0)

    def test_given_saves_when_loading_then_maximum_is_kept(self):
        with tempfile.TemporaryDirectory() as td:
            db_path = os.path.join(td, "jd.db")
            self.assertEqual(save_best_score(db_path, 12), 12)
            self.assertEqual(save_best_score(db_path, 5), 12)
            self.assertEqual(load_best_score(db_path), 12)
            save_best_score(db_path, 40)
            self.assertEqual(load_best_score(db_path), 40)
            # Other keys are independent
            self.assertEqual(load_best_score(db_path, key="other"), 0)
            self.assertEqual(BEST_SCORE_KEY, "jd_best_score")

    def test_given_nested_path_when_saving_then_directories_created(self):
        with tempfile.TemporaryDirectory() as td:
            nested = os.path.join(td, "deep", "nest", "scores.db")
            save_best_score(nested, 7)
            self.assertTrue(os.path.isfile(nested))
            self.assertEqual(load_best_score(nested), 7)

    def test_given_negative_score_when_saving_then_value_error(self):
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(ValueError):
                save_best_score(os.path.join(td, "jd.db"), -1)

    def test_given_store_when_session_beats_best_then_persisted(self):
        with tempfile.TemporaryDirectory() as td:
            db_path = os.path.join(td, "jd.db")
            save_best_score(db_path, 2)
            store = BestScoreStore(db_path)
            session = GameSession(store=store, seed=5)
            self.assertEqual(session.best_score, 2)
            session.state.queue[:2] = [8, 4]
            session.place_active(0, 0)
            session.place_active(0, 1)
            self.assertEqual(session.state.score, 4)
            self.assertEqual(load_best_score(db_path), 4)


class TestGameConfig(unittest.TestCase):
    def test_given_defaults_when_constructed_then_published_rules(self):
        cfg = GameConfig()
        self.assertEqual(cfg.grid_size, 4)
        self.assertEqual(cfg.max_undo, 10)
        self.assertEqual(cfg.starting_trash, 10)
        self.assertEqual(cfg.points_per_level, 10)
        self.assertEqual(cfg.difficulty, "medium")

    def test_given_env_overrides_when_loading_then_applied(self):
        env = {"JUSTDIVIDE_DIFFICULTY": "Hard", "JUSTDIVIDE_MAX_UNDO": "4"}
        with mock.patch.dict(os.environ, env):
            cfg = GameConfig.from_env()
        self.assertEqual(cfg.difficulty, "hard")
        self.assertEqual(cfg.max_undo, 4)

    def test_given_bad_env_value_when_loading_then_value_error(self):
        with mock.patch.dict(os.environ, {"JUSTDIVIDE_MAX_UNDO": "lots"}):
            with self.assertRaises(ValueError):
                GameConfig.from_env()
        with mock.patch.dict(os.environ, {"JUSTDIVIDE_MAX_UNDO": "0"}):
            with self.assertRaises(ValueError):
                GameConfig.from_env()


if __name__ == '__main__':
    unittest.main(verbosity=2)
