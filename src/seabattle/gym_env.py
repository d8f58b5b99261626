"""Gymnasium compatible wrapper around the sea battle Field logic.

The agent plays the shooting half of a game against a hidden random fleet and
sees exactly what a human sees: the opponent view, including the empty border
that mark_kill() deduces around every sunk ship.

Observation
===========
2-channel (2, 8, 8) float32 tensor where
  chan 0 = 1.0 at cells confirmed KILLED
  chan 1 = 1.0 at cells confirmed EMPTY (missed or deduced)
All zeros elsewhere (still UNKNOWN).

Action space
============
Discrete(64) – flattened (y*8 + x) coordinate.

Reward (dense, simple)
======================
+5   hit
+10  kill (ship sunk, game not over)
-1   miss
-10  shot at a cell that is already known
+100 last segment destroyed -> terminated=True
"""

from __future__ import annotations

import random

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .field import FIELD_SIZE, CellState, Field, ShotResult, generate_random_field


class SeabattleEnv(gym.Env):
    metadata = {"render_modes": ["human", "ansi"]}

    DEFAULT_REWARDS = {
        "hit": 5.0,
        "kill": 10.0,
        "miss": -1.0,
        "repeat": -10.0,
        "win": 100.0,
    }

    def __init__(self, *, reward_dict: dict | None = None, render_mode: str | None = None):
        super().__init__()
        self.action_space = spaces.Discrete(FIELD_SIZE * FIELD_SIZE)
        self.observation_space = spaces.Box(0.0, 1.0, shape=(2, FIELD_SIZE, FIELD_SIZE), dtype=np.float32)
        self._rewards = self.DEFAULT_REWARDS.copy()
        if reward_dict is not None:
            self._rewards.update(reward_dict)
        self.render_mode = render_mode
        self.hidden: Field | None = None
        self.view: Field | None = None
        self.shots = 0

    # ------------------------------------------------------------------
    def reset(self, *, seed: int | None = None, options: dict | None = None):  # type: ignore[override]
        super().reset(seed=seed)
        # Placement takes a stdlib Random; derive it from the env's seeded generator
        rng = random.Random(int(self.np_random.integers(0, 2**31 - 1)))
        self.hidden = generate_random_field(rng)
        self.view = Field()
        self.shots = 0
        return self._observe(), {}

    # ------------------------------------------------------------------
    def step(self, action: int):  # type: ignore[override]
        if self.hidden is None or self.view is None:
            raise RuntimeError("Env must be reset before step")
        y, x = divmod(int(action), FIELD_SIZE)
        self.shots += 1

        if self.view.cell(x, y) is not CellState.UNKNOWN:
            info = {"result": None, "shots": self.shots}
            return self._observe(), self._rewards["repeat"], False, False, info

        result = self.hidden.shoot(x, y)
        self.view.apply_result(x, y, result)
        terminated = self.hidden.is_loser()
        if terminated:
            reward = self._rewards["win"]
        elif result is ShotResult.KILL:
            reward = self._rewards["kill"]
        elif result is ShotResult.HIT:
            reward = self._rewards["hit"]
        else:
            reward = self._rewards["miss"]

        info = {"result": result, "shots": self.shots}
        return self._observe(), reward, terminated, False, info

    # ------------------------------------------------------------------
    def action_masks(self) -> np.ndarray:
        """Boolean mask over the 64 actions, True where the cell is still unknown."""
        if self.view is None:
            return np.ones(FIELD_SIZE * FIELD_SIZE, dtype=bool)
        return (self.view.as_array() == int(CellState.UNKNOWN)).reshape(-1)

    def _observe(self) -> np.ndarray:
        grid = self.view.as_array()
        obs = np.zeros((2, FIELD_SIZE, FIELD_SIZE), dtype=np.float32)
        obs[0] = grid == int(CellState.KILLED)
        obs[1] = grid == int(CellState.EMPTY)
        return obs

    # ------------------------------------------------------------------
    def render(self):
        if self.view is None:
            return None
        text = str(self.view)
        if self.render_mode == "ansi":
            return text
        print(text)
        return None


ENV_ID = "seabattle/Seabattle-v0"


def register_envs() -> None:
    """Register :class:`SeabattleEnv` so ``gymnasium.make(ENV_ID)`` can build it."""
    if ENV_ID not in gym.registry:
        gym.register(id=ENV_ID, entry_point="seabattle.gym_env:SeabattleEnv")


register_envs()
