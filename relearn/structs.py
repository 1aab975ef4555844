from dataclasses import dataclass
from typing import Hashable


@dataclass
class Parameters:
    """Hyperparameters shared by the discounted updaters (Q-learning and Monte Carlo)"""
    discount_factor: float
    learning_rate: float

    def __post_init__(self):
        if __debug__:
            assert 0.0 <= self.discount_factor <= 1.0, \
                f"Discount factor must be in the range [0, 1], received {self.discount_factor}"
            assert 0.0 < self.learning_rate <= 1.0, \
                f"Learning rate must be in the range (0, 1], received {self.learning_rate}"


@dataclass
class RLearningParameters:
    """Hyperparameters for average-reward R-learning"""
    learning_rate: float
    reward_rate_step: float
    initial_reward_rate: float = 0.0

    def __post_init__(self):
        if __debug__:
            assert 0.0 < self.learning_rate <= 1.0, \
                f"Learning rate must be in the range (0, 1], received {self.learning_rate}"
            assert 0.0 < self.reward_rate_step <= 1.0, \
                f"Reward rate step must be in the range (0, 1], received {self.reward_rate_step}"


@dataclass
class EpisodeStep:
    """Represents a single "step" in a finished trajectory: the state, the action taken and the reward received"""
    state: Hashable
    action: Hashable
    reward: float
