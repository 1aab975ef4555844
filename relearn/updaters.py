"""
Learning rules that revise the values stored in an episode.

The episode itself only stores numbers, every rule here computes the new value of a policy
and writes it back through Episode.update.
"""

from abc import ABC, abstractmethod
from typing import Hashable, Iterable, Sequence

import numpy as np

from relearn.episode import Episode
from relearn.policy import Policy
from relearn.structs import Parameters, RLearningParameters, EpisodeStep
from relearn.utils import calculate_discounted_rewards


def best_action_and_value(
        episode: Episode, state: Hashable, actions: Iterable[Hashable] | None = None
) -> tuple[Hashable | None, float]:
    """
    Returns what the episode currently believes to be the best action in a state and its value

    :param episode: the episode holding the values
    :param state:   the state to choose an action in
    :param actions: the actions available in that state. If omitted, the actions already recorded
                    for this state are used. Unseen actions are recorded with a value of 0.0
    :return: A tuple consisting of [the best action, its value]. (None, 0.0) if there are no candidate actions
    """
    if actions is None:
        actions = episode.actions(state)

    best_action, best_value = None, None

    # Find maximum value over all candidate actions, the first one wins ties
    for action in actions:
        action_value = episode.value(Policy(state, action))
        if best_value is None or action_value > best_value:
            best_value = action_value
            best_action = action

    if best_value is None:
        return None, 0.0
    return best_action, best_value


class Updater(ABC):
    """Represents a rule that updates the value of one policy after observing a single transition"""

    @abstractmethod
    def update(
            self, episode: Episode, state: Hashable, action: Hashable, reward: float, next_state: Hashable,
            next_actions: Iterable[Hashable] | None = None, is_terminal: bool = False,
            actions: Iterable[Hashable] | None = None
    ) -> float:
        """
        Uses the specified transition to update the value of (state, action) in the episode

        :param episode:      the episode whose values are updated
        :param state:        the initial state of the environment
        :param action:       the action taken
        :param reward:       the reward received by taking that action
        :param next_state:   the new state of the environment
        :param next_actions: the actions available in the new state (see best_action_and_value)
        :param is_terminal:  whether the new state ends the trajectory, in which case it has no future value
        :param actions:      the actions available in the initial state, used by rules that compare the action
                             taken against the other choices (see best_action_and_value)
        :return: the new value of (state, action)
        """
        raise NotImplementedError("Updater abstract method update was not implemented")


class QLearningUpdater(Updater):
    """Off-policy discounted Q-learning, blending each new estimate in with the learning rate"""

    def __init__(self, parameters: Parameters):
        self.parameters = parameters

    def update(
            self, episode: Episode, state: Hashable, action: Hashable, reward: float, next_state: Hashable,
            next_actions: Iterable[Hashable] | None = None, is_terminal: bool = False,
            actions: Iterable[Hashable] | None = None
    ) -> float:
        if __debug__:
            assert isinstance(episode, Episode), f"Episode must be of type Episode, received {type(episode)}"

        # First figure out the value of the new state
        if is_terminal:
            new_state_value = 0.0
        else:
            _, new_state_value = best_action_and_value(episode, next_state, next_actions)

        # Now calculate the expected value of this action in this instance
        action_value = reward + self.parameters.discount_factor * new_state_value

        # Now update the current value based on the specified learning rate
        policy = Policy(state, action)
        new_value = (
            action_value * self.parameters.learning_rate +
            episode.value(policy) * (1 - self.parameters.learning_rate)
        )
        episode.update(policy, new_value)
        return new_value


class RLearningUpdater(Updater):
    """
    Average-reward R-learning (Schwartz, 1993).

    Instead of discounting, values are relative to the reward rate, a running estimate of the average
    reward per step. The reward rate only moves when the action taken was the greedy one.
    """

    def __init__(self, parameters: RLearningParameters):
        self.parameters = parameters
        self.__reward_rate = parameters.initial_reward_rate

    @property
    def reward_rate(self) -> float:
        """The current estimate of the average reward per step"""
        return self.__reward_rate

    def update(
            self, episode: Episode, state: Hashable, action: Hashable, reward: float, next_state: Hashable,
            next_actions: Iterable[Hashable] | None = None, is_terminal: bool = False,
            actions: Iterable[Hashable] | None = None
    ) -> float:
        if __debug__:
            assert isinstance(episode, Episode), f"Episode must be of type Episode, received {type(episode)}"

        policy = Policy(state, action)
        current_value = episode.value(policy)

        # Decide whether the action was greedy before its value moves
        _, best_current_value = best_action_and_value(episode, state, actions)
        was_greedy = current_value >= best_current_value

        if is_terminal:
            new_state_value = 0.0
        else:
            _, new_state_value = best_action_and_value(episode, next_state, next_actions)

        new_value = current_value + self.parameters.learning_rate * (
            reward - self.__reward_rate + new_state_value - current_value
        )
        episode.update(policy, new_value)

        if was_greedy:
            self.__reward_rate += self.parameters.reward_rate_step * (
                reward - self.__reward_rate + new_state_value - best_current_value
            )

        return new_value


class MonteCarloUpdater:
    """
    Every-visit Monte Carlo updates over a finished trajectory.

    The trajectory is swept backwards, so the return of each step is known when its policy is updated.
    """

    def __init__(self, parameters: Parameters):
        self.parameters = parameters

    def propagate(self, episode: Episode, steps: Sequence[EpisodeStep]) -> None:
        """
        Moves the value of every (state, action) visited in steps towards the discounted return observed from it

        :param episode: the episode whose values are updated
        :param steps:   the trajectory, in the order it was played
        """
        if __debug__:
            assert isinstance(episode, Episode), f"Episode must be of type Episode, received {type(episode)}"

        if len(steps) == 0:
            return

        rewards = np.array([step.reward for step in steps], dtype=np.float64)
        returns = calculate_discounted_rewards(rewards, self.parameters.discount_factor)

        for step, step_return in zip(reversed(steps), reversed(returns)):
            policy = Policy(step.state, step.action)
            current_value = episode.value(policy)
            episode.update(
                policy,
                current_value + self.parameters.learning_rate * (float(step_return) - current_value)
            )
