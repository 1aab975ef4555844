"""
Every-visit Monte Carlo control on Blackjack.

Every hand starts from a different observation, so finished hands are swept backwards into one shared
table of values, an Episode rooted at None.
"""

import time

import gymnasium as gym
import numpy as np
from torch.utils.tensorboard import SummaryWriter
from tqdm import tqdm

from relearn.episode import Episode
from relearn.structs import Parameters, EpisodeStep
from relearn.updaters import MonteCarloUpdater, best_action_and_value
from relearn.utils import RollingAverage

PARAMS = Parameters(
    discount_factor=1.0,
    learning_rate=0.02,
)

NUM_HANDS = 50000
EXPLORATION_RATE = 0.1
ROLLING_AVERAGE_WINDOW_SIZE = 1000


def play_hand(table: Episode, env: gym.Env) -> list[EpisodeStep]:
    actions = range(env.action_space.n)
    state, _ = env.reset()
    steps = []

    while True:
        if np.random.rand() < EXPLORATION_RATE: # pick a random move
            action = int(env.action_space.sample())
        else:
            action, _ = best_action_and_value(table, state, actions)

        new_state, reward, is_done, is_trunc, _ = env.step(action)
        steps.append(EpisodeStep(state, action, float(reward)))

        if is_done or is_trunc:
            return steps
        state = new_state


def main(parameters: Parameters):
    env = gym.make('Blackjack-v1')
    updater = MonteCarloUpdater(parameters)
    table = Episode(None)
    rewards = RollingAverage(ROLLING_AVERAGE_WINDOW_SIZE)
    writer = SummaryWriter(f'./logs/MonteCarloBlackjack-{time.time()}')

    progress = tqdm(total=NUM_HANDS, ncols=100, ascii=True)
    for hand_number in range(NUM_HANDS):
        steps = play_hand(table, env)
        updater.propagate(table, steps)

        rewards.append(sum(step.reward for step in steps))
        if hand_number % ROLLING_AVERAGE_WINDOW_SIZE == 0:
            writer.add_scalar("Average reward", rewards.average, hand_number)
            writer.add_scalar("Policies", len(table), hand_number)
        progress.update(1)

    progress.close()
    writer.close()
    print(f"Average reward over the last {len(rewards)} hands: {rewards.average: .3f} "
          f"({len(table)} policies recorded)")


if __name__ == "__main__":
    main(PARAMS)
