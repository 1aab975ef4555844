"""
Average-reward R-learning on Taxi.

Taxi restarts from a random configuration, so every trajectory gets its own Episode. The values learned
in one trajectory seed the next one, which replays them under the new root before training continues.
"""

import time

import gymnasium as gym
import numpy as np
from torch.utils.tensorboard import SummaryWriter
from tqdm import tqdm

from relearn.episode import Episode
from relearn.structs import RLearningParameters
from relearn.updaters import RLearningUpdater, best_action_and_value
from relearn.utils import RollingAverage

PARAMS = RLearningParameters(
    learning_rate=0.1,
    reward_rate_step=0.01,
)

NUM_TRAJECTORIES = 2000
EXPLORATION_RATE = 0.1
ROLLING_AVERAGE_WINDOW_SIZE = 100


def copy_values(source: Episode, target: Episode) -> None:
    """Carries every learned value over to a freshly rooted episode"""
    for policy, value in source:
        target.update(policy, value)


def play_trajectory(episode: Episode, updater: RLearningUpdater, env: gym.Env, root: int) -> float:
    actions = range(env.action_space.n)
    state = root
    total_reward = 0.0

    while True:
        if np.random.rand() < EXPLORATION_RATE: # pick a random move
            action = int(env.action_space.sample())
        else:
            action, _ = best_action_and_value(episode, state, actions)

        new_state, reward, is_done, is_trunc, _ = env.step(action)
        updater.update(episode, state, action, float(reward), int(new_state), actions, is_terminal=is_done,
                       actions=actions)
        total_reward += reward

        if is_done or is_trunc:
            return total_reward
        state = int(new_state)


def main(parameters: RLearningParameters):
    env = gym.make('Taxi-v3')
    updater = RLearningUpdater(parameters)
    rewards = RollingAverage(ROLLING_AVERAGE_WINDOW_SIZE)
    writer = SummaryWriter(f'./logs/RLearningTaxi-{time.time()}')

    previous = None
    progress = tqdm(total=NUM_TRAJECTORIES, ncols=100, ascii=True)
    for trajectory in range(NUM_TRAJECTORIES):
        root, _ = env.reset()
        episode = Episode(int(root))
        if previous is not None:
            copy_values(previous, episode)

        rewards.append(play_trajectory(episode, updater, env, int(root)))

        writer.add_scalar("Average reward", rewards.average, trajectory)
        writer.add_scalar("Reward rate", updater.reward_rate, trajectory)
        writer.add_scalar("Policies", len(episode), trajectory)
        progress.update(1)
        previous = episode

    progress.close()
    writer.close()
    print(f"Average reward over the last {len(rewards)} trajectories: {rewards.average: .3f}, "
          f"reward rate {updater.reward_rate: .3f}")


if __name__ == "__main__":
    main(PARAMS)
