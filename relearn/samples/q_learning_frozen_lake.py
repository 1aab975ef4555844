"""
Tabular Q-learning on FrozenLake, storing every (state, action) value in a single relearn Episode.
FrozenLake always restarts from the same tile, so one episode rooted at that tile covers the whole run.
"""

import time

import gymnasium as gym
from torch.utils.tensorboard import SummaryWriter

from relearn.episode import Episode
from relearn.structs import Parameters
from relearn.updaters import QLearningUpdater, best_action_and_value

PARAMS = Parameters(
    learning_rate=0.2,
    discount_factor=0.9,
)

NUM_STEPS_PER_EPOCH = 10
NUM_EPISODES_PER_TEST = 20
TARGET_REWARD = 0.8
VISUALIZE_AFTER_TRAINING = True


def play_random_steps(episode: Episode, updater: QLearningUpdater, env: gym.Env, num_steps: int):
    actions = range(env.action_space.n)
    state, _ = env.reset()
    for _ in range(num_steps):
        action = int(env.action_space.sample())
        new_state, reward, is_done, is_trunc, _ = env.step(action)

        updater.update(episode, int(state), action, float(reward), int(new_state), actions, is_terminal=is_done)

        if is_done or is_trunc:
            state, _ = env.reset()
        else:
            state = new_state


def evaluate_episode(episode: Episode, env: gym.Env, num_episodes: int) -> float:
    actions = range(env.action_space.n)
    total_reward = 0.0

    for _ in range(num_episodes):
        state, _ = env.reset()
        while True:
            action, _ = best_action_and_value(episode, int(state), actions)
            new_state, reward, is_done, is_trunc, _ = env.step(action)
            total_reward += reward

            if is_done or is_trunc:
                break
            else:
                state = new_state

    return total_reward / num_episodes


def main(parameters: Parameters):
    env = gym.make('FrozenLake-v1')
    root, _ = env.reset()

    episode = Episode(int(root))
    updater = QLearningUpdater(parameters)
    writer = SummaryWriter(f'./logs/QLearningFrozenLake-{time.time()}')

    epochs = 0
    best_result = 0.0
    while True:
        epochs += 1

        # Play some rounds where we just pick random actions
        play_random_steps(episode, updater, env, NUM_STEPS_PER_EPOCH)

        # Now play some rounds with the "best" action so we can evaluate performance
        result = evaluate_episode(episode, env, NUM_EPISODES_PER_TEST)
        writer.add_scalar("reward", result, epochs)
        writer.add_scalar("policies", len(episode), epochs)
        if result > best_result:
            print(f"Training epoch {epochs} return {result} ({len(episode)} policies recorded)")
            best_result = result
        if result > TARGET_REWARD:
            break

    print("training complete!")
    writer.close()

    if VISUALIZE_AFTER_TRAINING:
        print("Visualizing! (just for fun)")
        env = gym.make('FrozenLake-v1', render_mode='human')
        evaluate_episode(episode, env, 5)


if __name__ == "__main__":
    main(PARAMS)
