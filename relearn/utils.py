from collections import deque

import numba
import numpy as np


@numba.jit(nopython=True) # Since we are just looping over a numpy array, numba jit works great here
def calculate_discounted_rewards(reward: np.ndarray, discount_factor: float) -> np.ndarray:
    """
    Given the raw reward at each step, this method calculates the total discounted reward at each step

    :param reward: A 1-d array representing the reward at each step
    :param discount_factor: The discount factor to use
    :return:       A 1-d array representing the total (present and future) discounted reward obtained at each step
    """
    n = reward.shape[0]
    discounted = np.zeros(n + 1) # The final item has a value 0 for padding
    for i in range(n - 1, -1, -1):
        discounted[i] = reward[i] + discount_factor * discounted[i + 1]
    return discounted[:-1]


class RollingAverage:
    """Maintains the average of the last few data values, 0.0 until the first value arrives"""

    def __init__(self, window_size: int):
        if __debug__:
            assert isinstance(window_size, int) and window_size > 0, \
                f"Window size was {window_size}, must be an integer greater than 0"

        self.__queue = deque(maxlen=window_size)
        self.__sum = 0.0

    def append(self, item: float) -> None:
        if len(self.__queue) == self.__queue.maxlen: self.__sum -= self.__queue[0]
        self.__sum += item
        self.__queue.append(item)

    def __len__(self) -> int:
        return len(self.__queue)

    @property
    def average(self) -> float:
        return self.__sum / len(self.__queue) if self.__queue else 0.0
