from typing import Generic, Iterator

from relearn.policy import Policy, S, A


class Episode(Generic[S, A]):
    """
    Represents a single trajectory, rooted at a starting state.

    The episode owns its root state and a table mapping every recorded policy (state, action pair)
    to a float value. The table is flat: the states reached by each action are not linked to one
    another, reconstructing the tree of states is left to whatever drives the episode.

    The episode does not interpret the values it stores. Any learning rule (see relearn.updaters)
    computes the new value first and then calls update.
    """

    def __init__(self, root: S):
        """
        :param root: the starting state of this trajectory
        """
        self.__root = root
        self.__policies: dict[Policy[S, A], float] = {}

    @property
    def root(self) -> S:
        return self.__root

    def update(self, policy: Policy[S, A], value: float) -> None:
        """
        Stores the value of a policy, overwriting any value previously stored for an equal policy

        :param policy: the (state, action) pair to update
        :param value:  the new value
        """
        self.__policies[policy] = float(value)

    def value(self, policy: Policy[S, A]) -> float:
        """
        Returns the value stored for a policy.
        A policy that has never been seen is recorded with a value of 0.0, which is then returned.

        :param policy: the (state, action) pair to look up
        :return: the stored value
        """
        return self.__policies.setdefault(policy, 0.0)

    def policies(self) -> Iterator[tuple[Policy[S, A], float]]:
        """
        Returns an iterator over every recorded (policy, value) pair, each exactly once.
        The order is stable for a given content but carries no meaning.
        Recording a new policy once the iterator exists makes its next step raise a RuntimeError.
        """
        return iter(self.__policies.items())

    def states(self) -> list[S]:
        """Returns the distinct states that appear in recorded policies, in the order they were first seen"""
        return list(dict.fromkeys(policy.state for policy in self.__policies))

    def actions(self, state: S) -> list[A]:
        """Returns the actions recorded for the given state"""
        return [policy.action for policy in self.__policies if policy.state == state]

    def __iter__(self) -> Iterator[tuple[Policy[S, A], float]]:
        return self.policies()

    def __contains__(self, policy: object) -> bool:
        return policy in self.__policies

    def __len__(self) -> int:
        return len(self.__policies)

    def __eq__(self, other: object) -> bool:
        """Two episodes are equal if their roots are equal and they hold the same policy values"""
        if not isinstance(other, Episode):
            return NotImplemented
        return bool(self.__root == other.root) and self.__policies == other.__policies

    __hash__ = None

    def __repr__(self) -> str:
        return f"Episode(root={self.__root!r}, policies={len(self.__policies)})"
