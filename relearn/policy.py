from typing import Generic, Hashable, TypeVar

from relearn.hashing import hash_combine

S = TypeVar("S", bound=Hashable)
A = TypeVar("A", bound=Hashable)


class Policy(Generic[S, A]):
    """
    A policy is the choice of doing an action A while in a state S.

    Policies are used as keys that associate a value with each (state, action) pair.
    Both the state and action must be hashable and must not be mutated once a policy
    refers to them, since that would silently change the policy's hash and equality.
    """

    __slots__ = ("__state", "__action", "__hash")

    def __init__(self, state: S, action: A):
        """
        :param state:  the state the action is taken from
        :param action: the action taken
        :raises TypeError: if either the state or the action is unhashable
        """
        self.__state = state
        self.__action = action

        self.__hash = PolicyHash.combine(state, action)
        """Cached since the state and action are immutable"""

    @property
    def state(self) -> S:
        return self.__state

    @property
    def action(self) -> A:
        return self.__action

    def __eq__(self, other: object) -> bool:
        """Two policies are equal if both their states and their actions are equal"""
        if not isinstance(other, Policy):
            return NotImplemented
        return bool(self.__state == other.state) and bool(self.__action == other.action)

    def __hash__(self) -> int:
        return self.__hash

    def __repr__(self) -> str:
        return f"Policy(state={self.__state!r}, action={self.__action!r})"


class PolicyHash:
    """Stateless hash functor for policies"""

    @staticmethod
    def combine(state: Hashable, action: Hashable) -> int:
        # State first, then action
        return hash_combine(hash_combine(0, state), action)

    def __call__(self, policy: Policy) -> int:
        return self.combine(policy.state, policy.action)


class PolicyEqual:
    """Stateless equality functor for policies"""

    def __call__(self, lhs: Policy, rhs: Policy) -> bool:
        return lhs == rhs
