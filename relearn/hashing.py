from typing import Hashable

SIZE_T_MASK = (1 << 64) - 1
"""Hashes are combined as unsigned 64-bit integers, wrapping on overflow"""

HASH_COMBINE_CONSTANT = 0x9e3779b9
"""Fractional part of the golden ratio, spreads the bits of consecutive hashes"""


def hash_combine(seed: int, value: Hashable) -> int:
    """
    Mixes the hash of value into seed and returns the new seed.

    The combination is order sensitive, so hash_combine(hash_combine(0, a), b)
    generally differs from hash_combine(hash_combine(0, b), a).

    :param seed:  the running hash (an unsigned 64-bit integer)
    :param value: any hashable object
    :return:      the updated seed, again an unsigned 64-bit integer
    :raises TypeError: if value is not hashable
    """
    seed &= SIZE_T_MASK
    value_hash = hash(value) & SIZE_T_MASK  # negative hashes wrap like size_t would
    seed ^= (value_hash + HASH_COMBINE_CONSTANT + (seed << 6) + (seed >> 2)) & SIZE_T_MASK
    return seed & SIZE_T_MASK
