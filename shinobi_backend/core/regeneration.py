# shinobi_backend/core/regeneration.py

"""
Resource pool model.

A pool (health, stamina, chakra, energy) recovers linearly at a per-second rate
and never exceeds its capacity. Pure helpers only, persistence lives in
services/user_service.py.
"""


def regenerate(current: float, capacity: float, rate_per_second: float, elapsed_seconds: float) -> float:
    """Return the pool value after `elapsed_seconds` of recovery, capped at `capacity`."""
    elapsed_seconds = max(elapsed_seconds, 0.0)
    return min(current + rate_per_second * elapsed_seconds, capacity)


def regenerate_pools(user, rate_per_second: float, elapsed_seconds: float, include_energy: bool = True) -> None:
    """
    Apply `regenerate` to every pool on a user-like object in place.
    Energy is skipped when `include_energy` is False (it is being spent on training).
    """
    user.cur_health = regenerate(user.cur_health, user.max_health, rate_per_second, elapsed_seconds)
    user.cur_stamina = regenerate(user.cur_stamina, user.max_stamina, rate_per_second, elapsed_seconds)
    user.cur_chakra = regenerate(user.cur_chakra, user.max_chakra, rate_per_second, elapsed_seconds)
    if include_energy:
        user.cur_energy = regenerate(user.cur_energy, user.max_energy, rate_per_second, elapsed_seconds)
