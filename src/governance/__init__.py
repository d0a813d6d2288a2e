"""
Governance-boosted rewards

Pipeline: VotingPowerModel → BoostCalculator → RewardProjector.
"""

from src.governance.boost import (
    MAX_BOOST,
    MIN_BOOST,
    TOKENLESS_PRODUCTION,
    BoostMultiplier,
    compute_boost_multiplier,
    voting_share,
)
from src.governance.calculator import (
    CalculatorOutcome,
    RewardsCalculator,
    UnresolvedPriceError,
)
from src.governance.rewards import (
    REWARD_PERIODS_PER_YEAR_DEFAULT,
    Annualization,
    BoostApplication,
    RewardsConfig,
    RewardsProjection,
    compute_base_rewards,
    compute_boosted_rewards,
    compute_total_apy,
    project_rewards,
)
from src.governance.voting_power import (
    MAX_LOCK_DAYS,
    LockPeriod,
    LockPosition,
    compute_escrow_balance,
)

__all__ = [
    # Voting power
    "MAX_LOCK_DAYS",
    "LockPeriod",
    "LockPosition",
    "compute_escrow_balance",
    # Boost
    "MAX_BOOST",
    "MIN_BOOST",
    "TOKENLESS_PRODUCTION",
    "BoostMultiplier",
    "compute_boost_multiplier",
    "voting_share",
    # Rewards
    "REWARD_PERIODS_PER_YEAR_DEFAULT",
    "Annualization",
    "BoostApplication",
    "RewardsConfig",
    "RewardsProjection",
    "compute_base_rewards",
    "compute_boosted_rewards",
    "compute_total_apy",
    "project_rewards",
    # Calculator
    "CalculatorOutcome",
    "RewardsCalculator",
    "UnresolvedPriceError",
]
