# payoff/strategies.py
from typing import Callable, Dict, List, Tuple, Union

from .schemas import CollectionStrategy, PaymentStrategy

# Display labels for the comparison / simulator views
STRATEGY_NAMES: Dict[PaymentStrategy, str] = {
    PaymentStrategy.AVALANCHE: "Avalanche (Highest Interest First)",
    PaymentStrategy.SNOWBALL: "Snowball (Smallest Balance First)",
    PaymentStrategy.COMBINED: "Combined (Balanced Approach)",
}

STRATEGY_DESCRIPTIONS: Dict[PaymentStrategy, str] = {
    PaymentStrategy.AVALANCHE: "Focused on minimizing the total interest paid. Recommended to maximize savings.",
    PaymentStrategy.SNOWBALL: "Focused on psychological momentum from quick payoffs. Recommended to stay motivated.",
    PaymentStrategy.COMBINED: "Weighs interest rate against debt size for a balanced approach.",
}

COLLECTION_STRATEGY_NAMES: Dict[CollectionStrategy, str] = {
    CollectionStrategy.AGGRESSIVE: "Aggressive (Fast Collection)",
    CollectionStrategy.CONSERVATIVE: "Conservative (Slow Collection)",
}

COLLECTION_STRATEGY_DESCRIPTIONS: Dict[CollectionStrategy, str] = {
    CollectionStrategy.AGGRESSIVE: "Collect as fast as possible by dedicating more resources. Higher recovery, higher cost.",
    CollectionStrategy.CONSERVATIVE: "Collect sustainably with fewer resources. Lower cost, more time.",
}

UNKNOWN_NAME = "Unknown"

# weights of the combined score: rate vs. relative original size
COMBINED_RATE_WEIGHT = 0.7
COMBINED_SIZE_WEIGHT = 0.3


def _lookup(table: Dict, enum_cls, key: Union[str, object], default: str) -> str:
    try:
        return table[enum_cls(key)]
    except ValueError:
        return default


def get_strategy_name(strategy: Union[PaymentStrategy, str]) -> str:
    return _lookup(STRATEGY_NAMES, PaymentStrategy, strategy, UNKNOWN_NAME)


def get_strategy_description(strategy: Union[PaymentStrategy, str]) -> str:
    return _lookup(STRATEGY_DESCRIPTIONS, PaymentStrategy, strategy, "")


def get_collection_strategy_name(strategy: Union[CollectionStrategy, str]) -> str:
    return _lookup(COLLECTION_STRATEGY_NAMES, CollectionStrategy, strategy, UNKNOWN_NAME)


def get_collection_strategy_description(strategy: Union[CollectionStrategy, str]) -> str:
    return _lookup(COLLECTION_STRATEGY_DESCRIPTIONS, CollectionStrategy, strategy, "")


# ---------- Ordering ----------
# Each key receives (debt_id, balance, annual_rate, original_amount) of a
# working debt plus the largest original amount of the run.

OrderKey = Callable[[str, float, float, float, float], Tuple]


def _avalanche_key(debt_id, balance, rate, original, max_original):
    return (-rate, -balance, debt_id)


def _snowball_key(debt_id, balance, rate, original, max_original):
    return (balance, -rate, debt_id)


def _combined_key(debt_id, balance, rate, original, max_original):
    size = original / max_original if max_original > 0 else 0.0
    score = rate * COMBINED_RATE_WEIGHT + size * COMBINED_SIZE_WEIGHT
    return (-score, debt_id)


ORDER_KEYS: Dict[PaymentStrategy, OrderKey] = {
    PaymentStrategy.AVALANCHE: _avalanche_key,
    PaymentStrategy.SNOWBALL: _snowball_key,
    PaymentStrategy.COMBINED: _combined_key,
}

ALL_STRATEGIES: List[PaymentStrategy] = list(PaymentStrategy)
