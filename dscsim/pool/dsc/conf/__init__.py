__all__ = [
    "DSC_TOKEN_CONF",
    "ENGINE_CONF",
    "ORACLE_CONF",
    "COLLATERAL_CONF",
    "DEFAULT_LIQUIDATOR",
    "PRECISION",
    "ADDITIONAL_FEED_PRECISION",
    "LIQUIDATION_THRESHOLD",
    "LIQUIDATION_BONUS",
    "LIQUIDATION_PRECISION",
    "MIN_HEALTH_FACTOR",
    "TIMEOUT",
]


DSC_TOKEN_CONF = {
    "address": "dsc_address",
    "symbol": "DSC",
    "name": "DecentralizedStableCoin",
    "decimals": 18,
}

ENGINE_CONF = {
    "address": "dsc_engine_address",
    "precision": 10**18,
    "additional_feed_precision": 10**10,
    "liquidation_threshold": 50,  # 200% overcollateralized
    "liquidation_bonus": 10,  # 10% bonus
    "liquidation_precision": 100,
    "min_health_factor": 10**18,
}

ORACLE_CONF = {
    "decimals": 8,
    "timeout": 3 * 60 * 60,  # 3 hours
    "min_answer": 1,
    "max_answer": 10**8 * 10**8,  # $100M per unit
}

COLLATERAL_CONF = {
    "weth": {
        "address": "weth_address",
        "name": "Wrapped Ether",
        "symbol": "WETH",
        "decimals": 18,
        "initial_answer": 2000 * 10**8,
    },
    "wbtc": {
        "address": "wbtc_address",
        "name": "Wrapped Bitcoin",
        "symbol": "WBTC",
        "decimals": 18,
        "initial_answer": 1000 * 10**8,
    },
}

DEFAULT_LIQUIDATOR = "default_liquidator"

PRECISION = ENGINE_CONF["precision"]
ADDITIONAL_FEED_PRECISION = ENGINE_CONF["additional_feed_precision"]
LIQUIDATION_THRESHOLD = ENGINE_CONF["liquidation_threshold"]
LIQUIDATION_BONUS = ENGINE_CONF["liquidation_bonus"]
LIQUIDATION_PRECISION = ENGINE_CONF["liquidation_precision"]
MIN_HEALTH_FACTOR = ENGINE_CONF["min_health_factor"]
TIMEOUT = ORACLE_CONF["timeout"]
