__all__ = ["StateLog", "get_engine_state"]

from .state_log import StateLog, get_engine_state
