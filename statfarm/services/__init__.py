"""Service modules"""
from .slots import Slot, SlotStore
from .poller import Poller
from .dashboard import Dashboard
from .rewards import estimate_rewards

__all__ = ["Slot", "SlotStore", "Poller", "Dashboard", "estimate_rewards"]
