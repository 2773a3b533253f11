"""Perception-phase agents."""

from .environment_monitor import EnvironmentMonitorAgent
from .festival_detector import FestivalDetectorAgent
from .season_tracker import SeasonTrackerAgent

__all__ = ["EnvironmentMonitorAgent", "FestivalDetectorAgent", "SeasonTrackerAgent"]
