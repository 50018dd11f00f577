"""ScholarQuest: a personal tracker for academic paper submissions."""

__version__ = "0.1.0"
