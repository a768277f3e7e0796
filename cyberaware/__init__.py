"""
CyberAware - gamified cybersecurity-awareness learning core

Users register or continue as guests, take a baseline assessment, work
through topic modules and earn XP, levels, badges, streaks and quest
rewards. All progress flows through a single reducer owned by GameStore.
"""

__version__ = "0.1.0"
