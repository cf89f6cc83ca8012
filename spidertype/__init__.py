"""SpiderType typing-session measurement and gamification engine."""

__version__ = "0.1.0"
