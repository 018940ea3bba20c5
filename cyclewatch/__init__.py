# cyclewatch/__init__.py
# Interval-training stopwatch: automatic & manual cycle timing w/ persisted sessions

__version__ = "0.1.0"
