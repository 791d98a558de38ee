# Copyright 2025 Animals Code Apache 2.0
# Animals Code Tracker: opt-in plugin usage reporting.

__version__ = "1.0.0"
