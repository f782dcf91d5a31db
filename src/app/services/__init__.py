"""Background services used by the launcher.

This package contains:
- workers.py: QRunnable task classes for background history searches
"""

# Direct imports like `from app.services.workers import X` are recommended
