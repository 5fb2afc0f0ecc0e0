from .click_tracker import ClickTracker

__all__ = ["ClickTracker"]
