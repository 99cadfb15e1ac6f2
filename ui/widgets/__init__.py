from ui.widgets.target_view import TargetView

__all__ = ["TargetView"]
