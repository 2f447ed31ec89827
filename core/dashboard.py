# core/dashboard.py
from dataclasses import dataclass, field
from typing import Callable, Dict, List


@dataclass
class DashboardWidget:
    id: str
    title: str
    callback: Callable[[], str]

    def render(self) -> str:
        return self.callback()


@dataclass
class DashboardRegistry:
    widgets: Dict[str, DashboardWidget] = field(default_factory=dict)

    def add_dashboard_widget(self, widget_id: str, title: str, callback: Callable[[], str]) -> DashboardWidget:
        widget = DashboardWidget(widget_id, title, callback)
        self.widgets[widget_id] = widget
        return widget

    def all(self) -> List[DashboardWidget]:
        return list(self.widgets.values())
