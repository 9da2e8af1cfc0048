"""Dashboard panels: the three resource lists, detail, navigation and forms."""

from .base import Panel, PanelHost, PanelKind
from .detail import DetailPanel
from .form import Form
from .lists import ContainerListPanel, ImageListPanel, ListPanel, VolumeListPanel
from .navigate import NavigatePanel

__all__ = [
    "ContainerListPanel",
    "DetailPanel",
    "Form",
    "ImageListPanel",
    "ListPanel",
    "NavigatePanel",
    "Panel",
    "PanelHost",
    "PanelKind",
    "VolumeListPanel",
]
