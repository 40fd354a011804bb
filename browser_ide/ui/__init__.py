"""Dashboard page rendering and the deployments panel controller."""

from browser_ide.ui.controller import DashboardController, DeploymentsPanel, TextBuffer
from browser_ide.ui.render import render_deployments, templates

__all__ = [
    "DashboardController",
    "DeploymentsPanel",
    "TextBuffer",
    "render_deployments",
    "templates",
]
