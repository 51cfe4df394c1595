"""
Presentation package: display formatting and template rendering.
"""

from services.dashboard.presentation.template import TemplateField, render

__all__ = ["TemplateField", "render"]
