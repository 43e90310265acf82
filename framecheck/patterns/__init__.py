"""Action model, technique templates and the built-in template library."""
from .actions import Action, ActionKind, Button, RangeZone, SquareZone, Stick, Zone
from .library import TemplateRegistry, default_templates, default_zones
from .template import FrameWindow, SequenceTemplate, Step, TemplateBuilder, TemplateError

__all__ = [
    "Action",
    "ActionKind",
    "Button",
    "RangeZone",
    "SquareZone",
    "Stick",
    "Zone",
    "TemplateRegistry",
    "default_templates",
    "default_zones",
    "FrameWindow",
    "SequenceTemplate",
    "Step",
    "TemplateBuilder",
    "TemplateError",
]
