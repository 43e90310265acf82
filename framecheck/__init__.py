"""Controller technique recognition and frame-timing scoring."""
from .patterns.actions import Action, ActionKind, Button, Stick
from .patterns.library import TemplateRegistry, default_templates
from .patterns.template import SequenceTemplate, TemplateBuilder, TemplateError
from .session import TrainerSession
from .timing.matcher import CompletedRun, MatchOutcome, SequenceMatcher
from .timing.scorer import RunScore, Verdict, classify, score_run, success_probability

__version__ = "0.1.0"

__all__ = [
    "Action",
    "ActionKind",
    "Button",
    "Stick",
    "TemplateRegistry",
    "default_templates",
    "SequenceTemplate",
    "TemplateBuilder",
    "TemplateError",
    "TrainerSession",
    "CompletedRun",
    "MatchOutcome",
    "SequenceMatcher",
    "RunScore",
    "Verdict",
    "classify",
    "score_run",
    "success_probability",
]
