# wsfix/__init__.py
from .fixer import analyze, fix
from .models import BatchResult, FixOutcome, LineEnding, Options, OutcomeKind
from .runner import BatchRunner, run

__version__ = "0.1.0"

__all__ = [
    'analyze', 'fix', 'run', 'BatchRunner',
    'BatchResult', 'FixOutcome', 'LineEnding', 'Options', 'OutcomeKind',
]
