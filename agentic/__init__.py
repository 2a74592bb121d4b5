"""Terminal assistant: tasks, study sessions, blog drafts, command running and model-backed help."""

__version__ = "0.1.0"