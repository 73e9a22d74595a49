from . import scoring, selection  # noqa: F401
