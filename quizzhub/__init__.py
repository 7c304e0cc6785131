"""quizzhub - reactive client-side cache for quizz records."""

__version__ = "0.1.0"
