"""buildflow: run platform-scoped build pipelines."""

__version__ = "0.3.0"
