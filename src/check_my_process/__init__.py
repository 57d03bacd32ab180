"""check-my-process: enforce software development process standards as code."""

__version__ = "1.1.0"
