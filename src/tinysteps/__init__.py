"""TinySteps: parent/child early-learning backend."""

__version__ = "0.1.0"
