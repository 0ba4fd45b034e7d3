"""Investment Time Machine: hypothetical returns of past stock investments."""

__version__ = "1.0.0"
