"""WOFOST crop growth processes, input-file readers and gridded weather loading."""

__version__ = "0.1.0"