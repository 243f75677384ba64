"""Shared whiteboard: a gRPC drawing server and a pygame drawing client."""

__version__ = "0.1.0"