"""Gradio front end for the flashcard client."""

from .interface import build_interface, launch_gradio

__all__ = ["build_interface", "launch_gradio"]
