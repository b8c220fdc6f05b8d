"""Gradio front-end."""
