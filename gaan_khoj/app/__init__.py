"""Application wiring, services and UI for Gaan Khoj."""
