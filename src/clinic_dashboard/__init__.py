"""Practice dashboard for a psychology clinic, backed by the clinic REST API."""
