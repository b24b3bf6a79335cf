"""Book Catalog - CLI Utilities

Rendering helpers shared by the typer commands and the interactive menu.
"""
