"""Interface ligne de commande stubsync (Typer + Rich)."""
