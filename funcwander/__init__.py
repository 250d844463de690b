"""Search for compositions of elementary functions matching a target table."""

__version__ = "1.0.0"
__all__ = ["alaw", "atom", "cli", "common", "func_node", "samples", "search_task", "target"]