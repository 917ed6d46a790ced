"""Plan generation, adaptation, and review logic (no I/O)."""
