"""Project service (validation + orchestration over core.tree and a ProjectRepo)."""
