"""
Core subsystem.

Components:
- models.py: immutable entities (Project, TaskList, Task)
- tree.py: locate/rewrite helpers producing new trees with shared subtrees
- ports.py: repository Protocol consumed by the service
- state.py: application state wiring (settings, store, service)
"""
