"""
Storage subsystem.

Components:
- codec.py: Project <-> JSON document mapping
- paths.py: platform / legacy storage directory resolution
- project_store.py: file-per-project JSON store keyed by sanitized title
"""
