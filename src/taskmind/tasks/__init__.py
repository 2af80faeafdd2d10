"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Workflow, Priority, TaskStatus)
- task_store.py: SQLite-backed storage + classifier audit log
- task_api.py: derived views (urgent/active) and the reload helper
"""
