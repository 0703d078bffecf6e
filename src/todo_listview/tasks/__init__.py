"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Subtask, Priority, Urgency)
- task_store.py: SQLite-backed storage implementing the TaskRepo port
"""
