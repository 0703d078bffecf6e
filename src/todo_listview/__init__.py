"""
todo_listview: presentation-ready view over a hierarchical to-do list.

Subpackages:
- tasks: domain objects (Task, Subtask, Priority) and the SQLite store
- listview: filter -> sort -> priority grouping -> flattened rows
- core: ports and application state
- cli / connectors: console front end
"""
