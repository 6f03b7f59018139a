"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus, results) and date helpers
- task_store.py: SQLite-backed store
- rest_store.py: hosted PostgREST store over httpx
- task_list.py: list component (load, counts, filter, optimistic status change)
- task_form.py: form component (validate, normalize, create)
"""
