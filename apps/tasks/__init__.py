# apps/tasks/__init__.py

"""
Tasks - everything that lives on a card

- Create/update/delete and move between lanes (WIP limits)
- Assignees and workspace labels
- Comments, attachments and subtasks
"""
