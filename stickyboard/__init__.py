"""
Sticky Board.

- backend/: Sticky store API, database, configuration, logging
- board/: Note widget, board controller and the event surface they run on
- client/: HTTP persistence client for the sticky store
"""
