# Services package init
"""
Exercise Tracker Backend — Services Layer
==========================================

What:  Logic between routes (HTTP) and the database (persistence).
How:   Services accept a session and plain request data, coerce input, run
       one database statement, and return response models or confirmation
       messages. They raise app.exceptions errors, never HTTP responses.

Service Inventory:
    - coercion:          pure input validation / type coercion functions
    - ExerciseService:   list, add, get, delete, update exercises
    - UserService:       list, add users
"""
