# Routes package init
"""
Exercise Tracker Backend — API Routes Package
==============================================

Route Inventory:
    - exercises.py:  GET    /exercises
                     POST   /exercises/add
                     GET    /exercises/{id}
                     DELETE /exercises/{id}
                     PUT    /exercises/update/{id}
    - users.py:      GET    /users
                     POST   /users/add
    - health.py:     GET    /health

Routes are thin: pull the id/body off the request, call the service, return
what it returns.
"""
