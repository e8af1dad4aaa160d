# Routes package init
"""
Vidly Backend — API Routes Package
===================================

Route Inventory:
    - genres.py:     /api/genres      list, get, create, replace, delete
    - customers.py:  /api/customers   list, get, create, replace, delete
    - movies.py:     /api/movies      list, get, create, replace, delete
    - users.py:      /api/users       register, me, list, get, replace
    - rentals.py:    /api/rentals     list, get, create
    - auth.py:       /api/auth        login
    - health.py:     /health          service health check

Design Principle:
    Routes are THIN: they declare guards (token, admin, id shape), take the
    validated body, call one service method and return its result.
"""
