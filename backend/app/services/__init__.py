# Services package init
"""
Vidly Backend — Services Layer
===============================

What:  Business logic between routes (HTTP) and database (persistence).

Service Inventory:
    - EntityService (base): lookup/list/save/delete shared by all entities
    - GenreService, CustomerService: plain CRUD
    - MovieService: resolves genreId and embeds a genre snapshot
    - UserService: registration, unique email, password hashing
    - RentalService: customer/movie checks, stock gate and decrement
    - AuthService: email + password → token

Each service is a stateless module-level singleton that takes the request's
AsyncSession as its first argument.
"""
